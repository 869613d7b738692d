"""
Exception taxonomy.

IngestError subclasses are raised by the loaders and mean no dataset was
produced. NotFoundError subclasses are raised only by the registries'
``require()`` lookups; removal of unknown ids is a no-op instead.
PreconditionError subclasses describe chart creation attempted without an
active dataset or dashboard.
"""


class VizboardError(Exception):
    """Base class for all vizboard errors."""


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------
class IngestError(VizboardError):
    """A file could not be turned into a dataset."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        super().__init__(f"{file_name}: {message}")


class EmptyFileError(IngestError):
    def __init__(self, file_name: str):
        super().__init__(file_name, "no data rows found")


class UnsupportedFormatError(IngestError):
    def __init__(self, file_name: str, extension: str):
        self.extension = extension
        super().__init__(file_name, f"unsupported file type '{extension or '(none)'}'")


class ParseFailureError(IngestError):
    """Malformed content. The parser's own exception is chained as __cause__."""

    def __init__(self, file_name: str, detail: str):
        self.detail = detail
        super().__init__(file_name, f"could not parse file ({detail})")


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------
class NotFoundError(VizboardError, LookupError):
    kind = "object"

    def __init__(self, object_id: str):
        self.object_id = object_id
        super().__init__(f"{self.kind} '{object_id}' not found")


class DatasetNotFoundError(NotFoundError):
    kind = "dataset"


class DashboardNotFoundError(NotFoundError):
    kind = "dashboard"


class ChartNotFoundError(NotFoundError):
    kind = "chart"


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------
class PreconditionError(VizboardError):
    """Chart creation attempted without the required active selections."""


class NoActiveDatasetError(PreconditionError):
    def __init__(self):
        super().__init__("no active dataset selected")


class NoActiveDashboardError(PreconditionError):
    def __init__(self):
        super().__init__("no active dashboard selected")
