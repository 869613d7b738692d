"""
Data ingestion: raw file content -> Dataset.

ingest() is a pure transform. Registering the result is the caller's job,
so a failed import never leaves a partial dataset behind.
"""

import asyncio
import logging
from pathlib import PurePath

from ..config import DELIMITED_EXTENSIONS, SPREADSHEET_EXTENSIONS
from ..errors import UnsupportedFormatError
from ..models import Dataset
from .delimited import parse_delimited
from .spreadsheet import parse_spreadsheet

logger = logging.getLogger(__name__)

CSV = "csv"
SPREADSHEET = "spreadsheet"


def detect_format(file_name: str) -> str:
    """Map a file name to "csv" or "spreadsheet" by its extension.

    Raises UnsupportedFormatError for anything else, before any parsing.
    """
    suffix = PurePath(file_name).suffix.lower()
    if suffix in DELIMITED_EXTENSIONS:
        return CSV
    if suffix in SPREADSHEET_EXTENSIONS:
        return SPREADSHEET
    raise UnsupportedFormatError(file_name, suffix)


def ingest(file_name: str, content: str | bytes, fmt: str | None = None) -> Dataset:
    """Parse an uploaded file into an unregistered Dataset.

    Parameters
    ----------
    file_name : Original file name; used as the dataset name and, when
        ``fmt`` is omitted, to pick the parser.
    content : Text or bytes for CSV, bytes for workbooks.
    fmt : "csv" or "spreadsheet" to force a parser.

    Raises
    ------
    EmptyFileError, UnsupportedFormatError, ParseFailureError
    """
    if fmt is None:
        fmt = detect_format(file_name)

    if fmt == CSV:
        columns, records = parse_delimited(file_name, content)
    elif fmt == SPREADSHEET:
        columns, records = parse_spreadsheet(file_name, content)
    else:
        raise UnsupportedFormatError(file_name, fmt)

    logger.info("Ingested '%s' (%s): %d rows", file_name, fmt, len(records))
    return Dataset(name=file_name, columns=tuple(columns), rows=tuple(records))


async def ingest_async(file_name: str, content: str | bytes, fmt: str | None = None) -> Dataset:
    """Run ingest() in a worker thread; resumes once with a Dataset or raises."""
    return await asyncio.to_thread(ingest, file_name, content, fmt)


__all__ = [
    "CSV",
    "SPREADSHEET",
    "detect_format",
    "ingest",
    "ingest_async",
    "parse_delimited",
    "parse_spreadsheet",
]
