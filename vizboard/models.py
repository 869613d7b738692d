"""
Domain records: datasets, dashboards and chart configurations.

Datasets and charts are frozen once created. Dashboards are the only
mutable record and are changed exclusively through DashboardRegistry.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any

import pandas as pd

from .config import (
    DEFAULT_CHART_POSITION,
    DEFAULT_CHART_SIZE,
    DEFAULT_COLOR_SCHEME,
    DEFAULT_LAYOUT,
)

# A cell value after ingestion-time type inference
Scalar = str | int | float | bool | None
# Records are read-only once they belong to a Dataset
Record = Mapping[str, Scalar]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def frozen_record(record: Mapping[str, Scalar]) -> Record:
    if isinstance(record, MappingProxyType):
        return record
    return MappingProxyType(dict(record))


def index_of_value(values: Iterable[Scalar], value: Scalar) -> int | None:
    """Position of ``value`` in ``values`` matching on type as well as value.

    Keeps 1, 1.0 and True apart, which ``list.index`` does not.
    """
    for i, candidate in enumerate(values):
        if type(candidate) is type(value) and candidate == value:
            return i
    return None


class ChartType(str, Enum):
    """The closed set of chart kinds a dashboard can hold."""

    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    SCATTER = "scatter"
    AREA = "area"
    RADAR = "radar"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: "str | ChartType") -> "ChartType":
        """Accept either a ChartType or its tag string ("bar", "pie", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown chart type: {value!r}") from None


class RenderState(str, Enum):
    """Render readiness of a chart.

    UNRESOLVED: dataset missing or x/y columns unset.
    RESOLVABLE: dataset present and both x and y chosen.
    RENDERED:   handed to a renderer.
    """

    UNRESOLVED = "unresolved"
    RESOLVABLE = "resolvable"
    RENDERED = "rendered"


@dataclass(frozen=True)
class Dataset:
    """A named, normalised table produced by ingestion.

    ``columns`` holds unique names in first-seen order. Every record's keys
    are a subset of ``columns``; spreadsheet records omit empty cells.
    Records are stored as read-only mappings.
    """

    name: str
    columns: tuple[str, ...]
    rows: tuple[Record, ...]
    id: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "rows", tuple(frozen_record(r) for r in self.rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def distinct_values(self, column: str) -> list[Scalar]:
        """Non-null values of ``column`` in first-seen order (for filter pickers)."""
        seen: list[Scalar] = []
        for row in self.rows:
            val = row.get(column)
            if val is None or val == "":
                continue
            if index_of_value(seen, val) is None:
                seen.append(val)
        return seen

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame.from_records([dict(r) for r in self.rows], columns=list(self.columns))


@dataclass(frozen=True)
class ChartColumns:
    """Column roles of a chart. Empty string means "not chosen"."""

    x: str = ""
    y: str = ""
    category: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.x) and bool(self.y)


@dataclass(frozen=True)
class Size:
    width: int = DEFAULT_CHART_SIZE[0]
    height: int = DEFAULT_CHART_SIZE[1]


@dataclass(frozen=True)
class Position:
    x: int = DEFAULT_CHART_POSITION[0]
    y: int = DEFAULT_CHART_POSITION[1]


@dataclass(frozen=True)
class Chart:
    """A chart configuration snapshot.

    ``dataset_id`` is a weak reference: the dataset may be removed later,
    in which case the chart resolves to an empty row set.
    """

    id: str
    type: ChartType
    dataset_id: str
    columns: ChartColumns
    filters: Mapping[str, Any]
    color_scheme: str = DEFAULT_COLOR_SCHEME
    title: str = ""
    size: Size = field(default_factory=Size)
    position: Position = field(default_factory=Position)

    def __post_init__(self):
        if not isinstance(self.filters, MappingProxyType):
            object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))


@dataclass
class Dashboard:
    """A named, ordered collection of charts."""

    id: str
    name: str
    charts: list[Chart] = field(default_factory=list)
    layout: str = DEFAULT_LAYOUT
    created_at: datetime = field(default_factory=utcnow)

    def find_chart(self, chart_id: str) -> Chart | None:
        for chart in self.charts:
            if chart.id == chart_id:
                return chart
        return None
