"""
Chart configuration builder.

build_chart() snapshots the caller's selection (column roles, filters,
palette) into a frozen Chart, so later edits to the selection never
reach charts that already exist.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .config import CHART_TITLE_TEMPLATE, DEFAULT_COLOR_SCHEME
from .errors import NoActiveDatasetError
from .models import Chart, ChartColumns, ChartType, Position, Size
from .registry import new_id

logger = logging.getLogger(__name__)


def default_title(chart_type: ChartType) -> str:
    return CHART_TITLE_TEMPLATE.format(type=chart_type.label)


def _as_columns(columns: ChartColumns | Mapping[str, Any] | None) -> ChartColumns:
    if columns is None:
        return ChartColumns()
    if isinstance(columns, ChartColumns):
        return ChartColumns(x=columns.x, y=columns.y, category=columns.category)
    return ChartColumns(
        x=str(columns.get("x") or ""),
        y=str(columns.get("y") or ""),
        category=str(columns.get("category") or ""),
    )


def build_chart(
    chart_type: ChartType | str,
    dataset_id: str | None,
    columns: ChartColumns | Mapping[str, Any] | None = None,
    filters: Mapping[str, Any] | None = None,
    color_scheme: str | None = DEFAULT_COLOR_SCHEME,
    title: str | None = None,
) -> Chart:
    """Assemble a new chart configuration.

    Parameters
    ----------
    chart_type : ChartType or its tag ("line", "bar", ...).
    dataset_id : Id of the dataset the chart reads from.
    columns : Column roles as ChartColumns or a {"x", "y", "category"} mapping.
    filters : Equality filters; deep-copied and stored read-only.
    color_scheme : Palette id. Unknown ids are kept and fall back at render time.
    title : Defaults to "<Type> chart".

    Raises
    ------
    NoActiveDatasetError : ``dataset_id`` is None.
    ValueError : unknown chart type.
    """
    kind = ChartType.parse(chart_type)
    if not dataset_id:
        raise NoActiveDatasetError()

    chart = Chart(
        id=new_id(),
        type=kind,
        dataset_id=dataset_id,
        columns=_as_columns(columns),
        filters=copy.deepcopy(dict(filters or {})),
        color_scheme=color_scheme or DEFAULT_COLOR_SCHEME,
        title=title or default_title(kind),
        size=Size(),
        position=Position(),
    )
    logger.debug("Built %s chart %s for dataset %s", kind.value, chart.id, dataset_id)
    return chart
