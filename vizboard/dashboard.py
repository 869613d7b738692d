"""
Dashboard-ready output functions.

These are the entry points for a Streamlit/Dash front end: they resolve
chart configurations against the current datasets into filtered rows,
a palette and a render state. Nothing here raises for a chart whose
dataset has been removed; such charts come back UNRESOLVED and empty.
"""

import logging
from dataclasses import dataclass, field

from .filters import apply_filters
from .models import Chart, Dashboard, Dataset, Record, RenderState
from .palettes import resolve_palette
from .registry import DatasetRegistry

logger = logging.getLogger(__name__)


@dataclass
class ResolvedChart:
    """Everything a renderer needs for one chart."""

    chart: Chart
    state: RenderState
    rows: list[Record] = field(default_factory=list)
    palette: list[str] = field(default_factory=list)
    reason: str = ""

    @property
    def is_renderable(self) -> bool:
        return self.state is not RenderState.UNRESOLVED


def _unresolved_reason(chart: Chart, dataset: Dataset | None) -> str:
    if dataset is None:
        return "The dataset for this chart is no longer available."
    if not chart.columns.is_complete:
        return "Choose an X and a Y column to draw this chart."
    missing = [c for c in (chart.columns.x, chart.columns.y) if c not in dataset.columns]
    if missing:
        return f"Column(s) not in dataset: {', '.join(missing)}"
    return ""


def render_state(chart: Chart, datasets: DatasetRegistry) -> RenderState:
    """UNRESOLVED if the dataset is gone or x/y are unset, else RESOLVABLE."""
    dataset = datasets.get(chart.dataset_id)
    if _unresolved_reason(chart, dataset):
        return RenderState.UNRESOLVED
    return RenderState.RESOLVABLE


def resolve_chart(chart: Chart, datasets: DatasetRegistry) -> ResolvedChart:
    """Resolve a chart into its filtered row set and palette.

    Returns
    -------
    ResolvedChart with:
        rows    : dataset rows passing chart.filters, original order
                  (empty when the dataset is missing)
        palette : non-empty color list
        state   : RESOLVABLE or UNRESOLVED, with a reason for the latter
    """
    palette = resolve_palette(chart.color_scheme)
    dataset = datasets.get(chart.dataset_id)

    if dataset is None:
        logger.warning("Chart %s references missing dataset %s", chart.id, chart.dataset_id)
        return ResolvedChart(
            chart=chart,
            state=RenderState.UNRESOLVED,
            palette=palette,
            reason=_unresolved_reason(chart, None),
        )

    rows = apply_filters(dataset.rows, chart.filters)
    reason = _unresolved_reason(chart, dataset)
    state = RenderState.UNRESOLVED if reason else RenderState.RESOLVABLE
    return ResolvedChart(chart=chart, state=state, rows=rows, palette=palette, reason=reason)


def get_dashboard_view(dashboard: Dashboard | None, datasets: DatasetRegistry) -> list[ResolvedChart]:
    """Resolve every chart on a dashboard, in dashboard order."""
    if dashboard is None:
        return []
    return [resolve_chart(chart, datasets) for chart in dashboard.charts]
