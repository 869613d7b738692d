"""
Session context: the top-level controller a front end holds per user.

Owns the dataset and dashboard registries plus the ephemeral selection
state (active dataset/dashboard, column roles, filters, palette). The
selection is only read when a chart is created.
"""

import logging
from dataclasses import dataclass, field

from .charts import build_chart
from .config import DEFAULT_COLOR_SCHEME
from .dashboard import ResolvedChart, get_dashboard_view
from .errors import NoActiveDashboardError, NoActiveDatasetError, PreconditionError
from .filters import is_inert
from .loaders import ingest, ingest_async
from .models import Chart, ChartColumns, ChartType, Dashboard, Dataset, Scalar
from .registry import DashboardRegistry, DatasetRegistry

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    x: str = ""
    y: str = ""
    category: str = ""
    filters: dict[str, Scalar] = field(default_factory=dict)
    color_scheme: str = DEFAULT_COLOR_SCHEME

    @property
    def columns(self) -> ChartColumns:
        return ChartColumns(x=self.x, y=self.y, category=self.category)


class SessionContext:
    """Selection state plus the registries it acts on."""

    def __init__(
        self,
        datasets: DatasetRegistry | None = None,
        dashboards: DashboardRegistry | None = None,
    ):
        self.datasets = datasets if datasets is not None else DatasetRegistry()
        self.dashboards = dashboards if dashboards is not None else DashboardRegistry()
        self.selection = SelectionState()
        self.active_dataset_id: str | None = None
        self.active_dashboard_id: str | None = None

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------
    @property
    def active_dataset(self) -> Dataset | None:
        return self.datasets.get(self.active_dataset_id)

    def _activate_dataset(self, dataset_id: str | None) -> None:
        """Switch the active dataset and drop selections it cannot satisfy.

        Column roles and filters naming columns the new dataset lacks are
        cleared, so they cannot leak into charts built on it.
        """
        self.active_dataset_id = dataset_id
        dataset = self.active_dataset
        columns = set(dataset.columns) if dataset is not None else set()

        sel = self.selection
        for role in ("x", "y", "category"):
            if getattr(sel, role) not in columns:
                setattr(sel, role, "")
        stale = [col for col in sel.filters if col not in columns]
        for col in stale:
            del sel.filters[col]
        if stale:
            logger.info("Cleared filters on columns not in the active dataset: %s", ", ".join(stale))

    def _register_import(self, dataset: Dataset) -> Dataset:
        dataset_id = self.datasets.register(dataset)
        self._activate_dataset(dataset_id)
        return self.datasets.require(dataset_id)

    def import_file(self, file_name: str, content: str | bytes) -> Dataset:
        """Ingest a file, register it and make it the active dataset.

        IngestError propagates and nothing is registered.
        """
        return self._register_import(ingest(file_name, content))

    async def import_file_async(self, file_name: str, content: str | bytes) -> Dataset:
        # Concurrent imports are independent; each registers on completion
        dataset = await ingest_async(file_name, content)
        return self._register_import(dataset)

    def select_dataset(self, dataset_id: str) -> bool:
        if dataset_id not in self.datasets:
            logger.warning("Cannot select dataset '%s': not found", dataset_id)
            return False
        self._activate_dataset(dataset_id)
        return True

    def remove_dataset(self, dataset_id: str) -> Dataset | None:
        """Remove a dataset. Charts using it stay and resolve as UNRESOLVED."""
        dataset = self.datasets.remove(dataset_id)
        if dataset is not None:
            if self.active_dataset_id == dataset_id:
                self._activate_dataset(None)
            orphaned = self.dashboards.find_charts_for_dataset(dataset_id)
            if orphaned:
                logger.info("%d chart(s) now reference removed dataset '%s'", len(orphaned), dataset.name)
        return dataset

    def dangling_charts(self) -> list[tuple[Dashboard, Chart]]:
        return [
            (dashboard, chart)
            for dashboard in self.dashboards
            for chart in dashboard.charts
            if chart.dataset_id not in self.datasets
        ]

    # ------------------------------------------------------------------
    # Dashboards
    # ------------------------------------------------------------------
    @property
    def active_dashboard(self) -> Dashboard | None:
        return self.dashboards.get(self.active_dashboard_id)

    def create_dashboard(self, name: str | None = None) -> Dashboard:
        dashboard = self.dashboards.create_dashboard(name)
        self.active_dashboard_id = dashboard.id
        return dashboard

    def select_dashboard(self, dashboard_id: str) -> bool:
        if dashboard_id not in self.dashboards:
            logger.warning("Cannot select dashboard '%s': not found", dashboard_id)
            return False
        self.active_dashboard_id = dashboard_id
        return True

    def remove_dashboard(self, dashboard_id: str) -> Dashboard | None:
        dashboard = self.dashboards.remove_dashboard(dashboard_id)
        if dashboard is not None and self.active_dashboard_id == dashboard_id:
            self.active_dashboard_id = None
        return dashboard

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def set_columns(self, x: str | None = None, y: str | None = None, category: str | None = None) -> None:
        """Update the chosen column roles. None leaves a role unchanged, "" clears it."""
        if x is not None:
            self.selection.x = x
        if y is not None:
            self.selection.y = y
        if category is not None:
            self.selection.category = category

    def set_filter(self, column: str, value: Scalar) -> None:
        if is_inert(value):
            self.selection.filters.pop(column, None)
        else:
            self.selection.filters[column] = value

    def clear_filters(self) -> None:
        self.selection.filters.clear()

    def set_color_scheme(self, scheme_id: str) -> None:
        self.selection.color_scheme = scheme_id

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------
    def missing_selections(self) -> list[PreconditionError]:
        """Unmet preconditions for chart creation; empty when a chart can be added."""
        missing: list[PreconditionError] = []
        if self.active_dataset is None:
            missing.append(NoActiveDatasetError())
        if self.active_dashboard is None:
            missing.append(NoActiveDashboardError())
        return missing

    @property
    def can_add_chart(self) -> bool:
        return not self.missing_selections()

    def add_chart(self, chart_type: ChartType | str) -> Chart | None:
        """Build a chart from the current selection and append it to the active dashboard.

        Returns None, changing nothing, when there is no active dataset or
        dashboard; missing_selections() tells the caller which.
        """
        missing = self.missing_selections()
        if missing:
            logger.warning("Chart not created: %s", "; ".join(str(e) for e in missing))
            return None

        chart = build_chart(
            chart_type,
            self.active_dataset_id,
            columns=self.selection.columns,
            filters=self.selection.filters,
            color_scheme=self.selection.color_scheme,
        )
        self.dashboards.add_chart(self.active_dashboard_id, chart)
        return chart

    def remove_chart(self, dashboard_id: str, chart_id: str) -> Chart | None:
        return self.dashboards.remove_chart(dashboard_id, chart_id)

    def view(self) -> list[ResolvedChart]:
        """Resolved charts of the active dashboard."""
        return get_dashboard_view(self.active_dashboard, self.datasets)
