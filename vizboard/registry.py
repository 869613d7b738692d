"""
Session-scoped registries for datasets and dashboards.

Each registry is the single owner of its collection. Ids are random
uuid4 hex strings, so two objects created back to back never collide.
Lookups of unknown ids through get()/remove()/add_chart()/remove_chart()
are no-ops; require() raises the matching NotFoundError.
"""

import dataclasses
import logging
import uuid
from collections.abc import Iterator

from .config import DASHBOARD_NAME_TEMPLATE, DEFAULT_LAYOUT
from .errors import ChartNotFoundError, DashboardNotFoundError, DatasetNotFoundError
from .models import Chart, Dashboard, Dataset

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


class DatasetRegistry:
    """Imported datasets in insertion order."""

    def __init__(self):
        self._datasets: dict[str, Dataset] = {}

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return dataset_id in self._datasets

    def __iter__(self) -> Iterator[Dataset]:
        return iter(list(self._datasets.values()))

    def register(self, dataset: Dataset) -> str:
        """Store ``dataset`` and return its id.

        A dataset without an id, or whose id is already taken, is stored
        under a freshly generated id. Existing entries are never replaced.
        """
        if dataset.id is None or dataset.id in self._datasets:
            if dataset.id is not None:
                logger.warning("Dataset id '%s' already registered, assigning a new id", dataset.id)
            dataset = dataclasses.replace(dataset, id=new_id())
        self._datasets[dataset.id] = dataset
        logger.info("Registered dataset '%s' (%s, %d rows)", dataset.name, dataset.id, dataset.row_count)
        return dataset.id

    def get(self, dataset_id: str | None) -> Dataset | None:
        if dataset_id is None:
            return None
        return self._datasets.get(dataset_id)

    def require(self, dataset_id: str) -> Dataset:
        dataset = self.get(dataset_id)
        if dataset is None:
            raise DatasetNotFoundError(dataset_id)
        return dataset

    def remove(self, dataset_id: str) -> Dataset | None:
        """Drop a dataset. Charts that reference it are left untouched."""
        dataset = self._datasets.pop(dataset_id, None)
        if dataset is None:
            logger.warning("Cannot remove dataset '%s': not found", dataset_id)
        else:
            logger.info("Removed dataset '%s' (%s)", dataset.name, dataset_id)
        return dataset

    def list(self) -> list[Dataset]:
        return list(self._datasets.values())


class DashboardRegistry:
    """Dashboards in creation order, each owning an ordered list of charts."""

    def __init__(self):
        self._dashboards: dict[str, Dashboard] = {}

    def __len__(self) -> int:
        return len(self._dashboards)

    def __contains__(self, dashboard_id: object) -> bool:
        return dashboard_id in self._dashboards

    def __iter__(self) -> Iterator[Dashboard]:
        return iter(list(self._dashboards.values()))

    def next_default_name(self) -> str:
        # Based on the live count, so deletions are reflected
        return DASHBOARD_NAME_TEMPLATE.format(n=len(self._dashboards) + 1)

    def create_dashboard(self, name: str | None = None, layout: str = DEFAULT_LAYOUT) -> Dashboard:
        dashboard = Dashboard(id=new_id(), name=name or self.next_default_name(), layout=layout)
        self._dashboards[dashboard.id] = dashboard
        logger.info("Created dashboard '%s' (%s)", dashboard.name, dashboard.id)
        return dashboard

    def get(self, dashboard_id: str | None) -> Dashboard | None:
        if dashboard_id is None:
            return None
        return self._dashboards.get(dashboard_id)

    def require(self, dashboard_id: str) -> Dashboard:
        dashboard = self.get(dashboard_id)
        if dashboard is None:
            raise DashboardNotFoundError(dashboard_id)
        return dashboard

    def require_chart(self, dashboard_id: str, chart_id: str) -> Chart:
        chart = self.require(dashboard_id).find_chart(chart_id)
        if chart is None:
            raise ChartNotFoundError(chart_id)
        return chart

    def remove_dashboard(self, dashboard_id: str) -> Dashboard | None:
        dashboard = self._dashboards.pop(dashboard_id, None)
        if dashboard is None:
            logger.warning("Cannot remove dashboard '%s': not found", dashboard_id)
        else:
            logger.info("Removed dashboard '%s' with %d charts", dashboard.name, len(dashboard.charts))
        return dashboard

    def rename_dashboard(self, dashboard_id: str, name: str) -> Dashboard | None:
        dashboard = self.get(dashboard_id)
        if dashboard is None:
            logger.warning("Cannot rename dashboard '%s': not found", dashboard_id)
            return None
        dashboard.name = name
        return dashboard

    def add_chart(self, dashboard_id: str, chart: Chart) -> Dashboard | None:
        """Append ``chart`` to a dashboard. No-op for unknown dashboards or a repeated chart id."""
        dashboard = self.get(dashboard_id)
        if dashboard is None:
            logger.warning("Cannot add chart to dashboard '%s': not found", dashboard_id)
            return None
        if dashboard.find_chart(chart.id) is not None:
            logger.warning("Chart '%s' already on dashboard '%s'", chart.id, dashboard_id)
            return dashboard
        dashboard.charts.append(chart)
        logger.info("Added %s chart %s to '%s'", chart.type.value, chart.id, dashboard.name)
        return dashboard

    def remove_chart(self, dashboard_id: str, chart_id: str) -> Chart | None:
        """Remove a chart by id. No-op if either id is unknown."""
        dashboard = self.get(dashboard_id)
        if dashboard is None:
            logger.warning("Cannot remove chart from dashboard '%s': not found", dashboard_id)
            return None
        chart = dashboard.find_chart(chart_id)
        if chart is None:
            logger.warning("Chart '%s' not on dashboard '%s'", chart_id, dashboard_id)
            return None
        dashboard.charts = [c for c in dashboard.charts if c.id != chart_id]
        return chart

    def find_charts_for_dataset(self, dataset_id: str) -> list[tuple[Dashboard, Chart]]:
        return [
            (dashboard, chart)
            for dashboard in self._dashboards.values()
            for chart in dashboard.charts
            if chart.dataset_id == dataset_id
        ]

    def list(self) -> list[Dashboard]:
        return list(self._dashboards.values())
