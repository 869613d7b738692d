"""Tests for the session controller."""

import asyncio

import pytest

from vizboard.errors import EmptyFileError, NoActiveDashboardError, NoActiveDatasetError
from vizboard.models import RenderState


class TestImport:
    """File import through the session."""

    def test_import_registers_and_activates(self, session, sales_csv) -> None:
        """A successful import is registered and becomes active."""
        dataset = session.import_file("sales.csv", sales_csv)
        assert dataset.id in session.datasets
        assert session.active_dataset_id == dataset.id

    def test_failed_import_registers_nothing(self, session) -> None:
        """A failed import leaves the registry and selection untouched."""
        with pytest.raises(EmptyFileError):
            session.import_file("empty.csv", "a,b\n")
        assert len(session.datasets) == 0
        assert session.active_dataset_id is None

    def test_concurrent_async_imports(self, session) -> None:
        """Two in-flight imports both complete and both register."""

        async def run():
            return await asyncio.gather(
                session.import_file_async("one.csv", "a\n1"),
                session.import_file_async("two.csv", "b\n2"),
            )

        first, second = asyncio.run(run())
        assert first.id != second.id
        assert {d.name for d in session.datasets.list()} == {"one.csv", "two.csv"}


class TestChartCreation:
    """Chart creation from the selection state."""

    def test_end_to_end(self, session, sales_csv) -> None:
        """Import, dashboard, selection and bar chart resolve to the filtered rows."""
        session.import_file("sales.csv", sales_csv)
        dashboard = session.create_dashboard()
        session.set_columns(x="region", y="sales")
        session.set_filter("region", "East")
        chart = session.add_chart("bar")

        assert dashboard.charts == [chart]
        [resolved] = session.view()
        assert resolved.state is RenderState.RESOLVABLE
        assert resolved.rows == [{"region": "East", "sales": 10}, {"region": "East", "sales": 5}]

    def test_selection_snapshot(self, session, sales_csv) -> None:
        """Changing the selection afterwards leaves existing charts alone."""
        session.import_file("sales.csv", sales_csv)
        session.create_dashboard()
        session.set_columns(x="region", y="sales")
        session.set_filter("a", "1")
        chart = session.add_chart("line")

        session.set_filter("a", "2")
        session.set_columns(x="sales")
        session.set_color_scheme("sunset")
        assert chart.filters == {"a": "1"}
        assert chart.columns.x == "region"
        assert chart.color_scheme == "default"

    def test_requires_dataset_and_dashboard(self, session, sales_csv) -> None:
        """Without both selections add_chart is a no-op and reports why."""
        assert session.add_chart("bar") is None
        missing = session.missing_selections()
        assert {type(e) for e in missing} == {NoActiveDatasetError, NoActiveDashboardError}

        session.import_file("sales.csv", sales_csv)
        assert session.add_chart("bar") is None
        assert [type(e) for e in session.missing_selections()] == [NoActiveDashboardError]

        session.create_dashboard()
        assert session.can_add_chart
        assert session.add_chart("bar") is not None

    def test_precondition_failure_keeps_state(self, session) -> None:
        """A rejected chart leaves dashboards untouched."""
        dashboard = session.create_dashboard()
        assert session.add_chart("pie") is None
        assert dashboard.charts == []

    def test_remove_chart(self, session, sales_csv) -> None:
        """Charts are removed from their dashboard by id."""
        session.import_file("sales.csv", sales_csv)
        dashboard = session.create_dashboard()
        chart = session.add_chart("scatter")
        assert session.remove_chart(dashboard.id, chart.id) is chart
        assert dashboard.charts == []
        assert session.remove_chart(dashboard.id, chart.id) is None


class TestSelection:
    """Selection-state helpers."""

    def test_empty_filter_value_clears(self, session) -> None:
        """Setting a filter to an empty value removes it."""
        session.set_filter("region", "East")
        session.set_filter("region", "")
        assert session.selection.filters == {}

    def test_clear_filters(self, session) -> None:
        """clear_filters() drops every filter."""
        session.set_filter("a", 1)
        session.set_filter("b", True)
        session.clear_filters()
        assert session.selection.filters == {}

    def test_set_columns_partial(self, session) -> None:
        """None leaves a role unchanged; empty string clears it."""
        session.set_columns(x="a", y="b", category="c")
        session.set_columns(y="z", category="")
        assert (session.selection.x, session.selection.y, session.selection.category) == ("a", "z", "")

    def test_select_unknown_ids(self, session) -> None:
        """Selecting unknown datasets or dashboards is refused."""
        assert session.select_dataset("missing") is False
        assert session.select_dashboard("missing") is False
        assert session.active_dataset_id is None


class TestRemoval:
    """Dataset and dashboard removal."""

    def test_remove_dataset_keeps_charts(self, session, sales_csv) -> None:
        """Charts outlive their dataset and resolve as unresolved and empty."""
        dataset = session.import_file("sales.csv", sales_csv)
        dashboard = session.create_dashboard()
        session.set_columns(x="region", y="sales")
        chart = session.add_chart("bar")

        session.remove_dataset(dataset.id)
        assert session.active_dataset_id is None
        assert dashboard.charts == [chart]
        [resolved] = session.view()
        assert resolved.state is RenderState.UNRESOLVED
        assert resolved.rows == []
        assert session.dangling_charts() == [(dashboard, chart)]

    def test_remove_dashboard_clears_active(self, session) -> None:
        """Removing the active dashboard clears the selection."""
        dashboard = session.create_dashboard()
        session.remove_dashboard(dashboard.id)
        assert session.active_dashboard is None
        assert session.view() == []

    def test_remove_unknown_ids(self, session) -> None:
        """Unknown ids are ignored."""
        assert session.remove_dataset("missing") is None
        assert session.remove_dashboard("missing") is None


class TestSelectionFollowsDataset:
    """Selection entries tied to another dataset's columns are dropped on switch."""

    def test_import_drops_foreign_filters_and_roles(self, session, sales_csv) -> None:
        """A filter on the previous dataset's column does not reach charts on the new one."""
        session.import_file("sales.csv", sales_csv)
        session.set_columns(x="region", y="sales", category="region")
        session.set_filter("region", "East")

        session.import_file("cities.csv", "city,n\nOslo,1\nRome,2")
        assert session.selection.filters == {}
        assert (session.selection.x, session.selection.y, session.selection.category) == ("", "", "")

        session.create_dashboard()
        session.set_columns(x="city", y="n")
        chart = session.add_chart("bar")
        assert chart.filters == {}
        [resolved] = session.view()
        assert resolved.state is RenderState.RESOLVABLE
        assert len(resolved.rows) == 2

    def test_select_keeps_shared_columns(self, session) -> None:
        """Roles and filters on columns both datasets have survive a switch."""
        first = session.import_file("a.csv", "region,sales\nEast,1")
        session.import_file("b.csv", "region,units\nEast,2")
        session.set_columns(x="region", y="units")
        session.set_filter("region", "East")
        session.set_filter("units", 2)

        session.select_dataset(first.id)
        assert session.selection.filters == {"region": "East"}
        assert (session.selection.x, session.selection.y) == ("region", "")

    def test_removing_active_dataset_clears_selection(self, session, sales_csv) -> None:
        """Without an active dataset no column roles or filters remain."""
        dataset = session.import_file("sales.csv", sales_csv)
        session.set_columns(x="region", y="sales")
        session.set_filter("region", "East")
        session.remove_dataset(dataset.id)
        assert session.selection.filters == {}
        assert session.selection.columns.is_complete is False
