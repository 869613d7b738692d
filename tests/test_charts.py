"""Tests for the chart configuration builder."""

import dataclasses

import pytest

from vizboard.charts import build_chart, default_title
from vizboard.errors import NoActiveDatasetError, PreconditionError
from vizboard.models import ChartColumns, ChartType, Position, Size


class TestBuildChart:
    """Chart construction from a selection snapshot."""

    def test_defaults(self) -> None:
        """New charts get a typed title, default size and origin position."""
        chart = build_chart("bar", "ds", {"x": "region", "y": "sales"}, {}, "ocean")
        assert chart.type is ChartType.BAR
        assert chart.dataset_id == "ds"
        assert chart.columns == ChartColumns(x="region", y="sales", category="")
        assert chart.color_scheme == "ocean"
        assert chart.title == "Bar chart"
        assert chart.size == Size(400, 300)
        assert chart.position == Position(0, 0)

    def test_accepts_enum_and_custom_title(self) -> None:
        """ChartType members and explicit titles are accepted."""
        chart = build_chart(ChartType.RADAR, "ds", title="Skills")
        assert chart.type is ChartType.RADAR
        assert chart.title == "Skills"

    def test_unknown_type(self) -> None:
        """Unknown chart type tags are rejected."""
        with pytest.raises(ValueError):
            build_chart("histogram", "ds")

    def test_requires_dataset(self) -> None:
        """A chart cannot be built without a dataset id."""
        with pytest.raises(NoActiveDatasetError):
            build_chart("line", None)
        with pytest.raises(PreconditionError):
            build_chart("line", "")

    def test_filter_snapshot(self) -> None:
        """Later edits to the caller's filter map do not reach the chart."""
        filters = {"a": "1"}
        chart = build_chart("bar", "ds", filters=filters)
        filters["a"] = "2"
        filters["b"] = "3"
        assert chart.filters == {"a": "1"}

    def test_filters_read_only(self) -> None:
        """The stored filter snapshot cannot be edited through the chart."""
        chart = build_chart("bar", "ds", filters={"a": "1"})
        with pytest.raises(TypeError):
            chart.filters["a"] = "2"  # type: ignore[index]
        assert chart.filters == {"a": "1"}

    def test_column_snapshot(self) -> None:
        """Later edits to a column mapping do not reach the chart."""
        columns = {"x": "a", "y": "b"}
        chart = build_chart("bar", "ds", columns=columns)
        columns["x"] = "z"
        assert chart.columns.x == "a"

    def test_chart_is_frozen(self) -> None:
        """Chart fields cannot be reassigned."""
        chart = build_chart("pie", "ds")
        with pytest.raises(dataclasses.FrozenInstanceError):
            chart.title = "changed"  # type: ignore[misc]

    def test_unique_ids(self) -> None:
        """100 charts built back to back have 100 distinct ids."""
        ids = {build_chart("line", "ds").id for _ in range(100)}
        assert len(ids) == 100

    def test_missing_palette_uses_default(self) -> None:
        """A None palette id is stored as the default scheme."""
        assert build_chart("area", "ds", color_scheme=None).color_scheme == "default"


class TestChartType:
    """The closed chart-type enumeration."""

    def test_six_kinds(self) -> None:
        """Exactly the six supported kinds exist."""
        assert {t.value for t in ChartType} == {"line", "bar", "pie", "scatter", "area", "radar"}

    def test_parse(self) -> None:
        """Tags parse case-insensitively."""
        assert ChartType.parse(" Scatter ") is ChartType.SCATTER

    def test_default_title(self) -> None:
        """Titles derive from the type label."""
        assert default_title(ChartType.AREA) == "Area chart"
