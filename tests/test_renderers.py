"""Tests for the plotly rendering collaborator."""

import plotly.graph_objects as go
import pytest

from vizboard.charts import build_chart
from vizboard.dashboard import resolve_chart
from vizboard.loaders import ingest
from vizboard.models import ChartColumns, ChartType, RenderState
from vizboard.palettes import color_for
from vizboard.renderers import RENDERERS, render_chart, split_series


@pytest.fixture
def region_dataset_id(datasets) -> str:
    csv = "month,region,sales\nJan,East,1\nJan,West,2\nFeb,East,3\nFeb,West,4\nMar,North,5"
    return datasets.register(ingest("regions.csv", csv))


class TestRenderers:
    """Per-type rendering."""

    def test_every_chart_type_has_renderer(self) -> None:
        """The renderer mapping covers every chart kind."""
        assert set(RENDERERS) == set(ChartType)

    @pytest.mark.parametrize("chart_type", list(ChartType))
    def test_renders_each_type(self, datasets, region_dataset_id, chart_type) -> None:
        """Every kind produces a figure with data and marks the chart rendered."""
        chart = build_chart(chart_type, region_dataset_id, {"x": "month", "y": "sales"})
        resolved = resolve_chart(chart, datasets)
        fig = render_chart(resolved)
        assert isinstance(fig, go.Figure)
        assert len(fig.data) >= 1
        assert fig.layout.title.text == chart.title
        assert resolved.state is RenderState.RENDERED

    def test_category_splits_series(self, datasets, region_dataset_id) -> None:
        """A category column yields one colored trace per category value."""
        chart = build_chart(
            "bar", region_dataset_id, {"x": "month", "y": "sales", "category": "region"}, color_scheme="ocean",
        )
        fig = render_chart(resolve_chart(chart, datasets))
        assert [t.name for t in fig.data] == ["East", "West", "North"]
        assert [t.marker.color for t in fig.data] == [color_for("ocean", i) for i in range(3)]

    def test_pie_colors_cycle(self, datasets) -> None:
        """Pie slices take palette colors cyclically."""
        rows = "\n".join(f"s{i},{i}" for i in range(10))
        dataset_id = datasets.register(ingest("slices.csv", "label,value\n" + rows))
        chart = build_chart("pie", dataset_id, {"x": "label", "y": "value"})
        fig = render_chart(resolve_chart(chart, datasets))
        colors = list(fig.data[0].marker.colors)
        assert len(colors) == 10
        assert colors[8] == colors[0]

    def test_unresolved_renders_placeholder(self, datasets, region_dataset_id) -> None:
        """A dangling chart draws an empty figure with an explanation."""
        chart = build_chart("line", region_dataset_id, {"x": "month", "y": "sales"})
        datasets.remove(region_dataset_id)
        resolved = resolve_chart(chart, datasets)
        fig = render_chart(resolved)
        assert len(fig.data) == 0
        assert "no longer available" in fig.layout.annotations[0].text
        assert resolved.state is RenderState.UNRESOLVED

    def test_split_series_without_category(self) -> None:
        """Without a category there is one series named after Y."""
        rows = [{"x": 1, "y": 2}, {"x": 3}]
        assert split_series(rows, ChartColumns(x="x", y="y")) == [("y", [1, 3], [2, None])]
