"""
Plotly rendering of resolved charts.

One renderer per ChartType, registered in RENDERERS. Renderers receive
rows that are already filtered and a non-empty palette. UNRESOLVED charts
get an empty figure carrying the reason instead of raising.
"""

import logging
from collections.abc import Callable

import plotly.graph_objects as go

from .dashboard import ResolvedChart
from .models import ChartColumns, ChartType, Record, RenderState, Scalar
from .palettes import color_for

logger = logging.getLogger(__name__)

Series = tuple[str, list[Scalar], list[Scalar]]


def split_series(rows: list[Record], columns: ChartColumns) -> list[Series]:
    """Group rows into (name, xs, ys) series.

    Without a category column there is a single series named after the Y
    column; otherwise one series per category value in first-seen order.
    """
    if not columns.category:
        return [(columns.y, [r.get(columns.x) for r in rows], [r.get(columns.y) for r in rows])]

    groups: dict[str, tuple[list[Scalar], list[Scalar]]] = {}
    for row in rows:
        key = str(row.get(columns.category))
        xs, ys = groups.setdefault(key, ([], []))
        xs.append(row.get(columns.x))
        ys.append(row.get(columns.y))
    return [(name, xs, ys) for name, (xs, ys) in groups.items()]


def _render_line(resolved: ResolvedChart) -> go.Figure:
    fig = go.Figure()
    scheme = resolved.chart.color_scheme
    for i, (name, xs, ys) in enumerate(split_series(resolved.rows, resolved.chart.columns)):
        fig.add_trace(go.Scatter(
            x=xs, y=ys, name=name, mode="lines+markers",
            line=dict(color=color_for(scheme, i), width=2),
        ))
    return fig


def _render_bar(resolved: ResolvedChart) -> go.Figure:
    fig = go.Figure()
    scheme = resolved.chart.color_scheme
    for i, (name, xs, ys) in enumerate(split_series(resolved.rows, resolved.chart.columns)):
        fig.add_trace(go.Bar(x=xs, y=ys, name=name, marker_color=color_for(scheme, i)))
    fig.update_layout(barmode="group")
    return fig


def _render_pie(resolved: ResolvedChart) -> go.Figure:
    columns = resolved.chart.columns
    labels = [r.get(columns.x) for r in resolved.rows]
    values = [r.get(columns.y) for r in resolved.rows]
    colors = [color_for(resolved.chart.color_scheme, i) for i in range(len(labels))]
    return go.Figure(go.Pie(labels=labels, values=values, marker=dict(colors=colors), sort=False))


def _render_scatter(resolved: ResolvedChart) -> go.Figure:
    fig = go.Figure()
    scheme = resolved.chart.color_scheme
    for i, (name, xs, ys) in enumerate(split_series(resolved.rows, resolved.chart.columns)):
        fig.add_trace(go.Scatter(
            x=xs, y=ys, name=name, mode="markers",
            marker=dict(color=color_for(scheme, i), size=8),
        ))
    return fig


def _render_area(resolved: ResolvedChart) -> go.Figure:
    fig = go.Figure()
    scheme = resolved.chart.color_scheme
    for i, (name, xs, ys) in enumerate(split_series(resolved.rows, resolved.chart.columns)):
        color = color_for(scheme, i)
        fig.add_trace(go.Scatter(
            x=xs, y=ys, name=name, mode="lines",
            fill="tozeroy", line=dict(color=color), fillcolor=color, opacity=0.6,
        ))
    return fig


def _render_radar(resolved: ResolvedChart) -> go.Figure:
    fig = go.Figure()
    scheme = resolved.chart.color_scheme
    for i, (name, xs, ys) in enumerate(split_series(resolved.rows, resolved.chart.columns)):
        color = color_for(scheme, i)
        fig.add_trace(go.Scatterpolar(
            r=ys, theta=xs, name=name, fill="toself",
            line=dict(color=color), opacity=0.6,
        ))
    fig.update_layout(polar=dict(radialaxis=dict(visible=True)))
    return fig


RENDERERS: dict[ChartType, Callable[[ResolvedChart], go.Figure]] = {
    ChartType.LINE: _render_line,
    ChartType.BAR: _render_bar,
    ChartType.PIE: _render_pie,
    ChartType.SCATTER: _render_scatter,
    ChartType.AREA: _render_area,
    ChartType.RADAR: _render_radar,
}


def empty_figure(message: str, height: int | None = None) -> go.Figure:
    """Blank figure with a centred explanatory note."""
    fig = go.Figure()
    fig.add_annotation(
        text=message, showarrow=False,
        xref="paper", yref="paper", x=0.5, y=0.5,
        font=dict(size=14, color="#888"),
    )
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        plot_bgcolor="rgba(0,0,0,0)",
        height=height,
    )
    return fig


def render_chart(resolved: ResolvedChart) -> go.Figure:
    """Draw a resolved chart. Marks it RENDERED on success."""
    chart = resolved.chart
    if resolved.state is RenderState.UNRESOLVED:
        logger.debug("Chart %s unresolved: %s", chart.id, resolved.reason)
        return empty_figure(resolved.reason or "Nothing to display.", chart.size.height)

    fig = RENDERERS[chart.type](resolved)
    fig.update_layout(
        title=chart.title,
        height=chart.size.height,
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=40, b=30),
    )
    resolved.state = RenderState.RENDERED
    return fig
