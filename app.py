"""
vizboard — Interactive Dashboard Builder

Run with:  streamlit run app.py
"""

import streamlit as st

from vizboard.config import COLOR_SCHEME_LABELS
from vizboard.errors import IngestError
from vizboard.models import ChartType, index_of_value
from vizboard.palettes import available_palettes
from vizboard.renderers import render_chart
from vizboard.session import SessionContext

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="vizboard",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

NO_SELECTION = ""
GRID_COLUMNS = 3


# ---------------------------------------------------------------------------
# Session (one controller per browser session)
# ---------------------------------------------------------------------------
if "session" not in st.session_state:
    st.session_state["session"] = SessionContext()
    st.session_state["imported"] = set()

session: SessionContext = st.session_state["session"]

# ---------------------------------------------------------------------------
# Sidebar: datasets
# ---------------------------------------------------------------------------
st.sidebar.title("vizboard")
st.sidebar.subheader("Datasets")

upload = st.sidebar.file_uploader("Import CSV / Excel", type=["csv", "xlsx", "xls"])
if upload is not None and upload.file_id not in st.session_state["imported"]:
    st.session_state["imported"].add(upload.file_id)
    try:
        dataset = session.import_file(upload.name, upload.getvalue())
        st.sidebar.success(f"Imported {dataset.name} ({dataset.row_count} rows)")
    except IngestError as e:
        st.sidebar.error(str(e))

for dataset in session.datasets.list():
    active = dataset.id == session.active_dataset_id
    col_a, col_b = st.sidebar.columns([5, 1])
    if col_a.button(("▶ " if active else "") + dataset.name, key=f"ds-{dataset.id}"):
        session.select_dataset(dataset.id)
        st.rerun()
    if col_b.button("✕", key=f"ds-rm-{dataset.id}"):
        session.remove_dataset(dataset.id)
        st.rerun()

st.sidebar.divider()

# ---------------------------------------------------------------------------
# Sidebar: dashboards
# ---------------------------------------------------------------------------
st.sidebar.subheader("Dashboards")
if st.sidebar.button("＋ New dashboard"):
    session.create_dashboard()
    st.rerun()

for dashboard in session.dashboards.list():
    active = dashboard.id == session.active_dashboard_id
    col_a, col_b = st.sidebar.columns([5, 1])
    if col_a.button(("▶ " if active else "") + dashboard.name, key=f"db-{dashboard.id}"):
        session.select_dashboard(dashboard.id)
        st.rerun()
    if col_b.button("✕", key=f"db-rm-{dashboard.id}"):
        session.remove_dashboard(dashboard.id)
        st.rerun()

# ---------------------------------------------------------------------------
# Toolbar: column roles, palette, filters, chart buttons
# ---------------------------------------------------------------------------
dataset = session.active_dataset
if dataset is not None:
    options = [NO_SELECTION] + list(dataset.columns)

    def _index(value: str) -> int:
        return options.index(value) if value in options else 0

    c1, c2, c3, c4 = st.columns(4)
    x = c1.selectbox("X axis", options, index=_index(session.selection.x))
    y = c2.selectbox("Y axis", options, index=_index(session.selection.y))
    category = c3.selectbox("Category", options, index=_index(session.selection.category))
    session.set_columns(x=x, y=y, category=category)

    palettes = available_palettes()
    scheme = c4.selectbox(
        "Palette",
        palettes,
        index=palettes.index(session.selection.color_scheme) if session.selection.color_scheme in palettes else 0,
        format_func=lambda s: COLOR_SCHEME_LABELS.get(s, s),
    )
    session.set_color_scheme(scheme)

    with st.expander("Filters"):
        for column in dataset.columns:
            values = dataset.distinct_values(column)
            current = session.selection.filters.get(column)
            choices = [None] + values
            # Options are positions so 1, 1.0 and True stay distinct
            current_pos = index_of_value(values, current) if current is not None else None
            picked = st.selectbox(
                column,
                range(len(choices)),
                index=0 if current_pos is None else current_pos + 1,
                format_func=lambda i, choices=choices: "(all)" if i == 0 else str(choices[i]),
                key=f"filter-{dataset.id}-{column}",
            )
            session.set_filter(column, choices[picked])

button_cols = st.columns(len(ChartType))
for col, chart_type in zip(button_cols, ChartType):
    if col.button(chart_type.label, disabled=not session.can_add_chart, use_container_width=True):
        session.add_chart(chart_type)

if not session.can_add_chart:
    st.caption(" · ".join(str(e).capitalize() for e in session.missing_selections()))

st.divider()

# ---------------------------------------------------------------------------
# Dashboard grid
# ---------------------------------------------------------------------------
dashboard = session.active_dashboard
if dashboard is None:
    st.info("Create or select a dashboard to get started.")
else:
    st.title(dashboard.name)
    resolved_charts = session.view()
    if not resolved_charts:
        st.caption("No charts yet. Pick columns and click a chart type above.")

    grid = st.columns(GRID_COLUMNS)
    for i, resolved in enumerate(resolved_charts):
        with grid[i % GRID_COLUMNS]:
            chart = resolved.chart
            if st.button("✕ Remove", key=f"rm-{chart.id}"):
                session.remove_chart(dashboard.id, chart.id)
                st.rerun()
            st.plotly_chart(render_chart(resolved), use_container_width=True, key=f"fig-{chart.id}")
