"""
vizboard — Dataset & Dashboard Composition Layer

Turns uploaded CSV/Excel files into normalised in-memory datasets and lets
a front end compose named dashboards out of chart configurations.

Data flow:
    file bytes -> loaders.ingest() -> DatasetRegistry
    selection state -> charts.build_chart() -> DashboardRegistry.add_chart()
    dashboard.resolve_chart() -> filtered rows + palette -> renderers

To connect to Streamlit/Dash:
    Keep one session.SessionContext per user session and call
    dashboard.get_dashboard_view(dashboard, datasets) to get the resolved
    charts for rendering (see app.py).

To add new palettes:
    Add an entry to config.COLOR_SCHEMES mapping the scheme id to an
    ordered list of colors.
"""

__version__ = "0.1.0"
