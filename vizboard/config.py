"""
Configuration: palette registry, chart defaults, ingestion constants.

COLOR_SCHEMES maps each palette id to its ordered color list. Colors are
cycled by index when a chart has more series/slices than colors.
"""

# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------
DEFAULT_COLOR_SCHEME = "default"

COLOR_SCHEMES: dict[str, list[str]] = {
    "default": [
        "#8884d8", "#82ca9d", "#ffc658", "#ff7c7c",
        "#8dd1e1", "#d084d0", "#ffb347", "#67b7dc",
    ],
    "ocean": [
        "#003f5c", "#2f4b7c", "#665191", "#a05195",
        "#d45087", "#f95d6a", "#ff7c43", "#ffa600",
    ],
    "forest": [
        "#2d4a2b", "#4a7c59", "#8eb897", "#c5d86d",
        "#f7f3ce", "#e8b04b", "#c85450", "#8b4049",
    ],
    "sunset": [
        "#ff6b6b", "#f9844a", "#ee6c4d", "#c9ada7",
        "#f8b500", "#ffcb69", "#e76f51", "#f4a261",
    ],
}

# Display labels for UI dropdowns
COLOR_SCHEME_LABELS: dict[str, str] = {
    "default": "Default",
    "ocean": "Ocean",
    "forest": "Forest",
    "sunset": "Sunset",
}

# ---------------------------------------------------------------------------
# Dashboards & charts
# ---------------------------------------------------------------------------
DEFAULT_LAYOUT = "grid"
DASHBOARD_NAME_TEMPLATE = "Dashboard {n}"
CHART_TITLE_TEMPLATE = "{type} chart"

# Logical units; placement is left to the front end's layout
DEFAULT_CHART_SIZE = (400, 300)
DEFAULT_CHART_POSITION = (0, 0)

# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------
DELIMITED_EXTENSIONS = {".csv"}
SPREADSHEET_EXTENSIONS = {".xlsx", ".xls"}

TRUE_STRINGS = {"true", "TRUE", "True"}
FALSE_STRINGS = {"false", "FALSE", "False"}

# Decode order for delimited text handed over as bytes
TEXT_ENCODINGS = ("utf-8-sig", "latin-1")

# Header placeholder for blank spreadsheet header cells
EMPTY_HEADER = "__EMPTY"
