"""
utils/constants.py
------------------
Shared constants used across the dashboard sections and the
processing scripts. Import from here rather than defining locally
in section files.
"""

import os

# ── Input files ───────────────────────────────────────────────────
DATA_DIR = "data"
RAW_DIR  = os.path.join(DATA_DIR, "raw")

CRIME_BY_DATE_PATH      = os.path.join(DATA_DIR, "crimeByDate.csv")
CRIME_BY_COMMUNITY_PATH = os.path.join(DATA_DIR, "crimeByCommunity.csv")
MAP_PATH                = os.path.join(DATA_DIR, "chitown.topojson")

CRIME_BY_DATE_COLUMNS      = ["Date", "Crimes"]
CRIME_BY_COMMUNITY_COLUMNS = ["year", "Community Area", "Crimes"]

# TopoJSON object holding the community area polygons, and the
# feature properties read from it.
MAP_LAYER               = "community"
COMMUNITY_PROPERTY      = "community"
AREA_NUMBER_PROPERTY    = "area_numbe"

# Projected CRS used for centroid maths (UTM zone 16N covers Chicago).
PROJECTED_CRS = "EPSG:26916"
GEOGRAPHIC_CRS = "EPSG:4326"

# ── Date formats ──────────────────────────────────────────────────
DATE_FORMAT     = "%Y-%m-%d"
YEAR_FORMAT     = "%Y"
RAW_DATE_FORMAT = "%m/%d/%Y %I:%M:%S %p"

# ── Year selection ────────────────────────────────────────────────
DEFAULT_YEAR = "2012"

LINE_FREQUENCIES = {
    "Daily":   "D",
    "Weekly":  "W",
    "Monthly": "MS",
}

# ── Line chart ────────────────────────────────────────────────────
GRAPH_MARGIN = dict(t=20, r=20, b=30, l=50)
GRAPH_WIDTH  = 660
GRAPH_HEIGHT = 480
GRAPH_TICK_FORMAT = "%b"
GRAPH_Y_TITLE = "Number of Crimes"
LINE_COLOUR = "steelblue"
LINE_WIDTH  = 1.5

# ── Choropleth map ────────────────────────────────────────────────
MAP_WIDTH  = 510
MAP_HEIGHT = 600
MAP_OUTLINE_COLOUR = "white"
MAP_OUTLINE_WIDTH  = 2
ACTIVE_OUTLINE_WIDTH = 3
LABEL_FONT = dict(size=8, color="#333333")

CRIME_PALETTE = ["#eaeaea", "#ffd4aa", "#ffa54c", "#c63b3b", "#720f00"]
NO_DATA_COLOUR = "#bdbdbd"
NO_DATA_LABEL  = "No data"
COLOUR_TICK_COUNT = 5

# Click-to-zoom limits. The region fills ZOOM_FILL of the viewport,
# capped at ZOOM_CLICK_MAX. Scroll zoom on the map is bounded by ZOOM_EXTENT.
ZOOM_EXTENT    = (1, 20)
ZOOM_CLICK_MAX = 8
ZOOM_FILL      = 0.7
ALL_COMMUNITIES = "All of Chicago"

# ── Legend ────────────────────────────────────────────────────────
LEGEND_WIDTH  = 475
LEGEND_HEIGHT = 100
LEGEND_CAPTION = "Crime Count"
TOP_COMMUNITY_COUNT = 10

# ── Transitions (milliseconds) ────────────────────────────────────
GRAPH_TRANSITION_MS = 1099
MAP_TRANSITION_MS   = 999
ZOOM_TRANSITION_MS  = 1100

# ── Plotly chart config ───────────────────────────────────────────
CHART_CONFIG = {'displayModeBar': False, 'scrollZoom': False}
MAP_CHART_CONFIG = {
    'displayModeBar': False,
    'scrollZoom': True,
    'doubleClick': False,
}

# ── Shared layout defaults applied to all Plotly figures ─────────
BASE_LAYOUT = dict(
    plot_bgcolor='rgba(0,0,0,0)',
    paper_bgcolor='rgba(0,0,0,0)',
    dragmode=False,
    hovermode='x unified',
)

AXIS_DEFAULTS = dict(
    showspikes=False,
    gridcolor='rgba(0,0,0,0.05)',
)
