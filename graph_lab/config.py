from __future__ import annotations

from pathlib import Path

# Paths and filenames
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "graph_lab" / "data"

# Parameter defaults and bounds
DEFAULT_PARAMS = {"a": 1.0, "p": 0.0, "q": 0.0, "m": 1.0, "n": 2.0}
PARAM_BOUNDS = {
    "a": {"min": -5.0, "max": 5.0},
    "p": {"min": -5.0, "max": 5.0},
    "q": {"min": -5.0, "max": 5.0},
    "m": {"min": -5.0, "max": 5.0},
    "n": {"min": -10.0, "max": 10.0},
}
PARABOLA_PARAMS = ("a", "p", "q")
LINE_PARAMS = ("m", "n")
A_MIN_MAGNITUDE = 0.01

# Precision / guard rails
EPS_DISCRIMINANT = 1e-9
EPS_POINT = 1e-10
ROUND_TRIP_TOLERANCE = 1e-6

# Viewport
UNITS_ACROSS = 12.0
ZOOM_MIN = 0.5
ZOOM_MAX = 5.0
GRID_STEP_CANDIDATES = (0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 50.0)
GRID_MIN_PIXEL_GAP = 40.0
VISIBILITY_MARGIN = 2.0

# Gestures (screen px unless noted)
CURVE_PROXIMITY = 0.5  # math units
DRAG_SENSITIVITY = 0.01  # a per px
TAP_SLOP_PX = 10.0
HIT_RADIUS_PX = 44.0
SNAP_RADIUS_PX = 20.0
POINT_SNAP_STEP = 0.5

# Marked points
MAX_MARKED_POINTS = 10
POINT_LABELS = ("A", "B", "C", "D", "E", "F", "G", "H", "I", "J")

# Fraction approximation
FRACTION_TOLERANCE = 1e-3
FRACTION_MAX_DENOMINATOR = 20
PARAM_DECIMALS = {"a": 2, "p": 1, "q": 1, "m": 2, "n": 2}

# Logging and tracing
SCHEMA_VERSION = 1
APP_MODE = "graph-lab"
DEFAULT_INTERACTION_PHASE = "change"
LOG_RATE_LIMIT_SECONDS = 0.1
LOG_PREVIEW_CAPACITY = 5

# CSV column order
SCHEMA_COLUMNS = [
    "schema_version",
    "session_id",
    "seq",
    "t_server_iso",
    "elapsed_time_ms",
    "event",
    "param_name",
    "old_value",
    "new_value",
    "source",
    "mode",
    "interaction_phase",
    "a",
    "p",
    "q",
    "m",
    "n",
    "zoom_scale",
    "pan_x",
    "pan_y",
    "condition",
    "label",
    "x",
    "y",
    "graph_type",
    "description",
]

# Plot palette and styles (Okabe–Ito)
FIGURE_COLORS = {
    "parabola": "#0072B2",
    "line": "#D55E00",
    "intersection": "#009E73",
    "point": "#E69F00",
    "distance": "#CC79A7",
    "sketch": "#000000",
    "area_left": "rgba(213,94,0,0.3)",
    "area_right": "rgba(0,114,178,0.3)",
}
PARABOLA_LINE_STYLE = {"color": FIGURE_COLORS["parabola"], "width": 3}
LINE_LINE_STYLE = {"color": FIGURE_COLORS["line"], "width": 3}
GHOST_OPACITY = 0.3
INTERSECTION_MARKER_STYLE = {
    "color": FIGURE_COLORS["intersection"],
    "size": 12,
    "symbol": "circle",
    "line": {"color": "#ffffff", "width": 2},
}
POINT_MARKER_STYLE = {
    "color": FIGURE_COLORS["point"],
    "size": 9,
    "symbol": "circle",
    "line": {"color": "#ffffff", "width": 1},
}
DISTANCE_LINE_STYLE = {"color": FIGURE_COLORS["distance"], "width": 2, "dash": "dash"}
DROPLINE_STYLE = {"color": FIGURE_COLORS["intersection"], "width": 1, "dash": "dash"}
SKETCH_LINE_STYLE = {"color": FIGURE_COLORS["sketch"], "width": 2}
AXIS_LINE_STYLE = {"zerolinecolor": "#777777"}
FIGURE_SAMPLES = 401
