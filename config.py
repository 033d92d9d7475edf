"""
Signal Workbench - Configuration and Constants
===============================================
Centralized configuration for colors, themes, pane geometry and app settings.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

# =============================================================================
# Signal Colors - Distinct palette for registered signals
# =============================================================================
SIGNAL_COLORS: List[str] = [
    "#FF0000",  # Red
    "#0000FF",  # Blue
    "#2E86AB",  # Steel blue
    "#A23B72",  # Magenta
    "#F18F01",  # Orange
    "#95C623",  # Lime green
    "#5E60CE",  # Indigo
    "#48BFE3",  # Cyan
    "#E63946",  # Coral red
    "#2A9D8F",  # Sea green
]

# =============================================================================
# Theme Definitions
# =============================================================================
@dataclass
class ThemeColors:
    """Color scheme for a theme"""
    bg: str
    card: str
    card_header: str
    text: str
    muted: str
    border: str
    plot_bg: str
    paper_bg: str
    grid: str
    accent: str


THEMES: Dict[str, ThemeColors] = {
    "dark": ThemeColors(
        bg="#1a1a2e",
        card="#16213e",
        card_header="#0f3460",
        text="#e8e8e8",
        muted="#aaa",
        border="#333",
        plot_bg="#1a1a2e",
        paper_bg="#16213e",
        grid="#444",
        accent="#4ea8de",
    ),
    "light": ThemeColors(
        bg="#f0f2f5",
        card="#ffffff",
        card_header="#e3e7eb",
        text="#1a1a2e",
        muted="#5a6268",
        border="#ced4da",
        plot_bg="#ffffff",
        paper_bg="#fafbfc",
        grid="#dee2e6",
        accent="#2E86AB",
    ),
}

# =============================================================================
# Application Constants
# =============================================================================
APP_TITLE = "Signal Workbench"
APP_VERSION = "1.0"
APP_HOST = "127.0.0.1"
APP_PORT = 8050
APP_URL = f"http://{APP_HOST}:{APP_PORT}"

LOGGER_NAME = "SignalWorkbench"

# Pane geometry
DEFAULT_PANE_HEIGHT = 300.0
MIN_PANE_HEIGHT = 100.0
TITLE_BAR_HEIGHT = 24.0
DEFAULT_FLOATING_SIZE: Tuple[float, float] = (480.0, 320.0)
FLOATING_ORIGIN: Tuple[float, float] = (40.0, 40.0)
FLOATING_CASCADE_OFFSET = 24.0

# Signal sampling
SAMPLE_DOMAIN: Tuple[float, float] = (-5.0, 5.0)
SAMPLE_COUNT = 200

# Drag highlighting (color, stroke width)
DRAG_ACTIVE_COLOR = "#FFFF00"
DRAG_ACTIVE_WIDTH = 2
DROP_TARGET_COLOR = "#00FF00"
DROP_TARGET_WIDTH = 3

# Axis grid
MINS_PER_DAY = 24.0 * 60.0
MINS_PER_H = 60.0
TIME_DEMO_DAYS = 5
TIME_DEMO_SAMPLES = 100
MAX_AXIS_LABELS = 12
MAX_AXIS_GRIDLINES = 200
MAX_GRID_POSITIONS = 100_000
APPROX_TOLERANCE = 1e-6

# =============================================================================
# Store Keys (for dcc.Store components)
# =============================================================================
class StoreKeys:
    """Centralized store ID constants"""
    UI_EVENT = "store-ui-event"
    FRAME = "store-frame"
    THEME = "store-theme"
    DND_INIT = "store-dnd-init"
    SIGNAL_COLORS = "store-signal-colors"


def get_theme_colors(theme_name: str) -> ThemeColors:
    """Get theme colors by name, defaulting to dark theme"""
    return THEMES.get(theme_name, THEMES["dark"])
