"""Shared default values for user-facing configuration settings."""
from gridtone.type_defs import ColorMode, OverlayStyle

# Analysis
DEFAULT_SAMPLE_MAX_SIDE = 96
DEFAULT_CLUSTER_COUNT = 3
DEFAULT_SAMPLE_CAP = 4000
DEFAULT_ITERATIONS = 8

# Render
DEFAULT_COLUMNS = 3
DEFAULT_TILE_SIZE = 300
DEFAULT_SPACING = 6
DEFAULT_BACKGROUND = (15, 15, 16)  # #0F0F10
DEFAULT_INCLUDE_OVERLAYS = True
DEFAULT_PIXEL_DENSITY = 1.0
DEFAULT_JPEG_QUALITY = 92
PREVIEW_TILE_SIZE = 120

# Overlay
DEFAULT_SHOW_COLORS = False
DEFAULT_COLOR_MODE: ColorMode = "average"
DEFAULT_OVERLAY_STYLE: OverlayStyle = "dot"
DEFAULT_OVERLAY_ALPHA = 0.5

# Import
DEFAULT_RETAIN_MAX_SIDE = 1600

# Output
DEFAULT_OUTPUT_PATH = "gridtone.jpg"
DEFAULT_STATE_PATH = "gridtone-state.json"
