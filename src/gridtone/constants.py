"""
Constants used internally by gridtone.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_MODE_RGBA = "RGBA"
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)

# Fallback for missing or corrupt color data
COLOR_FALLBACK_GRAY = (128, 128, 128)

CHANNEL_MIN = 0
CHANNEL_MAX = 255
RGB_CHANNELS = 3
RGBA_CHANNELS = 4

# Overlay stripes shown for dominant colors
STRIPE_COUNT = 3

# Tile outline (white at ~8% opacity)
TILE_STROKE_ALPHA = 0.08
TILE_STROKE_PX = 1

# Dot swatch geometry in logical pixels
SWATCH_PAD = 8
SWATCH_DIAMETER = 18
SWATCH_GAP = 8
SWATCH_CAPSULE_INSET = 6
SWATCH_CAPSULE_LIFT = 4
SWATCH_CAPSULE_ALPHA = 0.15
SWATCH_OUTLINE_ALPHA = 0.25

# Pillow JPEG quality ceiling
JPEG_QUALITY_MIN = 1
JPEG_QUALITY_MAX = 95

# Import filtering
IMAGE_SUFFIXES = frozenset({
    ".bmp",
    ".gif",
    ".jpeg",
    ".jpg",
    ".png",
    ".tif",
    ".tiff",
    ".webp",
})

# Persisted state
STORAGE_KEY = "gridtone:v1"
