"""Application configuration constants."""

from __future__ import annotations

# Line width (image pixels)
DEFAULT_LINE_WIDTH = 3
MIN_LINE_WIDTH = 1
MAX_LINE_WIDTH = 30

# Stroke rendering
STROKE_DOT_EPSILON = 0.1    # Nudge for single-point strokes so a dot shows

# Arrow geometry
ARROW_MIN_LENGTH = 2.0       # Shorter arrows are not drawn
ARROW_MIN_SIZE_MULTIPLIER = 0.4
ARROW_BASE_WIDTH_FRAC = 0.08
ARROW_BASE_WIDTH_MIN = 4.0
ARROW_BASE_WIDTH_MAX = 8.0
ARROW_SHAFT_WIDTH_FACTOR = 1.4
ARROW_HEAD_LENGTH_FRAC = 0.28
ARROW_HEAD_LENGTH_MIN = 14.0
ARROW_HEAD_LENGTH_MAX = 28.0
ARROW_HEAD_WIDTH_FACTOR = 2.4
ARROW_OUTLINE_FRAC = 0.35
ARROW_OUTLINE_MIN = 1.0

# Colors
DEFAULT_COLOR = "#ff0000"
COLOR_PRESETS = ("#ff0000", "#00c853", "#2962ff", "#ffd600", "#000000")
SURFACE_CLEAR_RGBA = (0, 0, 0, 0)

# Export
EXPORT_FORMAT = "PNG"
EXPORT_MIME = "image/png"

# Commit events
WIDGET_NAME = "FileDisplayer"

# Viewer
TARGET_FPS = 60
WINDOW_W = 1280
WINDOW_H = 800
WINDOW_TITLE = "overmark"
FIT_DEFAULT_SCALE = 0.95
WIDTH_STEP = 1

# Supported image extensions
IMG_EXTS = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"})

# Hotkeys (raylib key codes)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_TOOL_PEN = 80           # KEY_P
KEY_TOOL_ARROW = 65         # KEY_A
KEY_UNDO = 90               # KEY_Z
KEY_SAVE = 83               # KEY_S
KEY_DELETE = 261            # KEY_DELETE
KEY_CANCEL = 67             # KEY_C
KEY_WIDTH_DOWN = 91         # KEY_LEFT_BRACKET
KEY_WIDTH_UP = 93           # KEY_RIGHT_BRACKET
KEY_COLOR_FIRST = 49        # KEY_ONE; presets map to KEY_ONE..KEY_FIVE
KEY_CLOSE = 256             # KEY_ESCAPE
