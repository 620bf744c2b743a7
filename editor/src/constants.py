"""
Canvas Node Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Canvas defaults and render loop timing
- Transform handle layout (anchors, radii, colors)
- Text node defaults and placeholder content
- Caret blink timing
- Color picker palette
- Export defaults
"""

# ======================================================================
# CANVAS
# ======================================================================

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600

# Background fill behind everything (RGBA)
CANVAS_CLEAR_COLOR = (255, 255, 255, 255)

# Render loop frame interval while a node is selected (~60 fps)
RENDER_FRAME_INTERVAL_MS = 16

# ======================================================================
# TRANSFORM HANDLES
# ======================================================================
# Handle kinds in priority order. Hit testing walks this order, so when two
# hit circles overlap the earlier kind wins.

HANDLE_TRANSLATE = 'translate'
HANDLE_DELETE = 'delete'
HANDLE_RESIZE = 'resize'
HANDLE_ROTATE = 'rotate'

HANDLE_PRIORITY = (HANDLE_TRANSLATE, HANDLE_DELETE, HANDLE_RESIZE, HANDLE_ROTATE)

# Normalized anchor on the padded selection box (0,0 = top-left, 1,1 = bottom-right)
HANDLE_ANCHORS = {
    HANDLE_TRANSLATE: (0.0, 0.0),
    HANDLE_DELETE:    (1.0, 0.0),
    HANDLE_RESIZE:    (1.0, 1.0),
    HANDLE_ROTATE:    (0.0, 1.0),
}

HANDLE_RADIUS = 12  # Default handle circle radius (pixels)
HANDLE_RADII = {
    HANDLE_TRANSLATE: 20,  # Larger grab area for moving
}

# Selection chrome styling (RGBA)
SELECTION_BOX_COLOR = (128, 0, 128, 255)
SELECTION_BOX_WIDTH = 2
HANDLE_FILL_COLOR = (255, 255, 255, 230)
HANDLE_OUTLINE_COLOR = (153, 153, 153, 255)
HANDLE_GLYPH_COLOR = (60, 60, 60, 255)

# ======================================================================
# NODE DEFAULTS
# ======================================================================

DEFAULT_ROTATION = 0.0  # Radians
DEFAULT_SCALE_X = 1.0
DEFAULT_SCALE_Y = 1.0

IMAGE_TRANSFORMER_PADDING = 0
TEXT_TRANSFORMER_PADDING = 16

DEFAULT_FONT_SIZE = 20
DEFAULT_FONT_FAMILY = 'Poppins'
DEFAULT_FONT_WEIGHT = 'bold'
DEFAULT_TEXT_COLOR = 'black'

# ======================================================================
# TEXT EDITING
# ======================================================================

PLACEHOLDER_TEXT = "Type your text\nhere"
PLACEHOLDER_COLOR = '#818181'

CARET_BLINK_INTERVAL_MS = 500
CARET_WIDTH = 2
CARET_HEIGHT_RATIO = 0.8  # Fraction of the line height
CARET_EMPTY_COLOR = 'black'  # Caret color while the placeholder is showing

# ======================================================================
# COLOR PICKER
# ======================================================================

COLOR_PICKER_COLORS = ['black', 'white', 'red', 'blue', 'green']
COLOR_PICKER_RADIUS = 8
COLOR_PICKER_SPACING = 12
COLOR_PICKER_X_OFFSET = 8   # From the selection box left edge
COLOR_PICKER_Y_OFFSET = 16  # Below the selection box bottom edge
COLOR_PICKER_HIGHLIGHT = 'white'

# ======================================================================
# EXPORT
# ======================================================================

EXPORT_FORMATS = ('png', 'jpeg')
DEFAULT_EXPORT_FORMAT = 'png'
DEFAULT_JPEG_QUALITY = 92
