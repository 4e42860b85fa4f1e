from __future__ import annotations

# Document structure
MISSING_VIEWBOX = "MISSING_VIEWBOX"
EMPTY_DOCUMENT = "EMPTY_DOCUMENT"
TOO_MANY_ELEMENTS = "TOO_MANY_ELEMENTS"
EXCESSIVE_NESTING = "EXCESSIVE_NESTING"
MISSING_ACCESSIBILITY_METADATA = "MISSING_ACCESSIBILITY_METADATA"

# ViewBox
INVALID_VIEWBOX_VALUE = "INVALID_VIEWBOX_VALUE"
INVALID_VIEWBOX_WIDTH = "INVALID_VIEWBOX_WIDTH"
INVALID_VIEWBOX_HEIGHT = "INVALID_VIEWBOX_HEIGHT"
VERY_LARGE_VIEWBOX = "VERY_LARGE_VIEWBOX"
EXTREME_ASPECT_RATIO = "EXTREME_ASPECT_RATIO"

# Cross references
MISSING_REFERENCE = "MISSING_REFERENCE"
UNREFERENCED_ID = "UNREFERENCED_ID"
DUPLICATE_ID = "DUPLICATE_ID"

# Shared element properties
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
INVALID_COORDINATE = "INVALID_COORDINATE"
INVALID_ID = "INVALID_ID"
INVALID_CLASS_NAME = "INVALID_CLASS_NAME"
INVALID_TRANSFORM = "INVALID_TRANSFORM"
INVALID_OPACITY = "INVALID_OPACITY"
INVALID_FILL_OPACITY = "INVALID_FILL_OPACITY"
INVALID_STROKE_OPACITY = "INVALID_STROKE_OPACITY"
INVALID_STROKE_WIDTH = "INVALID_STROKE_WIDTH"
INVALID_COLOR_FORMAT = "INVALID_COLOR_FORMAT"
INVISIBLE_ELEMENT = "INVISIBLE_ELEMENT"

# Circle
NEGATIVE_RADIUS = "NEGATIVE_RADIUS"
ZERO_RADIUS = "ZERO_RADIUS"
LARGE_RADIUS = "LARGE_RADIUS"
EXTREME_COORDINATES = "EXTREME_COORDINATES"
PERFORMANCE_OPTIMIZATION = "PERFORMANCE_OPTIMIZATION"

# Rect
NEGATIVE_WIDTH = "NEGATIVE_WIDTH"
ZERO_WIDTH = "ZERO_WIDTH"
NEGATIVE_HEIGHT = "NEGATIVE_HEIGHT"
ZERO_HEIGHT = "ZERO_HEIGHT"
LARGE_DIMENSIONS = "LARGE_DIMENSIONS"
NEGATIVE_CORNER_RADIUS = "NEGATIVE_CORNER_RADIUS"
EXCESSIVE_CORNER_RADIUS = "EXCESSIVE_CORNER_RADIUS"

# Line
ZERO_LENGTH_LINE = "ZERO_LENGTH_LINE"
VERY_LONG_LINE = "VERY_LONG_LINE"
INVISIBLE_LINE = "INVISIBLE_LINE"

# Path
EMPTY_PATH_DATA = "EMPTY_PATH_DATA"
INVALID_PATH_DATA = "INVALID_PATH_DATA"
QUESTIONABLE_PATH_STRUCTURE = "QUESTIONABLE_PATH_STRUCTURE"
COMPLEX_PATH = "COMPLEX_PATH"
OPTIMIZE_PATH = "OPTIMIZE_PATH"
HIGH_COMMAND_COUNT = "HIGH_COMMAND_COUNT"

# Text
EMPTY_TEXT_CONTENT = "EMPTY_TEXT_CONTENT"
VERY_LONG_TEXT = "VERY_LONG_TEXT"
INVALID_FONT_SIZE = "INVALID_FONT_SIZE"
VERY_LARGE_FONT = "VERY_LARGE_FONT"
LOW_CONTRAST = "LOW_CONTRAST"
ACCESSIBILITY_IMPROVEMENT = "ACCESSIBILITY_IMPROVEMENT"

# Group
EMPTY_GROUP = "EMPTY_GROUP"
LARGE_GROUP = "LARGE_GROUP"
DEEP_NESTING = "DEEP_NESTING"

# Compliance rules
SVG20_VIEWBOX_REQUIRED = "SVG2.0-VIEWBOX-REQUIRED"
SVG20_EMPTY_GROUPS = "SVG2.0-EMPTY-GROUPS"
