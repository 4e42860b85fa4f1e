from __future__ import annotations

import math
from typing import Any, Callable

from svgdoc.errors import ConfigurationError
from svgdoc.model import (
    Circle,
    Element,
    Group,
    Line,
    Path,
    Rect,
    Text,
    is_finite_number,
    is_number,
)

from . import codes
from .report import ElementResult, ValidationIssue
from .style_checks import (
    count_path_commands,
    is_valid_class_name,
    is_valid_color,
    is_valid_path_data,
    is_valid_transform,
)

LARGE_RADIUS = 10_000
LARGE_DIMENSION = 10_000
EXTREME_COORDINATE = 1_000_000
LONG_LINE = 10_000
LONG_PATH_DATA = 10_000
MAX_PATH_COMMANDS = 1000
LONG_TEXT = 10_000
LARGE_FONT = 1000
SMALL_FONT = 8
LARGE_GROUP = 1000
DEEP_NESTING = 10

REQUIRED_NUMBERS: dict[str, tuple[str, ...]] = {
    "circle": ("cx", "cy", "r"),
    "rect": ("x", "y", "width", "height"),
    "line": ("x1", "y1", "x2", "y2"),
    "path": (),
    "text": ("x", "y"),
    "group": (),
}
OPTIONAL_NUMBERS: dict[str, tuple[str, ...]] = {"rect": ("rx", "ry")}


def _element_context(element: Element) -> dict[str, Any]:
    context: dict[str, Any] = {"type": element.kind}
    if element.id:
        context["id"] = element.id
    return context


class _Checker:
    def __init__(self, element: Element) -> None:
        self.element = element
        self.result = ElementResult()

    def error(self, code: str, message: str, prop: str | None = None, value: Any = None, hint: str = "") -> None:
        self.result.errors.append(
            ValidationIssue(code, message, hint, prop, value, _element_context(self.element))
        )

    def warning(self, code: str, message: str, prop: str | None = None, value: Any = None, hint: str = "") -> None:
        self.result.warnings.append(
            ValidationIssue(code, message, hint, prop, value, _element_context(self.element))
        )

    def suggestion(self, code: str, message: str, suggestion: str, prop: str | None = None) -> None:
        self.result.suggestions.append(
            ValidationIssue(code, message, suggestion, prop, None, _element_context(self.element))
        )


def _check_common(check: _Checker) -> None:
    element = check.element
    if element.id is not None and (not isinstance(element.id, str) or not element.id.strip()):
        check.error(codes.INVALID_ID, "Element ID cannot be empty", "id", element.id)
    if element.class_name is not None and not is_valid_class_name(str(element.class_name)):
        check.warning(
            codes.INVALID_CLASS_NAME,
            "Class name contains invalid characters",
            "className",
            element.class_name,
        )
    if element.transform is not None and not is_valid_transform(str(element.transform)):
        check.error(
            codes.INVALID_TRANSFORM,
            "Transform contains invalid syntax",
            "transform",
            element.transform,
            hint="Use matrix/translate/scale/rotate/skewX/skewY functions.",
        )
    if element.style is not None:
        _check_style(check)


def _check_style(check: _Checker) -> None:
    style = check.element.style
    for attr, label, code in (
        ("opacity", "Opacity", codes.INVALID_OPACITY),
        ("fill_opacity", "Fill opacity", codes.INVALID_FILL_OPACITY),
        ("stroke_opacity", "Stroke opacity", codes.INVALID_STROKE_OPACITY),
    ):
        value = getattr(style, attr)
        if value is None:
            continue
        if not is_finite_number(value) or value < 0 or value > 1:
            check.error(code, f"{label} must be between 0 and 1", f"style.{attr}", value)
    if style.stroke_width is not None:
        if not is_finite_number(style.stroke_width) or style.stroke_width < 0:
            check.error(
                codes.INVALID_STROKE_WIDTH,
                "Stroke width cannot be negative",
                "style.stroke_width",
                style.stroke_width,
            )
    for attr, label in (("fill", "Fill"), ("stroke", "Stroke")):
        value = getattr(style, attr)
        if value and not is_valid_color(str(value)):
            check.warning(
                codes.INVALID_COLOR_FORMAT,
                f"{label} color format may not be valid",
                f"style.{attr}",
                value,
            )


def _check_numbers(check: _Checker) -> bool:
    """Report missing or non-finite numeric fields; True when all are usable."""
    element = check.element
    usable = True
    for name in REQUIRED_NUMBERS[element.kind]:
        value = getattr(element, name)
        if value is None:
            check.error(
                codes.MISSING_REQUIRED_FIELD,
                f"{element.kind.capitalize()} is missing required field '{name}'",
                name,
            )
            usable = False
        elif not is_finite_number(value):
            check.error(
                codes.INVALID_COORDINATE,
                f"{element.kind.capitalize()} field '{name}' must be a finite number",
                name,
                value if is_number(value) else str(value),
            )
            usable = False
    for name in OPTIONAL_NUMBERS.get(element.kind, ()):
        value = getattr(element, name)
        if value is not None and not is_finite_number(value):
            check.error(
                codes.INVALID_COORDINATE,
                f"{element.kind.capitalize()} field '{name}' must be a finite number",
                name,
                value if is_number(value) else str(value),
            )
            usable = False
    return usable


def _is_invisible(element: Element) -> bool:
    style = element.style
    if style is None:
        return False
    return style.fill == "none" and (not style.stroke or style.stroke == "none")


def _check_circle(check: _Checker, circle: Circle, depth: int) -> None:
    if _check_numbers(check):
        if circle.r < 0:
            check.error(codes.NEGATIVE_RADIUS, "Circle radius cannot be negative", "r", circle.r)
        elif circle.r == 0:
            check.warning(codes.ZERO_RADIUS, "Circle with zero radius will not be visible", "r", circle.r)
        elif circle.r > LARGE_RADIUS:
            check.warning(codes.LARGE_RADIUS, "Very large radius may impact performance", "r", circle.r)
        if abs(circle.cx) > EXTREME_COORDINATE or abs(circle.cy) > EXTREME_COORDINATE:
            check.warning(
                codes.EXTREME_COORDINATES,
                "Circle center coordinates are very large",
                "cx,cy",
                {"cx": circle.cx, "cy": circle.cy},
            )
        if circle.r > 1000 and circle.style is not None and circle.style.stroke_dasharray:
            check.suggestion(
                codes.PERFORMANCE_OPTIMIZATION,
                "Large circle with stroke dash array may impact performance",
                "Consider simplifying the stroke pattern or reducing the radius",
            )
    if _is_invisible(circle):
        check.warning(codes.INVISIBLE_ELEMENT, "Circle has no fill or stroke and will not be visible")


def _check_rect(check: _Checker, rect: Rect, depth: int) -> None:
    if _check_numbers(check):
        for name, label, negative, zero in (
            ("width", "width", codes.NEGATIVE_WIDTH, codes.ZERO_WIDTH),
            ("height", "height", codes.NEGATIVE_HEIGHT, codes.ZERO_HEIGHT),
        ):
            value = getattr(rect, name)
            if value < 0:
                check.error(negative, f"Rectangle {label} cannot be negative", name, value)
            elif value == 0:
                check.warning(zero, f"Rectangle with zero {label} will not be visible", name, value)
        if rect.width > LARGE_DIMENSION or rect.height > LARGE_DIMENSION:
            check.warning(
                codes.LARGE_DIMENSIONS,
                "Very large rectangle dimensions may impact performance",
                "width,height",
                {"width": rect.width, "height": rect.height},
            )
        for name, extent, label in (("rx", rect.width, "width"), ("ry", rect.height, "height")):
            value = getattr(rect, name)
            if value is None:
                continue
            if value < 0:
                check.error(
                    codes.NEGATIVE_CORNER_RADIUS, f"Corner radius {name} cannot be negative", name, value
                )
            elif value > extent / 2:
                check.warning(
                    codes.EXCESSIVE_CORNER_RADIUS,
                    f"Corner radius {name} is larger than half the {label}",
                    name,
                    value,
                )
    if _is_invisible(rect):
        check.warning(codes.INVISIBLE_ELEMENT, "Rectangle has no fill or stroke and will not be visible")


def _check_line(check: _Checker, line: Line, depth: int) -> None:
    if _check_numbers(check):
        length = math.hypot(line.x2 - line.x1, line.y2 - line.y1)
        if length == 0:
            check.warning(codes.ZERO_LENGTH_LINE, "Line has zero length and will not be visible")
        elif length > LONG_LINE:
            check.warning(codes.VERY_LONG_LINE, "Very long line may impact performance")
    stroke = line.style.stroke if line.style is not None else None
    if not stroke or stroke == "none":
        check.warning(
            codes.INVISIBLE_LINE,
            "Line has no stroke and will not be visible",
            hint="Set style.stroke to a visible color.",
        )


def _check_path(check: _Checker, path: Path, depth: int) -> None:
    d = path.d
    if not isinstance(d, str) or not d.strip():
        check.error(codes.EMPTY_PATH_DATA, "Path data (d attribute) cannot be empty", "d", d)
        return
    if not is_valid_path_data(d):
        check.error(codes.INVALID_PATH_DATA, "Path data contains invalid characters", "d", d)
    if d.strip()[0] not in "Mm":
        check.warning(
            codes.QUESTIONABLE_PATH_STRUCTURE,
            "Path data structure may be malformed",
            "d",
            d,
            hint="Path data should start with a move command (M or m).",
        )
    if len(d) > LONG_PATH_DATA:
        check.warning(codes.COMPLEX_PATH, "Very long path data may impact performance", "d")
        check.suggestion(
            codes.OPTIMIZE_PATH,
            "Path is very complex",
            "Consider simplifying the path or breaking it into smaller segments",
            "d",
        )
    if count_path_commands(d) > MAX_PATH_COMMANDS:
        check.warning(codes.HIGH_COMMAND_COUNT, "Path has many commands and may impact performance", "d")
    if _is_invisible(path):
        check.warning(codes.INVISIBLE_ELEMENT, "Path has no fill or stroke and will not be visible")


def _check_text(check: _Checker, text: Text, depth: int) -> None:
    _check_numbers(check)
    content = text.content
    if not isinstance(content, str) or not content.strip():
        check.warning(codes.EMPTY_TEXT_CONTENT, "Text element has no content", "content", content)
    elif len(content) > LONG_TEXT:
        check.warning(codes.VERY_LONG_TEXT, "Very long text content may impact performance", "content")
    style = text.style
    if style is None:
        return
    font_size = style.font_size
    if font_size is not None:
        if not is_finite_number(font_size) or font_size <= 0:
            check.error(codes.INVALID_FONT_SIZE, "Font size must be positive", "style.font_size", font_size)
        else:
            if font_size > LARGE_FONT:
                check.warning(
                    codes.VERY_LARGE_FONT, "Very large font size may impact layout", "style.font_size", font_size
                )
            if font_size < SMALL_FONT:
                check.suggestion(
                    codes.ACCESSIBILITY_IMPROVEMENT,
                    "Very small text may be hard to read",
                    "Consider increasing font size for better accessibility",
                    "style.font_size",
                )
    if style.fill and style.fill == style.stroke:
        check.warning(
            codes.LOW_CONTRAST,
            "Text fill and stroke colors are the same, may reduce readability",
        )


def _check_group(check: _Checker, group: Group, depth: int) -> None:
    if not group.children:
        check.warning(codes.EMPTY_GROUP, "Group element has no children", "children")
    elif len(group.children) > LARGE_GROUP:
        check.warning(codes.LARGE_GROUP, "Group has many children and may impact performance", "children")
    if depth > DEEP_NESTING:
        check.warning(codes.DEEP_NESTING, "Deep group nesting may impact performance", value=depth)
    for child in group.children:
        check.result.extend(validate_element(child, depth + 1))


_RULES: dict[type, Callable[[_Checker, Any, int], None]] = {
    Circle: _check_circle,
    Rect: _check_rect,
    Line: _check_line,
    Path: _check_path,
    Text: _check_text,
    Group: _check_group,
}


def supported_element_kinds() -> list[str]:
    return [cls.kind for cls in _RULES]


def validate_element(element: Element, depth: int = 0) -> ElementResult:
    """Validate one element; a group's result includes all of its descendants."""
    rule = _RULES.get(type(element))
    if rule is None:
        raise ConfigurationError(
            code="UNKNOWN_ELEMENT_TYPE",
            message=f"Unknown element type: {type(element).__name__}",
            hint=f"Use one of: {', '.join(supported_element_kinds())}.",
        )
    check = _Checker(element)
    _check_common(check)
    rule(check, element, depth)
    return check.result
