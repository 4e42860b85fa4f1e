"""Builders for model elements, including path-based polygons and stars.

Style keywords are the ``Style`` field names (``fill``, ``stroke_width``,
``font_size`` ...). The outline presets default to a black one-unit stroke
with no fill; keywords passed by the caller win.
"""

from __future__ import annotations

import math
from dataclasses import fields
from typing import Any, Iterable, Sequence

from .errors import ConfigurationError
from .model import Circle, Element, Group, Line, Path, Rect, Style, Text, ViewBox

Point = tuple[float, float]
PathCommand = tuple[Any, ...]

OUTLINE_STYLE: dict[str, Any] = {"fill": "none", "stroke": "black", "stroke_width": 1}

# command letter -> number of arguments after it
PATH_COMMAND_ARITY = {"M": 2, "L": 2, "C": 6, "Q": 4, "A": 7, "Z": 0}

_STYLE_FIELDS = {item.name for item in fields(Style)}


def _invalid(message: str, hint: str) -> ConfigurationError:
    return ConfigurationError(code="INVALID_SHAPE", message=message, hint=hint)


def _style(values: dict[str, Any]) -> Style | None:
    unknown = sorted(set(values) - _STYLE_FIELDS)
    if unknown:
        raise ConfigurationError(
            code="UNKNOWN_STYLE_PROPERTY",
            message=f"Unknown style property '{unknown[0]}'",
            hint=f"Use one of: {', '.join(sorted(_STYLE_FIELDS))}.",
        )
    present = {key: value for key, value in values.items() if value is not None}
    return Style(**present) if present else None


def _outline(style: dict[str, Any]) -> dict[str, Any]:
    return {**OUTLINE_STYLE, **style}


def format_number(value: float) -> str:
    text = repr(round(float(value), 6) + 0.0)
    return text[:-2] if text.endswith(".0") else text


def path_data(commands: Iterable[PathCommand]) -> str:
    """Serialize ``("M", x, y)``-style command tuples into a ``d`` string."""
    parts: list[str] = []
    for command in commands:
        if not command or command[0] not in PATH_COMMAND_ARITY:
            raise ConfigurationError(
                code="UNKNOWN_PATH_COMMAND",
                message=f"Unknown path command: {command!r}",
                hint=f"Use one of: {', '.join(PATH_COMMAND_ARITY)}.",
            )
        letter, args = command[0], command[1:]
        if len(args) != PATH_COMMAND_ARITY[letter]:
            raise ConfigurationError(
                code="UNKNOWN_PATH_COMMAND",
                message=f"Path command {letter} takes {PATH_COMMAND_ARITY[letter]} values, got {len(args)}",
                hint="Check the command tuple.",
            )
        if letter == "A":
            rx, ry, rotation, large_arc, sweep, x, y = args
            args = (rx, ry, rotation, int(bool(large_arc)), int(bool(sweep)), x, y)
        parts.append(" ".join([letter, *(format_number(arg) for arg in args)]))
    return " ".join(parts)


def circle(cx: float, cy: float, r: float, *, id: str | None = None, class_name: str | None = None, **style: Any) -> Circle:
    if r <= 0:
        raise _invalid("Circle radius must be positive", "Pass r > 0.")
    return Circle(id=id, class_name=class_name, style=_style(style), cx=cx, cy=cy, r=r)


def rect(
    x: float,
    y: float,
    width: float,
    height: float,
    rx: float | None = None,
    ry: float | None = None,
    *,
    id: str | None = None,
    class_name: str | None = None,
    **style: Any,
) -> Rect:
    if width <= 0 or height <= 0:
        raise _invalid("Rectangle width and height must be positive", "Pass width > 0 and height > 0.")
    return Rect(
        id=id, class_name=class_name, style=_style(style), x=x, y=y, width=width, height=height, rx=rx, ry=ry
    )


def line(
    x1: float, y1: float, x2: float, y2: float, *, id: str | None = None, class_name: str | None = None, **style: Any
) -> Line:
    return Line(id=id, class_name=class_name, style=_style(style), x1=x1, y1=y1, x2=x2, y2=y2)


def text(x: float, y: float, content: str, *, id: str | None = None, class_name: str | None = None, **style: Any) -> Text:
    if not content.strip():
        raise _invalid("Text content cannot be empty", "Pass visible text content.")
    return Text(id=id, class_name=class_name, style=_style(style), x=x, y=y, content=content)


def group(
    children: Sequence[Element],
    *,
    transform: str | None = None,
    id: str | None = None,
    class_name: str | None = None,
    **style: Any,
) -> Group:
    if not children:
        raise _invalid("Group must contain at least one child element", "Pass one or more children.")
    return Group(id=id, class_name=class_name, style=_style(style), transform=transform, children=list(children))


def path(
    commands: Sequence[PathCommand], *, id: str | None = None, class_name: str | None = None, **style: Any
) -> Path:
    if not commands:
        raise _invalid("Path must contain at least one command", "Pass one or more path commands.")
    return Path(id=id, class_name=class_name, style=_style(style), d=path_data(commands))


def default_circle(radius: float) -> Circle:
    return circle(0, 0, radius, **OUTLINE_STYLE)


def default_rect(width: float, height: float) -> Rect:
    return rect(0, 0, width, height, **OUTLINE_STYLE)


def horizontal_line(x1: float, x2: float, y: float) -> Line:
    return line(x1, y, x2, y, stroke="black", stroke_width=1)


def vertical_line(x: float, y1: float, y2: float) -> Line:
    return line(x, y1, x, y2, stroke="black", stroke_width=1)


def square(x: float, y: float, size: float, **style: Any) -> Rect:
    return rect(x, y, size, size, **_outline(style))


def ellipse(cx: float, cy: float, rx: float, ry: float, **style: Any) -> Path:
    """Ellipse drawn as two half arcs, since the model has no ellipse kind."""
    commands = [
        ("M", cx - rx, cy),
        ("A", rx, ry, 0, False, False, cx + rx, cy),
        ("A", rx, ry, 0, False, False, cx - rx, cy),
        ("Z",),
    ]
    return path(commands, **_outline(style))


def polygon(points: Sequence[Point], **style: Any) -> Path:
    if len(points) < 3:
        raise _invalid("Polygon must have at least 3 points", "Pass three or more (x, y) points.")
    (first_x, first_y), rest = points[0], points[1:]
    commands: list[PathCommand] = [("M", first_x, first_y)]
    commands.extend(("L", x, y) for x, y in rest)
    commands.append(("Z",))
    return path(commands, **_outline(style))


def regular_polygon(cx: float, cy: float, radius: float, sides: int, **style: Any) -> Path:
    """Regular polygon with its first vertex straight above the center."""
    if sides < 3:
        raise _invalid("Polygon must have at least 3 sides", "Pass sides >= 3.")
    step = 2 * math.pi / sides
    points = [
        (cx + radius * math.cos(i * step - math.pi / 2), cy + radius * math.sin(i * step - math.pi / 2))
        for i in range(sides)
    ]
    return polygon(points, **style)


def star(cx: float, cy: float, outer_radius: float, inner_radius: float, points: int, **style: Any) -> Path:
    if points < 3:
        raise _invalid("Star must have at least 3 points", "Pass points >= 3.")
    step = math.pi / points
    vertices: list[Point] = []
    for i in range(points * 2):
        radius = outer_radius if i % 2 == 0 else inner_radius
        angle = i * step - math.pi / 2
        vertices.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return polygon(vertices, **style)


def bounding_box(points: Iterable[Point]) -> ViewBox:
    points = list(points)
    if not points:
        return ViewBox(0, 0, 0, 0)
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    return ViewBox(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
