from __future__ import annotations

import math

import pytest

from svgcheck import codes
from svgcheck.element_rules import supported_element_kinds, validate_element
from svgcheck.style_checks import is_valid_color
from svgdoc.errors import ConfigurationError
from svgdoc.model import Circle, Group, Line, Path, Rect, Style, Text


def _codes(issues) -> set[str]:
    return {issue.code for issue in issues}


def test_valid_circle_has_no_issues() -> None:
    result = validate_element(Circle(cx=10, cy=10, r=5, style=Style(fill="#ff0000")))
    assert result.valid
    assert not result.warnings


def test_circle_radius_rules() -> None:
    assert codes.NEGATIVE_RADIUS in _codes(validate_element(Circle(cx=0, cy=0, r=-1)).errors)
    assert codes.ZERO_RADIUS in _codes(validate_element(Circle(cx=0, cy=0, r=0)).warnings)
    assert codes.LARGE_RADIUS in _codes(validate_element(Circle(cx=0, cy=0, r=20_000)).warnings)


def test_circle_extreme_coordinates_and_dash_suggestion() -> None:
    result = validate_element(
        Circle(cx=2_000_000, cy=0, r=1500, style=Style(stroke="black", stroke_dasharray="4 2"))
    )
    assert codes.EXTREME_COORDINATES in _codes(result.warnings)
    assert codes.PERFORMANCE_OPTIMIZATION in _codes(result.suggestions)


def test_missing_and_non_finite_fields_are_errors() -> None:
    missing = validate_element(Circle(cx=1, cy=1))
    assert [issue.code for issue in missing.errors] == [codes.MISSING_REQUIRED_FIELD]
    assert missing.errors[0].property == "r"

    nan = validate_element(Rect(x=math.nan, y=0, width=10, height=10))
    assert codes.INVALID_COORDINATE in _codes(nan.errors)

    text = validate_element(Text(x="left", y=0, content="hi"))
    assert text.errors[0].value == "left"


def test_rect_dimension_rules() -> None:
    assert codes.NEGATIVE_WIDTH in _codes(validate_element(Rect(x=0, y=0, width=-1, height=5)).errors)
    assert codes.ZERO_HEIGHT in _codes(validate_element(Rect(x=0, y=0, width=5, height=0)).warnings)
    corners = validate_element(Rect(x=0, y=0, width=10, height=10, rx=6, ry=-1))
    assert codes.EXCESSIVE_CORNER_RADIUS in _codes(corners.warnings)
    assert codes.NEGATIVE_CORNER_RADIUS in _codes(corners.errors)


def test_line_rules() -> None:
    result = validate_element(Line(x1=0, y1=0, x2=0, y2=0))
    assert _codes(result.warnings) == {codes.ZERO_LENGTH_LINE, codes.INVISIBLE_LINE}
    stroked = validate_element(Line(x1=0, y1=0, x2=10, y2=0, style=Style(stroke="blue")))
    assert not stroked.warnings


def test_path_rules() -> None:
    assert codes.EMPTY_PATH_DATA in _codes(validate_element(Path(d="  ")).errors)
    assert codes.INVALID_PATH_DATA in _codes(validate_element(Path(d="M 0 0 L 1 # 2")).errors)
    assert codes.QUESTIONABLE_PATH_STRUCTURE in _codes(validate_element(Path(d="L 10 10")).warnings)

    busy = "M0 0 " + "L1 1 " * 1001
    result = validate_element(Path(d=busy))
    assert codes.HIGH_COMMAND_COUNT in _codes(result.warnings)


def test_text_rules() -> None:
    result = validate_element(
        Text(x=0, y=0, content="", style=Style(font_size=6, fill="red", stroke="red"))
    )
    assert codes.EMPTY_TEXT_CONTENT in _codes(result.warnings)
    assert codes.LOW_CONTRAST in _codes(result.warnings)
    assert codes.ACCESSIBILITY_IMPROVEMENT in _codes(result.suggestions)

    bad_size = validate_element(Text(x=0, y=0, content="a", style=Style(font_size=0)))
    assert codes.INVALID_FONT_SIZE in _codes(bad_size.errors)


def test_common_property_rules() -> None:
    result = validate_element(
        Circle(
            cx=1,
            cy=1,
            r=1,
            id=" ",
            class_name="1bad",
            transform="skew(10)",
            style=Style(opacity=1.5, stroke_width=-2, fill="notacolor"),
        )
    )
    assert {codes.INVALID_ID, codes.INVALID_TRANSFORM, codes.INVALID_OPACITY, codes.INVALID_STROKE_WIDTH} <= _codes(
        result.errors
    )
    assert {codes.INVALID_CLASS_NAME, codes.INVALID_COLOR_FORMAT} <= _codes(result.warnings)


def test_valid_transform_and_colors_pass() -> None:
    result = validate_element(
        Rect(
            x=0,
            y=0,
            width=10,
            height=10,
            transform="translate(10, 20) rotate(45)",
            style=Style(fill="rgb(10, 20, 30)", stroke="#abc"),
        )
    )
    assert result.valid
    assert not result.warnings


def test_invisible_element_warning() -> None:
    result = validate_element(Rect(x=0, y=0, width=5, height=5, style=Style(fill="none")))
    assert codes.INVISIBLE_ELEMENT in _codes(result.warnings)


def test_group_collects_descendant_issues() -> None:
    group = Group(children=[Circle(cx=0, cy=0, r=-1), Group()])
    result = validate_element(group)
    assert codes.NEGATIVE_RADIUS in _codes(result.errors)
    assert codes.EMPTY_GROUP in _codes(result.warnings)


def test_deep_nesting_warning() -> None:
    inner: Group = Group(children=[Circle(cx=0, cy=0, r=1)])
    for _ in range(11):
        inner = Group(children=[inner])
    result = validate_element(inner)
    assert codes.DEEP_NESTING in _codes(result.warnings)


def test_supported_kinds_and_unknown_element() -> None:
    assert supported_element_kinds() == ["circle", "rect", "line", "path", "text", "group"]
    with pytest.raises(ConfigurationError):
        validate_element(object())


@pytest.mark.parametrize("color", ["darkblue", "gold", "RebeccaPurple", "lightgoldenrodyellow"])
def test_extended_named_colors_are_valid(color: str) -> None:
    assert is_valid_color(color)
    result = validate_element(Circle(cx=1, cy=1, r=1, style=Style(fill=color, stroke=color)))
    assert codes.INVALID_COLOR_FORMAT not in _codes(result.warnings)


def test_unknown_color_name_is_rejected() -> None:
    assert not is_valid_color("goldish")
