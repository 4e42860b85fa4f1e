from __future__ import annotations

import math

import pytest

from svgdoc.errors import ConfigurationError
from svgdoc.model import Circle, Document, Group, Line, Path, Rect, Text, ViewBox
from svgdoc.transform import (
    TransformStep,
    parse_transform_step,
    transform_document,
    transform_multiple,
)


def _circle_document() -> Document:
    return Document(view_box=ViewBox(0, 0, 200, 200), elements=[Circle(cx=50, cy=50, r=25)])


def test_scale_circle_and_view_box() -> None:
    result = transform_document(_circle_document(), "scale", {"x": 2, "y": 2})
    circle = result.transformed_document.elements[0]
    assert (circle.cx, circle.cy, circle.r) == (100, 100, 50)
    assert result.transformed_document.view_box == ViewBox(0, 0, 400, 400)
    assert result.metadata.scale_factors == (2.0, 2.0)
    assert result.applied[0].description == "Scale by 2x2"


def test_scale_uses_smaller_factor_for_radius_and_axis_for_rects() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 100, 100),
        elements=[Circle(cx=10, cy=10, r=10), Rect(x=1, y=2, width=3, height=4, rx=1, ry=1)],
    )
    transformed = transform_document(document, "scale", {"x": 3, "y": 0.5}).transformed_document
    circle, rect = transformed.elements
    assert circle.r == 5
    assert (rect.x, rect.y, rect.width, rect.height, rect.rx, rect.ry) == (3, 1, 9, 2, 3, 0.5)


def test_flip_horizontal_mirrors_about_view_box_center() -> None:
    circle = transform_document(_circle_document(), "flipHorizontal").transformed_document.elements[0]
    assert (circle.cx, circle.cy) == (150, 50)


def test_flip_vertical() -> None:
    circle = transform_document(_circle_document(), "flipVertical").transformed_document.elements[0]
    assert (circle.cx, circle.cy) == (50, 150)


def test_flip_reflects_rect_anchor_like_other_points() -> None:
    document = Document(view_box=ViewBox(0, 0, 200, 100), elements=[Rect(x=10, y=5, width=30, height=20)])
    rect = transform_document(document, "flipHorizontal").transformed_document.elements[0]
    assert (rect.x, rect.y, rect.width) == (190, 5, 30)
    rect = transform_document(document, "flipVertical").transformed_document.elements[0]
    assert (rect.x, rect.y, rect.height) == (10, 95, 20)


def test_translate_moves_points_but_not_view_box() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 100, 100),
        elements=[Line(x1=0, y1=0, x2=10, y2=10), Text(x=5, y=5, content="a")],
    )
    result = transform_document(document, "translate", {"x": 10, "y": 20})
    line, text = result.transformed_document.elements
    assert (line.x1, line.y1, line.x2, line.y2) == (10, 20, 20, 30)
    assert (text.x, text.y) == (15, 25)
    assert result.transformed_document.view_box == ViewBox(0, 0, 100, 100)
    assert result.metadata.translation == (10.0, 20.0)
    assert result.applied[0].description == "Translate by (10, 20)"


def test_rotate_about_view_box_center() -> None:
    document = Document(view_box=ViewBox(0, 0, 200, 200), elements=[Circle(cx=150, cy=100, r=5)])
    result = transform_document(document, "rotate", {"angle": 90})
    circle = result.transformed_document.elements[0]
    assert circle.cx == pytest.approx(100)
    assert circle.cy == pytest.approx(150)
    assert circle.r == 5
    assert result.metadata.rotation_angle == 90
    assert result.applied[0].description == "Rotate by 90°"


def test_rotate_with_explicit_center_needs_no_view_box() -> None:
    document = Document(view_box=None, elements=[Circle(cx=10, cy=0, r=1)])
    circle = transform_document(
        document, "rotate", {"angle": 180, "centerX": 0, "centerY": 0}
    ).transformed_document.elements[0]
    assert circle.cx == pytest.approx(-10)
    assert circle.cy == pytest.approx(0, abs=1e-9)


def test_view_box_dependent_operations_require_view_box() -> None:
    document = Document(view_box=None, elements=[Circle(cx=1, cy=1, r=1)])
    for kind, params in (("rotate", {"angle": 45}), ("flipHorizontal", {}), ("flipVertical", {})):
        with pytest.raises(ConfigurationError) as excinfo:
            transform_document(document, kind, params)
        assert excinfo.value.code == "VIEWBOX_REQUIRED"


def test_invalid_transform_requests() -> None:
    document = _circle_document()
    with pytest.raises(ConfigurationError) as excinfo:
        transform_document(document, "shear", {"x": 1})
    assert excinfo.value.code == "UNKNOWN_TRANSFORM"
    with pytest.raises(ConfigurationError) as excinfo:
        transform_document(document, "scale", {"x": 2})
    assert excinfo.value.code == "MISSING_TRANSFORM_PARAM"
    with pytest.raises(ConfigurationError) as excinfo:
        transform_document(document, "translate", {"x": math.nan, "y": 0})
    assert excinfo.value.code == "INVALID_TRANSFORM_PARAM"


def test_groups_are_transformed_recursively_and_paths_untouched() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 100, 100),
        elements=[Group(children=[Circle(cx=1, cy=2, r=1), Path(d="M0 0 L10 10")])],
    )
    result = transform_document(document, "translate", {"x": 5, "y": 5})
    circle, path = result.transformed_document.elements[0].children
    assert (circle.cx, circle.cy) == (6, 7)
    assert path.d == "M0 0 L10 10"
    assert result.applied[0].element_count == 3


def test_non_numeric_fields_are_skipped() -> None:
    document = Document(view_box=ViewBox(0, 0, 10, 10), elements=[Circle(cx="left", cy=1, r=1)])
    circle = transform_document(document, "translate", {"x": 1, "y": 1}).transformed_document.elements[0]
    assert circle.cx == "left"
    assert circle.cy == 1


def test_scale_then_translate_round_trip() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 200, 200),
        elements=[Circle(cx=50, cy=50, r=25), Line(x1=1, y1=2, x2=3, y2=4)],
    )
    forward = transform_multiple(
        document,
        [
            {"type": "scale", "params": {"x": 2, "y": 2}},
            {"type": "translate", "params": {"x": 7, "y": 7}},
        ],
    )
    back = transform_multiple(
        forward.transformed_document,
        [
            {"type": "translate", "params": {"x": -7, "y": -7}},
            {"type": "scale", "params": {"x": 0.5, "y": 0.5}},
        ],
    )
    circle, line = back.transformed_document.elements
    assert (circle.cx, circle.cy, circle.r) == pytest.approx((50, 50, 25))
    assert (line.x1, line.y1, line.x2, line.y2) == pytest.approx((1, 2, 3, 4))
    assert back.transformed_document.view_box == ViewBox(0, 0, 200, 200)


def test_transform_multiple_composes_metadata() -> None:
    result = transform_multiple(
        _circle_document(),
        [
            TransformStep("rotate", {"angle": 30}),
            TransformStep("translate", {"x": 1, "y": 2}),
            TransformStep("rotate", {"angle": 15}),
            TransformStep("translate", {"x": 3, "y": 4}),
            TransformStep("scale", {"x": 2, "y": 4}),
        ],
    )
    metadata = result.metadata
    assert metadata.rotation_angle == 45
    assert metadata.translation == (4.0, 6.0)
    assert metadata.scale_factors == (2.0, 4.0)
    assert metadata.original_bounds.center_x == 100
    assert metadata.transformed_bounds.width == 400
    assert [item.type for item in result.applied] == [
        "rotate",
        "translate",
        "rotate",
        "translate",
        "scale",
    ]


def test_input_document_is_not_mutated() -> None:
    document = _circle_document()
    transform_document(document, "scale", {"x": 3, "y": 3})
    assert document.elements[0].cx == 50
    assert document.view_box.width == 200


def test_parse_transform_step_forms() -> None:
    nested = parse_transform_step({"type": "scale", "params": {"x": 2, "y": 3}})
    flat = parse_transform_step({"type": "scale", "x": 2, "y": 3})
    assert nested == flat == TransformStep("scale", {"x": 2, "y": 3})
    with pytest.raises(ConfigurationError):
        parse_transform_step(["scale"])


def test_non_numeric_view_box_yields_no_bounds() -> None:
    document = Document(view_box=ViewBox(0, 0, "100", 100), elements=[Circle(cx=1, cy=1, r=1)])
    result = transform_document(document, "scale", {"x": 2, "y": 2})
    assert result.metadata.original_bounds is None
    assert result.metadata.scale_factors == (1.0, 1.0)
    assert result.transformed_document.elements[0].cx == 2
