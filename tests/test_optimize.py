from __future__ import annotations

import pytest

from svgcheck.suite import validate
from svgdoc.errors import ConfigurationError
from svgdoc.model import Circle, Document, Group, Rect, Style, ViewBox
from svgdoc.optimize import (
    PRESETS,
    OptimizationOptions,
    optimize_document,
    resolve_optimization_options,
    round_half_up,
)
from svgdoc.references import build_reference_graph


def _scenario_document() -> Document:
    return Document(
        view_box=ViewBox(0, 0, 100, 100),
        elements=[Group(), Circle(cx=50.12345, cy=50.12345, r=25.98765)],
    )


def test_removes_empty_group_and_rounds_coordinates() -> None:
    result = optimize_document(_scenario_document(), "balanced")
    elements = result.optimized_document.elements
    assert len(elements) == 1
    circle = elements[0]
    assert circle.cx == pytest.approx(50.12)
    assert circle.cy == pytest.approx(50.12)
    assert circle.r == pytest.approx(25.99)

    stats = result.statistics
    assert stats.original_element_count == 2
    assert stats.optimized_element_count == 1
    assert stats.element_reduction == 1
    assert stats.coordinates_rounded == 3
    assert stats.estimated_size_reduction > 0
    assert [item.type for item in result.applied] == ["remove_empty_elements", "round_coordinates"]
    assert result.applied[0].element_count == 1
    assert result.applied[1].description == "Rounded 3 coordinates to 2 decimal places"


def test_input_document_is_not_mutated() -> None:
    document = _scenario_document()
    result = optimize_document(document)
    assert len(document.elements) == 2
    assert document.elements[1].cx == 50.12345
    assert result.original_document == document


def test_optimization_is_idempotent() -> None:
    first = optimize_document(_scenario_document(), "aggressive")
    second = optimize_document(first.optimized_document, "aggressive")
    assert second.applied == []
    assert second.optimized_document == first.optimized_document


def test_nested_empty_groups_are_removed_post_order() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 10, 10),
        elements=[Group(children=[Group(children=[Group()])]), Circle(cx=1, cy=1, r=1)],
    )
    result = optimize_document(document)
    assert [element.kind for element in result.optimized_document.elements] == ["circle"]
    assert result.applied[0].element_count == 3


def test_referenced_empty_group_is_kept() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 10, 10),
        elements=[Group(id="clip"), Circle(cx=1, cy=1, r=1, clip_path="url(#clip)")],
    )
    before = build_reference_graph(document)
    result = optimize_document(document)
    after = build_reference_graph(result.optimized_document)
    assert before.is_consistent() and after.is_consistent()
    assert result.optimized_document.elements[0].id == "clip"
    assert result.warnings == ["Kept empty group 'clip' because it is referenced"]


def test_redundant_attributes_are_removed() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 10, 10),
        elements=[
            Rect(x=0, y=0, width=5, height=5, style=Style(fill="black", stroke_width=1, opacity=1, stroke="red")),
            Circle(cx=1, cy=1, r=1, style=Style(fill="black")),
        ],
    )
    result = optimize_document(document)
    rect, circle = result.optimized_document.elements
    assert rect.style == Style(stroke="red")
    assert circle.style is None
    assert result.statistics.attributes_removed == 4
    assert result.applied[0].type == "remove_redundant_attributes"


def test_conservative_preset_keeps_attributes() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 10, 10),
        elements=[Circle(cx=1.23456, cy=1, r=1, style=Style(fill="black"))],
    )
    result = optimize_document(document, "conservative")
    circle = result.optimized_document.elements[0]
    assert circle.style == Style(fill="black")
    assert circle.cx == pytest.approx(1.235)


def test_view_box_is_rounded() -> None:
    document = Document(view_box=ViewBox(0.123, 0, 99.999, 100), elements=[Circle(cx=1, cy=1, r=1)])
    result = optimize_document(document, {"preset": "aggressive"})
    view_box = result.optimized_document.view_box
    assert view_box.x == pytest.approx(0.1)
    assert view_box.width == pytest.approx(100.0)
    assert result.statistics.coordinates_rounded == 2


def test_non_numeric_fields_are_skipped() -> None:
    document = Document(view_box=ViewBox(0, 0, 10, 10), elements=[Circle(cx="left", cy=1.556, r=None)])
    circle = optimize_document(document).optimized_document.elements[0]
    assert circle.cx == "left"
    assert circle.cy == pytest.approx(1.56)
    assert circle.r is None


def test_huge_coordinates_are_left_unrounded() -> None:
    document = Document(view_box=ViewBox(0, 0, 10, 10), elements=[Circle(cx=1e307, cy=1.2346, r=1)])
    assert validate(document).valid
    result = optimize_document(document, "conservative")
    circle = result.optimized_document.elements[0]
    assert circle.cx == 1e307
    assert circle.cy == pytest.approx(1.235)
    assert result.statistics.coordinates_rounded == 1


def test_round_half_up() -> None:
    assert round_half_up(2.5, 0) == 3
    assert round_half_up(-2.5, 0) == -2
    assert round_half_up(1.005, 1) == pytest.approx(1.0)
    assert round_half_up(1e307, 3) == 1e307


def test_option_resolution() -> None:
    assert resolve_optimization_options(True) == PRESETS["balanced"]
    assert resolve_optimization_options({"coordinatePrecision": 4}).coordinate_precision == 4
    with pytest.raises(ConfigurationError):
        resolve_optimization_options("extreme")
    with pytest.raises(ConfigurationError):
        resolve_optimization_options(OptimizationOptions(coordinate_precision=-1))
    with pytest.raises(ConfigurationError):
        resolve_optimization_options({"stripComments": True})


def test_passes_can_be_switched_off() -> None:
    options = OptimizationOptions(remove_empty_elements=False, round_coordinates=False)
    result = optimize_document(_scenario_document(), options)
    assert len(result.optimized_document.elements) == 2
    assert result.applied == []
