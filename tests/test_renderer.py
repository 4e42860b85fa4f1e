from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from svgdoc.errors import RenderError
from svgdoc.model import Circle, Definition, Document, Group, Line, Path as PathElement, Rect, Style, Text, ViewBox
from svgdoc.renderer import render_svg, save_svg, style_string

NS = "{http://www.w3.org/2000/svg}"


def _document() -> Document:
    return Document(
        view_box=ViewBox(0, 0, 200, 100),
        width=400,
        height=200,
        title="Shapes",
        description="Every supported shape",
        defs=[
            Definition(
                id="grad",
                type="linearGradient",
                content='<linearGradient id="grad"><stop offset="0" stop-color="red"/></linearGradient>',
            )
        ],
        style=".accent { fill: blue; }",
        elements=[
            Circle(id="dot", cx=10, cy=20, r=5, style=Style(fill="red", stroke_width=2, aria_label="Red dot")),
            Group(
                id="grp",
                class_name="accent",
                transform="translate(5, 5)",
                children=[
                    Rect(x=0, y=0, width=10, height=10, rx=2, clip_path="url(#grad)"),
                    Line(x1=0, y1=0, x2=10, y2=10, style=Style(stroke="black")),
                ],
            ),
            PathElement(d="M0 0 L10 10", mask="url(#grad)"),
            Text(x=5, y=50, content="Hello & welcome", style=Style(font_size=14, font_family="Arial")),
        ],
    )


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode("utf-8"))


def test_render_document_structure() -> None:
    root = _parse(render_svg(_document()))
    assert root.tag == f"{NS}svg"
    assert root.get("viewBox").replace(",", " ").split() == ["0", "0", "200", "100"]
    assert root.get("width") == "400"
    assert root.find(f"{NS}title").text == "Shapes"
    assert root.find(f"{NS}desc").text == "Every supported shape"
    assert root.find(f".//{NS}linearGradient").get("id") == "grad"
    assert "fill: blue" in root.find(f".//{NS}style").text


def test_render_elements_and_attributes() -> None:
    root = _parse(render_svg(_document()))
    circle = root.find(f"{NS}circle")
    assert circle.get("id") == "dot"
    assert circle.get("r") == "5"
    assert circle.get("style") == "fill:red;stroke-width:2"
    assert circle.get("aria-label") == "Red dot"

    group = root.find(f"{NS}g")
    assert group.get("class") == "accent"
    assert group.get("transform") == "translate(5, 5)"
    rect = group.find(f"{NS}rect")
    assert rect.get("clip-path") == "url(#grad)"
    assert rect.get("rx") == "2"
    assert rect.get("ry") is None
    assert group.find(f"{NS}line").get("x2") == "10"

    assert root.find(f"{NS}path").get("d") == "M0 0 L10 10"
    assert root.find(f"{NS}path").get("mask") == "url(#grad)"
    text = root.find(f"{NS}text")
    assert text.text == "Hello & welcome"
    assert text.get("style") == "font-family:Arial;font-size:14"


def test_pretty_output_is_indented() -> None:
    assert "\n  <" in render_svg(_document(), pretty=True)


def test_style_string_skips_aria_label() -> None:
    assert style_string(Style(fill_opacity=0.5, aria_label="x")) == "fill-opacity:0.5"
    assert style_string(None) == ""


def test_invalid_definition_raises_render_error() -> None:
    document = Document(
        view_box=ViewBox(0, 0, 10, 10),
        defs=[Definition(id="bad", type="pattern", content="<pattern")],
    )
    with pytest.raises(RenderError) as excinfo:
        render_svg(document)
    assert excinfo.value.code == "INVALID_DEFINITION"


def test_save_svg_writes_file(tmp_path: Path) -> None:
    output = save_svg(_document(), tmp_path / "out" / "shapes.svg")
    assert output.exists()
    assert _parse(output.read_text()).tag == f"{NS}svg"
