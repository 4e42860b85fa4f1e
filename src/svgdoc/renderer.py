from __future__ import annotations

import io
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import svgwrite

from .errors import RenderError
from .model import Definition, Document, Element, Group, Style, Text

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"([A-Z])")


class _RawFragment:
    """A ``<defs>`` child taken verbatim from markup."""

    def __init__(self, definition: Definition) -> None:
        try:
            self.node = ET.fromstring(definition.content)
        except ET.ParseError as exc:
            raise RenderError(
                code="INVALID_DEFINITION",
                message=f"Definition '{definition.id}' is not well-formed markup: {exc}",
                hint="Pass a single element such as <linearGradient id=...>...</linearGradient>.",
            ) from exc
        if not self.node.get("id"):
            self.node.set("id", definition.id)

    def get_xml(self) -> ET.Element:
        return self.node


def style_string(style: Style | None) -> str:
    if style is None:
        return ""
    parts = []
    for key, value in style.to_dict().items():
        if key == "ariaLabel":
            continue
        name = _CAMEL_RE.sub(r"-\1", key).lower()
        parts.append(f"{name}:{value}")
    return ";".join(parts)


def _common_attributes(element: Element) -> dict[str, Any]:
    attributes: dict[str, Any] = {
        "id": element.id or None,
        "class": element.class_name or None,
        "transform": element.transform or None,
        "clip-path": element.clip_path or None,
        "mask": element.mask or None,
        "style": style_string(element.style) or None,
    }
    if element.style is not None and element.style.aria_label:
        attributes["aria-label"] = element.style.aria_label
    return {key: value for key, value in attributes.items() if value is not None}


def _build(drawing: svgwrite.Drawing, element: Element):
    if isinstance(element, Group):
        shape = drawing.g()
        for child in element.children:
            shape.add(_build(drawing, child))
    elif isinstance(element, Text):
        shape = drawing.text(element.content or "")
    elif element.kind == "path":
        shape = drawing.path(d=element.d) if element.d else drawing.path()
    else:
        shape = getattr(drawing, element.kind)()
    for name in element.geometry:
        if name in ("d", "content"):
            continue
        shape.attribs[name] = getattr(element, name)
    for key, value in _common_attributes(element).items():
        shape.attribs[key] = value
    return shape


def build_drawing(document: Document) -> svgwrite.Drawing:
    size = (
        document.width if document.width is not None else "100%",
        document.height if document.height is not None else "100%",
    )
    drawing = svgwrite.Drawing(size=size, profile="full", debug=False)
    view_box = document.view_box
    if view_box is not None:
        drawing.viewbox(view_box.x, view_box.y, view_box.width, view_box.height)
    if document.title or document.description:
        drawing.set_desc(title=document.title or None, desc=document.description or None)
    for definition in document.defs:
        drawing.defs.add(_RawFragment(definition))
    if document.style:
        drawing.embed_stylesheet(document.style)
    for element in document.elements:
        drawing.add(_build(drawing, element))
    return drawing


def render_svg(document: Document, pretty: bool = False) -> str:
    try:
        drawing = build_drawing(document)
        buffer = io.StringIO()
        drawing.write(buffer, pretty=pretty)
    except RenderError:
        raise
    except (TypeError, ValueError, AttributeError) as exc:
        raise RenderError(
            code="RENDER_FAILED",
            message=f"Failed to render document: {exc}",
            hint="Validate the document before rendering.",
        ) from exc
    svg = buffer.getvalue()
    logger.info("Rendered %d top-level elements (%d bytes)", len(document.elements), len(svg))
    return svg


def save_svg(document: Document, path: Path, pretty: bool = True) -> Path:
    svg = render_svg(document, pretty=pretty)
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding="utf-8")
    except OSError as exc:
        raise RenderError(
            code="RENDER_FAILED",
            message=f"Failed to write {path}: {exc}",
            hint="Check that the output directory is writable.",
        ) from exc
    return path
