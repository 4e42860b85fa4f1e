"""Document tree for the restricted SVG profile.

The tree is built only from structured data (``document_from_dict``). Element
kinds form a closed set of dataclasses; a group's ``children`` list is the
only ownership edge, so the tree never has back references or cycles.

Coordinate fields are stored exactly as supplied. A missing or non-numeric
value is kept so that validation can report it, and every rewriting pass
skips fields that are not real numbers.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Iterable, Iterator, Union

from .errors import ConfigurationError

STYLE_KEYS: dict[str, str] = {
    "fill": "fill",
    "stroke": "stroke",
    "strokeWidth": "stroke_width",
    "strokeLinecap": "stroke_linecap",
    "strokeLinejoin": "stroke_linejoin",
    "strokeDasharray": "stroke_dasharray",
    "opacity": "opacity",
    "fillOpacity": "fill_opacity",
    "strokeOpacity": "stroke_opacity",
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "fontWeight": "font_weight",
    "fontStyle": "font_style",
    "textAnchor": "text_anchor",
    "dominantBaseline": "dominant_baseline",
    "ariaLabel": "aria_label",
}
STYLE_ALIASES = {"aria-label": "ariaLabel"}

DEFINITION_TYPES = ("linearGradient", "radialGradient", "pattern", "clipPath", "mask")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


@dataclass
class ViewBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class Style:
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    stroke_linecap: str | None = None
    stroke_linejoin: str | None = None
    stroke_dasharray: str | None = None
    opacity: float | None = None
    fill_opacity: float | None = None
    stroke_opacity: float | None = None
    font_family: str | None = None
    font_size: float | None = None
    font_weight: str | float | None = None
    font_style: str | None = None
    text_anchor: str | None = None
    dominant_baseline: str | None = None
    aria_label: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key, attr in STYLE_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data


@dataclass
class Definition:
    id: str
    type: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "type": self.type, "content": self.content}


@dataclass
class BaseElement:
    kind: ClassVar[str] = ""
    # kind-specific fields in wire order, used by to_dict and validation
    geometry: ClassVar[tuple[str, ...]] = ()

    id: str | None = None
    class_name: str | None = None
    style: Style | None = None
    transform: str | None = None
    clip_path: str | None = None
    mask: str | None = None

    def common_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind}
        if self.id is not None:
            data["id"] = self.id
        if self.class_name is not None:
            data["className"] = self.class_name
        if self.style is not None:
            data["style"] = self.style.to_dict()
        if self.transform is not None:
            data["transform"] = self.transform
        if self.clip_path is not None:
            data["clipPath"] = self.clip_path
        if self.mask is not None:
            data["mask"] = self.mask
        return data

    def to_dict(self) -> dict[str, Any]:
        data = self.common_dict()
        for name in self.geometry:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


@dataclass
class Circle(BaseElement):
    kind: ClassVar[str] = "circle"
    geometry: ClassVar[tuple[str, ...]] = ("cx", "cy", "r")

    cx: float | None = None
    cy: float | None = None
    r: float | None = None


@dataclass
class Rect(BaseElement):
    kind: ClassVar[str] = "rect"
    geometry: ClassVar[tuple[str, ...]] = ("x", "y", "width", "height", "rx", "ry")

    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    rx: float | None = None
    ry: float | None = None


@dataclass
class Line(BaseElement):
    kind: ClassVar[str] = "line"
    geometry: ClassVar[tuple[str, ...]] = ("x1", "y1", "x2", "y2")

    x1: float | None = None
    y1: float | None = None
    x2: float | None = None
    y2: float | None = None


@dataclass
class Path(BaseElement):
    kind: ClassVar[str] = "path"
    geometry: ClassVar[tuple[str, ...]] = ("d",)

    d: str | None = None


@dataclass
class Text(BaseElement):
    kind: ClassVar[str] = "text"
    geometry: ClassVar[tuple[str, ...]] = ("x", "y", "content")

    x: float | None = None
    y: float | None = None
    content: str | None = None


@dataclass
class Group(BaseElement):
    kind: ClassVar[str] = "group"

    children: list[Element] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.common_dict()
        data["children"] = [child.to_dict() for child in self.children]
        return data


Element = Union[Circle, Rect, Line, Path, Text, Group]

ELEMENT_TYPES: dict[str, type] = {
    cls.kind: cls for cls in (Circle, Rect, Line, Path, Text, Group)
}

# Coordinate-bearing numeric fields per kind. Shared by rounding and by the
# geometric transforms.
COORDINATE_FIELDS: dict[str, tuple[str, ...]] = {
    "circle": ("cx", "cy", "r"),
    "rect": ("x", "y", "width", "height", "rx", "ry"),
    "line": ("x1", "y1", "x2", "y2"),
    "path": (),
    "text": ("x", "y"),
    "group": (),
}
VIEWBOX_FIELDS = ("x", "y", "width", "height")


@dataclass
class Document:
    view_box: ViewBox | None
    elements: list[Element] = field(default_factory=list)
    width: float | None = None
    height: float | None = None
    title: str | None = None
    description: str | None = None
    defs: list[Definition] = field(default_factory=list)
    style: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "viewBox": self.view_box.to_dict() if self.view_box is not None else None,
        }
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        if self.title is not None:
            data["title"] = self.title
        if self.description is not None:
            data["description"] = self.description
        data["elements"] = [element.to_dict() for element in self.elements]
        if self.defs:
            data["defs"] = [definition.to_dict() for definition in self.defs]
        if self.style is not None:
            data["style"] = self.style
        return data


def iter_elements(
    elements: Iterable[Element], depth: int = 0
) -> Iterator[tuple[Element, int]]:
    """Depth-first walk; a group's children come before its next sibling."""
    for element in elements:
        yield element, depth
        if isinstance(element, Group):
            yield from iter_elements(element.children, depth + 1)


def count_elements(elements: Iterable[Element]) -> int:
    return sum(1 for _ in iter_elements(elements))


def max_depth(elements: Iterable[Element]) -> int:
    return max((depth for _, depth in iter_elements(elements)), default=0)


def estimate_size(document: Document) -> int:
    return len(json.dumps(document.to_dict(), separators=(",", ":")))


def _require_mapping(data: Any, label: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigurationError(
            code="MALFORMED_SPEC",
            message=f"Expected a mapping for {label}, got {type(data).__name__}",
            hint="Pass structured objects (dicts), not scalars or lists.",
        )
    return data


def style_from_dict(data: Any) -> Style | None:
    if data is None:
        return None
    data = _require_mapping(data, "style")
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        key = STYLE_ALIASES.get(key, key)
        attr = STYLE_KEYS.get(key)
        if attr is None:
            raise ConfigurationError(
                code="UNKNOWN_STYLE_PROPERTY",
                message=f"Unknown style property '{key}'",
                hint=f"Use one of: {', '.join(STYLE_KEYS)}.",
            )
        kwargs[attr] = value
    return Style(**kwargs)


def view_box_from_dict(data: Any) -> ViewBox | None:
    if data is None:
        return None
    data = _require_mapping(data, "viewBox")
    return ViewBox(
        x=data.get("x", 0),
        y=data.get("y", 0),
        width=data.get("width"),
        height=data.get("height"),
    )


def element_from_dict(data: Any) -> Element:
    data = _require_mapping(data, "element")
    kind = data.get("type")
    cls = ELEMENT_TYPES.get(kind) if isinstance(kind, str) else None
    if cls is None:
        raise ConfigurationError(
            code="UNKNOWN_ELEMENT_TYPE",
            message=f"Unknown element type: {kind}",
            hint=f"Use one of: {', '.join(ELEMENT_TYPES)}.",
        )
    kwargs: dict[str, Any] = {
        "id": data.get("id"),
        "class_name": data.get("className"),
        "style": style_from_dict(data.get("style")),
        "transform": data.get("transform"),
        "clip_path": data.get("clipPath"),
        "mask": data.get("mask"),
    }
    if cls is Group:
        kwargs["children"] = [element_from_dict(child) for child in data.get("children") or []]
    else:
        for name in cls.geometry:
            kwargs[name] = data.get(name)
    return cls(**kwargs)


def definition_from_dict(data: Any) -> Definition:
    data = _require_mapping(data, "definition")
    def_type = data.get("type")
    if def_type not in DEFINITION_TYPES:
        raise ConfigurationError(
            code="UNKNOWN_DEFINITION_TYPE",
            message=f"Unknown definition type: {def_type}",
            hint=f"Use one of: {', '.join(DEFINITION_TYPES)}.",
        )
    return Definition(id=str(data.get("id", "")), type=def_type, content=str(data.get("content", "")))


def document_from_dict(data: Any) -> Document:
    data = _require_mapping(data, "document")
    elements = data.get("elements") or []
    if not isinstance(elements, list):
        raise ConfigurationError(
            code="MALFORMED_SPEC",
            message="Document elements must be a list",
            hint="Provide elements as a JSON array.",
        )
    return Document(
        view_box=view_box_from_dict(data.get("viewBox")),
        elements=[element_from_dict(item) for item in elements],
        width=data.get("width"),
        height=data.get("height"),
        title=data.get("title"),
        description=data.get("description"),
        defs=[definition_from_dict(item) for item in data.get("defs") or []],
        style=data.get("style"),
    )
