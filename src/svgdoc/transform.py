"""Geometric transforms applied directly to coordinate fields.

Every operation walks the whole tree, groups included, and rewrites numeric
fields in place on a deep copy. Path data is left untouched. Fields that are
missing or not real numbers are skipped; validation reports them.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .errors import ConfigurationError
from .model import (
    Circle,
    Document,
    Element,
    Line,
    Rect,
    Text,
    ViewBox,
    count_elements,
    is_finite_number,
    iter_elements,
)

logger = logging.getLogger(__name__)

TRANSFORM_TYPES = ("scale", "translate", "rotate", "flipHorizontal", "flipVertical")

Point = tuple[float, float]


@dataclass(frozen=True)
class TransformStep:
    type: str
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "params": dict(self.params)}


def parse_transform_step(data: Any) -> TransformStep:
    """Accept ``{"type": t, "params": {...}}`` or the flat ``{"type": t, ...}`` form."""
    if isinstance(data, TransformStep):
        return data
    if not isinstance(data, dict) or "type" not in data:
        raise ConfigurationError(
            code="MALFORMED_TRANSFORM",
            message=f"Transform step must be a mapping with a type, got {data!r}",
            hint='Use {"type": "scale", "params": {"x": 2, "y": 2}}.',
        )
    params = data.get("params")
    if params is None:
        params = {key: value for key, value in data.items() if key != "type"}
    if not isinstance(params, dict):
        raise ConfigurationError(
            code="MALFORMED_TRANSFORM",
            message=f"Transform params must be a mapping, got {type(params).__name__}",
            hint="Pass params as an object.",
        )
    return TransformStep(type=data["type"], params=dict(params))


@dataclass
class BoundingBox:
    x: float
    y: float
    width: float
    height: float
    center_x: float
    center_y: float

    @classmethod
    def from_view_box(cls, view_box: ViewBox | None) -> BoundingBox | None:
        if view_box is None or not all(
            is_finite_number(getattr(view_box, name)) for name in ("x", "y", "width", "height")
        ):
            return None
        center_x, center_y = view_box.center
        return cls(view_box.x, view_box.y, view_box.width, view_box.height, center_x, center_y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "centerX": self.center_x,
            "centerY": self.center_y,
        }


@dataclass
class AppliedTransform:
    type: str
    params: dict[str, Any]
    element_count: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "params": dict(self.params),
            "elementCount": self.element_count,
            "description": self.description,
        }


@dataclass
class TransformationMetadata:
    original_bounds: BoundingBox | None
    transformed_bounds: BoundingBox | None
    scale_factors: Point = (1.0, 1.0)
    rotation_angle: float = 0.0
    translation: Point = (0.0, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalBounds": self.original_bounds.to_dict() if self.original_bounds else None,
            "transformedBounds": (
                self.transformed_bounds.to_dict() if self.transformed_bounds else None
            ),
            "scaleFactors": {"x": self.scale_factors[0], "y": self.scale_factors[1]},
            "rotationAngle": self.rotation_angle,
            "translation": {"x": self.translation[0], "y": self.translation[1]},
        }


@dataclass
class TransformationResult:
    original_document: Document
    transformed_document: Document
    applied: list[AppliedTransform]
    metadata: TransformationMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "transformedDocument": self.transformed_document.to_dict(),
            "appliedTransforms": [item.to_dict() for item in self.applied],
            "metadata": self.metadata.to_dict(),
        }


def _number_param(params: dict[str, Any], name: str, kind: str, default: float | None = None) -> float:
    value = params.get(name, default)
    if value is None:
        raise ConfigurationError(
            code="MISSING_TRANSFORM_PARAM",
            message=f"{kind} transform requires parameter '{name}'",
            hint=f"Add '{name}' to the {kind} params.",
        )
    if not is_finite_number(value):
        raise ConfigurationError(
            code="INVALID_TRANSFORM_PARAM",
            message=f"{kind} parameter '{name}' must be a finite number, got {value!r}",
            hint="Use a finite numeric value.",
        )
    return float(value)


def _require_view_box(document: Document, kind: str) -> ViewBox:
    view_box = document.view_box
    if view_box is None or not all(
        is_finite_number(getattr(view_box, name)) for name in ("x", "y", "width", "height")
    ):
        raise ConfigurationError(
            code="VIEWBOX_REQUIRED",
            message=f"{kind} needs a document viewBox with finite values",
            hint="Set a viewBox on the document, or pass an explicit center.",
        )
    return view_box


def _map_points(element: Element, fn: Callable[[float, float], Point]) -> None:
    """Apply ``fn`` to every point-like field pair whose values are both numbers."""
    pairs: Iterable[tuple[str, str]]
    if isinstance(element, Circle):
        pairs = (("cx", "cy"),)
    elif isinstance(element, (Rect, Text)):
        pairs = (("x", "y"),)
    elif isinstance(element, Line):
        pairs = (("x1", "y1"), ("x2", "y2"))
    else:
        return
    for name_x, name_y in pairs:
        x, y = getattr(element, name_x), getattr(element, name_y)
        if is_finite_number(x) and is_finite_number(y):
            new_x, new_y = fn(x, y)
            setattr(element, name_x, new_x)
            setattr(element, name_y, new_y)


def _scale_field(target: Any, name: str, factor: float) -> None:
    value = getattr(target, name)
    if is_finite_number(value):
        setattr(target, name, value * factor)


def _apply_scale(document: Document, params: dict[str, Any]) -> None:
    sx = _number_param(params, "x", "scale")
    sy = _number_param(params, "y", "scale")
    axis_x = ("cx", "x", "width", "rx", "x1", "x2")
    axis_y = ("cy", "y", "height", "ry", "y1", "y2")
    for element, _ in iter_elements(document.elements):
        if isinstance(element, Circle):
            _scale_field(element, "cx", sx)
            _scale_field(element, "cy", sy)
            _scale_field(element, "r", min(sx, sy))
        elif isinstance(element, (Rect, Line, Text)):
            for name in axis_x:
                if hasattr(element, name):
                    _scale_field(element, name, sx)
            for name in axis_y:
                if hasattr(element, name):
                    _scale_field(element, name, sy)
    if document.view_box is not None:
        for name in ("x", "width"):
            _scale_field(document.view_box, name, sx)
        for name in ("y", "height"):
            _scale_field(document.view_box, name, sy)


def _apply_translate(document: Document, params: dict[str, Any]) -> None:
    dx = _number_param(params, "x", "translate")
    dy = _number_param(params, "y", "translate")
    for element, _ in iter_elements(document.elements):
        _map_points(element, lambda x, y: (x + dx, y + dy))


def _apply_rotate(document: Document, params: dict[str, Any]) -> None:
    angle = _number_param(params, "angle", "rotate")
    if params.get("centerX") is None or params.get("centerY") is None:
        default_x, default_y = _require_view_box(document, "rotate").center
    else:
        default_x = default_y = None
    center_x = _number_param(params, "centerX", "rotate", default_x)
    center_y = _number_param(params, "centerY", "rotate", default_y)
    radians = math.radians(angle)
    cos_a, sin_a = math.cos(radians), math.sin(radians)

    def rotate(x: float, y: float) -> Point:
        dx, dy = x - center_x, y - center_y
        return dx * cos_a - dy * sin_a + center_x, dx * sin_a + dy * cos_a + center_y

    # rect rotation moves the anchor corner only; width and height keep their axes
    for element, _ in iter_elements(document.elements):
        _map_points(element, rotate)


def _apply_flip(document: Document, horizontal: bool) -> None:
    view_box = _require_view_box(document, "flipHorizontal" if horizontal else "flipVertical")
    axis_sum_x = 2 * view_box.x + view_box.width
    axis_sum_y = 2 * view_box.y + view_box.height

    def reflect(x: float, y: float) -> Point:
        if horizontal:
            return axis_sum_x - x, y
        return x, axis_sum_y - y

    for element, _ in iter_elements(document.elements):
        _map_points(element, reflect)


_APPLIERS: dict[str, Callable[[Document, dict[str, Any]], None]] = {
    "scale": _apply_scale,
    "translate": _apply_translate,
    "rotate": _apply_rotate,
    "flipHorizontal": lambda document, params: _apply_flip(document, horizontal=True),
    "flipVertical": lambda document, params: _apply_flip(document, horizontal=False),
}


def _describe(kind: str, params: dict[str, Any]) -> str:
    if kind == "scale":
        return f"Scale by {params['x']:g}x{params['y']:g}"
    if kind == "rotate":
        return f"Rotate by {params['angle']:g}°"
    if kind == "translate":
        return f"Translate by ({params['x']:g}, {params['y']:g})"
    if kind == "flipHorizontal":
        return "Flip horizontally"
    return "Flip vertically"


def _scale_factors(original: BoundingBox | None, transformed: BoundingBox | None) -> Point:
    if original is None or transformed is None:
        return 1.0, 1.0
    return (
        transformed.width / original.width if original.width else 1.0,
        transformed.height / original.height if original.height else 1.0,
    )


def _apply_step(document: Document, step: TransformStep) -> AppliedTransform:
    applier = _APPLIERS.get(step.type)
    if applier is None:
        raise ConfigurationError(
            code="UNKNOWN_TRANSFORM",
            message=f"Unsupported transformation type: {step.type}",
            hint=f"Use one of: {', '.join(TRANSFORM_TYPES)}.",
        )
    logger.debug("Applying %s transform with %s", step.type, step.params)
    applier(document, step.params)
    return AppliedTransform(
        type=step.type,
        params=dict(step.params),
        element_count=count_elements(document.elements),
        description=_describe(step.type, step.params),
    )


def transform_multiple(
    document: Document, steps: Iterable[TransformStep | dict[str, Any]]
) -> TransformationResult:
    """Apply transforms in order and compose their metadata.

    Rotation angles and translations accumulate; the scale factors are the
    ratio between the final and the original viewBox.
    """
    steps = [parse_transform_step(step) for step in steps]
    logger.info("Applying %d transform(s)", len(steps))
    original = copy.deepcopy(document)
    transformed = copy.deepcopy(document)

    applied = [_apply_step(transformed, step) for step in steps]

    rotation = sum(item.params["angle"] for item in applied if item.type == "rotate")
    translation = (
        sum(item.params["x"] for item in applied if item.type == "translate"),
        sum(item.params["y"] for item in applied if item.type == "translate"),
    )
    original_bounds = BoundingBox.from_view_box(original.view_box)
    transformed_bounds = BoundingBox.from_view_box(transformed.view_box)
    metadata = TransformationMetadata(
        original_bounds=original_bounds,
        transformed_bounds=transformed_bounds,
        scale_factors=_scale_factors(original_bounds, transformed_bounds),
        rotation_angle=float(rotation),
        translation=(float(translation[0]), float(translation[1])),
    )
    logger.info("Transforms completed: %s", ", ".join(item.description for item in applied) or "none")
    return TransformationResult(
        original_document=original,
        transformed_document=transformed,
        applied=applied,
        metadata=metadata,
    )


def transform_document(
    document: Document, kind: str, params: dict[str, Any] | None = None
) -> TransformationResult:
    return transform_multiple(document, [TransformStep(type=kind, params=dict(params or {}))])
