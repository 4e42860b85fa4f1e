"""Size-reducing rewrites that leave the rendered drawing unchanged.

Passes run in a fixed order on a deep copy of the input:

1. remove groups left empty after cleaning their children,
2. strip style properties equal to the profile defaults,
3. round coordinate fields to a fixed number of decimals.
"""

from __future__ import annotations

import copy
import json
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any

from .errors import ConfigurationError
from .model import (
    COORDINATE_FIELDS,
    VIEWBOX_FIELDS,
    Document,
    Element,
    Group,
    count_elements,
    is_finite_number,
    iter_elements,
)
from .references import build_reference_graph

logger = logging.getLogger(__name__)

# Style values that equal the rendering defaults and can be dropped.
REDUNDANT_STYLE_VALUES: dict[str, Any] = {
    "fill": "black",
    "stroke_width": 1,
    "opacity": 1,
}


@dataclass(frozen=True)
class OptimizationOptions:
    remove_empty_elements: bool = True
    remove_redundant_attributes: bool = True
    round_coordinates: bool = True
    coordinate_precision: int = 2


PRESETS: dict[str, OptimizationOptions] = {
    "aggressive": OptimizationOptions(coordinate_precision=1),
    "balanced": OptimizationOptions(coordinate_precision=2),
    "conservative": OptimizationOptions(remove_redundant_attributes=False, coordinate_precision=3),
}

_OPTION_KEYS = {
    "removeEmptyElements": "remove_empty_elements",
    "removeRedundantAttributes": "remove_redundant_attributes",
    "roundCoordinates": "round_coordinates",
    "coordinatePrecision": "coordinate_precision",
    "precision": "coordinate_precision",
}


@dataclass
class OptimizationStatistics:
    original_element_count: int = 0
    optimized_element_count: int = 0
    element_reduction: int = 0
    coordinates_rounded: int = 0
    attributes_removed: int = 0
    estimated_size_reduction: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalElementCount": self.original_element_count,
            "optimizedElementCount": self.optimized_element_count,
            "elementReduction": self.element_reduction,
            "coordinatesRounded": self.coordinates_rounded,
            "attributesRemoved": self.attributes_removed,
            "estimatedSizeReduction": self.estimated_size_reduction,
        }


@dataclass
class AppliedOptimization:
    type: str
    description: str
    impact: str
    element_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "description": self.description,
            "impact": self.impact,
        }
        if self.element_count is not None:
            data["elementCount"] = self.element_count
        return data


@dataclass
class OptimizationResult:
    original_document: Document
    optimized_document: Document
    statistics: OptimizationStatistics
    applied: list[AppliedOptimization] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "optimizedDocument": self.optimized_document.to_dict(),
            "statistics": self.statistics.to_dict(),
            "applied": [item.to_dict() for item in self.applied],
            "warnings": list(self.warnings),
        }


def check_options(options: OptimizationOptions) -> OptimizationOptions:
    precision = options.coordinate_precision
    if not isinstance(precision, int) or isinstance(precision, bool) or precision < 0:
        raise ConfigurationError(
            code="INVALID_PRECISION",
            message=f"Coordinate precision must be a non-negative integer, got {precision!r}",
            hint="Use 0-6 decimal places, or a preset (aggressive, balanced, conservative).",
        )
    return options


def resolve_optimization_options(
    value: str | bool | OptimizationOptions | dict[str, Any] | None = None,
) -> OptimizationOptions:
    if value is None or value is True:
        return PRESETS["balanced"]
    if isinstance(value, OptimizationOptions):
        return check_options(value)
    if isinstance(value, str):
        preset = PRESETS.get(value)
        if preset is None:
            raise ConfigurationError(
                code="UNKNOWN_OPTIMIZATION_PRESET",
                message=f"Unknown optimization preset: {value}",
                hint=f"Use one of: {', '.join(PRESETS)}.",
            )
        return preset
    if isinstance(value, dict):
        data = dict(value)
        base = resolve_optimization_options(data.pop("preset", "balanced"))
        overrides: dict[str, Any] = {}
        for key, item in data.items():
            attr = _OPTION_KEYS.get(key)
            if attr is None:
                raise ConfigurationError(
                    code="UNKNOWN_OPTIMIZATION_OPTION",
                    message=f"Unknown optimization option: {key}",
                    hint=f"Use one of: {', '.join(_OPTION_KEYS)}.",
                )
            overrides[attr] = item
        return check_options(replace(base, **overrides))
    raise ConfigurationError(
        code="INVALID_OPTIMIZATION_OPTIONS",
        message=f"Unsupported optimization options: {value!r}",
        hint="Pass true, a preset name, a mapping, or OptimizationOptions.",
    )


def round_half_up(value: float, precision: int) -> float:
    factor = 10**precision
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def _remove_empty_elements(document: Document, protected: set[str]) -> tuple[int, list[str]]:
    removed = 0
    kept: list[str] = []

    def clean(elements: list[Element]) -> list[Element]:
        nonlocal removed
        result: list[Element] = []
        for element in elements:
            if isinstance(element, Group):
                element.children = clean(element.children)
                if not element.children:
                    if element.id and element.id in protected:
                        kept.append(element.id)
                    else:
                        removed += 1
                        continue
            result.append(element)
        return result

    document.elements = clean(document.elements)
    warnings = [f"Kept empty group '{ident}' because it is referenced" for ident in kept]
    return removed, warnings


def _remove_redundant_attributes(document: Document) -> int:
    removed = 0
    for element, _ in iter_elements(document.elements):
        style = element.style
        if style is None:
            continue
        for attr, default in REDUNDANT_STYLE_VALUES.items():
            value = getattr(style, attr)
            if value is not None and not isinstance(value, bool) and value == default:
                setattr(style, attr, None)
                removed += 1
        if style.is_empty():
            element.style = None
    return removed


def _round_coordinates(document: Document, precision: int) -> int:
    rounded = 0

    def round_fields(target: Any, names: tuple[str, ...]) -> None:
        nonlocal rounded
        for name in names:
            value = getattr(target, name)
            if not is_finite_number(value):
                continue
            new_value = round_half_up(value, precision)
            if new_value != value:
                rounded += 1
                setattr(target, name, new_value)

    for element, _ in iter_elements(document.elements):
        round_fields(element, COORDINATE_FIELDS[element.kind])
    if document.view_box is not None:
        round_fields(document.view_box, VIEWBOX_FIELDS)
    return rounded


def _serialized_size(document: Document) -> int:
    return len(json.dumps(document.to_dict(), separators=(",", ":")))


def optimize_document(
    document: Document,
    options: str | bool | OptimizationOptions | dict[str, Any] | None = None,
) -> OptimizationResult:
    options = resolve_optimization_options(options)
    logger.info("Starting document optimization (%d top-level elements)", len(document.elements))

    original = copy.deepcopy(document)
    optimized = copy.deepcopy(document)
    statistics = OptimizationStatistics(original_element_count=count_elements(original.elements))
    applied: list[AppliedOptimization] = []
    warnings: list[str] = []

    if options.remove_empty_elements:
        protected = set(build_reference_graph(optimized).referenced_ids)
        removed, kept_warnings = _remove_empty_elements(optimized, protected)
        warnings.extend(kept_warnings)
        if removed:
            applied.append(
                AppliedOptimization(
                    type="remove_empty_elements",
                    description=f"Removed {removed} empty elements",
                    impact="medium",
                    element_count=removed,
                )
            )

    if options.remove_redundant_attributes:
        removed = _remove_redundant_attributes(optimized)
        statistics.attributes_removed = removed
        if removed:
            applied.append(
                AppliedOptimization(
                    type="remove_redundant_attributes",
                    description=f"Removed {removed} redundant attributes",
                    impact="low",
                )
            )

    if options.round_coordinates:
        rounded = _round_coordinates(optimized, options.coordinate_precision)
        statistics.coordinates_rounded = rounded
        if rounded:
            applied.append(
                AppliedOptimization(
                    type="round_coordinates",
                    description=(
                        f"Rounded {rounded} coordinates to "
                        f"{options.coordinate_precision} decimal places"
                    ),
                    impact="low",
                )
            )

    statistics.optimized_element_count = count_elements(optimized.elements)
    statistics.element_reduction = (
        statistics.original_element_count - statistics.optimized_element_count
    )
    original_size = _serialized_size(original)
    optimized_size = _serialized_size(optimized)
    if original_size:
        statistics.estimated_size_reduction = int(
            math.floor((original_size - optimized_size) / original_size * 100 + 0.5)
        )

    logger.info(
        "Optimization completed: %d -> %d elements, %d passes applied",
        statistics.original_element_count,
        statistics.optimized_element_count,
        len(applied),
    )
    return OptimizationResult(
        original_document=original,
        optimized_document=optimized,
        statistics=statistics,
        applied=applied,
        warnings=warnings,
    )
