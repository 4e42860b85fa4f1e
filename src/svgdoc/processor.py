"""End-to-end pipeline: transform, optimize, validate, render.

Stages run in that order. Warnings from every stage are collected in
pipeline order; a failed validation stops the pipeline before rendering.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from svgcheck.config import ValidationOptions
from svgcheck.suite import validate

from .errors import ConfigurationError, DocumentValidationError
from .model import Document, document_from_dict, estimate_size, iter_elements
from .optimize import OptimizationOptions, optimize_document
from .renderer import render_svg
from .transform import TransformStep, parse_transform_step, transform_multiple

logger = logging.getLogger(__name__)

OptimizeSetting = bool | str | dict[str, Any] | OptimizationOptions | None
ValidateSetting = bool | str | dict[str, Any] | ValidationOptions | None


@dataclass
class DocumentSpec:
    document: Document
    optimize: OptimizeSetting = None
    validate: ValidateSetting = None
    transform: list[TransformStep] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> DocumentSpec:
        if not isinstance(data, dict):
            raise ConfigurationError(
                code="MALFORMED_SPEC",
                message=f"Expected a mapping for the document spec, got {type(data).__name__}",
                hint="The spec must be a JSON/YAML object.",
            )
        steps = data.get("transform") or []
        if not isinstance(steps, list):
            raise ConfigurationError(
                code="MALFORMED_SPEC",
                message="transform must be a list of steps",
                hint='Use [{"type": "scale", "params": {"x": 2, "y": 2}}].',
            )
        return cls(
            document=document_from_dict(data),
            optimize=data.get("optimize"),
            validate=data.get("validate"),
            transform=[parse_transform_step(step) for step in steps],
        )


@dataclass
class DocumentMetadata:
    complexity: str
    features: list[str]
    has_title: bool
    has_description: bool
    estimated_size: int
    element_count: int
    max_depth: int
    compliance: str | None = None
    score: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "complexity": self.complexity,
            "features": list(self.features),
            "accessibility": {
                "hasTitle": self.has_title,
                "hasDescription": self.has_description,
            },
            "estimatedSize": self.estimated_size,
            "elementCount": self.element_count,
            "maxDepth": self.max_depth,
        }
        if self.compliance is not None:
            data["compliance"] = self.compliance
        if self.score is not None:
            data["score"] = self.score
        return data


@dataclass
class ProcessingResult:
    document: Document
    svg: str
    warnings: list[str]
    errors: list[str]
    metadata: DocumentMetadata
    processing_time_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document.to_dict(),
            "svg": self.svg,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "metadata": self.metadata.to_dict(),
            "processingTimeMs": self.processing_time_ms,
        }


def _complexity(count: int, depth: int) -> str:
    if count < 10 and depth < 3:
        return "low"
    if count < 100 and depth < 6:
        return "medium"
    return "high"


def generate_metadata(document: Document) -> DocumentMetadata:
    features: list[str] = []
    count = 0
    depth = 0
    for element, level in iter_elements(document.elements):
        count += 1
        depth = max(depth, level)
        if element.kind not in features:
            features.append(element.kind)
    return DocumentMetadata(
        complexity=_complexity(count, depth),
        features=features,
        has_title=bool(document.title),
        has_description=bool(document.description),
        estimated_size=estimate_size(document),
        element_count=count,
        max_depth=depth,
    )


def process_document(
    spec: DocumentSpec | dict[str, Any],
    renderer: Callable[[Document], str] = render_svg,
) -> ProcessingResult:
    if not isinstance(spec, DocumentSpec):
        spec = DocumentSpec.from_dict(spec)
    started = time.perf_counter()
    document = spec.document
    warnings: list[str] = []
    errors: list[str] = []
    logger.info("Processing document with %d top-level elements", len(document.elements))

    if spec.transform:
        transformed = transform_multiple(document, spec.transform)
        document = transformed.transformed_document
        warnings.extend(item.description for item in transformed.applied)

    if spec.optimize:
        optimized = optimize_document(document, spec.optimize)
        document = optimized.optimized_document
        warnings.extend(optimized.warnings)

    suite = None
    if spec.validate is not False:
        suite = validate(document, spec.validate)
        if suite.document_result is not None:
            errors.extend(f"{issue.code}: {issue.message}" for issue in suite.document_result.errors)
            warnings.extend(issue.message for issue in suite.document_result.warnings)
        if not suite.valid:
            logger.warning("Validation failed with %d error(s); skipping render", len(errors))
            raise DocumentValidationError(errors=errors, warnings=warnings)

    svg = renderer(document)
    metadata = generate_metadata(document)
    if suite is not None:
        compliance = suite.document_result.compliance if suite.document_result else None
        metadata.compliance = compliance.version if compliance is not None else None
        metadata.score = suite.score

    elapsed = (time.perf_counter() - started) * 1000
    logger.info("Processing completed in %.1f ms with %d warning(s)", elapsed, len(warnings))
    return ProcessingResult(
        document=document,
        svg=svg,
        warnings=warnings,
        errors=errors,
        metadata=metadata,
        processing_time_ms=elapsed,
    )
