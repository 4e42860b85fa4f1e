"""Document-level validation.

Runs the structural, viewBox, per-element and cross-reference checks in a
fixed order and builds the compliance, accessibility and performance reports.
Every issue is collected; nothing here raises except for invalid options.
"""

from __future__ import annotations

from svgdoc.model import (
    Document,
    Group,
    Text,
    ViewBox,
    estimate_size,
    is_finite_number,
    iter_elements,
)
from svgdoc.references import ReferenceGraph, build_reference_graph

from . import codes
from .config import ValidationOptions, ValidationThresholds, check_options
from .element_rules import validate_element
from .report import (
    AccessibilityReport,
    ComplianceReport,
    ComplianceViolation,
    DocumentReport,
    DocumentStats,
    PerformanceIssue,
    PerformanceReport,
    TextSizeIssue,
    ValidationIssue,
)

RENDER_WEIGHTS = {
    "circle": 1.0,
    "rect": 1.0,
    "line": 1.0,
    "path": 3.0,
    "text": 2.0,
    "group": 0.5,
}


def _check_structure(
    document: Document, options: ValidationOptions, total_elements: int, depth: int
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    if document.view_box is None:
        errors.append(
            ValidationIssue(
                code=codes.MISSING_VIEWBOX,
                message="Document must have a viewBox",
                hint="Add a viewBox {x, y, width, height} with positive width and height.",
                property="viewBox",
            )
        )
    if not document.elements:
        warnings.append(ValidationIssue(code=codes.EMPTY_DOCUMENT, message="Document has no elements"))
    if total_elements > options.max_elements:
        errors.append(
            ValidationIssue(
                code=codes.TOO_MANY_ELEMENTS,
                message=f"Document exceeds maximum element limit of {options.max_elements}",
                hint="Split the drawing or use a preset with a higher ceiling.",
                value=total_elements,
            )
        )
    if depth > options.max_nesting_depth:
        warnings.append(
            ValidationIssue(
                code=codes.EXCESSIVE_NESTING,
                message=f"Document nesting depth exceeds {options.max_nesting_depth}",
                hint="Flatten nested groups.",
                value=depth,
            )
        )
    if not document.title and not document.description:
        warnings.append(
            ValidationIssue(
                code=codes.MISSING_ACCESSIBILITY_METADATA,
                message="Document should have a title or description for accessibility",
                hint="Set title and description on the document.",
            )
        )
    return errors, warnings


def _check_view_box(
    view_box: ViewBox | None, thresholds: ValidationThresholds
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    if view_box is None:
        return errors, warnings

    values = view_box.to_dict()
    bad = {name: value for name, value in values.items() if not is_finite_number(value)}
    if bad:
        errors.append(
            ValidationIssue(
                code=codes.INVALID_VIEWBOX_VALUE,
                message="ViewBox values must be finite numbers",
                property="viewBox",
                value={name: str(value) for name, value in bad.items()},
            )
        )
        return errors, warnings

    if view_box.width <= 0:
        errors.append(
            ValidationIssue(
                code=codes.INVALID_VIEWBOX_WIDTH,
                message="ViewBox width must be positive",
                property="viewBox.width",
                value=view_box.width,
            )
        )
    if view_box.height <= 0:
        errors.append(
            ValidationIssue(
                code=codes.INVALID_VIEWBOX_HEIGHT,
                message="ViewBox height must be positive",
                property="viewBox.height",
                value=view_box.height,
            )
        )
    limit = thresholds.very_large_viewbox
    if view_box.width > limit or view_box.height > limit:
        warnings.append(
            ValidationIssue(
                code=codes.VERY_LARGE_VIEWBOX,
                message="Very large viewBox dimensions may impact performance",
                property="viewBox",
                value=values,
            )
        )
    if view_box.width > 0 and view_box.height > 0:
        ratio = view_box.width / view_box.height
        if ratio > thresholds.max_aspect_ratio or ratio < thresholds.min_aspect_ratio:
            warnings.append(
                ValidationIssue(
                    code=codes.EXTREME_ASPECT_RATIO,
                    message="Extreme aspect ratio may cause rendering issues",
                    property="viewBox",
                    value=ratio,
                )
            )
    return errors, warnings


def _check_references(graph: ReferenceGraph) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    for ref in graph.missing_references():
        errors.append(
            ValidationIssue(
                code=codes.MISSING_REFERENCE,
                message=f"Referenced ID '{ref}' not found in document",
                hint=f"Define an element or definition with id '{ref}' or drop the reference.",
                value=ref,
            )
        )
    for ident in graph.unreferenced_ids():
        warnings.append(
            ValidationIssue(
                code=codes.UNREFERENCED_ID,
                message=f"ID '{ident}' is defined but never referenced",
                value=ident,
            )
        )
    for ident in graph.duplicate_ids():
        errors.append(
            ValidationIssue(
                code=codes.DUPLICATE_ID,
                message=f"Duplicate ID found: '{ident}'",
                hint="Give every element a unique id.",
                value=ident,
                context={"count": graph.id_counts[ident]},
            )
        )
    return errors, warnings


def _complexity(total: int, depth: int) -> str:
    if total < 10 and depth < 3:
        return "low"
    if total < 100 and depth < 6:
        return "medium"
    if total < 1000 and depth < 10:
        return "high"
    return "extreme"


def _document_stats(document: Document, graph: ReferenceGraph) -> DocumentStats:
    element_types: dict[str, int] = {}
    total = 0
    depth = 0
    for element, level in iter_elements(document.elements):
        total += 1
        depth = max(depth, level)
        element_types[element.kind] = element_types.get(element.kind, 0) + 1
    return DocumentStats(
        total_elements=total,
        element_types=element_types,
        max_nesting_depth=depth,
        total_ids=len(graph.defined_ids),
        duplicate_ids=graph.duplicate_ids(),
        unreferenced_ids=graph.unreferenced_ids(),
        missing_references=graph.missing_references(),
        estimated_bytes=estimate_size(document),
        complexity=_complexity(total, depth),
    )


def _compliance_report(document: Document, target: str) -> ComplianceReport:
    violations: list[ComplianceViolation] = []
    recommendations: list[str] = []
    if target == "svg20":
        if document.view_box is None:
            violations.append(
                ComplianceViolation(
                    rule=codes.SVG20_VIEWBOX_REQUIRED,
                    description="ViewBox is recommended for SVG 2.0 documents",
                    severity="warning",
                )
            )
        empty_groups = [
            element
            for element, _ in iter_elements(document.elements)
            if isinstance(element, Group) and not element.children
        ]
        if empty_groups:
            violations.append(
                ComplianceViolation(
                    rule=codes.SVG20_EMPTY_GROUPS,
                    description="Empty group elements should be avoided",
                    severity="warning",
                    element_ids=[group.id for group in empty_groups if group.id],
                )
            )
        recommendations.append("Consider adding accessibility metadata (title, description)")
        recommendations.append("Use semantic grouping with meaningful IDs")
    return ComplianceReport(
        standard="SVG",
        version=target,
        compliant=not any(violation.severity == "error" for violation in violations),
        violations=violations,
        recommendations=recommendations,
    )


def _accessibility_report(document: Document, thresholds: ValidationThresholds) -> AccessibilityReport:
    score = 100.0
    recommendations: list[str] = []
    text_size_issues: list[TextSizeIssue] = []

    has_title = bool(document.title)
    has_description = bool(document.description)
    if not has_title:
        score -= thresholds.a11y_missing_title
        recommendations.append("Add a title for screen readers")
    if not has_description:
        score -= thresholds.a11y_missing_description
        recommendations.append("Add a description for better accessibility")

    elements = [element for element, _ in iter_elements(document.elements)]
    has_aria_labels = any(
        element.style is not None and element.style.aria_label for element in elements
    )
    if not has_aria_labels:
        score -= thresholds.a11y_missing_aria
        recommendations.append("Consider adding aria-label attributes to important elements")

    for element in elements:
        if not isinstance(element, Text):
            continue
        font_size = thresholds.default_font_size
        if element.style is not None and is_finite_number(element.style.font_size) and element.style.font_size:
            font_size = element.style.font_size
        if font_size < thresholds.min_font_size:
            text_size_issues.append(
                TextSizeIssue(element_id=element.id, font_size=font_size, recommended=thresholds.min_font_size)
            )
            score -= thresholds.a11y_small_text
    if text_size_issues:
        recommendations.append("Increase font sizes for better readability")

    return AccessibilityReport(
        score=max(0.0, score),
        has_title=has_title,
        has_description=has_description,
        has_aria_labels=has_aria_labels,
        text_size_issues=text_size_issues,
        recommendations=recommendations,
    )


def _performance_report(
    document: Document, stats: DocumentStats, thresholds: ValidationThresholds
) -> PerformanceReport:
    score = 100.0
    issues: list[PerformanceIssue] = []
    optimizations: list[str] = []

    render_complexity = sum(
        RENDER_WEIGHTS[element.kind] for element, _ in iter_elements(document.elements)
    )
    if stats.total_elements > thresholds.perf_max_elements:
        issues.append(PerformanceIssue("complexity", "Document has many elements", "high"))
        score -= 30
        optimizations.append("Consider grouping similar elements or using patterns")
    if stats.max_nesting_depth > thresholds.perf_max_depth:
        issues.append(PerformanceIssue("nesting", "Deep element nesting detected", "medium"))
        score -= 15
        optimizations.append("Flatten deeply nested structures where possible")
    if stats.estimated_bytes > thresholds.perf_max_bytes:
        issues.append(PerformanceIssue("size", "Document is very large", "high"))
        score -= 25
        optimizations.append("Consider optimizing path data and removing unused elements")

    return PerformanceReport(
        score=max(0.0, score),
        render_complexity=render_complexity,
        memory_estimate=stats.estimated_bytes / 1024,
        issues=issues,
        optimizations=optimizations,
    )


def validate_document(document: Document, options: ValidationOptions | None = None) -> DocumentReport:
    options = check_options(options or ValidationOptions())
    thresholds = options.thresholds
    report = DocumentReport()

    graph = build_reference_graph(document)
    stats = _document_stats(document, graph)
    report.stats = stats

    errors, warnings = _check_structure(document, options, stats.total_elements, stats.max_nesting_depth)
    report.errors.extend(errors)
    report.warnings.extend(warnings)

    errors, warnings = _check_view_box(document.view_box, thresholds)
    report.errors.extend(errors)
    report.warnings.extend(warnings)

    for index, element in enumerate(document.elements):
        result = validate_element(element)
        report.element_results[index] = result
        report.errors.extend(result.errors)
        report.warnings.extend(result.warnings)
        report.suggestions.extend(result.suggestions)

    errors, warnings = _check_references(graph)
    report.errors.extend(errors)
    report.warnings.extend(warnings)

    if options.check_compliance:
        report.compliance = _compliance_report(document, options.target_compliance)
    if options.check_accessibility:
        report.accessibility = _accessibility_report(document, thresholds)
    if options.check_performance:
        report.performance = _performance_report(document, stats, thresholds)
    return report
