from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Any

from svgdoc.model import Document, is_number

from .config import ValidationOptions, resolve_validation_options
from .document import validate_document
from .element_rules import validate_element
from .report import DocumentReport, ElementResult, QuickFix, SuiteResult

HIGH_PRIORITY_CODES = ("MISSING_REQUIRED", "INVALID_DIMENSION", "NEGATIVE")
LOW_PRIORITY_CODES = ("PERFORMANCE_OPTIMIZATION", "OPTIMIZE_PATH")

DEFAULT_TITLE = "SVG Document"
DEFAULT_DESCRIPTION = "An SVG graphic"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _suggestion_priority(code: str) -> str:
    if any(token in code for token in HIGH_PRIORITY_CODES):
        return "high"
    if any(token in code for token in LOW_PRIORITY_CODES):
        return "low"
    return "medium"


def _summary(errors: int, warnings: int) -> str:
    if errors == 0 and warnings == 0:
        return "Document is valid with no issues detected"
    if errors == 0:
        return f"Document is valid with {warnings} warning(s)"
    return f"Document has {errors} error(s) and {warnings} warning(s)"


def overall_score(
    element_results: dict[int, ElementResult] | None, document_result: DocumentReport | None
) -> tuple[int, int]:
    """Return ``(score, total_errors)`` using the fixed suite weighting."""
    score = 100.0
    total_errors = 0
    if element_results:
        for result in element_results.values():
            total_errors += len(result.errors)
            score -= len(result.errors) * 10
            score -= len(result.warnings) * 2
    if document_result is not None:
        total_errors += len(document_result.errors)
        score -= len(document_result.errors) * 15
        score -= len(document_result.warnings) * 3
        if document_result.accessibility is not None:
            score -= (100 - document_result.accessibility.score) * 0.2
        if document_result.performance is not None:
            score -= (100 - document_result.performance.score) * 0.1
    score = max(0.0, min(100.0, score))
    return _round_half_up(score), total_errors


def validate(
    document: Document,
    options: str | ValidationOptions | dict[str, Any] | None = None,
    element_validation: bool = True,
    document_validation: bool = True,
) -> SuiteResult:
    """Run the full validation suite and score the document."""
    resolved = resolve_validation_options(options)
    recommendations: list[str] = []
    quick_fixes: list[QuickFix] = []
    element_results: dict[int, ElementResult] | None = None
    document_result = None

    if element_validation:
        element_results = {}
        for index, element in enumerate(document.elements):
            result = validate_element(element)
            element_results[index] = result
            for suggestion in result.suggestions:
                quick_fixes.append(
                    QuickFix(
                        type="modify",
                        description=suggestion.message,
                        priority=_suggestion_priority(suggestion.code),
                        automated=False,
                        property=suggestion.property,
                    )
                )

    if document_validation:
        document_result = validate_document(document, resolved)
        if document_result.accessibility is not None:
            recommendations.extend(document_result.accessibility.recommendations)
            if not document_result.accessibility.has_title:
                quick_fixes.append(
                    QuickFix(
                        type="add",
                        description="Add a title for screen readers",
                        priority="high",
                        automated=True,
                        property="title",
                        suggested_value=DEFAULT_TITLE,
                    )
                )
            if not document_result.accessibility.has_description:
                quick_fixes.append(
                    QuickFix(
                        type="add",
                        description="Add a description for better accessibility",
                        priority="medium",
                        automated=True,
                        property="description",
                        suggested_value=DEFAULT_DESCRIPTION,
                    )
                )
        if document_result.performance is not None:
            recommendations.extend(document_result.performance.optimizations)
        if document_result.compliance is not None:
            recommendations.extend(document_result.compliance.recommendations)
        for warning in document_result.warnings:
            quick_fixes.append(
                QuickFix(type="modify", description=warning.message, priority="medium", automated=False)
            )

    score, total_errors = overall_score(element_results, document_result)
    if document_result is not None:
        summary = _summary(len(document_result.errors), len(document_result.warnings))
    else:
        summary = _summary(
            total_errors, sum(len(result.warnings) for result in (element_results or {}).values())
        )
    return SuiteResult(
        valid=total_errors == 0,
        score=score,
        summary=summary,
        element_results=element_results,
        document_result=document_result,
        recommendations=list(dict.fromkeys(recommendations)),
        quick_fixes=quick_fixes,
    )


@dataclass
class QuickCheck:
    valid: bool
    critical_issues: list[str] = field(default_factory=list)
    element_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "criticalIssues": list(self.critical_issues),
            "elementCount": self.element_count,
        }


def quick_validate(document: Document) -> QuickCheck:
    """Cheap structural check: viewBox presence and sign, non-empty document."""
    issues: list[str] = []
    view_box = document.view_box
    if view_box is None:
        issues.append("Missing viewBox")
    elif not all(
        is_number(value) and value > 0
        for value in (view_box.width, view_box.height)
    ):
        issues.append("Invalid viewBox dimensions")
    if not document.elements:
        issues.append("No elements in document")
    return QuickCheck(valid=not issues, critical_issues=issues, element_count=len(document.elements))


@dataclass
class AutoFixResult:
    validation: SuiteResult
    fixed_document: Document | None = None
    fixed_validation: SuiteResult | None = None
    applied_fixes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "validation": self.validation.to_dict(),
            "appliedFixes": list(self.applied_fixes),
        }
        if self.fixed_document is not None:
            data["fixedDocument"] = self.fixed_document.to_dict()
        if self.fixed_validation is not None:
            data["fixedValidation"] = self.fixed_validation.to_dict()
        return data


def validate_with_autofix(
    document: Document, options: str | ValidationOptions | dict[str, Any] | None = None
) -> AutoFixResult:
    """Validate, apply the automated quick fixes to a copy, and revalidate it."""
    result = validate(document, options)
    automated = [fix for fix in result.quick_fixes if fix.automated]
    if not automated:
        return AutoFixResult(validation=result)

    fixed = copy.deepcopy(document)
    applied: list[str] = []
    for fix in automated:
        if fix.property == "title" and not fixed.title:
            fixed.title = fix.suggested_value
            applied.append(fix.description)
        elif fix.property == "description" and not fixed.description:
            fixed.description = fix.suggested_value
            applied.append(fix.description)
    return AutoFixResult(
        validation=result,
        fixed_document=fixed,
        fixed_validation=validate(fixed, options),
        applied_fixes=applied,
    )
