from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationIssue:
    code: str
    message: str
    hint: str = ""
    property: str | None = None
    value: Any = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.hint:
            data["hint"] = self.hint
        if self.property is not None:
            data["property"] = self.property
        if self.value is not None:
            data["value"] = self.value
        if self.context:
            data["context"] = self.context
        return data


@dataclass
class ElementResult:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    suggestions: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def extend(self, other: ElementResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.suggestions.extend(other.suggestions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "suggestions": [issue.to_dict() for issue in self.suggestions],
        }


@dataclass
class DocumentStats:
    total_elements: int
    element_types: dict[str, int]
    max_nesting_depth: int
    total_ids: int
    duplicate_ids: list[str]
    unreferenced_ids: list[str]
    missing_references: list[str]
    estimated_bytes: int
    complexity: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalElements": self.total_elements,
            "elementTypes": dict(self.element_types),
            "maxNestingDepth": self.max_nesting_depth,
            "totalIds": self.total_ids,
            "duplicateIds": list(self.duplicate_ids),
            "unreferencedIds": list(self.unreferenced_ids),
            "missingReferences": list(self.missing_references),
            "documentSize": {
                "estimatedBytes": self.estimated_bytes,
                "complexity": self.complexity,
            },
        }


@dataclass
class ComplianceViolation:
    rule: str
    description: str
    severity: str
    element_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "description": self.description,
            "severity": self.severity,
            "elementIds": list(self.element_ids),
        }


@dataclass
class ComplianceReport:
    standard: str
    version: str
    compliant: bool
    violations: list[ComplianceViolation] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "standard": self.standard,
            "version": self.version,
            "compliant": self.compliant,
            "violations": [violation.to_dict() for violation in self.violations],
            "recommendations": list(self.recommendations),
        }


@dataclass
class TextSizeIssue:
    element_id: str | None
    font_size: float
    recommended: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "elementId": self.element_id,
            "fontSize": self.font_size,
            "recommended": self.recommended,
        }


@dataclass
class AccessibilityReport:
    score: float
    has_title: bool
    has_description: bool
    has_aria_labels: bool
    text_size_issues: list[TextSizeIssue] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "hasTitle": self.has_title,
            "hasDescription": self.has_description,
            "hasAriaLabels": self.has_aria_labels,
            "textSizeIssues": [issue.to_dict() for issue in self.text_size_issues],
            "recommendations": list(self.recommendations),
        }


@dataclass
class PerformanceIssue:
    type: str
    description: str
    impact: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "description": self.description, "impact": self.impact}


@dataclass
class PerformanceReport:
    score: float
    render_complexity: float
    memory_estimate: float
    issues: list[PerformanceIssue] = field(default_factory=list)
    optimizations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "renderComplexity": self.render_complexity,
            "memoryEstimate": self.memory_estimate,
            "issues": [issue.to_dict() for issue in self.issues],
            "optimizations": list(self.optimizations),
        }


@dataclass
class DocumentReport:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    suggestions: list[ValidationIssue] = field(default_factory=list)
    element_results: dict[int, ElementResult] = field(default_factory=dict)
    stats: DocumentStats | None = None
    compliance: ComplianceReport | None = None
    accessibility: AccessibilityReport | None = None
    performance: PerformanceReport | None = None

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "suggestions": [issue.to_dict() for issue in self.suggestions],
            "elementResults": {
                str(index): result.to_dict() for index, result in self.element_results.items()
            },
            "stats": self.stats.to_dict() if self.stats else None,
            "compliance": self.compliance.to_dict() if self.compliance else None,
            "accessibility": self.accessibility.to_dict() if self.accessibility else None,
            "performance": self.performance.to_dict() if self.performance else None,
        }


@dataclass
class QuickFix:
    type: str
    description: str
    priority: str
    automated: bool
    property: str | None = None
    suggested_value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "description": self.description,
            "priority": self.priority,
            "automated": self.automated,
        }
        if self.property is not None:
            data["property"] = self.property
        if self.suggested_value is not None:
            data["suggestedValue"] = self.suggested_value
        return data


@dataclass
class SuiteResult:
    valid: bool
    score: int
    summary: str
    element_results: dict[int, ElementResult] | None = None
    document_result: DocumentReport | None = None
    recommendations: list[str] = field(default_factory=list)
    quick_fixes: list[QuickFix] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return list(self.document_result.errors) if self.document_result else []

    @property
    def warnings(self) -> list[ValidationIssue]:
        return list(self.document_result.warnings) if self.document_result else []

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "overall": {"valid": self.valid, "score": self.score, "summary": self.summary},
            "recommendations": list(self.recommendations),
            "quickFixes": [fix.to_dict() for fix in self.quick_fixes],
        }
        if self.element_results is not None:
            data["elementResults"] = {
                str(index): result.to_dict() for index, result in self.element_results.items()
            }
        if self.document_result is not None:
            data["documentResult"] = self.document_result.to_dict()
        return data
