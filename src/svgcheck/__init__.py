"""Validation engine for svgdoc documents."""

from .config import PRESETS, ValidationOptions, ValidationThresholds, resolve_validation_options
from .document import validate_document
from .element_rules import supported_element_kinds, validate_element
from .report import DocumentReport, SuiteResult, ValidationIssue
from .suite import quick_validate, validate, validate_with_autofix

__all__ = [
    "PRESETS",
    "DocumentReport",
    "SuiteResult",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationThresholds",
    "quick_validate",
    "resolve_validation_options",
    "supported_element_kinds",
    "validate",
    "validate_document",
    "validate_element",
    "validate_with_autofix",
]
