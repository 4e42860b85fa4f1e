from __future__ import annotations

from pathlib import Path

import pytest

from svgcheck import codes
from svgcheck.config import (
    PRESETS,
    ValidationThresholds,
    load_thresholds,
    resolve_validation_options,
)
from svgcheck.suite import DEFAULT_TITLE, quick_validate, validate, validate_with_autofix
from svgdoc.errors import ConfigurationError
from svgdoc.model import Circle, Document, Style, ViewBox

ROOT = Path(__file__).resolve().parents[1]
THRESHOLDS = ROOT / "config" / "validator_thresholds.v1.yaml"


def _labelled_circle(**kwargs) -> Circle:
    values = {"cx": 50, "cy": 50, "r": 25, "style": Style(aria_label="dot")}
    values.update(kwargs)
    return Circle(**values)


def _document(**overrides) -> Document:
    base = {
        "view_box": ViewBox(0, 0, 100, 100),
        "elements": [_labelled_circle()],
        "title": "Dot",
        "description": "A single dot",
    }
    base.update(overrides)
    return Document(**base)


def test_clean_document_scores_full_marks() -> None:
    result = validate(_document())
    assert result.valid
    assert result.score == 100
    assert result.summary == "Document is valid with no issues detected"
    assert not [fix for fix in result.quick_fixes if fix.automated]


def test_missing_metadata_lowers_score_and_offers_fixes() -> None:
    result = validate(_document(title=None, description=None))
    # one document warning (-3) and accessibility 65 (-7)
    assert result.score == 90
    assert result.valid
    automated = [fix for fix in result.quick_fixes if fix.automated]
    assert [fix.property for fix in automated] == ["title", "description"]
    assert automated[0].suggested_value == DEFAULT_TITLE
    assert "Add a title for screen readers" in result.recommendations
    assert len(result.recommendations) == len(set(result.recommendations))


def test_element_errors_count_twice_in_score() -> None:
    result = validate(_document(elements=[_labelled_circle(r=-1)]))
    assert not result.valid
    assert result.score == 75
    assert result.summary == "Document has 1 error(s) and 0 warning(s)"
    assert codes.NEGATIVE_RADIUS in {issue.code for issue in result.errors}


def test_score_is_clamped_at_zero() -> None:
    elements = [_labelled_circle(r=-1) for _ in range(10)]
    assert validate(_document(elements=elements)).score == 0


def test_element_validation_can_be_disabled() -> None:
    result = validate(_document(), element_validation=False)
    assert result.element_results is None
    assert result.document_result is not None


def test_document_validation_can_be_disabled() -> None:
    result = validate(_document(elements=[_labelled_circle(r=-1)]), document_validation=False)
    assert result.document_result is None
    assert result.score == 90
    assert not result.valid


def test_disabled_reports_are_not_penalised() -> None:
    result = validate(_document(title=None, description=None), "minimal")
    assert result.document_result.accessibility is None
    assert result.score == 97


def test_priority_of_suggestion_fixes() -> None:
    circle = _labelled_circle(r=1500, style=Style(aria_label="dot", stroke="red", stroke_dasharray="2 2"))
    result = validate(_document(view_box=ViewBox(0, 0, 5000, 5000), elements=[circle]))
    modify = [fix for fix in result.quick_fixes if fix.type == "modify" and fix.priority == "low"]
    assert modify


def test_resolve_presets() -> None:
    assert resolve_validation_options(None) == PRESETS["standard"]
    assert resolve_validation_options("strict").max_elements == 5000
    performance = resolve_validation_options("performance")
    assert performance.check_performance and not performance.check_accessibility
    with pytest.raises(ConfigurationError):
        resolve_validation_options("paranoid")


def test_resolve_mapping_overrides_preset() -> None:
    options = resolve_validation_options(
        {"preset": "minimal", "maxElements": 5, "thresholds": {"min_font_size": 14}}
    )
    assert options.max_elements == 5
    assert not options.check_accessibility
    assert options.thresholds.min_font_size == 14.0
    with pytest.raises(ConfigurationError):
        resolve_validation_options({"maxWidgets": 1})


def test_shipped_thresholds_match_defaults() -> None:
    assert load_thresholds(THRESHOLDS) == ValidationThresholds()


def test_thresholds_yaml_overrides(tmp_path: Path) -> None:
    path = tmp_path / "thresholds.yaml"
    path.write_text("thresholds:\n  min_font_size: 14\n  perf_max_elements: 50\n")
    thresholds = load_thresholds(path)
    assert thresholds.min_font_size == 14.0
    assert thresholds.perf_max_elements == 50


def test_thresholds_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "thresholds.yaml"
    path.write_text("thresholds:\n  bogus: 1\n")
    with pytest.raises(ConfigurationError) as excinfo:
        load_thresholds(path)
    assert excinfo.value.code == "UNKNOWN_THRESHOLD"


def test_quick_validate() -> None:
    assert quick_validate(_document()).valid
    check = quick_validate(Document(view_box=None, elements=[]))
    assert check.critical_issues == ["Missing viewBox", "No elements in document"]
    bad = quick_validate(_document(view_box=ViewBox(0, 0, 0, 10)))
    assert bad.critical_issues == ["Invalid viewBox dimensions"]


def test_validate_with_autofix_adds_metadata() -> None:
    document = _document(title=None, description=None)
    outcome = validate_with_autofix(document)
    assert outcome.fixed_document.title == DEFAULT_TITLE
    assert outcome.fixed_document.description
    assert outcome.fixed_validation.score > outcome.validation.score
    assert document.title is None
    assert len(outcome.applied_fixes) == 2


def test_validate_with_autofix_without_fixes() -> None:
    outcome = validate_with_autofix(_document())
    assert outcome.fixed_document is None
    assert outcome.applied_fixes == []


def test_suite_result_serializes() -> None:
    data = validate(_document()).to_dict()
    assert data["overall"]["score"] == 100
    assert "documentResult" in data
