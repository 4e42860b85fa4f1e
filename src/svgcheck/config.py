from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from svgdoc.errors import ConfigurationError

COMPLIANCE_TARGETS = ("svg11", "svg20", "svg21")


@dataclass(frozen=True)
class ValidationThresholds:
    very_large_viewbox: float = 100_000.0
    min_aspect_ratio: float = 0.01
    max_aspect_ratio: float = 100.0
    perf_max_elements: int = 1000
    perf_max_depth: int = 10
    perf_max_bytes: int = 1_000_000
    a11y_missing_title: float = 20.0
    a11y_missing_description: float = 15.0
    a11y_missing_aria: float = 10.0
    a11y_small_text: float = 5.0
    min_font_size: float = 12.0
    default_font_size: float = 16.0


@dataclass(frozen=True)
class ValidationOptions:
    check_accessibility: bool = True
    check_performance: bool = True
    check_compliance: bool = True
    target_compliance: str = "svg20"
    max_elements: int = 10_000
    max_nesting_depth: int = 20
    thresholds: ValidationThresholds = field(default_factory=ValidationThresholds)


PRESETS: dict[str, ValidationOptions] = {
    "strict": ValidationOptions(max_elements=5000, max_nesting_depth=15),
    "standard": ValidationOptions(),
    "minimal": ValidationOptions(
        check_accessibility=False,
        check_performance=False,
        check_compliance=False,
        max_elements=50_000,
        max_nesting_depth=50,
    ),
    "performance": ValidationOptions(
        check_accessibility=False,
        check_compliance=False,
        max_elements=1000,
        max_nesting_depth=10,
    ),
    "accessibility": ValidationOptions(
        check_performance=False,
        max_elements=50_000,
        max_nesting_depth=50,
    ),
}


def check_options(options: ValidationOptions) -> ValidationOptions:
    if options.target_compliance not in COMPLIANCE_TARGETS:
        raise ConfigurationError(
            code="UNKNOWN_COMPLIANCE_TARGET",
            message=f"Unknown compliance target: {options.target_compliance}",
            hint=f"Use one of: {', '.join(COMPLIANCE_TARGETS)}.",
        )
    if options.max_elements < 0 or options.max_nesting_depth < 0:
        raise ConfigurationError(
            code="INVALID_LIMIT",
            message="maxElements and maxNestingDepth must be non-negative",
            hint="Use a positive ceiling or a preset.",
        )
    return options


def resolve_validation_options(
    value: str | ValidationOptions | dict[str, Any] | bool | None = None,
) -> ValidationOptions:
    """Turn a preset name, an options mapping or an options object into options.

    ``None`` and ``True`` select the ``standard`` preset. A mapping may carry a
    ``preset`` key whose values are overridden by the remaining keys.
    """
    if value is None or value is True:
        return PRESETS["standard"]
    if isinstance(value, ValidationOptions):
        return check_options(value)
    if isinstance(value, str):
        preset = PRESETS.get(value)
        if preset is None:
            raise ConfigurationError(
                code="UNKNOWN_VALIDATION_PRESET",
                message=f"Unknown validation preset: {value}",
                hint=f"Use one of: {', '.join(PRESETS)}.",
            )
        return preset
    if isinstance(value, dict):
        return options_from_dict(value)
    raise ConfigurationError(
        code="INVALID_VALIDATION_OPTIONS",
        message=f"Unsupported validation options: {value!r}",
        hint="Pass a preset name, a mapping, or ValidationOptions.",
    )


_OPTION_KEYS = {
    "checkAccessibility": "check_accessibility",
    "checkPerformance": "check_performance",
    "checkCompliance": "check_compliance",
    "targetCompliance": "target_compliance",
    "maxElements": "max_elements",
    "maxNestingDepth": "max_nesting_depth",
}


def options_from_dict(data: dict[str, Any]) -> ValidationOptions:
    data = dict(data)
    base = resolve_validation_options(data.pop("preset", "standard"))
    overrides: dict[str, Any] = {}
    for key, value in data.items():
        attr = _OPTION_KEYS.get(key, key)
        if attr == "thresholds":
            overrides["thresholds"] = thresholds_from_dict(value or {}, base.thresholds)
            continue
        if attr not in _OPTION_KEYS.values():
            raise ConfigurationError(
                code="UNKNOWN_VALIDATION_OPTION",
                message=f"Unknown validation option: {key}",
                hint=f"Use one of: {', '.join(_OPTION_KEYS)}.",
            )
        overrides[attr] = value
    return check_options(replace(base, **overrides))


def thresholds_from_dict(
    data: dict[str, Any], base: ValidationThresholds | None = None
) -> ValidationThresholds:
    base = base or ValidationThresholds()
    known = {item.name for item in fields(ValidationThresholds)}
    overrides: dict[str, float] = {}
    for key, value in data.items():
        if key not in known:
            raise ConfigurationError(
                code="UNKNOWN_THRESHOLD",
                message=f"Unknown validation threshold: {key}",
                hint=f"Use one of: {', '.join(sorted(known))}.",
            )
        try:
            overrides[key] = type(getattr(base, key))(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                code="INVALID_THRESHOLD",
                message=f"Invalid value for threshold {key}: {value!r}",
                hint="Thresholds must be numbers.",
            ) from exc
    return replace(base, **overrides)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            code="CONFIG_UNREADABLE",
            message=f"Failed to read {path}: {exc}",
            hint="Check that the YAML file exists and is well-formed.",
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            code="CONFIG_UNREADABLE",
            message=f"Expected mapping at top of YAML: {path}",
            hint="Wrap the values in a top-level mapping.",
        )
    return data


def load_thresholds(path: Path) -> ValidationThresholds:
    data = _load_yaml(Path(path))
    return thresholds_from_dict(data.get("thresholds", {}) or {})
