from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError
from .processor import DocumentSpec

SPEC_SUFFIXES = (".json", ".yaml", ".yml")


def _read_data(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            code="SPEC_UNREADABLE",
            message=f"Failed to read {path}: {exc}",
            hint="Check the spec path.",
        ) from exc
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            code="SPEC_UNREADABLE",
            message=f"Failed to parse {path}: {exc}",
            hint="Check that the file is well-formed JSON or YAML.",
        ) from exc


def load_spec(path: Path) -> DocumentSpec:
    path = Path(path)
    if path.suffix.lower() not in SPEC_SUFFIXES:
        raise ConfigurationError(
            code="UNSUPPORTED_SPEC_FORMAT",
            message=f"Unsupported spec file type: {path.suffix or '(none)'}",
            hint=f"Use one of: {', '.join(SPEC_SUFFIXES)}.",
        )
    return DocumentSpec.from_dict(_read_data(path))
