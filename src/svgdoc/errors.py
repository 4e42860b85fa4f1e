from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SvgDocError(Exception):
    code: str
    message: str
    hint: str = ""

    def __str__(self) -> str:
        return self.message


class ConfigurationError(SvgDocError):
    """Invalid option or malformed specification; raised immediately."""


class RenderError(SvgDocError):
    """Serialization of a document to markup failed."""


@dataclass
class DocumentValidationError(SvgDocError):
    code: str = "VALIDATION_FAILED"
    message: str = "Document validation failed"
    hint: str = "Fix the reported errors and resubmit the document."
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return f"{self.message}: {'; '.join(self.errors)}"
