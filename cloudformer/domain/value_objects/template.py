"""
Template Value Objects

Architectural Intent:
- TemplateBody carries either inline template text or a pass-through URL
  that the provisioning service fetches itself
- ValidationResult is the structured verdict of a template validation
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TemplateBody:
    """
    Value Object holding a resolved template.

    Exactly one of ``body`` and ``url`` is set.
    """
    body: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.body is None) == (self.url is None):
            raise ValueError("TemplateBody needs exactly one of body or url")

    @staticmethod
    def from_text(text: str) -> "TemplateBody":
        return TemplateBody(body=text)

    @staticmethod
    def from_url(url: str) -> "TemplateBody":
        return TemplateBody(url=url)

    def as_api_kwargs(self) -> dict[str, str]:
        if self.url is not None:
            return {"TemplateURL": self.url}
        return {"TemplateBody": self.body}

    def __str__(self) -> str:
        if self.url is not None:
            return self.url
        return f"<inline template, {len(self.body)} chars>"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    diagnostic_code: str = ""
    diagnostic_message: str = ""

    @staticmethod
    def ok() -> "ValidationResult":
        return ValidationResult(valid=True)

    @staticmethod
    def invalid(code: str, message: str) -> "ValidationResult":
        return ValidationResult(
            valid=False, diagnostic_code=code, diagnostic_message=message
        )
