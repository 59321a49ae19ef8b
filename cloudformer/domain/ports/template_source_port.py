"""
Template Source Port

Architectural Intent:
- Port interface for turning a template reference (S3 URL, HTTP URL or local
  path) into a TemplateBody
"""

from typing import Protocol, runtime_checkable
from cloudformer.domain.value_objects.template import TemplateBody


class TemplateResolutionError(Exception):
    """Raised when a template reference cannot be retrieved or read."""

    def __init__(self, template_ref: str, reason: str) -> None:
        super().__init__(f"Unable to retrieve template from {template_ref} - {reason}")
        self.template_ref = template_ref
        self.reason = reason


@runtime_checkable
class TemplateSourcePort(Protocol):
    def resolve(self, template_ref: str) -> TemplateBody:
        """Return the template. Raises TemplateResolutionError."""
        ...
