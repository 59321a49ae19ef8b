"""
Provisioning Port

Architectural Intent:
- Port interface for the remote provisioning service (CloudFormation)
- Every method is a live query or a submission; nothing is cached
- Implemented by CloudFormationAdapter (boto3) and in-memory fakes in tests

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- validate_template never raises for a malformed template
- create_stack/update_stack return an OperationResult instead of raising for
  provider rejections; only unexpected client faults propagate
- Queries against an unknown stack raise StackNotFoundError
"""

from typing import Protocol, runtime_checkable
from cloudformer.domain.entities.deployment import OperationResult
from cloudformer.domain.value_objects.stack_event import (
    StackEvent,
    StackOutput,
    StackResource,
)
from cloudformer.domain.value_objects.template import TemplateBody, ValidationResult


class StackNotFoundError(Exception):
    """Raised when the provider does not know the requested stack."""

    def __init__(self, stack_name: str) -> None:
        super().__init__(f"Stack:{stack_name} does not exist")
        self.stack_name = stack_name


@runtime_checkable
class ProvisioningPort(Protocol):
    """Port for stack provisioning operations."""

    def validate_template(self, template: TemplateBody) -> ValidationResult:
        """Ask the provider to validate a template."""
        ...

    def stack_exists(self, stack_name: str) -> bool:
        ...

    def get_stack_status(self, stack_name: str) -> str:
        """Return the live status string. Raises StackNotFoundError."""
        ...

    def get_stack_status_reason(self, stack_name: str) -> str:
        ...

    def list_events(self, stack_name: str) -> list[StackEvent]:
        """Return every event of the stack, in no guaranteed order."""
        ...

    def list_resources(self, stack_name: str) -> list[StackResource]:
        ...

    def list_outputs(self, stack_name: str) -> list[StackOutput]:
        ...

    def create_stack(
        self,
        stack_name: str,
        template: TemplateBody,
        parameters: dict[str, str],
        disable_rollback: bool = False,
        capabilities: tuple[str, ...] = (),
        notify: tuple[str, ...] = (),
        tags: dict[str, str] | None = None,
    ) -> OperationResult:
        ...

    def update_stack(
        self,
        stack_name: str,
        template: TemplateBody,
        parameters: dict[str, str],
        capabilities: tuple[str, ...] = (),
    ) -> OperationResult:
        """Submit an update. A no-op update yields OperationResult.no_changes()."""
        ...

    def delete_stack(self, stack_name: str) -> None:
        ...
