"""
Stack Handle

Architectural Intent:
- Thin reference to a named remote stack owned by the provisioning service
- Every accessor is a live query against the ProvisioningPort; nothing is
  cached between calls, so existence and status are always re-derived
"""

from cloudformer.domain.ports.provisioning_port import (
    ProvisioningPort,
    StackNotFoundError,
)
from cloudformer.domain.value_objects.stack_event import (
    StackEvent,
    StackOutput,
    StackResource,
)
from cloudformer.domain.value_objects.stack_status import DOES_NOT_EXIST


class StackHandle:
    __slots__ = ("_name", "_provisioning")

    def __init__(self, name: str, provisioning: ProvisioningPort) -> None:
        if not name:
            raise ValueError("Stack name cannot be empty")
        self._name = name
        self._provisioning = provisioning

    @property
    def name(self) -> str:
        return self._name

    def exists(self) -> bool:
        return self._provisioning.stack_exists(self._name)

    def status_message(self) -> str:
        """Live status, or DOES_NOT_EXIST when the provider does not know the stack."""
        try:
            return self._provisioning.get_stack_status(self._name)
        except StackNotFoundError:
            return DOES_NOT_EXIST

    def status_reason(self) -> str:
        try:
            return self._provisioning.get_stack_status_reason(self._name)
        except StackNotFoundError as e:
            return str(e)

    def events(self) -> list[StackEvent]:
        return self._provisioning.list_events(self._name)

    def resources(self) -> list[StackResource]:
        return self._provisioning.list_resources(self._name)

    def outputs(self) -> list[StackOutput]:
        return self._provisioning.list_outputs(self._name)

    def __repr__(self) -> str:
        return f"StackHandle(name={self._name!r})"
