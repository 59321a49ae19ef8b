"""
Stack Event Value Objects

Architectural Intent:
- Immutable records of what the provisioning service reports about a stack
- StackEvent is append-only on the provider side: ordered by timestamp,
  unique by event_id
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StackEvent:
    """
    Value Object for one resource-level state transition within a stack.
    """
    event_id: str
    timestamp: datetime
    logical_id: str
    physical_id: str
    resource_type: str
    status: str
    status_reason: str = ""

    def __post_init__(self) -> None:
        if not self.event_id:
            raise ValueError("StackEvent event_id cannot be empty")

    def progress_line(self) -> str:
        return (
            f"{self.timestamp} - {self.physical_id} - {self.resource_type} - "
            f"{self.status} - {self.status_reason}"
        )

    def history_line(self) -> str:
        return (
            f"{self.timestamp} - {self.physical_id} - {self.logical_id} - "
            f"{self.resource_type} - {self.status} - {self.status_reason}"
        )


@dataclass(frozen=True)
class StackResource:
    logical_id: str
    physical_id: str
    resource_type: str
    status: str = ""


@dataclass(frozen=True)
class StackOutput:
    key: str
    value: str
    description: str = ""

    def __str__(self) -> str:
        return f"{self.key} - {self.description} - {self.value}"
