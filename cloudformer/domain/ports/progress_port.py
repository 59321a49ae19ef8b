"""
Progress Port

Architectural Intent:
- Abstract interface for human-readable progress output
- Lets use cases stream lines without knowing about terminals or widths
- Implemented by ConsoleReporter; tests use a recording fake

Design Decisions:
- scope() frames a whole operation; nested scopes are allowed
- line() carries no machine-readable contract
"""

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressPort(Protocol):
    """Port for operator-facing progress lines."""

    def line(self, text: str) -> None:
        """Emit one progress line."""
        ...

    def scope(self) -> AbstractContextManager[None]:
        """Frame the lines of one operation."""
        ...
