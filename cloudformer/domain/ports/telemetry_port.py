"""
Telemetry Port

Architectural Intent:
- Optional observability sink for stack operations (spans and durations)
- Implemented by OTELExporter; use cases run unchanged without one
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class TelemetryPort(Protocol):
    def start_span(
        self, name: str, attributes: Optional[dict[str, str]] = None
    ) -> Optional[Any]:
        ...

    def end_span(self, span: Any) -> None:
        ...

    def record_operation(
        self, operation: str, stack_name: str, outcome: str, duration_s: float
    ) -> None:
        ...
