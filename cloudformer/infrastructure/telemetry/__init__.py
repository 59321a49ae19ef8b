"""
Cloudformer Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability of stack operations
- Traces and metrics export
"""

from cloudformer.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
