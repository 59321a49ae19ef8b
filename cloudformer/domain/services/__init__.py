"""
Domain Services Package

Architectural Intent:
- Contains domain services that encapsulate business logic
  spanning multiple entities or value objects
"""

from cloudformer.domain.services.event_reporter import EventReporter

__all__ = ["EventReporter"]
