"""
Application Orchestration Package

Architectural Intent:
- Contains the polling loop that supervises remote stack operations
"""

from cloudformer.application.orchestration.stack_poller import (
    StackPoller,
    PollResult,
    PollState,
)

__all__ = ["StackPoller", "PollResult", "PollState"]
