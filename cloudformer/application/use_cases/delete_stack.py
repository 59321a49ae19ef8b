"""
Delete Stack Use Case

Architectural Intent:
- Submits a delete and supervises it with the same poller as apply
- A stack that is already gone, or disappears while polling, is a
  successful delete
"""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from cloudformer.application.orchestration.stack_poller import PollState, StackPoller
from cloudformer.application.reporting import reported
from cloudformer.application.use_cases.apply_stack import DEPLOY_FAILED_MESSAGE, utcnow
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.ports.progress_port import ProgressPort
from cloudformer.domain.ports.provisioning_port import ProvisioningPort
from cloudformer.domain.ports.telemetry_port import TelemetryPort

logger = logging.getLogger(__name__)


class DeleteStack:
    def __init__(
        self,
        stack: StackHandle,
        provisioning: ProvisioningPort,
        poller: StackPoller,
        progress: ProgressPort,
        now: Callable[[], datetime] = utcnow,
        telemetry: Optional[TelemetryPort] = None,
    ):
        self.stack = stack
        self.provisioning = provisioning
        self.poller = poller
        self.progress = progress
        self._now = now
        self.telemetry = telemetry

    @reported
    def execute(self) -> bool:
        span = None
        if self.telemetry:
            span = self.telemetry.start_span(
                "cloudformer.delete", {"stack": self.stack.name}
            )
        started = time.monotonic()
        try:
            deleted = self._delete()
        finally:
            if self.telemetry:
                self.telemetry.end_span(span)

        if self.telemetry:
            self.telemetry.record_operation(
                "delete",
                self.stack.name,
                "Succeeded" if deleted else "Failed",
                time.monotonic() - started,
            )
        return deleted

    def _delete(self) -> bool:
        self.progress.line(f"Attempting to delete stack - {self.stack.name}")
        since = self._now()
        self.provisioning.delete_stack(self.stack.name)

        poll = self.poller.wait(since)
        if poll.state is PollState.VANISHED:
            logger.info(
                "Stack %s deleted",
                self.stack.name,
                extra={"stack": self.stack.name, "operation": "delete"},
            )
            return True
        if poll.state is PollState.TIMED_OUT:
            return False
        if poll.succeeded:
            return True
        self.progress.line(DEPLOY_FAILED_MESSAGE)
        return False
