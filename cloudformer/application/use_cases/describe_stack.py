"""
Describe Stack Use Case

Architectural Intent:
- Read-only views of a stack: status line, full event history and outputs
- Non-existence is reported as a message, never raised
"""

import logging

from cloudformer.application.reporting import reported
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.ports.progress_port import ProgressPort
from cloudformer.domain.ports.provisioning_port import StackNotFoundError
from cloudformer.domain.value_objects.stack_status import DOES_NOT_EXIST

logger = logging.getLogger(__name__)


class DescribeStack:
    def __init__(self, stack: StackHandle, progress: ProgressPort):
        self.stack = stack
        self.progress = progress

    @reported
    def status(self) -> str:
        status = self.stack.status_message()
        if status == DOES_NOT_EXIST:
            self.progress.line(f"{self.stack.name} - Not Deployed")
        else:
            self.progress.line(
                f"{self.stack.name} - {status} - {self.stack.status_reason()}"
            )
        return status

    @reported
    def events(self) -> bool:
        try:
            events = self.stack.events()
        except StackNotFoundError:
            self.progress.line("Stack not up.")
            return False
        for event in sorted(events, key=lambda e: e.timestamp):
            self.progress.line(event.history_line())
        return True

    @reported
    def outputs(self) -> int:
        try:
            outputs = self.stack.outputs()
        except StackNotFoundError:
            self.progress.line("Stack not up.")
            return 1
        for output in outputs:
            self.progress.line(str(output))
        return 0
