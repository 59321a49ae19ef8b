"""
Stack Poller

Architectural Intent:
- Owns the poll-until-terminal loop shared by apply and delete
- Streams each new stack event exactly once, oldest first, while the
  provisioning service moves the stack on its own schedule
- The only suspension point of the system: blocks for a fixed interval between
  remote queries

Design Decisions:
- Status is read before events in each iteration, so once a terminal status is
  seen every event leading up to it has already been fetched and reported
- A stack that stops existing ends the loop with VANISHED; the caller decides
  what that means for its verdict
- Unbounded by default; max_wait_seconds > 0 bounds the total wait
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Callable

from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.ports.progress_port import ProgressPort
from cloudformer.domain.ports.provisioning_port import StackNotFoundError
from cloudformer.domain.services.event_reporter import EventReporter
from cloudformer.domain.value_objects.stack_event import StackEvent
from cloudformer.domain.value_objects.stack_status import (
    DOES_NOT_EXIST,
    deploy_succeeded,
    is_terminal,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 30


class PollState(Enum):
    TERMINAL = auto()
    VANISHED = auto()
    TIMED_OUT = auto()


@dataclass(frozen=True)
class PollResult:
    state: PollState
    status: str
    reported_events: tuple[StackEvent, ...] = ()
    iterations: int = 0

    @property
    def succeeded(self) -> bool:
        return self.state is PollState.TERMINAL and deploy_succeeded(self.status)


class StackPoller:
    def __init__(
        self,
        stack: StackHandle,
        progress: ProgressPort,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_wait_seconds: float = 0,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        if interval_seconds < 0:
            raise ValueError("interval_seconds cannot be negative")
        self.stack = stack
        self.progress = progress
        self.interval_seconds = interval_seconds
        self.max_wait_seconds = max_wait_seconds
        self._sleep = sleep
        self._monotonic = monotonic

    def wait(self, since: datetime) -> PollResult:
        """Poll until the stack reaches a terminal status, vanishes or times out."""
        reporter = EventReporter(since, self.progress.line)
        reported: list[StackEvent] = []
        deadline = None
        if self.max_wait_seconds > 0:
            deadline = self._monotonic() + self.max_wait_seconds

        iterations = 0
        while True:
            iterations += 1
            status = self.stack.status_message()
            if status == DOES_NOT_EXIST:
                return self._vanished(reported, iterations)

            try:
                reported.extend(reporter.report(self.stack.events()))
            except StackNotFoundError:
                return self._vanished(reported, iterations)

            if is_terminal(status):
                logger.info(
                    "Stack %s reached %s after %d poll(s)",
                    self.stack.name,
                    status,
                    iterations,
                    extra={"stack": self.stack.name, "status": status},
                )
                return PollResult(PollState.TERMINAL, status, tuple(reported), iterations)

            if deadline is not None and self._monotonic() >= deadline:
                logger.warning(
                    "Stopped waiting for stack %s after %ss (last status %s)",
                    self.stack.name,
                    self.max_wait_seconds,
                    status,
                )
                self.progress.line(
                    f"Gave up waiting after {self.max_wait_seconds}s - "
                    f"{self.stack.name} is still {status}"
                )
                return PollResult(PollState.TIMED_OUT, status, tuple(reported), iterations)

            logger.debug(
                "Stack %s is %s, next poll in %ss",
                self.stack.name,
                status,
                self.interval_seconds,
            )
            self._sleep(self.interval_seconds)

    def _vanished(self, reported: list[StackEvent], iterations: int) -> PollResult:
        logger.info("Stack %s no longer exists", self.stack.name)
        self.progress.line("Stack not up.")
        return PollResult(PollState.VANISHED, DOES_NOT_EXIST, tuple(reported), iterations)
