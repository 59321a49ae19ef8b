"""
Event Reporter Domain Service

Architectural Intent:
- Turns repeated, overlapping, unordered event list fetches into a stream
  where each event is reported exactly once, in timestamp order
- Events older than the start of the current operation are history and are
  never reported

Design Decisions:
- Pure domain logic: the caller fetches the events and supplies the sink
- The reported-id set lives for one operation only
"""

from datetime import datetime
from typing import Callable, Iterable

from cloudformer.domain.value_objects.stack_event import StackEvent


class EventReporter:
    def __init__(
        self,
        since: datetime,
        emit: Callable[[str], None],
    ) -> None:
        self._since = since
        self._emit = emit
        self._reported: set[str] = set()

    def fresh_events(self, events: Iterable[StackEvent]) -> list[StackEvent]:
        """Return unseen events at or after the start time, oldest first."""
        fresh: dict[str, StackEvent] = {}
        for event in events:
            if event.timestamp < self._since:
                continue
            if event.event_id in self._reported:
                continue
            fresh.setdefault(event.event_id, event)
        return sorted(fresh.values(), key=lambda e: e.timestamp)

    def report(self, events: Iterable[StackEvent]) -> list[StackEvent]:
        """Emit one line per fresh event and remember it as reported."""
        fresh = self.fresh_events(events)
        for event in fresh:
            self._emit(event.progress_line())
            self._reported.add(event.event_id)
        return fresh
