"""
Console Progress Reporter

Architectural Intent:
- Implements ProgressPort for a terminal: one line per message on stdout
- scope() frames an operation between separator rules sized to the terminal
  width
"""

import shutil
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO


class ConsoleReporter:
    def __init__(
        self,
        stream: Optional[TextIO] = None,
        width: Optional[int] = None,
        fill: str = "=",
    ) -> None:
        self._stream = stream
        self._width = width
        self._fill = fill

    def _columns(self) -> int:
        if self._width is not None:
            return self._width
        return shutil.get_terminal_size(fallback=(80, 24)).columns

    def line(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        print(text, file=stream, flush=True)

    @contextmanager
    def scope(self) -> Iterator[None]:
        rule = self._fill * self._columns()
        self.line(rule)
        try:
            yield
        finally:
            self.line(rule)
