"""
Progress Reporting

Architectural Intent:
- Cross-cutting decorator that frames every public stack operation in a
  progress scope, independent of the operation's own logic
- Swapping the ProgressPort implementation changes the framing everywhere
"""

import functools
from typing import Callable, TypeVar

F = TypeVar("F", bound=Callable)


def reported(method: F) -> F:
    """Run a use-case method inside ``self.progress.scope()``."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.progress.scope():
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
