"""
Centralized Logging

Architectural Intent:
- Structured or human-readable diagnostics for all Cloudformer components
- Diagnostics go to stderr; stdout is reserved for operator progress lines
  written by the ConsoleReporter
- Level comes from CLI flags (--verbose, --debug) or the config log_level
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Optional, TextIO

LOGGER_NAME = "cloudformer"

# Record attributes passed through ``extra=`` that identify the stack operation
CONTEXT_FIELDS = ("stack", "operation", "status")


class JSONFormatter(logging.Formatter):
    """One JSON object per log record.

    Stack context given as ``extra={"stack": ..., "operation": ...}`` is
    copied into the object so lines can be filtered per stack.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def resolve_level(name: str, default: int = logging.WARNING) -> int:
    """Map a level name such as "info" to its logging constant."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure the ``cloudformer`` logger hierarchy.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSON structured output. Otherwise human-readable.
        stream: Destination for diagnostics. Defaults to stderr.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)
