# src/logging/logger.py — v2
"""Log formatters and CLI logging setup.

Records carry the current run context (run_id, step, batch_id). The JSON
format flattens it into each line so CI log search can filter on
``batch_id`` directly; the text format shows step and batch inline.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from autodocumentator.logging.context import get_context

ROOT_LOGGER = "autodocumentator"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(get_context().as_dict())

        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """``<utc time> [LEVEL] logger (step) [batch id] - message``."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = f"{self.formatTime(record, '%Y-%m-%d %H:%M:%S')} [{record.levelname:8s}] {record.name}"
        if ctx.step:
            line += f" ({ctx.step})"
        if ctx.batch_id:
            line += f" [batch {ctx.batch_id}]"
        line += f" - {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> None:
    """Configure the package logger for one CLI invocation.

    Logs go to stderr; stdout is reserved for summaries and the
    ``key=value`` counter lines the workflow captures.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional log file, rotated by size.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.handlers.clear()

    formatter = JsonFormatter() if log_format == "json" else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        from autodocumentator.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation, retention))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
