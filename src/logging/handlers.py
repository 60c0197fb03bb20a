# src/logging/handlers.py — v2
"""Size-rotated log file handler (LOG_FILE, LOG_ROTATION, LOG_RETENTION)."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_PATTERN = re.compile(r"^(\d+)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_UNITS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def _parse_size(size_str: str) -> int:
    """Bytes for sizes like ``10MB``, ``512kb`` or a bare byte count."""
    match = _SIZE_PATTERN.match(size_str.strip())
    if match is None:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    count, unit = match.groups()
    return int(count) * _UNITS[(unit or "B").upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Rotating handler for ``log_file``; missing parent directories are created.

    ``retention`` is the number of rotated backups kept next to the file.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=_parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
