# src/cache/json_store.py — v2
"""JSON file-based state store (default STATE_BACKEND=json)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from autodocumentator.cache.base_state_store import BaseStateStore, StateStoreError

logger = logging.getLogger(__name__)


class JsonStateStore(BaseStateStore):
    """Persist one JSON document in a single file, overwritten on each write."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def read(self) -> dict[str, Any] | None:
        """Load the document; a missing file is not an error."""
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StateStoreError(f"Cannot read state from {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StateStoreError(
                f"Expected a JSON object in {self._path}, got {type(data).__name__}"
            )
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Overwrite the file with ``data`` (pretty-printed)."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Wrote state to %s", self._path)

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()
