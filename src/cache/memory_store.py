# src/cache/memory_store.py — v1
"""In-memory state store (STATE_BACKEND=memory).

Used by tests and dry runs. Documents are deep-copied on the way in and
out so callers never share mutable state with the store, mirroring what a
file round-trip does. Several coordinators may share one instance to
simulate independent processes on the same shared file.
"""

from __future__ import annotations

import copy
from typing import Any

from autodocumentator.cache.base_state_store import BaseStateStore


class MemoryStateStore(BaseStateStore):
    """Process-local state store.

    ``writes`` counts calls to :meth:`write`. It is a test hook: callers
    use it to assert that an operation did or did not persist anything.
    """

    def __init__(self, initial: dict[str, Any] | None = None, name: str = "memory") -> None:
        self._data: dict[str, Any] | None = copy.deepcopy(initial)
        self._name = name
        self.writes = 0

    @property
    def location(self) -> str:
        return f"<{self._name}>"

    def read(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._data)

    def write(self, data: dict[str, Any]) -> None:
        self._data = copy.deepcopy(data)
        self.writes += 1

    def clear(self) -> None:
        self._data = None
