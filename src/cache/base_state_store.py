# src/cache/base_state_store.py — v1
"""Abstract whole-document state store interface.

Shared state (metadata, lease tables) is read and written as one JSON
document per store. There is no partial update and no cross-process
locking: a ``write`` replaces the whole document, last writer wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StateStoreError(Exception):
    """Raised when persisted state exists but cannot be read or parsed."""


class BaseStateStore(ABC):
    """Unified interface for state persistence backends."""

    @abstractmethod
    def read(self) -> dict[str, Any] | None:
        """Return the stored document, or None if nothing was stored yet.

        Raises:
            StateStoreError: If stored content is unreadable or malformed.
        """

    @abstractmethod
    def write(self, data: dict[str, Any]) -> None:
        """Replace the stored document with ``data``."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored document."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location, used in log messages."""
