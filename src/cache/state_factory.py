# src/cache/state_factory.py — v1
"""Factory for state store instantiation."""

from __future__ import annotations

from pathlib import Path

from autodocumentator.cache.base_state_store import BaseStateStore
from autodocumentator.config.settings import Settings


class UnsupportedStateBackendError(ValueError):
    """Raised when STATE_BACKEND names an unknown backend."""


def create_state_store(path: Path, settings: Settings | None = None) -> BaseStateStore:
    """Instantiate the configured state backend for one document.

    Args:
        path: Backing file for the json backend; used as the store name
            for the memory backend.
        settings: Application settings. Defaults to the JSON backend.

    Returns:
        Configured BaseStateStore implementation.
    """
    backend = "json" if settings is None else settings.state_backend

    if backend == "json":
        from autodocumentator.cache.json_store import JsonStateStore
        return JsonStateStore(path)

    if backend == "memory":
        from autodocumentator.cache.memory_store import MemoryStateStore
        return MemoryStateStore(name=Path(path).name)

    raise UnsupportedStateBackendError(f"Unsupported state backend: {backend!r}")
