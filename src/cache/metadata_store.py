# src/cache/metadata_store.py — v1
"""Metadata store: project-relative path → FileRecord.

Loaded and saved as a whole on each invocation. Not safe for concurrent
writers; the pipeline runs exactly one metadata-writing step per run,
after all parallel batches have finished.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from autodocumentator.cache.base_state_store import BaseStateStore, StateStoreError
from autodocumentator.cache.models import FileRecord

logger = logging.getLogger(__name__)


class MetadataStore:
    """Typed view over a state store holding one FileRecord per path."""

    def __init__(self, store: BaseStateStore) -> None:
        self._store = store

    def load(self) -> dict[str, FileRecord]:
        """Return all records.

        A missing backing document yields an empty mapping (first run).
        Malformed content is logged and also yields an empty mapping;
        individually malformed records are dropped.
        """
        try:
            raw = self._store.read()
        except StateStoreError as e:
            logger.warning("Failed to load metadata, treating as first run: %s", e)
            return {}

        if raw is None:
            logger.info("No metadata found at %s (first run)", self._store.location)
            return {}

        records: dict[str, FileRecord] = {}
        for path, data in raw.items():
            try:
                records[path] = FileRecord.model_validate(data)
            except ValidationError as e:
                logger.warning("Dropping malformed metadata record for %s: %s", path, e)
        return records

    def save(self, records: dict[str, FileRecord]) -> None:
        """Overwrite the whole store with ``records`` (keys sorted)."""
        self._store.write(
            {path: records[path].to_json_dict() for path in sorted(records)}
        )
        logger.debug("Saved %d metadata record(s) to %s", len(records), self._store.location)
