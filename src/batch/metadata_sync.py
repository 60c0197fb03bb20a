# src/batch/metadata_sync.py — v1
"""Metadata writers: record processed files, or seed from existing docs.

Both steps rewrite the whole metadata document and must run as a single
step after all parallel batches have finished.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from autodocumentator.batch.models import MetadataSyncResult, MetadataUpdateResult
from autodocumentator.batch.scanner import index_by_basename
from autodocumentator.cache.fingerprint import fingerprint_file
from autodocumentator.cache.models import FileRecord
from autodocumentator.docs.parser import documented_keys

if TYPE_CHECKING:
    from autodocumentator.cache.metadata_store import MetadataStore

logger = logging.getLogger(__name__)

SYNCED_FROM_DOCS = "synced-from-docs"


class MetadataUpdater:
    """Write FileRecords for processed or already-documented files."""

    def __init__(
        self,
        metadata_store: MetadataStore,
        project_root: Path = Path("."),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._metadata_store = metadata_store
        self._project_root = Path(project_root)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def update(
        self,
        processed: list[str],
        exclude: Iterable[str] = (),
    ) -> MetadataUpdateResult:
        """Refresh the record of every processed file.

        Args:
            processed: Project-relative paths scheduled this run.
            exclude: Paths to leave untouched (typically this run's
                failures, so they are picked up again next run).
        """
        excluded_paths = set(exclude)
        records = self._metadata_store.load()
        result = MetadataUpdateResult()
        now = self._clock()

        for rel_path in processed:
            if rel_path in excluded_paths:
                result.excluded.append(rel_path)
                continue
            try:
                fingerprint = fingerprint_file(self._project_root / rel_path)
            except OSError as e:
                logger.warning("Cannot record %s: %s", rel_path, e)
                result.failed.append(rel_path)
                continue
            records[rel_path] = FileRecord.from_fingerprint(fingerprint, processed_at=now)
            result.updated.append(rel_path)

        self._metadata_store.save(records)
        result.total_records = len(records)

        if result.excluded:
            logger.info("Left %d failed file(s) untracked for retry", len(result.excluded))
        logger.info(
            "Metadata update: %d updated, %d failed, %d in store",
            len(result.updated), len(result.failed), result.total_records,
        )
        return result

    def sync_from_docs(self, markdown: str, discovered: list[str]) -> MetadataSyncResult:
        """Create records for documented files the store does not know yet.

        Documented basenames are resolved against ``discovered``. A
        basename shared by several discovered files seeds all of them.
        """
        keys = documented_keys(markdown)
        index = index_by_basename(discovered)
        records = self._metadata_store.load()
        result = MetadataSyncResult(documented=len(keys))
        now = self._clock()

        for basename in sorted(keys):
            paths = index.get(basename)
            if not paths:
                logger.warning("Documented file not found among test files: %s", basename)
                result.unresolved.append(basename)
                continue
            if len(paths) > 1:
                logger.warning("Basename %s matches %d files, seeding all", basename, len(paths))

            for rel_path in paths:
                if rel_path in records:
                    result.already_tracked.append(rel_path)
                    continue
                try:
                    fingerprint = fingerprint_file(self._project_root / rel_path)
                except OSError as e:
                    logger.warning("Cannot fingerprint %s: %s", rel_path, e)
                    result.unresolved.append(basename)
                    continue
                records[rel_path] = FileRecord.from_fingerprint(
                    fingerprint, source=SYNCED_FROM_DOCS, processed_at=now,
                )
                result.added.append(rel_path)

        if result.added:
            self._metadata_store.save(records)
        result.total_records = len(records)
        logger.info(
            "Metadata sync: %d documented, %d added, %d already tracked, %d unresolved",
            result.documented, len(result.added),
            len(result.already_tracked), len(result.unresolved),
        )
        return result
