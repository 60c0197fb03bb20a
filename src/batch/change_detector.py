# src/batch/change_detector.py — v1
"""Change detector: classify discovered files as new, changed or unchanged.

Decision flow per file (incremental mode):
  1. Fingerprint the current content
  2. No stored record              → NEW
  3. Stored hash != current hash   → CHANGED
  4. Otherwise                     → UNCHANGED

Only content hashes count. A touched-but-identical file stays unchanged
even though its modification time moved.

Forced full mode schedules every discovered file and never reads or
writes the metadata store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from autodocumentator.batch.models import ChangeReport, WorkItem
from autodocumentator.batch.work_list import write_work_list
from autodocumentator.cache.fingerprint import fingerprint_file

if TYPE_CHECKING:
    from autodocumentator.cache.metadata_store import MetadataStore

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Compare discovered files against the metadata store."""

    def __init__(
        self,
        discover: Callable[[], list[str]],
        metadata_store: MetadataStore,
        project_root: Path = Path("."),
    ) -> None:
        self._discover = discover
        self._metadata_store = metadata_store
        self._project_root = Path(project_root)

    def detect(self, force_full: bool = False) -> ChangeReport:
        """Classify every discovered file.

        Args:
            force_full: Schedule everything, ignoring stored metadata.

        Returns:
            ChangeReport whose ``work_list`` is the set to process.
        """
        candidates = sorted(self._discover())

        if force_full:
            logger.info("Full run forced: scheduling all %d file(s)", len(candidates))
            return ChangeReport(
                mode="full",
                items=[WorkItem(path=p, status="new") for p in candidates],
            )

        records = self._metadata_store.load()
        report = ChangeReport(mode="incremental")

        for rel_path in candidates:
            try:
                current = fingerprint_file(self._project_root / rel_path)
            except OSError as e:
                logger.warning("Skipping unreadable file %s: %s", rel_path, e)
                report.skipped.append(rel_path)
                continue

            stored = records.get(rel_path)
            if stored is None:
                status = "new"
            elif stored.hash != current.hash:
                status = "changed"
            else:
                status = "unchanged"

            if status != "unchanged":
                logger.info("%s: %s", status.upper(), rel_path)
            report.items.append(WorkItem(path=rel_path, status=status))

        logger.info(
            "Change detection complete: %d new, %d changed, %d unchanged, %d skipped",
            len(report.new), len(report.changed),
            len(report.unchanged), len(report.skipped),
        )
        return report

    def detect_and_write(self, work_list_path: Path, force_full: bool = False) -> ChangeReport:
        """Run detection and persist the work list for downstream workers."""
        report = self.detect(force_full=force_full)
        write_work_list(work_list_path, report.work_list)
        logger.debug("Work list written to %s", work_list_path)
        return report
