# src/docs/merger.py — v1
"""Batch documentation merger.

Reconciles newly generated per-file sections with the previously
consolidated document:

  - existing section, file not scheduled this run   → KEPT
  - new section for a file that already had one     → UPDATED
  - new section for a file without one              → ADDED
  - existing section, file scheduled, nothing new   → RETIRED (dropped)

Retiring means a file whose processing failed loses its old section
rather than keeping possibly stale documentation. The failure identifier
reports such files so a retry can run before the output is published.

Output sections are sorted by basename. The merged document is written
both as the consolidated artifact and as the baseline for the next run.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from autodocumentator.batch.work_list import read_work_list, scheduled_basenames
from autodocumentator.docs.batch_io import load_batch_results
from autodocumentator.docs.models import BatchResult, MergeResult
from autodocumentator.docs.parser import extract_entries

logger = logging.getLogger(__name__)

DOCUMENT_TITLE = "# UI Test Documentation"


def collect_new_entries(results: list[BatchResult]) -> dict[str, str]:
    """Map basename → markdown across batches; later batches win."""
    entries: dict[str, str] = {}
    for result in results:
        for entry in result.documented_entries:
            entries[entry.basename] = entry.markdown.strip()
    return entries


class DocumentationMerger:
    """Merge existing and new documentation sections into one document."""

    def __init__(
        self,
        generated_by: str = "Automated Workflow",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._generated_by = generated_by
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def merge(
        self,
        existing: dict[str, str],
        new: dict[str, str],
        scheduled: set[str],
    ) -> MergeResult:
        """Apply the keep/update/add/retire policy.

        Args:
            existing: Sections of the previous document, by basename.
            new: Sections produced this run, by basename.
            scheduled: Basenames that were scheduled for processing.
        """
        result = MergeResult()
        final: dict[str, str] = {}

        for key, text in existing.items():
            if key in scheduled:
                if key not in new:
                    result.retired.append(key)
                continue
            final[key] = text
            result.kept.append(key)

        for key, text in new.items():
            if key in existing:
                result.updated.append(key)
            else:
                result.added.append(key)
            final[key] = text

        result.entries = {key: final[key] for key in sorted(final)}
        result.content = self.render(result.entries)

        if result.retired:
            logger.warning(
                "%d scheduled file(s) produced no documentation and were dropped: %s",
                len(result.retired), ", ".join(sorted(result.retired)),
            )
        logger.info(
            "Merge complete: %d kept, %d updated, %d added, %d retired, %d total",
            len(result.kept), len(result.updated), len(result.added),
            len(result.retired), result.total,
        )
        return result

    def render(self, entries: dict[str, str]) -> str:
        """Render header, sections (in the given order) and footer."""
        now = self._clock()
        header = (
            f"{DOCUMENT_TITLE}\n\n"
            "## 📚 Test Documentation\n\n"
            f"> **Generated:** {now.strftime('%Y-%m-%d')}  \n"
            f"> **Total Tests:** {len(entries)}  \n"
            f"> **Generated by:** {self._generated_by}\n\n"
            "---\n\n"
        )
        footer = f"\n\n---\n\n_Last Updated: {now.strftime('%Y-%m-%d %H:%M:%S')} UTC_\n"
        return header + "\n\n".join(entries.values()) + footer

    def merge_files(
        self,
        existing_doc: Path,
        batches_dir: Path,
        work_list: Path,
        output_doc: Path,
    ) -> MergeResult:
        """Merge from the artifact files and write both outputs.

        A missing existing document means first run; a missing work list
        means nothing was scheduled, so no existing section is retired.
        """
        existing: dict[str, str] = {}
        if existing_doc.exists():
            existing = extract_entries(existing_doc.read_text(encoding="utf-8"))
            logger.info("Loaded %d existing entr(y/ies)", len(existing))
        else:
            logger.info("No existing documentation found (first run)")

        new = collect_new_entries(load_batch_results(batches_dir))
        logger.info("Loaded %d new/updated entr(y/ies) from batches", len(new))

        scheduled = scheduled_basenames(read_work_list(work_list) or [])
        logger.info("Files scheduled this run: %d", len(scheduled))

        result = self.merge(existing, new, scheduled)

        output_doc.parent.mkdir(parents=True, exist_ok=True)
        output_doc.write_text(result.content, encoding="utf-8")
        existing_doc.parent.mkdir(parents=True, exist_ok=True)
        existing_doc.write_text(result.content, encoding="utf-8")
        return result
