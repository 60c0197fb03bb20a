# src/failures/retry_planner.py — v1
"""Retry planning: hand failed files to batches whose provider worked.

Failures are dealt round-robin over the working batches, in the order the
failure identifier reported them. Each working batch gets its own
``retry-batch-<id>.txt`` list; a retry worker writes its results as
``batch-retry-<id>.json`` so the next merge picks them up.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from autodocumentator.batch.work_list import write_work_list
from autodocumentator.storage import layout

logger = logging.getLogger(__name__)


class RetryPlan(BaseModel):
    """Failed files grouped by the working batch that will retry them."""

    assignments: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(files) for files in self.assignments.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def plan_retries(failures: list[str], working_batches: list[str]) -> RetryPlan:
    """Assign ``failures`` round-robin to ``working_batches``."""
    if not working_batches:
        if failures:
            logger.warning("No working batches: %d failed file(s) cannot be retried", len(failures))
        return RetryPlan()

    assignments: dict[str, list[str]] = {batch_id: [] for batch_id in working_batches}
    for i, path in enumerate(failures):
        assignments[working_batches[i % len(working_batches)]].append(path)

    return RetryPlan(
        assignments={batch_id: files for batch_id, files in assignments.items() if files}
    )


def write_retry_plan(plan: RetryPlan, docs_root: Path) -> list[Path]:
    """Write one retry list per assigned batch, replacing earlier plans."""
    batches_dir = layout.batches_dir(docs_root)
    if batches_dir.is_dir():
        for stale in batches_dir.glob(layout.RETRY_BATCH_GLOB):
            stale.unlink()

    written = []
    for batch_id, files in plan.assignments.items():
        path = layout.retry_batch_path(docs_root, batch_id)
        write_work_list(path, files)
        written.append(path)
        logger.info("Batch %s will retry %d file(s)", batch_id, len(files))
    return written
