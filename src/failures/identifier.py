# src/failures/identifier.py — v1
"""Failure identifier: which scheduled files produced no documentation.

Batch result files are the source of truth. A scheduled file counts as
documented when any batch produced an entry with its basename and
non-blank markdown, whichever batch was meant to handle it; that is the
same rule the merger applies, so every retired file shows up here.
Batches that documented at least one file are reported as working; their
providers are the ones a retry should use.

Without a work list the run is treated as a full run and every
discoverable file is considered scheduled.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Literal

from pydantic import BaseModel, Field

from autodocumentator.batch.work_list import read_work_list, write_work_list
from autodocumentator.docs.batch_io import load_batch_results
from autodocumentator.docs.models import BatchResult

logger = logging.getLogger(__name__)


class BatchHealth(BaseModel):
    """Per-batch success signal."""

    batch_id: str
    successes: int = 0

    @property
    def is_working(self) -> bool:
        return self.successes > 0


class FailureReport(BaseModel):
    """Outcome of reconciling the schedule with produced batch results."""

    mode: Literal["incremental", "full"]
    scheduled: list[str] = Field(default_factory=list)
    documented: list[str] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)
    batches: list[BatchHealth] = Field(default_factory=list)

    @property
    def working_batches(self) -> list[str]:
        return [b.batch_id for b in self.batches if b.is_working]

    @property
    def documented_count(self) -> int:
        """Scheduled files that were documented."""
        return len(self.scheduled) - len(self.failures)

    @property
    def needs_retry(self) -> bool:
        return bool(self.failures)

    def to_stats(self) -> dict:
        """On-disk shape of ``batch-stats.json``."""
        return {
            "mode": self.mode,
            "totalTests": len(self.scheduled),
            "documented": self.documented_count,
            "failed": len(self.failures),
            "workingBatches": self.working_batches,
            "needsRetry": self.needs_retry,
            "batches": [
                {"batch": b.batch_id, "successes": b.successes, "isWorking": b.is_working}
                for b in self.batches
            ],
        }


def identify_failures(
    results: list[BatchResult],
    scheduled: list[str],
    mode: Literal["incremental", "full"] = "incremental",
) -> FailureReport:
    """Reconcile ``scheduled`` paths against batch results.

    Failures keep the scheduled (full) path and the schedule order.
    """
    documented: set[str] = set()
    batches = []
    for result in results:
        documented |= result.basenames
        batches.append(
            BatchHealth(batch_id=result.batch_id, successes=len(result.documented_entries))
        )

    failures = [path for path in scheduled if Path(path).name not in documented]
    return FailureReport(
        mode=mode,
        scheduled=list(scheduled),
        documented=sorted(documented),
        failures=failures,
        batches=batches,
    )


class FailureIdentifier:
    """File-level driver around :func:`identify_failures`."""

    def __init__(self, discover: Callable[[], list[str]]) -> None:
        self._discover = discover

    def identify(self, batches_dir: Path, work_list_path: Path) -> FailureReport:
        results = load_batch_results(batches_dir)
        if not results:
            logger.warning("No batch result files found in %s", batches_dir)

        scheduled = read_work_list(work_list_path)
        mode: Literal["incremental", "full"] = "incremental"
        if scheduled is None:
            logger.info("No work list at %s, treating run as full", work_list_path)
            scheduled = self._discover()
            mode = "full"

        report = identify_failures(results, scheduled, mode=mode)

        for batch in report.batches:
            logger.info(
                "Batch %s: %d entr(y/ies)%s",
                batch.batch_id, batch.successes, "" if batch.is_working else " (not working)",
            )
        if report.failures:
            logger.warning("%d scheduled file(s) were not documented", len(report.failures))
        logger.info(
            "Failure analysis (%s): %d scheduled, %d documented, %d failed",
            report.mode, len(report.scheduled), report.documented_count, len(report.failures),
        )
        return report

    def write(self, report: FailureReport, failed_tests_path: Path, stats_path: Path) -> None:
        """Persist the failure list (always, possibly empty) and batch stats."""
        write_work_list(failed_tests_path, report.failures)
        stats_path.parent.mkdir(parents=True, exist_ok=True)
        stats_path.write_text(json.dumps(report.to_stats(), indent=2), encoding="utf-8")
        logger.debug("Failure list written to %s, stats to %s", failed_tests_path, stats_path)


def load_working_batches(stats_path: Path) -> list[str] | None:
    """Working batch ids from a stats file, or None if it is missing or unreadable."""
    try:
        data = json.loads(stats_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Unreadable batch stats %s: %s", stats_path, e)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("workingBatches"), list):
        logger.warning("Batch stats %s has no workingBatches list", stats_path)
        return None
    return [str(batch_id) for batch_id in data["workingBatches"]]
