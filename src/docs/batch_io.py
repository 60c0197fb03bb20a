# src/docs/batch_io.py — v1
"""Read and write batch result files (``batch-<id>.json``).

Each parallel worker owns one uniquely named file, so batch files are
never written concurrently. Accepted shapes on read::

    {"entries": [{"fileName": ..., "markdown": ..., ...}, ...]}
    [{"fileName": ..., "markdown": ..., ...}, ...]

A missing directory means no batches ran; an unreadable or malformed
file is logged and counted as a batch that produced nothing.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from autodocumentator.docs.models import BatchResult, DocumentationEntry
from autodocumentator.logging.context import batch_context
from autodocumentator.storage import layout

logger = logging.getLogger(__name__)


def batch_id_for(path: Path) -> str:
    """Extract ``<id>`` from ``batch-<id>.json`` (falls back to the stem)."""
    match = layout.BATCH_RESULT_PATTERN.match(path.name)
    return match.group("batch_id") if match else path.stem


def _sort_key(path: Path) -> tuple[int, int, str]:
    # Numbered batches first in numeric order, then named ones (retries)
    batch_id = batch_id_for(path)
    if batch_id.isdigit():
        return (0, int(batch_id), "")
    return (1, 0, batch_id)


def list_batch_files(batches_dir: Path) -> list[Path]:
    """Return batch result files in processing order."""
    if not batches_dir.is_dir():
        return []
    files = [p for p in batches_dir.glob(layout.BATCH_RESULT_GLOB) if p.is_file()]
    return sorted(files, key=_sort_key)


def load_batch_result(path: Path) -> BatchResult:
    """Load one batch file, degrading to an empty result on bad content."""
    batch_id = batch_id_for(path)
    with batch_context(batch_id):
        return BatchResult(
            batch_id=batch_id, source=str(path), entries=_read_entries(path),
        )


def _read_entries(path: Path) -> list[DocumentationEntry]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Unreadable batch file %s, treating as empty: %s", path.name, e)
        return []

    raw_entries = data.get("entries", []) if isinstance(data, dict) else data
    if not isinstance(raw_entries, list):
        logger.warning("Batch file %s has no entry list, treating as empty", path.name)
        return []

    entries: list[DocumentationEntry] = []
    for raw in raw_entries:
        if not isinstance(raw, dict) or not raw.get("fileName"):
            logger.debug("Skipping entry without fileName in %s", path.name)
            continue
        try:
            entries.append(DocumentationEntry.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping malformed entry in %s: %s", path.name, e)

    logger.debug("Loaded %d entr(y/ies) from %s", len(entries), path.name)
    return entries


def load_batch_results(batches_dir: Path) -> list[BatchResult]:
    """Load every batch file in ``batches_dir`` in processing order."""
    return [load_batch_result(path) for path in list_batch_files(batches_dir)]


def write_batch_result(path: Path, entries: list[DocumentationEntry]) -> None:
    """Write entries in the ``{"entries": [...]}`` shape."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"entries": [entry.to_json_dict() for entry in entries]}
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
