# src/batch/splitter.py — v1
"""Split the work list into contiguous shards, one per parallel batch."""

from __future__ import annotations

import logging
from pathlib import Path

from autodocumentator.batch.work_list import write_work_list
from autodocumentator.storage import layout

logger = logging.getLogger(__name__)


def split_work_list(paths: list[str], batch_count: int) -> list[list[str]]:
    """Cut ``paths`` into ``batch_count`` order-preserving shards.

    Shard sizes differ by at most one, larger shards first. Trailing
    shards are empty when there are fewer paths than batches.
    """
    if batch_count < 1:
        raise ValueError("batch_count must be >= 1")
    size, extra = divmod(len(paths), batch_count)
    shards = []
    start = 0
    for i in range(batch_count):
        end = start + size + (1 if i < extra else 0)
        shards.append(paths[start:end])
        start = end
    return shards


def write_batch_inputs(shards: list[list[str]], docs_root: Path) -> list[Path]:
    """Write non-empty shards as ``batch-input-<n>.txt``, replacing old ones."""
    batches_dir = layout.batches_dir(docs_root)
    if batches_dir.is_dir():
        for stale in batches_dir.glob(layout.BATCH_INPUT_GLOB):
            stale.unlink()

    written = []
    for index, shard in enumerate(shards):
        if not shard:
            continue
        path = layout.batch_input_path(docs_root, index)
        write_work_list(path, shard)
        written.append(path)
        logger.info("Batch %d: %d file(s)", index, len(shard))
    return written
