# src/storage/layout.py — v2
"""Artifact directory structure definition.

Defines the well-known file names shared by detection, merge, failure
identification and retry steps. All paths hang off the artifact root
(``Settings.docs_root``) except the lease tables, which live at the
project root so every parallel worker sees the same file.
"""

from __future__ import annotations

import re
from pathlib import Path


# Files under {docs_root}/
METADATA_FILE = "test-metadata.json"
WORK_LIST_FILE = "tests-to-process.txt"
EXISTING_DOC_FILE = "EXISTING_DOCUMENTATION.md"
CONSOLIDATED_DOC_FILE = "CONSOLIDATED_DOCUMENTATION.md"
FAILED_TESTS_FILE = "failed-tests.txt"
BATCH_STATS_FILE = "batch-stats.json"
TEST_CASES_FILE = "test-cases.json"

# Sub-directories
BATCHES_DIR = "batches"

# Batch file naming
BATCH_RESULT_GLOB = "batch-*.json"
BATCH_RESULT_PATTERN = re.compile(r"^batch-(?P<batch_id>[\w-]+)\.json$")
BATCH_INPUT_GLOB = "batch-input-*.txt"
RETRY_BATCH_GLOB = "retry-batch-*.txt"


def metadata_path(docs_root: Path) -> Path:
    return docs_root / METADATA_FILE


def work_list_path(docs_root: Path) -> Path:
    return docs_root / WORK_LIST_FILE


def existing_doc_path(docs_root: Path) -> Path:
    return docs_root / EXISTING_DOC_FILE


def consolidated_doc_path(docs_root: Path) -> Path:
    return docs_root / CONSOLIDATED_DOC_FILE


def failed_tests_path(docs_root: Path) -> Path:
    return docs_root / FAILED_TESTS_FILE


def batch_stats_path(docs_root: Path) -> Path:
    return docs_root / BATCH_STATS_FILE


def test_cases_path(docs_root: Path) -> Path:
    return docs_root / TEST_CASES_FILE


def batches_dir(docs_root: Path) -> Path:
    """Return the directory holding batch result and batch input files."""
    return docs_root / BATCHES_DIR


def batch_result_path(docs_root: Path, batch_id: int | str) -> Path:
    return batches_dir(docs_root) / f"batch-{batch_id}.json"


def batch_input_path(docs_root: Path, index: int) -> Path:
    return batches_dir(docs_root) / f"batch-input-{index}.txt"


def retry_batch_path(docs_root: Path, batch_id: int | str) -> Path:
    return batches_dir(docs_root) / f"retry-batch-{batch_id}.txt"


def ensure_docs_directories(docs_root: Path) -> None:
    """Create the artifact root and its batches/ directory."""
    batches_dir(docs_root).mkdir(parents=True, exist_ok=True)
