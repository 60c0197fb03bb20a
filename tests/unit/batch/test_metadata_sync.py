# tests/unit/batch/test_metadata_sync.py — v1
"""Tests for batch/metadata_sync.py — post-run update and docs seeding."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from autodocumentator.batch.metadata_sync import SYNCED_FROM_DOCS, MetadataUpdater
from autodocumentator.cache.fingerprint import fingerprint_file
from autodocumentator.cache.memory_store import MemoryStateStore
from autodocumentator.cache.metadata_store import MetadataStore

FIXED = datetime(2026, 5, 4, 3, 2, 1, tzinfo=timezone.utc)

EXISTING_DOC = """# UI Test Documentation

## 🧪 `a.spec.js` → `Login`

**Summary:** logs in

---

## 🧪 `missing.spec.js` → `Gone`

---
"""


@pytest.fixture
def store():
    return MemoryStateStore()


@pytest.fixture
def updater(project, store):
    return MetadataUpdater(MetadataStore(store), project, clock=lambda: FIXED)


class TestUpdate:
    def test_records_processed_files(self, project, store, updater):
        result = updater.update(["tests/a.spec.js", "tests/b.spec.js"])
        assert result.updated == ["tests/a.spec.js", "tests/b.spec.js"]
        raw = store.read()
        assert raw["tests/a.spec.js"]["hash"] == fingerprint_file(project / "tests/a.spec.js").hash
        assert raw["tests/a.spec.js"]["lastProcessed"] == "2026-05-04T03:02:01Z"

    def test_missing_file_counted_failed(self, updater):
        result = updater.update(["tests/a.spec.js", "tests/nope.spec.js"])
        assert result.failed == ["tests/nope.spec.js"]
        assert result.total_records == 1

    def test_excluded_files_left_alone(self, store, updater):
        result = updater.update(
            ["tests/a.spec.js", "tests/b.spec.js"], exclude=["tests/b.spec.js"],
        )
        assert result.excluded == ["tests/b.spec.js"]
        assert "tests/b.spec.js" not in store.read()

    def test_existing_records_preserved(self, project):
        store = MemoryStateStore({
            "tests/old.spec.js": {"hash": "h", "timestamp": 1, "lastProcessed": "t"},
        })
        updater = MetadataUpdater(MetadataStore(store), project, clock=lambda: FIXED)
        result = updater.update(["tests/a.spec.js"])
        assert result.total_records == 2
        assert store.read()["tests/old.spec.js"]["hash"] == "h"


class TestSyncFromDocs:
    def test_seeds_documented_files(self, store, updater):
        result = updater.sync_from_docs(EXISTING_DOC, ["tests/a.spec.js", "tests/b.spec.js"])
        assert result.documented == 2
        assert result.added == ["tests/a.spec.js"]
        assert result.unresolved == ["missing.spec.js"]
        assert store.read()["tests/a.spec.js"]["source"] == SYNCED_FROM_DOCS

    def test_already_tracked_untouched(self, project):
        store = MemoryStateStore({
            "tests/a.spec.js": {"hash": "old", "timestamp": 1, "lastProcessed": "t"},
        })
        updater = MetadataUpdater(MetadataStore(store), project, clock=lambda: FIXED)
        result = updater.sync_from_docs(EXISTING_DOC, ["tests/a.spec.js"])
        assert result.already_tracked == ["tests/a.spec.js"]
        assert result.added == []
        assert store.read()["tests/a.spec.js"]["hash"] == "old"
        assert store.writes == 0

    def test_ambiguous_basename_seeds_all(self, project, store, updater):
        (project / "tests" / "nested").mkdir()
        (project / "tests" / "nested" / "a.spec.js").write_text("x", encoding="utf-8")
        result = updater.sync_from_docs(
            EXISTING_DOC, ["tests/a.spec.js", "tests/nested/a.spec.js"],
        )
        assert result.added == ["tests/a.spec.js", "tests/nested/a.spec.js"]

    def test_no_sections(self, store, updater):
        result = updater.sync_from_docs("# UI Test Documentation\n", ["tests/a.spec.js"])
        assert result.documented == 0
        assert store.read() is None
