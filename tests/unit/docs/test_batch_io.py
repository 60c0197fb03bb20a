# tests/unit/docs/test_batch_io.py — v1
"""Tests for docs/batch_io.py — batch result files."""

from __future__ import annotations

import json

from autodocumentator.docs.batch_io import (
    batch_id_for,
    list_batch_files,
    load_batch_result,
    load_batch_results,
    write_batch_result,
)
from autodocumentator.docs.models import DocumentationEntry


def _write_json(path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestBatchId:
    def test_numeric(self, tmp_path):
        assert batch_id_for(tmp_path / "batch-3.json") == "3"

    def test_retry(self, tmp_path):
        assert batch_id_for(tmp_path / "batch-retry-0.json") == "retry-0"


class TestListBatchFiles:
    def test_missing_dir(self, tmp_path):
        assert list_batch_files(tmp_path / "nope") == []

    def test_numeric_order_then_named(self, tmp_path):
        for name in ["batch-10.json", "batch-retry-0.json", "batch-2.json", "other.json"]:
            _write_json(tmp_path / name, {"entries": []})
        (tmp_path / "batch-input-0.txt").write_text("x", encoding="utf-8")
        names = [p.name for p in list_batch_files(tmp_path)]
        assert names == ["batch-2.json", "batch-10.json", "batch-retry-0.json"]


class TestLoadBatchResult:
    def test_entries_object(self, tmp_path):
        path = _write_json(tmp_path / "batch-0.json", {"entries": [
            {"fileName": "a.spec.js", "markdown": "## 🧪 `a.spec.js`", "testName": "Login"},
        ]})
        result = load_batch_result(path)
        assert result.batch_id == "0"
        assert result.is_working
        assert result.entries[0].file_name == "a.spec.js"
        assert result.entries[0].model_extra["testName"] == "Login"

    def test_bare_array(self, tmp_path):
        path = _write_json(tmp_path / "batch-1.json", [{"fileName": "a.spec.js", "markdown": "x"}])
        assert load_batch_result(path).basenames == {"a.spec.js"}

    def test_entry_without_file_name_skipped(self, tmp_path):
        path = _write_json(tmp_path / "batch-1.json", {"entries": [{"markdown": "x"}, "junk"]})
        assert load_batch_result(path).entries == []

    def test_malformed_json_is_empty(self, tmp_path):
        path = tmp_path / "batch-2.json"
        path.write_text("{oops", encoding="utf-8")
        result = load_batch_result(path)
        assert result.entries == []
        assert not result.is_working

    def test_basename_of_nested_file_name(self, tmp_path):
        path = _write_json(tmp_path / "batch-0.json", {"entries": [{"fileName": "tests/x/a.spec.js", "markdown": "x"}]})
        assert load_batch_result(path).basenames == {"a.spec.js"}

    def test_blank_markdown_is_not_documented(self, tmp_path):
        path = _write_json(tmp_path / "batch-0.json", {"entries": [
            {"fileName": "a.spec.js", "markdown": ""},
            {"fileName": "b.spec.js"},
        ]})
        result = load_batch_result(path)
        assert len(result.entries) == 2
        assert result.basenames == set()
        assert not result.is_working

    def test_load_all(self, tmp_path):
        _write_json(tmp_path / "batch-0.json", {"entries": [{"fileName": "a.spec.js"}]})
        _write_json(tmp_path / "batch-1.json", {"entries": []})
        assert [r.batch_id for r in load_batch_results(tmp_path)] == ["0", "1"]


class TestWriteBatchResult:
    def test_written_shape(self, tmp_path):
        path = tmp_path / "batches" / "batch-0.json"
        entry = DocumentationEntry(file_name="a.spec.js", markdown="## 🧪 `a.spec.js`", score=80)
        write_batch_result(path, [entry])
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"entries": [
            {"fileName": "a.spec.js", "markdown": "## 🧪 `a.spec.js`", "score": 80},
        ]}
        assert "🧪" in path.read_text(encoding="utf-8")
