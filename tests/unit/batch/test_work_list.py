# tests/unit/batch/test_work_list.py — v1
"""Tests for batch/work_list.py — newline-separated path lists."""

from __future__ import annotations

from autodocumentator.batch.work_list import read_work_list, scheduled_basenames, write_work_list


class TestWorkList:
    def test_write_format(self, tmp_path):
        path = tmp_path / "docs" / "tests-to-process.txt"
        write_work_list(path, ["tests/a.spec.js", "tests/b.spec.js"])
        assert path.read_text(encoding="utf-8") == "tests/a.spec.js\ntests/b.spec.js"

    def test_empty_list_writes_empty_file(self, tmp_path):
        path = tmp_path / "tests-to-process.txt"
        write_work_list(path, [])
        assert read_work_list(path) == []

    def test_missing_file_is_none(self, tmp_path):
        assert read_work_list(tmp_path / "nope.txt") is None

    def test_read_skips_blank_lines(self, tmp_path):
        path = tmp_path / "list.txt"
        path.write_text("  tests/a.spec.js \n\n\ntests/b.spec.js\n", encoding="utf-8")
        assert read_work_list(path) == ["tests/a.spec.js", "tests/b.spec.js"]

    def test_scheduled_basenames(self):
        assert scheduled_basenames(["tests/x/a.spec.js", "b.spec.js"]) == {"a.spec.js", "b.spec.js"}
