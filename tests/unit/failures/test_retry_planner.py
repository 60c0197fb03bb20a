# tests/unit/failures/test_retry_planner.py — v1
"""Tests for failures/retry_planner.py — round-robin retry assignment."""

from __future__ import annotations

from autodocumentator.batch.work_list import read_work_list
from autodocumentator.failures.retry_planner import plan_retries, write_retry_plan
from autodocumentator.storage import layout


class TestPlanRetries:
    def test_round_robin(self):
        plan = plan_retries(["a", "b", "c", "d", "e"], ["0", "2"])
        assert plan.assignments == {"0": ["a", "c", "e"], "2": ["b", "d"]}
        assert plan.total == 5

    def test_unused_batches_omitted(self):
        plan = plan_retries(["a"], ["0", "1", "2"])
        assert plan.assignments == {"0": ["a"]}

    def test_no_working_batches(self):
        plan = plan_retries(["a", "b"], [])
        assert plan.is_empty

    def test_no_failures(self):
        assert plan_retries([], ["0"]).is_empty


class TestWriteRetryPlan:
    def test_writes_one_file_per_batch(self, tmp_path):
        plan = plan_retries(["tests/a.spec.js", "tests/b.spec.js"], ["0", "3"])
        written = write_retry_plan(plan, tmp_path)
        assert [p.name for p in written] == ["retry-batch-0.txt", "retry-batch-3.txt"]
        assert read_work_list(layout.retry_batch_path(tmp_path, 3)) == ["tests/b.spec.js"]

    def test_stale_plans_removed(self, tmp_path):
        write_retry_plan(plan_retries(["a", "b"], ["0", "1"]), tmp_path)
        write_retry_plan(plan_retries([], ["0"]), tmp_path)
        assert list(layout.batches_dir(tmp_path).glob("retry-batch-*.txt")) == []
