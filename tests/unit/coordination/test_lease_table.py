# tests/unit/coordination/test_lease_table.py — v1
"""Tests for coordination/lease_table.py — advisory TTL leases."""

from __future__ import annotations

import logging

import pytest

from autodocumentator.cache.base_state_store import StateStoreError
from autodocumentator.cache.json_store import JsonStateStore
from autodocumentator.cache.memory_store import MemoryStateStore
from autodocumentator.coordination.lease_table import LeaseTable


@pytest.fixture
def table(memory_store, clock):
    return LeaseTable(memory_store, "models", "busy", ttl_seconds=60, clock=clock)


class BrokenStore(MemoryStateStore):
    def read(self):
        raise StateStoreError("unreadable")

    def write(self, data):
        raise PermissionError("read-only filesystem")


class TestLeaseState:
    def test_unknown_is_free(self, table):
        assert table.is_held("gpt-4") is False
        assert table.lease("gpt-4") is None

    def test_acquire_then_held(self, table):
        table.acquire("gpt-4", owner=3)
        assert table.is_held("gpt-4") is True
        assert table.lease("gpt-4").owner == "3"

    def test_release_is_immediate(self, table):
        table.acquire("gpt-4")
        table.release("gpt-4")
        assert table.is_held("gpt-4") is False

    def test_release_unknown_does_not_write(self, memory_store, table):
        table.release("gpt-4")
        assert memory_store.writes == 0

    def test_last_write_wins(self, table):
        table.acquire("gpt-4", owner="1")
        table.acquire("gpt-4", owner="2")
        assert table.lease("gpt-4").owner == "2"

    def test_flag_false_is_free(self, clock):
        store = MemoryStateStore({"models": {
            "gpt-4": {"busy": False, "timestamp": int(clock() * 1000)},
        }})
        assert LeaseTable(store, "models", "busy", 60, clock=clock).is_held("gpt-4") is False


class TestExpiry:
    def test_expires_after_ttl(self, table, clock):
        table.acquire("gpt-4")
        clock.advance(61)
        assert table.is_held("gpt-4") is False

    def test_held_at_exact_ttl(self, table, clock):
        table.acquire("gpt-4")
        clock.advance(60)
        assert table.is_held("gpt-4") is True

    def test_cleanup_removes_expired_only(self, memory_store, table, clock):
        table.acquire("old")
        clock.advance(30)
        table.acquire("fresh")
        clock.advance(31)
        assert table.cleanup_expired() == ["old"]
        assert set(memory_store.read()["models"]) == {"fresh"}

    def test_cleanup_drops_malformed(self, clock):
        store = MemoryStateStore({"models": {"bad": "not-a-lease"}})
        table = LeaseTable(store, "models", "busy", 60, clock=clock)
        assert table.cleanup_expired() == ["bad"]

    def test_active(self, table, clock):
        table.acquire("a")
        clock.advance(61)
        table.acquire("b")
        assert list(table.active()) == ["b"]


class TestNextAvailable:
    def test_first_free_in_priority_order(self, table):
        table.acquire("a")
        assert table.next_available(["a", "b", "c"]) == "b"

    def test_none_when_all_held(self, table):
        table.acquire("a")
        assert table.next_available(["a"]) is None

    def test_key_function(self, table):
        table.acquire("a")
        candidates = [{"name": "a"}, {"name": "b"}]
        assert table.next_available(candidates, key=lambda c: c["name"]) == {"name": "b"}


class TestPersistence:
    def test_document_shape(self, memory_store, table, clock):
        table.acquire("gpt-4", owner="3")
        now_ms = int(clock() * 1000)
        assert memory_store.read() == {
            "models": {"gpt-4": {"busy": True, "batchId": "3", "timestamp": now_ms}},
            "lastUpdate": now_ms,
        }

    def test_unreadable_state_is_empty(self, clock):
        table = LeaseTable(BrokenStore(), "models", "busy", 60, clock=clock)
        assert table.is_held("gpt-4") is False
        assert table.active() == {}

    def test_write_failure_swallowed(self, clock, caplog):
        table = LeaseTable(BrokenStore(), "models", "busy", 60, clock=clock)
        with caplog.at_level(logging.DEBUG, logger="autodocumentator"):
            table.acquire("gpt-4")
        assert "not persisted" in caplog.text

    def test_corrupt_json_file(self, tmp_path, clock):
        path = tmp_path / ".model-balancer.json"
        path.write_text("{", encoding="utf-8")
        table = LeaseTable(JsonStateStore(path), "models", "busy", 60, clock=clock)
        assert table.is_held("gpt-4") is False
        table.acquire("gpt-4")
        assert table.is_held("gpt-4") is True

    def test_shared_store_between_tables(self, memory_store, clock):
        first = LeaseTable(memory_store, "models", "busy", 60, clock=clock)
        second = LeaseTable(memory_store, "models", "busy", 60, clock=clock)
        first.acquire("gpt-4", owner="1")
        assert second.is_held("gpt-4") is True
