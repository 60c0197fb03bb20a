# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a throwaway project tree with test files, an in-memory state
store and a controllable clock. Nothing touches the real working tree.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from autodocumentator.cache.memory_store import MemoryStateStore

SAMPLE_SPEC = """import { test, expect } from '@playwright/test';

test.describe('Login', () => {
  test('user can log in', { tag: '@smoke' }, async ({ page }) => {
    await page.goto('/login');
  });
});
"""

SAMPLE_API_TEST = """const { taggedTest } = require('../helpers');

taggedTest('creates an application', ['@api', '@regression'], async () => {});
taggedTest('rejects empty payload', { tags: ['@api'] }, async () => {});
"""


class FakeClock:
    """Callable returning epoch seconds; advanced explicitly by tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def write_file(root: Path, rel_path: str, content: str) -> Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# === FIXTURES ===


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with two UI specs, one API test and a non-test file."""
    write_file(tmp_path, "tests/a.spec.js", SAMPLE_SPEC)
    write_file(tmp_path, "tests/b.spec.js", SAMPLE_SPEC.replace("Login", "Logout"))
    write_file(tmp_path, "tests/api/c.test.js", SAMPLE_API_TEST)
    write_file(tmp_path, "tests/helpers.js", "module.exports = {};\n")
    return tmp_path


@pytest.fixture
def memory_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
