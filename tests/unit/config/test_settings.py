# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from autodocumentator.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_paths(self):
        s = Settings(_env_file=None)
        assert s.test_dir == Path("tests")
        assert s.docs_root == Path("documentation")

    def test_default_lease_ttls(self):
        s = Settings(_env_file=None)
        assert s.model_lease_ttl_seconds == 60
        assert s.rate_limit_ttl_seconds == 120

    def test_default_patterns(self):
        assert Settings(_env_file=None).test_patterns_list == ["*.spec.js", "*.test.js"]

    def test_default_backend(self):
        assert Settings(_env_file=None).state_backend == "json"


class TestSettingsValidation:
    def test_empty_patterns(self):
        with pytest.raises(ConfigurationError, match="TEST_PATTERNS"):
            Settings(_env_file=None, test_patterns=" , ")

    def test_absolute_test_dir(self, tmp_path):
        with pytest.raises(ConfigurationError, match="TEST_DIR"):
            Settings(_env_file=None, test_dir=tmp_path)

    def test_non_positive_ttl(self):
        with pytest.raises(ValidationError, match="TTL"):
            Settings(_env_file=None, model_lease_ttl_seconds=0)

    def test_batch_count(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, batch_count=0)

    def test_unknown_backend(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, state_backend="redis")


class TestSettingsEnvironment:
    def test_force_full_from_env(self, monkeypatch):
        monkeypatch.setenv("FORCE_FULL_DOC_RUN", "true")
        assert Settings(_env_file=None).force_full_doc_run is True

    def test_patterns_from_env(self, monkeypatch):
        monkeypatch.setenv("TEST_PATTERNS", "*.e2e.ts")
        assert Settings(_env_file=None).test_patterns_list == ["*.e2e.ts"]

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GITHUB_ACTOR", raising=False)
        monkeypatch.delenv("GIT_USER_NAME", raising=False)
        env = tmp_path / ".env"
        env.write_text("BATCH_COUNT=7\nGITHUB_ACTOR=octocat\n", encoding="utf-8")
        s = Settings(_env_file=env)
        assert s.batch_count == 7
        assert s.generated_by == "octocat"


class TestHelpers:
    def test_generated_by_prefers_git_user(self):
        s = Settings(_env_file=None, git_user_name="Dana", github_actor="octocat")
        assert s.generated_by == "Dana"

    def test_generated_by_fallback(self):
        s = Settings(_env_file=None, git_user_name="", github_actor="")
        assert s.generated_by == "Automated Workflow"

    def test_resolved_roots(self, tmp_path):
        s = Settings(_env_file=None, project_root=tmp_path, docs_dir=Path("out"))
        assert s.docs_root == tmp_path / "out"
        assert s.test_root == tmp_path / "tests"

    def test_load_settings_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert load_settings(batch_count=2).batch_count == 2
