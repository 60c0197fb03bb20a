# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for paths, lease timeouts, discovery patterns and
logging. Every field can be set through an environment variable of the
same name (case-insensitive), e.g. ``FORCE_FULL_DOC_RUN=true``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Discovery ===
    project_root: Path = Path(".")
    test_dir: Path = Path("tests")
    test_patterns: str = "*.spec.js,*.test.js"

    # === Artifacts ===
    docs_dir: Path = Path("documentation")

    # === Change detection ===
    force_full_doc_run: bool = False

    # === Shared state ===
    state_backend: Literal["json", "memory"] = "json"
    model_balancer_file: Path = Path(".model-balancer.json")
    model_lease_ttl_seconds: float = 60.0
    rate_limit_file: Path = Path(".rate-limits.json")
    rate_limit_ttl_seconds: float = 120.0

    # === Batching ===
    batch_count: int = 4

    # === Attribution ===
    git_user_name: str = ""
    github_actor: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("model_lease_ttl_seconds", "rate_limit_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("lease TTL must be > 0")
        return v

    @field_validator("batch_count")
    @classmethod
    def validate_batch_count(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("batch_count must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.test_patterns_list:
            errors.append("TEST_PATTERNS must contain at least one glob pattern")

        # Work-list paths are stored relative to PROJECT_ROOT
        if self.test_dir.is_absolute():
            errors.append("TEST_DIR must be relative to PROJECT_ROOT")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def test_patterns_list(self) -> list[str]:
        """Parse comma-separated discovery patterns."""
        return [p.strip() for p in self.test_patterns.split(",") if p.strip()]

    @property
    def docs_root(self) -> Path:
        """Artifact directory resolved against the project root."""
        return self.project_root / self.docs_dir

    @property
    def test_root(self) -> Path:
        """Discovery root resolved against the project root."""
        return self.project_root / self.test_dir

    @property
    def generated_by(self) -> str:
        """Attribution shown in the consolidated documentation header."""
        return self.git_user_name or self.github_actor or "Automated Workflow"


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off runs).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
