# src/logging/context.py — v2
"""Contextual logging support: attach run_id, batch_id and step to log records."""

from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Iterator

# One CLI invocation = one run; batch_id is scoped with batch_context().
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_batch_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "batch_id", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Snapshot of the context attached to every log record."""

    run_id: str | None = None
    batch_id: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Only the fields that are set."""
        return {k: v for k, v in asdict(self).items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        batch_id=_batch_id.get(),
        step=_step.get(),
    )


def set_run_context(run_id: str, step: str | None = None) -> None:
    """Set run-level context (called once per CLI command)."""
    _run_id.set(run_id)
    _step.set(step)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _batch_id.set(None)
    _step.set(None)


@contextmanager
def batch_context(batch_id: str | int) -> Iterator[None]:
    """Tag log records with ``batch_id`` for the duration of the block."""
    token = _batch_id.set(str(batch_id))
    try:
        yield
    finally:
        _batch_id.reset(token)


def generate_run_id(timestamp: datetime | None = None) -> str:
    """Generate a run_id: yyyymmdd_hhmm_{uuid4_short}."""
    ts = timestamp or datetime.now(timezone.utc)
    short_uuid = uuid.uuid4().hex[:5]
    return f"{ts.strftime('%Y%m%d_%H%M')}_{short_uuid}"
