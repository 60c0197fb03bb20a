# src/coordination/rate_limiter.py — v1
"""Shared rate limiter: remember which AI providers recently throttled us.

When a provider answers with a rate-limit error, the batch marks it so
that every other batch skips it for the next two minutes instead of
hitting the same limit again.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable, Sequence

from autodocumentator.cache.state_factory import create_state_store
from autodocumentator.coordination.lease_table import LeaseTable
from autodocumentator.coordination.model_balancer import model_name

if TYPE_CHECKING:
    from autodocumentator.cache.base_state_store import BaseStateStore
    from autodocumentator.config.settings import Settings

RATE_LIMIT_TTL_SECONDS = 120.0


class RateLimiter(LeaseTable):
    """Rate-limited/working leases over provider names."""

    def __init__(
        self,
        store: BaseStateStore,
        ttl_seconds: float = RATE_LIMIT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(
            store,
            namespace="providers",
            flag_field="rateLimited",
            ttl_seconds=ttl_seconds,
            owner_field="batchId",
            clock=clock,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> RateLimiter:
        path = settings.project_root / settings.rate_limit_file
        return cls(
            create_state_store(path, settings),
            ttl_seconds=settings.rate_limit_ttl_seconds,
        )

    def is_provider_rate_limited(self, provider: str) -> bool:
        return self.is_held(provider)

    def mark_provider_rate_limited(self, provider: str, batch_id: str | int | None = None) -> None:
        self.acquire(provider, owner=batch_id)

    def mark_provider_working(self, provider: str) -> None:
        self.release(provider)

    def next_available_provider(self, providers: Sequence[Any]) -> Any | None:
        """First provider in priority order that is not rate limited."""
        return self.next_available(providers, key=model_name)

    def cleanup_stale_limits(self) -> list[str]:
        return self.cleanup_expired()
