# src/coordination/model_balancer.py — v1
"""Model balancer: spread parallel batches across AI models.

A batch marks the model it is about to use as busy; other batches pick
the first model in priority order that is not busy. Busy marks expire
after one minute so a crashed batch frees its model quickly.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable, Sequence

from autodocumentator.cache.state_factory import create_state_store
from autodocumentator.coordination.lease_table import LeaseTable

if TYPE_CHECKING:
    from autodocumentator.cache.base_state_store import BaseStateStore
    from autodocumentator.config.settings import Settings

MODEL_LEASE_TTL_SECONDS = 60.0


def model_name(model: Any) -> str:
    """Name of a model given as a string, a mapping or an object.

    Raises:
        ValueError: If the candidate carries no ``name``.
    """
    if isinstance(model, str):
        return model
    name = model.get("name") if isinstance(model, dict) else getattr(model, "name", None)
    if name is None:
        raise ValueError(f"Model candidate has no 'name': {model!r}")
    return str(name)


class ModelBalancer(LeaseTable):
    """Busy/available leases over AI model names."""

    def __init__(
        self,
        store: BaseStateStore,
        ttl_seconds: float = MODEL_LEASE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(
            store,
            namespace="models",
            flag_field="busy",
            ttl_seconds=ttl_seconds,
            owner_field="batchId",
            clock=clock,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> ModelBalancer:
        path = settings.project_root / settings.model_balancer_file
        return cls(
            create_state_store(path, settings),
            ttl_seconds=settings.model_lease_ttl_seconds,
        )

    def is_model_busy(self, name: str) -> bool:
        return self.is_held(name)

    def mark_model_busy(self, name: str, batch_id: str | int) -> None:
        self.acquire(name, owner=batch_id)

    def mark_model_available(self, name: str) -> None:
        self.release(name)

    def get_next_available_model(self, models: Sequence[Any]) -> Any | None:
        """First model in ``models`` (priority order) that is not busy."""
        return self.next_available(models, key=model_name)

    def cleanup_stale_locks(self) -> list[str]:
        return self.cleanup_expired()
