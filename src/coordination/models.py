# src/coordination/models.py — v1
"""Coordination models: ResourceLease."""

from __future__ import annotations

from pydantic import BaseModel


class ResourceLease(BaseModel):
    """Advisory, time-limited claim on a named shared resource.

    ``timestamp`` is the acquisition time in epoch milliseconds.
    """

    name: str
    held: bool
    owner: str | None = None
    timestamp: float

    def age_ms(self, now_ms: int) -> float:
        return now_ms - self.timestamp

    def is_expired(self, now_ms: int, ttl_ms: int) -> bool:
        """A lease older than the TTL no longer counts, whatever its flag."""
        return self.age_ms(now_ms) > ttl_ms
