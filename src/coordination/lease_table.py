# src/coordination/lease_table.py — v1
"""Named-resource lease table shared between processes through a state store.

Stored document shape (``namespace`` and ``flag_field`` vary per use)::

    {
      "models": {
        "gpt-4o-mini": {"busy": true, "batchId": "3", "timestamp": 1718000000000}
      },
      "lastUpdate": 1718000000000
    }

Every operation is a whole-document read-modify-write with no atomic
compare-and-swap, so concurrent writers can lose updates. Leases are
load-distribution hints, not locks. Entries self-expire after the TTL, so
a crashed holder never blocks anyone for longer than that.

The table is best-effort: an unreadable document counts as no leases and
a failed write is dropped. Neither is ever raised to the caller.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, TypeVar

from pydantic import ValidationError

from autodocumentator.cache.base_state_store import BaseStateStore, StateStoreError
from autodocumentator.coordination.models import ResourceLease

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LeaseTable:
    """Advisory leases over named resources with a fixed TTL."""

    def __init__(
        self,
        store: BaseStateStore,
        namespace: str,
        flag_field: str,
        ttl_seconds: float,
        owner_field: str = "batchId",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._namespace = namespace
        self._flag_field = flag_field
        self._owner_field = owner_field
        self._ttl_ms = int(ttl_seconds * 1000)
        self._clock = clock

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    # --- persistence ---

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _load(self) -> dict[str, Any]:
        try:
            data = self._store.read()
        except (StateStoreError, OSError) as e:
            logger.debug("Lease table %s unreadable, assuming empty: %s", self._store.location, e)
            data = None
        if not isinstance(data, dict):
            data = {}
        if not isinstance(data.get(self._namespace), dict):
            data[self._namespace] = {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        data["lastUpdate"] = self._now_ms()
        try:
            self._store.write(data)
        except (StateStoreError, OSError) as e:
            logger.debug("Lease table %s not persisted: %s", self._store.location, e)

    def _parse(self, name: str, record: Any) -> ResourceLease | None:
        if not isinstance(record, dict):
            return None
        owner = record.get(self._owner_field)
        try:
            return ResourceLease(
                name=name,
                held=record.get(self._flag_field) is True,
                owner=None if owner is None else str(owner),
                timestamp=record.get("timestamp"),
            )
        except ValidationError:
            logger.debug("Ignoring malformed lease %r in %s", name, self._store.location)
            return None

    # --- queries ---

    def lease(self, name: str) -> ResourceLease | None:
        """Current recorded lease for ``name``, expired or not."""
        return self._parse(name, self._load()[self._namespace].get(name))

    def is_held(self, name: str) -> bool:
        """True only for an unexpired lease whose flag is set."""
        lease = self.lease(name)
        if lease is None:
            return False
        if lease.is_expired(self._now_ms(), self._ttl_ms):
            return False
        return lease.held

    def active(self) -> dict[str, ResourceLease]:
        """All unexpired, held leases."""
        now = self._now_ms()
        leases: dict[str, ResourceLease] = {}
        for name, record in self._load()[self._namespace].items():
            lease = self._parse(name, record)
            if lease is not None and lease.held and not lease.is_expired(now, self._ttl_ms):
                leases[name] = lease
        return leases

    def next_available(
        self,
        candidates: Iterable[T],
        key: Callable[[T], str] | None = None,
    ) -> T | None:
        """First candidate, in priority order, that is not held."""
        name_of = key or str
        for candidate in candidates:
            if not self.is_held(name_of(candidate)):
                return candidate
        return None

    # --- mutations ---

    def acquire(self, name: str, owner: str | int | None = None) -> ResourceLease:
        """Unconditionally record a fresh lease; the last caller wins."""
        data = self._load()
        record: dict[str, Any] = {self._flag_field: True, "timestamp": self._now_ms()}
        if owner is not None:
            record[self._owner_field] = str(owner)
        data[self._namespace][name] = record
        self._save(data)
        logger.debug("Lease %s/%s acquired by %s", self._namespace, name, owner)
        return ResourceLease(
            name=name, held=True,
            owner=record.get(self._owner_field), timestamp=record["timestamp"],
        )

    def release(self, name: str) -> None:
        """Delete the lease for ``name`` if there is one."""
        data = self._load()
        if name in data[self._namespace]:
            del data[self._namespace][name]
            self._save(data)
            logger.debug("Lease %s/%s released", self._namespace, name)

    def cleanup_expired(self) -> list[str]:
        """Delete expired (and unparsable) entries; returns removed names."""
        data = self._load()
        now = self._now_ms()
        removed = []
        for name, record in list(data[self._namespace].items()):
            lease = self._parse(name, record)
            if lease is None or lease.is_expired(now, self._ttl_ms):
                del data[self._namespace][name]
                removed.append(name)
        if removed:
            self._save(data)
            logger.info("Removed %d expired %s lease(s)", len(removed), self._namespace)
        return removed
