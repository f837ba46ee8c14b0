"""
TTL-bounded cache of resolved remote resource ids.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple


class CacheKey(NamedTuple):
    """
    Identity of one resolved resource.

    ``tenant_id`` and ``token_digest`` together scope entries to the caller;
    a tenant id presented with a different credential never hits.
    """

    kind: str
    name: str
    parent_id: str | None
    tenant_id: str
    token_digest: str


@dataclass(frozen=True)
class CacheEntry:
    key: CacheKey
    resource_id: str
    inserted_at: float


class ResourceCache:
    """
    Maps cache keys to resource ids for a fixed time-to-live.

    Expiry is checked lazily on ``get``; expired entries are dropped on
    ``put``, so keys of rotated credentials do not accumulate. The lock only
    guards map operations, never remote I/O.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = max(0.0, ttl_seconds)
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, key: CacheKey) -> str | None:
        """
        Return the cached id, or None when missing or older than the TTL.
        """

        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at >= self._ttl_seconds:
            return None
        return entry.resource_id

    def put(self, key: CacheKey, resource_id: str) -> None:
        now = self._clock()
        entry = CacheEntry(key=key, resource_id=resource_id, inserted_at=now)
        with self._lock:
            expired = [
                stale_key
                for stale_key, stale in self._entries.items()
                if now - stale.inserted_at >= self._ttl_seconds
            ]
            for stale_key in expired:
                del self._entries[stale_key]
            self._entries[key] = entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
