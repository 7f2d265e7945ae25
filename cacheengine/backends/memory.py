"""In-memory store client with memcached semantics."""

import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..results import StoreResult
from ..ttl import expiry_timestamp
from .base import MAX_COUNTER, StoreClient, as_counter_value


class MemoryStoreClient(StoreClient):
    """
    In-memory store client.

    Not safe for concurrent use; use one instance per thread.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        """Initialize memory store client."""
        self._clock = clock
        self._cache: dict[str, dict[str, Any]] = {}
        self._stats = {"calls": 0, "hits": 0, "misses": 0, "sets": 0, "deletes": 0}
        self.servers: list[tuple[str, int, int]] = []

    def _entry(self, key: str) -> dict[str, Any] | None:
        entry = self._cache.get(key)
        if entry is None:
            return None

        # Check if expired
        if entry.get("expires") is not None and self._clock() >= entry["expires"]:
            del self._cache[key]
            return None

        return entry

    def _store(self, key: str, value: Any, ttl: int | None) -> None:
        self._cache[key] = {
            "value": value,
            "expires": expiry_timestamp(ttl, self._clock()),
        }
        self._stats["sets"] += 1

    def connect(self, host: str, port: int, weight: int = 0) -> None:
        self.servers.append((host, port, weight))

    def get(self, key: str) -> StoreResult:
        self._stats["calls"] += 1
        entry = self._entry(key)
        if entry is None:
            self._stats["misses"] += 1
            return StoreResult.not_found()

        self._stats["hits"] += 1
        return StoreResult.success(entry["value"])

    def set(self, key: str, value: Any, ttl: int | None = None) -> StoreResult:
        self._stats["calls"] += 1
        self._store(key, value, ttl)
        return StoreResult.success(True)

    def delete(self, key: str) -> StoreResult:
        self._stats["calls"] += 1
        if self._entry(key) is None:
            return StoreResult.not_found(False)

        del self._cache[key]
        self._stats["deletes"] += 1
        return StoreResult.success(True)

    def get_multi(self, keys: Sequence[str]) -> StoreResult:
        self._stats["calls"] += 1
        found = {}
        for key in keys:
            entry = self._entry(key)
            if entry is None:
                self._stats["misses"] += 1
            else:
                self._stats["hits"] += 1
                found[key] = entry["value"]
        return StoreResult.success(found)

    def set_multi(self, values: Mapping[str, Any], ttl: int | None = None) -> StoreResult:
        self._stats["calls"] += 1
        for key, value in values.items():
            self._store(key, value, ttl)
        return StoreResult.success(True)

    def delete_multi(self, keys: Sequence[str]) -> StoreResult:
        self._stats["calls"] += 1
        deleted = 0
        for key in keys:
            if self._entry(key) is not None:
                del self._cache[key]
                deleted += 1
        self._stats["deletes"] += deleted
        if deleted == 0 and keys:
            return StoreResult.not_found(False)
        return StoreResult.success(True)

    def _apply_delta(self, key: str, delta: int) -> StoreResult:
        entry = self._entry(key)
        if entry is None:
            return StoreResult.not_found(False)

        current = as_counter_value(entry["value"])
        if current is None:
            return StoreResult.failure(False)

        new_value = max(current + delta, 0) % MAX_COUNTER
        if isinstance(entry["value"], int):
            entry["value"] = new_value
        else:
            entry["value"] = str(new_value)
        return StoreResult.success(new_value)

    def increment(self, key: str, offset: int = 1) -> StoreResult:
        self._stats["calls"] += 1
        if offset < 0:
            return StoreResult.failure(False)
        return self._apply_delta(key, offset)

    def decrement(self, key: str, offset: int = 1) -> StoreResult:
        self._stats["calls"] += 1
        if offset < 0:
            return StoreResult.failure(False)
        return self._apply_delta(key, -offset)

    def flush(self) -> StoreResult:
        self._stats["calls"] += 1
        self._cache.clear()
        return StoreResult.success(True)

    def get_stats(self) -> dict[str, Any]:
        """Get call and hit/miss statistics."""
        total_reads = self._stats["hits"] + self._stats["misses"]
        hit_rate = self._stats["hits"] / total_reads if total_reads > 0 else 0

        return {
            "size": len(self._cache),
            "hit_rate": hit_rate,
            **self._stats,
        }
