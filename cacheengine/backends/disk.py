"""Disk-based store client using diskcache."""

import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import diskcache

from ..results import StoreResult
from ..ttl import expiry_timestamp
from .base import MAX_COUNTER, StoreClient, as_counter_value

_MISSING = object()


class DiskStoreClient(StoreClient):
    """
    Disk-based store client for local development.

    Shares diskcache's guarantees: safe across threads and processes
    using the same cache directory.
    """

    def __init__(self, cache_dir: str = "./.cache", clock: Callable[[], float] = time.time):
        """Initialize disk store client."""
        self.cache_dir = cache_dir
        self._clock = clock
        Path(cache_dir).mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(cache_dir)
        self.servers: list[tuple[str, int, int]] = []

    def _expire(self, ttl: int | None) -> float | None:
        """Translate a memcached TTL into diskcache's relative expire."""
        now = self._clock()
        expires = expiry_timestamp(ttl, now)
        if expires is None:
            return None
        return max(expires - now, 0)

    def connect(self, host: str, port: int, weight: int = 0) -> None:
        self.servers.append((host, port, weight))

    def get(self, key: str) -> StoreResult:
        value = self._cache.get(key, default=_MISSING)
        if value is _MISSING:
            return StoreResult.not_found()
        return StoreResult.success(value)

    def set(self, key: str, value: Any, ttl: int | None = None) -> StoreResult:
        return StoreResult.success(self._cache.set(key, value, expire=self._expire(ttl)))

    def delete(self, key: str) -> StoreResult:
        if self._cache.delete(key):
            return StoreResult.success(True)
        return StoreResult.not_found(False)

    def get_multi(self, keys: Sequence[str]) -> StoreResult:
        found = {}
        with self._cache.transact():
            for key in keys:
                value = self._cache.get(key, default=_MISSING)
                if value is not _MISSING:
                    found[key] = value
        return StoreResult.success(found)

    def set_multi(self, values: Mapping[str, Any], ttl: int | None = None) -> StoreResult:
        expire = self._expire(ttl)
        with self._cache.transact():
            for key, value in values.items():
                self._cache.set(key, value, expire=expire)
        return StoreResult.success(True)

    def delete_multi(self, keys: Sequence[str]) -> StoreResult:
        with self._cache.transact():
            deleted = sum(1 for key in keys if self._cache.delete(key))
        if deleted == 0 and keys:
            return StoreResult.not_found(False)
        return StoreResult.success(True)

    def _apply_delta(self, key: str, delta: int) -> StoreResult:
        with self._cache.transact():
            value, expire_time = self._cache.get(key, default=_MISSING, expire_time=True)
            if value is _MISSING:
                return StoreResult.not_found(False)

            current = as_counter_value(value)
            if current is None:
                return StoreResult.failure(False)

            new_value = max(current + delta, 0) % MAX_COUNTER
            expire = None
            if expire_time is not None:
                expire = max(expire_time - time.time(), 0)
            stored = new_value if isinstance(value, int) else str(new_value)
            self._cache.set(key, stored, expire=expire)
        return StoreResult.success(new_value)

    def increment(self, key: str, offset: int = 1) -> StoreResult:
        if offset < 0:
            return StoreResult.failure(False)
        return self._apply_delta(key, offset)

    def decrement(self, key: str, offset: int = 1) -> StoreResult:
        if offset < 0:
            return StoreResult.failure(False)
        return self._apply_delta(key, -offset)

    def flush(self) -> StoreResult:
        self._cache.clear()
        return StoreResult.success(True)

    def close(self) -> None:
        self._cache.close()

    def __del__(self):
        """Close the cache when the object is destroyed."""
        if hasattr(self, "_cache"):
            self._cache.close()
