"""Memcached store client using pymemcache."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import CacheRuntimeError, SerializationError
from ..results import StoreResult
from .base import StoreClient

logger = logging.getLogger(__name__)

_MISSING = object()


def _load_driver() -> tuple[type, type, tuple[type[Exception], ...]]:
    """Import the pymemcache client class, the value serde and the protocol error types."""
    try:
        from pymemcache.client.hash import HashClient
        from pymemcache.exceptions import (
            MemcacheClientError,
            MemcacheIllegalInputError,
            MemcacheServerError,
        )
        from ..serializers import CacheSerde
    except ImportError as exc:
        raise CacheRuntimeError(
            "memcached driver is missing. Install with: pip install pymemcache"
        ) from exc
    protocol_errors = (MemcacheClientError, MemcacheIllegalInputError, MemcacheServerError)
    return HashClient, CacheSerde, protocol_errors


class MemcachedStoreClient(StoreClient):
    """
    Store client backed by a pymemcache HashClient.

    The client is not thread-safe unless use_pooling is set, in which case
    pymemcache keeps a connection pool per server. Protocol errors from
    reads and counters, and values that cannot be serialized, are reported
    as FAILURE; connection errors propagate to the caller.
    """

    def __init__(
        self,
        connect_timeout: float | None = None,
        timeout: float | None = None,
        use_pooling: bool = False,
    ):
        hash_client_cls, serde_cls, self._protocol_errors = _load_driver()
        self._client = hash_client_cls(
            [],
            serde=serde_cls(),
            default_noreply=False,
            connect_timeout=connect_timeout,
            timeout=timeout,
            use_pooling=use_pooling,
        )
        self.servers: list[tuple[str, int, int]] = []
        logger.debug(f"Created memcached client (pooling={use_pooling})")

    def connect(self, host: str, port: int, weight: int = 0) -> None:
        # pymemcache hashing is unweighted; the weight is only recorded
        self._client.add_server(host, port)
        self.servers.append((host, port, weight))
        logger.debug(f"Added memcached server {host}:{port} (weight={weight})")

    def get(self, key: str) -> StoreResult:
        try:
            value = self._client.get(key, default=_MISSING)
        except self._protocol_errors as e:
            logger.warning(f"get on {key} failed: {e}")
            return StoreResult.failure(False)
        if value is _MISSING:
            return StoreResult.not_found()
        return StoreResult.success(value)

    def set(self, key: str, value: Any, ttl: int | None = None) -> StoreResult:
        try:
            written = self._client.set(key, value, expire=ttl or 0)
        except SerializationError:
            return StoreResult.failure(False)
        if written:
            return StoreResult.success(True)
        return StoreResult.failure(False)

    def delete(self, key: str) -> StoreResult:
        if self._client.delete(key):
            return StoreResult.success(True)
        return StoreResult.not_found(False)

    def get_multi(self, keys: Sequence[str]) -> StoreResult:
        try:
            found = self._client.get_many(list(keys))
        except self._protocol_errors as e:
            logger.warning(f"Batch get of {len(keys)} keys failed: {e}")
            return StoreResult.failure(False)
        return StoreResult.success(found)

    def set_multi(self, values: Mapping[str, Any], ttl: int | None = None) -> StoreResult:
        try:
            failed = self._client.set_many(dict(values), expire=ttl or 0)
        except SerializationError:
            return StoreResult.failure(False)
        if failed:
            return StoreResult.failure(False)
        return StoreResult.success(True)

    def delete_multi(self, keys: Sequence[str]) -> StoreResult:
        return StoreResult.success(bool(self._client.delete_many(list(keys))))

    def _counter(self, command: str, key: str, offset: int) -> StoreResult:
        try:
            value = getattr(self._client, command)(key, offset)
        except self._protocol_errors as e:
            logger.warning(f"{command} on {key} failed: {e}")
            return StoreResult.failure(False)
        if value is None:
            return StoreResult.not_found(False)
        return StoreResult.success(int(value))

    def increment(self, key: str, offset: int = 1) -> StoreResult:
        return self._counter("incr", key, offset)

    def decrement(self, key: str, offset: int = 1) -> StoreResult:
        return self._counter("decr", key, offset)

    def flush(self) -> StoreResult:
        self._client.flush_all()
        return StoreResult.success(True)

    @property
    def raw(self) -> Any:
        """The underlying pymemcache client."""
        return self._client
