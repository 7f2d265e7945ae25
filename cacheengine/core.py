"""Cache engine contract and its store-backed implementation."""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from .backends import StoreClient
from .config import EngineConfig, get_config
from .errors import InvalidArgumentError, MissingKeyError, NonNumericValueError
from .items import CacheItem, Counter
from .keys import compute_store_key, strip_prefix, validate_key, validate_keys
from .results import (
    ResultCode,
    counter_value,
    interpret,
    is_deleted,
    is_found,
    is_written,
)
from .ttl import TtlNormalizer

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Generic cache operations."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> CacheItem:
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    def has(self, key: str) -> bool:
        pass

    @abstractmethod
    def get_multiple(
        self, keys: Iterable[str], defaults: Sequence[Any] | None = None
    ) -> dict[str, Any]:
        pass

    @abstractmethod
    def set_multiple(self, values: Mapping[str, Any], ttl: int | None = None) -> bool:
        pass

    @abstractmethod
    def delete_multiple(self, keys: Iterable[str]) -> bool:
        pass

    @abstractmethod
    def clear(self) -> bool:
        pass


class CounterStore(ABC):
    """Atomic counter operations."""

    @abstractmethod
    def incr(self, key: str, offset: int = 1) -> Counter:
        pass

    @abstractmethod
    def decr(self, key: str, offset: int = 1) -> Counter:
        pass


class CacheEngine(KeyValueStore, CounterStore):
    """
    Cache engine over a memcached-style store client.

    Every operation validates its keys before touching the store and sends
    prefixed store keys. The store client is created and connected once in
    init() and shared by all calls; see the client classes for their
    thread-safety.

    Args:
        config: Engine configuration
        client: Store client to use instead of one built from config.backend
        clock: Source of the current unix time for TTL normalization
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        client: StoreClient | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config if config is not None else get_config()
        self._client = client
        self._ttl = TtlNormalizer(self.config.ttl_threshold, clock)
        self.init()

    def init(self) -> bool:
        """Build the store client if needed and connect it to the configured server."""
        if self._client is None:
            self._client = self.config.create_client()
        if not self.config.host:
            raise InvalidArgumentError("Cache host must not be empty")
        self._client.connect(self.config.host, self.config.port, self.config.weight)
        return True

    @property
    def client(self) -> StoreClient:
        """The underlying store client."""
        return self._client

    @property
    def prefix(self) -> str:
        return self.config.prefix

    def _store_key(self, key: str) -> str:
        return compute_store_key(self.config.prefix, key)

    def _log(self, message: str) -> None:
        if self.config.debug:
            logger.info(message)

    def get(self, key: str, default: Any = None) -> CacheItem:
        """Look up a key, returning default as the item value on a miss."""
        store_key = self._store_key(key)
        outcome = interpret(self._client.get(store_key))
        if outcome.found:
            self._log(f"Cache hit: {store_key}")
            return CacheItem(key, True, outcome.value)

        self._log(f"Cache miss: {store_key}")
        return CacheItem(key, False, default)

    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        store_key = self._store_key(key)
        written = is_written(self._client.set(store_key, value, self._ttl.normalize(ttl)))
        self._log(f"Cache set: {store_key} (ok={written})")
        return written

    def delete(self, key: str) -> bool:
        """Delete a key. Deleting an absent key succeeds."""
        return is_deleted(self._client.delete(self._store_key(key)))

    def has(self, key: str) -> bool:
        """Check for a key by result code, so falsy stored values still count."""
        return is_found(self._client.get(self._store_key(key)))

    def set_multiple(self, values: Mapping[str, Any], ttl: int | None = None) -> bool:
        """Write several values in one store call; all keys are validated first."""
        validate_keys(values.keys())
        store_values = {self._store_key(key): value for key, value in values.items()}
        result = self._client.set_multi(store_values, self._ttl.normalize(ttl))
        self._log(f"Cache set_multiple: {len(store_values)} keys (code={result.code.value})")
        return is_written(result)

    def get_multiple(
        self, keys: Iterable[str], defaults: Sequence[Any] | None = None
    ) -> dict[str, Any]:
        """
        Read several keys in one store call.

        Args:
            keys: Logical keys to read
            defaults: Positional defaults, defaults[i] belongs to keys[i]

        Returns:
            Mapping of every requested key to its value, or to its positional
            default when the key was not found or the batch call failed
        """
        logical_keys = validate_keys(keys)

        def default_for(index: int) -> Any:
            if defaults is None or index >= len(defaults):
                return None
            return defaults[index]

        store_keys = [self._store_key(key) for key in logical_keys]
        result = self._client.get_multi(store_keys)
        if result.code is not ResultCode.SUCCESS or not isinstance(result.value, Mapping):
            self._log(f"Cache get_multiple failed for {len(store_keys)} keys, using defaults")
            return {key: default_for(i) for i, key in enumerate(logical_keys)}

        found = {strip_prefix(self.config.prefix, k): v for k, v in result.value.items()}
        values = {}
        for i, key in enumerate(logical_keys):
            values[key] = found[key] if key in found else default_for(i)
        self._log(f"Cache get_multiple: {len(found)}/{len(logical_keys)} hits")
        return values

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys in one store call. Absent keys count as deleted."""
        store_keys = [self._store_key(key) for key in validate_keys(keys)]
        return is_deleted(self._client.delete_multi(store_keys))

    def clear(self) -> bool:
        """Flush the whole store, including keys outside this engine's prefix."""
        result = self._client.flush()
        self._log("Cache flushed")
        return result.code is ResultCode.SUCCESS and result.value is not False

    def _check_offset(self, offset: int) -> None:
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise InvalidArgumentError(f"Counter offset must be an integer, got {offset!r}")

    def incr(self, key: str, offset: int = 1) -> Counter:
        """
        Increment a counter.

        Raises:
            NonNumericValueError: the key is absent or not numeric
        """
        validate_key(key)
        self._check_offset(offset)
        store_key = self._store_key(key)
        if offset >= 0:
            result = self._client.increment(store_key, offset)
        else:
            result = self._client.decrement(store_key, -offset)
        value = counter_value(result, NonNumericValueError, "value must be number", key)
        self._log(f"Cache incr: {store_key} -> {value}")
        return Counter(key, value)

    def decr(self, key: str, offset: int = 1) -> Counter:
        """
        Decrement a counter. The store floors counters at zero.

        Raises:
            MissingKeyError: the key is missing
        """
        validate_key(key)
        self._check_offset(offset)
        store_key = self._store_key(key)
        if offset >= 0:
            result = self._client.decrement(store_key, offset)
        else:
            result = self._client.increment(store_key, -offset)
        value = counter_value(result, MissingKeyError, "key is missing", key)
        self._log(f"Cache decr: {store_key} -> {value}")
        return Counter(key, value)


def get_engine() -> CacheEngine:
    """Get the engine for the global configuration."""
    return get_config().get_engine()


def cache_exists(key: str) -> bool:
    """Check if cache key exists."""
    return get_engine().has(key)


def delete_cache_key(key: str) -> bool:
    """Delete specific cache entry."""
    return get_engine().delete(key)


def clear_all_cache() -> bool:
    """Clear all cache entries."""
    return get_engine().clear()
