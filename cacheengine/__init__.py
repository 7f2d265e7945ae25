"""cacheengine - Uniform cache engine over memcached-style stores."""

__version__ = "0.1.0"

# Store clients (for advanced usage)
from .backends import DiskStoreClient, MemcachedStoreClient, MemoryStoreClient, StoreClient

# Configuration
from .config import EngineConfig, configure, create_client, get_config, reset_config

# Core
from .core import (
    CacheEngine,
    CounterStore,
    KeyValueStore,
    cache_exists,
    clear_all_cache,
    delete_cache_key,
    get_engine,
)

# Errors
from .errors import (
    CacheError,
    CacheRuntimeError,
    CounterError,
    InvalidArgumentError,
    MissingKeyError,
    NonNumericValueError,
    SerializationError,
)
from .items import CacheItem, Counter

# Utilities (for advanced usage)
from .keys import compute_store_key, validate_key
from .results import ResultCode, StoreResult
from .ttl import DEFAULT_TTL_THRESHOLD, TtlNormalizer, normalize_ttl

__all__ = [
    "DEFAULT_TTL_THRESHOLD",
    # Core
    "CacheEngine",
    # Errors
    "CacheError",
    "CacheItem",
    "CacheRuntimeError",
    "Counter",
    "CounterError",
    "CounterStore",
    # Store clients
    "DiskStoreClient",
    # Configuration
    "EngineConfig",
    "InvalidArgumentError",
    "KeyValueStore",
    "MemcachedStoreClient",
    "MemoryStoreClient",
    "MissingKeyError",
    "NonNumericValueError",
    "ResultCode",
    "SerializationError",
    "StoreClient",
    "StoreResult",
    "TtlNormalizer",
    "cache_exists",
    "clear_all_cache",
    "compute_store_key",
    "configure",
    "create_client",
    "delete_cache_key",
    "get_config",
    "get_engine",
    "normalize_ttl",
    "reset_config",
    "validate_key",
]
