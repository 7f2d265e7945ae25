"""Configuration system for the cache engine."""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .backends import DiskStoreClient, MemcachedStoreClient, MemoryStoreClient, StoreClient
from .ttl import DEFAULT_TTL_THRESHOLD

if TYPE_CHECKING:
    from .core import CacheEngine

ENV_PREFIX = "CACHE_ENGINE_"


@dataclass
class EngineConfig:
    """Connection and behavior settings for a cache engine."""

    backend: str = "memcached"
    host: str = "127.0.0.1"
    port: int = 11211
    weight: int = 0
    prefix: str = ""
    ttl_threshold: int = DEFAULT_TTL_THRESHOLD
    debug: bool = False

    # Backend-specific settings
    cache_dir: str = "./.cache"
    connect_timeout: float | None = None
    timeout: float | None = None
    use_pooling: bool = False

    # Internal
    _engine_instance: "CacheEngine | None" = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Load configuration from environment variables."""
        self.backend = os.getenv(f"{ENV_PREFIX}BACKEND", self.backend)
        self.host = os.getenv(f"{ENV_PREFIX}HOST", self.host)
        self.port = self._get_int_env(f"{ENV_PREFIX}PORT", self.port)
        self.weight = self._get_int_env(f"{ENV_PREFIX}WEIGHT", self.weight)
        self.prefix = os.getenv(f"{ENV_PREFIX}PREFIX", self.prefix)
        self.ttl_threshold = self._get_int_env(
            f"{ENV_PREFIX}TTL_THRESHOLD", self.ttl_threshold
        )
        self.debug = self._get_bool_env(f"{ENV_PREFIX}DEBUG", self.debug)

        # Backend-specific settings
        self.cache_dir = os.getenv(f"{ENV_PREFIX}CACHE_DIR", self.cache_dir)
        self.connect_timeout = self._get_float_env(
            f"{ENV_PREFIX}CONNECT_TIMEOUT", self.connect_timeout
        )
        self.timeout = self._get_float_env(f"{ENV_PREFIX}TIMEOUT", self.timeout)
        self.use_pooling = self._get_bool_env(f"{ENV_PREFIX}USE_POOLING", self.use_pooling)

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean value from environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer value from environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float_env(self, key: str, default: float | None) -> float | None:
        """Get float value from environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def create_client(self) -> StoreClient:
        """Create a store client for the configured backend."""
        return create_client(
            self.backend,
            cache_dir=self.cache_dir,
            connect_timeout=self.connect_timeout,
            timeout=self.timeout,
            use_pooling=self.use_pooling,
        )

    def get_engine(self) -> "CacheEngine":
        """Get or create the engine for this configuration."""
        if self._engine_instance is None:
            from .core import CacheEngine

            self._engine_instance = CacheEngine(self)
        return self._engine_instance

    def reset_engine(self) -> None:
        """Reset the engine instance (useful for testing)."""
        self._engine_instance = None


def create_client(backend: str, **kwargs: Any) -> StoreClient:
    """Create a store client instance by backend name."""
    if backend == "memcached":
        return MemcachedStoreClient(
            connect_timeout=kwargs.get("connect_timeout"),
            timeout=kwargs.get("timeout"),
            use_pooling=kwargs.get("use_pooling", False),
        )
    elif backend == "memory":
        return MemoryStoreClient()
    elif backend == "disk":
        return DiskStoreClient(cache_dir=kwargs.get("cache_dir", "./.cache"))
    else:
        raise ValueError(f"Unknown backend: {backend}")


# Global configuration instance
_config = EngineConfig()

_ENGINE_KEYS = (
    "backend",
    "host",
    "port",
    "weight",
    "prefix",
    "ttl_threshold",
    "cache_dir",
    "connect_timeout",
    "timeout",
    "use_pooling",
)


def configure(**kwargs: Any) -> None:
    """Update global engine configuration."""
    for key, value in kwargs.items():
        if hasattr(_config, key) and not key.startswith("_"):
            setattr(_config, key, value)
        else:
            raise ValueError(f"Unknown configuration key: {key}")

    # Rebuild the engine if connection-related settings changed
    if any(key in kwargs for key in _ENGINE_KEYS):
        _config.reset_engine()


def get_config() -> EngineConfig:
    """Get current global configuration."""
    return _config


def reset_config() -> None:
    """Reset configuration to defaults (useful for testing)."""
    global _config  # noqa: PLW0603
    _config = EngineConfig()
