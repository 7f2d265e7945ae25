"""Unit tests for configuration."""

import os
from unittest.mock import patch

import pytest

from cacheengine.backends.disk import DiskStoreClient
from cacheengine.backends.memory import MemoryStoreClient
from cacheengine.config import (
    EngineConfig,
    configure,
    create_client,
    get_config,
    reset_config,
)
from cacheengine.core import CacheEngine
from cacheengine.ttl import DEFAULT_TTL_THRESHOLD


class TestEngineConfig:
    """Test the EngineConfig dataclass."""

    def test_engine_config_defaults(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            config = EngineConfig()

        assert config.backend == "memcached"
        assert config.host == "127.0.0.1"
        assert config.port == 11211
        assert config.weight == 0
        assert config.prefix == ""
        assert config.ttl_threshold == DEFAULT_TTL_THRESHOLD
        assert config.debug is False
        assert config.cache_dir == "./.cache"
        assert config.connect_timeout is None
        assert config.timeout is None
        assert config.use_pooling is False
        assert config._engine_instance is None

    def test_engine_config_environment_variables(self):
        """Test loading configuration from environment variables."""
        env_vars = {
            "CACHE_ENGINE_BACKEND": "memory",
            "CACHE_ENGINE_HOST": "cache.internal",
            "CACHE_ENGINE_PORT": "11311",
            "CACHE_ENGINE_WEIGHT": "2",
            "CACHE_ENGINE_PREFIX": "svc:",
            "CACHE_ENGINE_TTL_THRESHOLD": "2592000",
            "CACHE_ENGINE_DEBUG": "true",
            "CACHE_ENGINE_CACHE_DIR": "/tmp/custom_cache",
            "CACHE_ENGINE_CONNECT_TIMEOUT": "0.5",
            "CACHE_ENGINE_TIMEOUT": "1.5",
            "CACHE_ENGINE_USE_POOLING": "yes",
        }

        with patch.dict(os.environ, env_vars):
            config = EngineConfig()

            assert config.backend == "memory"
            assert config.host == "cache.internal"
            assert config.port == 11311
            assert config.weight == 2
            assert config.prefix == "svc:"
            assert config.ttl_threshold == 2592000
            assert config.debug is True
            assert config.cache_dir == "/tmp/custom_cache"
            assert config.connect_timeout == 0.5
            assert config.timeout == 1.5
            assert config.use_pooling is True

    def test_engine_config_bool_env_parsing(self):
        """Test boolean environment variable parsing."""
        true_values = ["true", "1", "yes", "on", "TRUE", "True"]
        false_values = ["false", "0", "no", "off", "FALSE", "False", ""]

        for value in true_values:
            with patch.dict(os.environ, {"CACHE_ENGINE_DEBUG": value}):
                assert EngineConfig().debug is True

        for value in false_values:
            with patch.dict(os.environ, {"CACHE_ENGINE_DEBUG": value}):
                assert EngineConfig().debug is False

    def test_engine_config_invalid_numbers_fall_back(self):
        """Test that malformed numbers keep the defaults."""
        env_vars = {"CACHE_ENGINE_PORT": "invalid", "CACHE_ENGINE_TIMEOUT": "soon"}
        with patch.dict(os.environ, env_vars):
            config = EngineConfig()

        assert config.port == 11211
        assert config.timeout is None

    def test_engine_config_get_engine(self):
        """Test that the engine is created once per configuration."""
        config = EngineConfig(backend="memory", prefix="p:")
        engine = config.get_engine()

        assert isinstance(engine, CacheEngine)
        assert engine.config is config
        assert config.get_engine() is engine

    def test_engine_config_reset_engine(self):
        """Test resetting the engine instance."""
        config = EngineConfig(backend="memory")
        engine1 = config.get_engine()

        config.reset_engine()
        assert config._engine_instance is None
        assert config.get_engine() is not engine1


class TestCreateClient:
    """Test the store client factory."""

    def test_create_memory_client(self):
        """Test creating a memory client."""
        assert isinstance(create_client("memory"), MemoryStoreClient)

    def test_create_disk_client(self, temp_cache_dir):
        """Test creating a disk client."""
        client = create_client("disk", cache_dir=temp_cache_dir)
        assert isinstance(client, DiskStoreClient)
        assert client.cache_dir == temp_cache_dir
        client.close()

    def test_create_memcached_client(self):
        """Test that memcached settings are passed through."""
        with patch("cacheengine.config.MemcachedStoreClient") as mock_client:
            create_client("memcached", connect_timeout=1.0, timeout=2.0, use_pooling=True)

        mock_client.assert_called_once_with(connect_timeout=1.0, timeout=2.0, use_pooling=True)

    def test_create_unknown_backend(self):
        """Test that unknown backends are rejected."""
        with pytest.raises(ValueError, match="Unknown backend: redis"):
            create_client("redis")


class TestGlobalConfig:
    """Test global configuration helpers."""

    def test_configure_updates_config(self):
        """Test updating the global configuration."""
        configure(prefix="app:", debug=True)

        config = get_config()
        assert config.prefix == "app:"
        assert config.debug is True

    def test_configure_unknown_key(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ValueError, match="Unknown configuration key: nope"):
            configure(nope=1)
        with pytest.raises(ValueError):
            configure(_engine_instance=None)

    def test_configure_debug_keeps_engine(self):
        """Test that non-connection settings keep the engine."""
        engine = get_config().get_engine()
        configure(debug=True)

        assert get_config().get_engine() is engine

    def test_configure_host_resets_engine(self):
        """Test that connection settings reset the engine."""
        engine = get_config().get_engine()
        configure(host="other.local")

        assert get_config()._engine_instance is None
        assert get_config().get_engine() is not engine

    def test_reset_config(self):
        """Test resetting the global configuration."""
        configure(prefix="x:")
        reset_config()

        assert get_config().prefix == ""
