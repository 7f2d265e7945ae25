"""Pytest configuration and fixtures for cacheengine tests."""

import shutil
import tempfile

import pytest

from cacheengine.backends.disk import DiskStoreClient
from cacheengine.backends.memory import MemoryStoreClient
from cacheengine.config import EngineConfig, configure, reset_config
from cacheengine.core import CacheEngine


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_engine_config():
    """Reset engine configuration before each test."""
    reset_config()
    # Use memory backend for testing to avoid a memcached server
    configure(backend="memory")
    yield
    reset_config()


@pytest.fixture
def clock():
    """Provide a fake clock."""
    return FakeClock()


@pytest.fixture
def memory_client(clock):
    """Provide a fresh memory store client driven by the fake clock."""
    return MemoryStoreClient(clock=clock)


@pytest.fixture
def temp_cache_dir():
    """Provide a temporary directory for disk cache tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def disk_client(temp_cache_dir):
    """Provide a disk store client with temporary directory."""
    client = DiskStoreClient(cache_dir=temp_cache_dir)
    yield client
    client.close()


@pytest.fixture
def engine_config():
    """Provide an engine configuration with a prefix."""
    return EngineConfig(backend="memory", prefix="app:")


@pytest.fixture
def engine(engine_config, memory_client, clock):
    """Provide an engine over the memory client."""
    return CacheEngine(engine_config, client=memory_client, clock=clock)
