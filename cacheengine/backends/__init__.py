"""Store client implementations."""

from .base import StoreClient
from .disk import DiskStoreClient
from .memcached import MemcachedStoreClient
from .memory import MemoryStoreClient

__all__ = ["DiskStoreClient", "MemcachedStoreClient", "MemoryStoreClient", "StoreClient"]
