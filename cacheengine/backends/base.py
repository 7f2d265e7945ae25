"""Abstract base class for store clients."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from ..results import StoreResult

MAX_COUNTER = 2**64


def as_counter_value(value: Any) -> int | None:
    """Read a stored value as memcached would for incr/decr, or None if not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    return None


class StoreClient(ABC):
    """
    Memcached-style key-value store client.

    Every call returns its raw value together with a result code, so no
    last-result-code state is shared between calls. Keys are store keys,
    already prefixed. TTLs use memcached wire semantics.
    """

    @abstractmethod
    def connect(self, host: str, port: int, weight: int = 0) -> None:
        """Register a server with the client."""
        pass

    @abstractmethod
    def get(self, key: str) -> StoreResult:
        """Get a value. NOT_FOUND when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int | None = None) -> StoreResult:
        """Store a value. The result value is a success bool."""
        pass

    @abstractmethod
    def delete(self, key: str) -> StoreResult:
        """Delete a key. NOT_FOUND when the key was absent."""
        pass

    @abstractmethod
    def get_multi(self, keys: Sequence[str]) -> StoreResult:
        """Get several keys. The result value maps found keys to values."""
        pass

    @abstractmethod
    def set_multi(self, values: Mapping[str, Any], ttl: int | None = None) -> StoreResult:
        """Store several values in one call."""
        pass

    @abstractmethod
    def delete_multi(self, keys: Sequence[str]) -> StoreResult:
        """Delete several keys in one call."""
        pass

    @abstractmethod
    def increment(self, key: str, offset: int = 1) -> StoreResult:
        """Increment a numeric value. The result value is the new number."""
        pass

    @abstractmethod
    def decrement(self, key: str, offset: int = 1) -> StoreResult:
        """Decrement a numeric value, flooring at zero."""
        pass

    @abstractmethod
    def flush(self) -> StoreResult:
        """Remove every key on the store."""
        pass
