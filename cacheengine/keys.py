"""Key validation and namespacing."""

from collections.abc import Iterable
from typing import Any

from .errors import InvalidArgumentError


def validate_key(key: Any) -> str:
    """
    Ensure a logical key is a non-empty string.

    Keys are not escaped, so callers must keep them within the store's
    charset and length limits (250 bytes, no whitespace for memcached).
    """
    if not isinstance(key, str):
        raise InvalidArgumentError(
            f"Cache key must be a string, got {type(key).__name__}"
        )
    if key == "":
        raise InvalidArgumentError("Cache key must not be empty")
    return key


def validate_keys(keys: Iterable[Any]) -> list[str]:
    """Validate every key of a batch, returning them as a list."""
    if isinstance(keys, (str, bytes)):
        raise InvalidArgumentError(
            f"Cache keys must be an iterable of keys, got {type(keys).__name__}"
        )
    return [validate_key(key) for key in keys]


def compute_store_key(prefix: str, key: Any) -> str:
    """Build the store key for a logical key."""
    return f"{prefix}{validate_key(key)}"


def strip_prefix(prefix: str, store_key: str) -> str:
    """Map a store key back to its logical key."""
    if prefix and store_key.startswith(prefix):
        return store_key[len(prefix) :]
    return store_key
