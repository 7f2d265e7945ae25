"""Exception types raised by the cache engine."""


class CacheError(Exception):
    """Base class for cache engine errors."""


class InvalidArgumentError(CacheError, ValueError):
    """Malformed caller input, raised before any store call."""


class CacheRuntimeError(CacheError, RuntimeError):
    """Environment misconfiguration or a failed store operation."""


class CounterError(CacheRuntimeError):
    """Counter operation failed on the store."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class NonNumericValueError(CounterError):
    """Increment failed: the key is absent or does not hold a number."""


class MissingKeyError(CounterError):
    """Decrement failed: the key is missing."""


class SerializationError(CacheError):
    """A value could not be encoded for the store."""
