"""TTL normalization between relative seconds and absolute timestamps."""

import time
from collections.abc import Callable

from .errors import InvalidArgumentError

# TTLs above this are sent to the store as now + ttl. Note that this is
# 75 days longer than the memcached relative limit below.
DEFAULT_TTL_THRESHOLD = 30 * 60 * 3600

# Memcached reads expirations up to 30 days as relative seconds and
# anything larger as a unix timestamp.
MEMCACHED_MAX_RELATIVE_TTL = 30 * 24 * 3600

Clock = Callable[[], float]


def normalize_ttl(
    ttl: int | None,
    threshold: int = DEFAULT_TTL_THRESHOLD,
    clock: Clock = time.time,
) -> int | None:
    """
    Convert a caller TTL into the value passed to the store.

    Args:
        ttl: Seconds to live, or None for the store default
        threshold: Largest TTL passed through as relative seconds
        clock: Source of the current unix time

    Returns:
        None when ttl is None, now + ttl above the threshold, else ttl
    """
    if ttl is None:
        return None
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise InvalidArgumentError(f"TTL must be an integer, got {ttl!r}")
    if ttl > threshold:
        return int(clock()) + ttl
    return ttl


class TtlNormalizer:
    """TTL normalizer bound to a threshold and a clock."""

    def __init__(
        self, threshold: int = DEFAULT_TTL_THRESHOLD, clock: Clock = time.time
    ):
        if threshold < 0:
            raise InvalidArgumentError(
                f"TTL threshold must not be negative, got {threshold}"
            )
        self.threshold = threshold
        self.clock = clock

    def normalize(self, ttl: int | None) -> int | None:
        """Normalize a TTL against the current time."""
        return normalize_ttl(ttl, self.threshold, self.clock)


def expiry_timestamp(ttl: int | None, now: float) -> float | None:
    """Absolute expiry for a TTL as memcached would interpret it on the wire."""
    if not ttl:
        return None
    if ttl <= MEMCACHED_MAX_RELATIVE_TTL:
        return now + ttl
    return float(ttl)
