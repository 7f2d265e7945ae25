"""Value serialization for the memcached wire."""

import logging
import pickle
from typing import Any

from pymemcache.serde import PickleSerde

from .errors import SerializationError

logger = logging.getLogger(__name__)


class CacheSerde(PickleSerde):
    """
    pymemcache pickle serde that reports unencodable values as SerializationError.

    Bytes, text and plain ints keep pymemcache's native flags, so ints stay
    decimal on the wire and memcached's incr/decr can operate on them.
    Everything else round-trips through pickle unchanged.
    """

    def serialize(self, key: str, value: Any) -> tuple[Any, int]:
        try:
            return super().serialize(key, value)
        except (pickle.PickleError, TypeError, AttributeError, RecursionError) as e:
            logger.warning(
                f"Failed to serialize value for key {key} of type {type(value)}: {e}"
            )
            raise SerializationError(f"Cannot serialize value for key {key}") from e
