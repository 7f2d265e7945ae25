"""Unit tests for the memcached value serde."""

import threading
from datetime import datetime
from enum import IntEnum

import pytest
from pymemcache.serde import FLAG_BYTES, FLAG_INTEGER, FLAG_PICKLE, FLAG_TEXT

from cacheengine.errors import CacheError, SerializationError
from cacheengine.serializers import CacheSerde


class Level(IntEnum):
    LOW = 1


@pytest.fixture
def serde():
    return CacheSerde()


def round_trip(serde, value):
    payload, flags = serde.serialize("k", value)
    return serde.deserialize("k", payload, flags)


class TestCacheSerde:
    """Test value encoding for the wire."""

    def test_bytes_and_text_use_native_flags(self, serde):
        """Test that bytes and strings are stored without pickling."""
        assert serde.serialize("k", b"\x00raw") == (b"\x00raw", FLAG_BYTES)
        assert serde.serialize("k", "héllo") == ("héllo".encode(), FLAG_TEXT)
        assert round_trip(serde, "héllo") == "héllo"

    def test_int_is_plain_decimal(self, serde):
        """Test that integers stay usable by incr/decr."""
        payload, flags = serde.serialize("k", 42)

        assert flags == FLAG_INTEGER
        assert int(payload) == 42
        assert serde.deserialize("k", b"9 ", FLAG_INTEGER) == 9

    @pytest.mark.parametrize(
        "value",
        [
            (1, 2),
            {1: "a"},
            {"a", "b"},
            datetime(2024, 1, 1),
            None,
            False,
            [1, {"nested": (2, 3)}],
        ],
    )
    def test_values_round_trip_unchanged(self, serde, value):
        """Test that structured values come back with their types intact."""
        result = round_trip(serde, value)

        assert result == value
        assert type(result) is type(value)

    def test_int_enum_is_pickled(self, serde):
        """Test that IntEnum members keep their type instead of becoming ints."""
        _, flags = serde.serialize("k", Level.LOW)
        assert flags & FLAG_PICKLE

        result = round_trip(serde, Level.LOW)
        assert result is Level.LOW

    def test_unserializable_value(self, serde, caplog):
        """Test that unserializable values raise SerializationError and are logged."""
        with pytest.raises(SerializationError) as exc_info:
            serde.serialize("k", threading.Lock())

        assert isinstance(exc_info.value, CacheError)
        assert "Failed to serialize value for key k" in caplog.text
