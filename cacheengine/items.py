"""Value objects returned to callers."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheItem:
    """A cache lookup result: the logical key, whether it was found, and its value."""

    key: str
    found: bool
    value: Any = None

    def is_hit(self) -> bool:
        return self.found

    def get(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Counter:
    """Counter value after a successful increment or decrement."""

    key: str
    value: int

    def __int__(self) -> int:
        return self.value
