"""Store call results and their interpretation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from .errors import CounterError


class ResultCode(Enum):
    """Outcome reported by a store client call."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


class StoreResult(NamedTuple):
    """Raw return value of a store call paired with its result code."""

    value: Any
    code: ResultCode

    @classmethod
    def success(cls, value: Any = True) -> "StoreResult":
        return cls(value, ResultCode.SUCCESS)

    @classmethod
    def not_found(cls, value: Any = None) -> "StoreResult":
        return cls(value, ResultCode.NOT_FOUND)

    @classmethod
    def failure(cls, value: Any = False) -> "StoreResult":
        return cls(value, ResultCode.FAILURE)


class OutcomeKind(Enum):
    SUCCESS = "success"
    SUCCESS_EMPTY = "success_empty"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


@dataclass(frozen=True)
class Outcome:
    """Interpreted result of a store call."""

    kind: OutcomeKind
    value: Any = None

    @property
    def found(self) -> bool:
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.SUCCESS_EMPTY)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == b""


def interpret(result: StoreResult) -> Outcome:
    """
    Classify a store result.

    The result code decides; the value is only inspected to tell an empty
    stored value apart from a non-empty one.
    """
    if result.code is ResultCode.SUCCESS:
        if _is_empty(result.value):
            return Outcome(OutcomeKind.SUCCESS_EMPTY, result.value)
        return Outcome(OutcomeKind.SUCCESS, result.value)
    if result.code is ResultCode.NOT_FOUND:
        return Outcome(OutcomeKind.NOT_FOUND)
    return Outcome(OutcomeKind.FAILURE)


def is_found(result: StoreResult) -> bool:
    """Whether a read found its key, regardless of the stored value."""
    return result.code is ResultCode.SUCCESS


def is_written(result: StoreResult) -> bool:
    return result.code is ResultCode.SUCCESS and result.value is not False


def is_deleted(result: StoreResult) -> bool:
    """Deleting an absent key counts as success."""
    return result.value is True or result.code is ResultCode.NOT_FOUND


def counter_value(
    result: StoreResult, error_cls: type[CounterError], message: str, key: str
) -> int:
    """Return the new counter value or raise error_cls."""
    if result.code is not ResultCode.SUCCESS or result.value is False:
        raise error_cls(message, key=key)
    return int(result.value)
