"""Outcome values returned by directory operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


NOT_FOUND_MESSAGE = "User not found"


class Outcome(str, Enum):
    """Category of a directory operation result."""
    OK = "ok"
    CREATED = "created"
    NO_CONTENT = "no_content"
    INVALID = "invalid"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ServiceResult:
    """
    Success or categorized failure of a directory operation.

    Expected failures (validation, missing records) travel as values;
    only unexpected faults are raised.
    """

    outcome: Outcome
    value: Any = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome in (Outcome.OK, Outcome.CREATED, Outcome.NO_CONTENT)

    @classmethod
    def ok(cls, value: Any) -> "ServiceResult":
        return cls(Outcome.OK, value=value)

    @classmethod
    def created(cls, value: Any) -> "ServiceResult":
        return cls(Outcome.CREATED, value=value)

    @classmethod
    def no_content(cls) -> "ServiceResult":
        return cls(Outcome.NO_CONTENT)

    @classmethod
    def invalid(cls, message: str) -> "ServiceResult":
        return cls(Outcome.INVALID, message=message)

    @classmethod
    def not_found(cls) -> "ServiceResult":
        return cls(Outcome.NOT_FOUND, message=NOT_FOUND_MESSAGE)
