"""Domain error codes for the event collections module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    UNSUPPORTED_CRITERIA = "UNSUPPORTED_CRITERIA"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidTimestampError(DomainError):
    """Raised when a window reference timestamp has an unusable type."""

    def __init__(self, timestamp: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIMESTAMP,
            message=f"Cannot use {type(timestamp).__name__} as a reference timestamp",
        )
        self.timestamp = timestamp


class UnsupportedCriteriaError(DomainError):
    """Raised by a store when it cannot translate a filter criteria."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_CRITERIA,
            message=detail,
        )
