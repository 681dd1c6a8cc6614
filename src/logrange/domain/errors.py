"""Typed failures raised while resolving a time expression.

Every failure carries the offending token, a short reason, and (where one
applies) the grammar the token was expected to follow.  The service layer
turns these into ``ServiceError`` payloads; nothing in the domain layer
exits the process.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categories of resolution failure."""

    INVALID_SEPARATOR = "InvalidSeparator"
    INVALID_DURATION = "InvalidDuration"
    INVALID_DATETIME = "InvalidDatetime"
    UNSUPPORTED_PHRASE = "UnsupportedPhrase"
    UNRECOGNIZED_FORMAT = "UnrecognizedFormat"
    MALFORMED_RANGE = "MalformedRange"


class TimeParseError(ValueError):
    """Base class for all time expression failures.

    Attributes:
        token: The substring that could not be resolved.
        reason: Human-readable explanation.
        expected: Grammar the token should have matched, if any.
    """

    kind: ErrorKind = ErrorKind.UNRECOGNIZED_FORMAT

    def __init__(self, token: str, reason: str, *, expected: str | None = None) -> None:
        self.token = token
        self.reason = reason
        self.expected = expected
        super().__init__(f"{self.kind}: {reason} ({token!r})")

    def to_detail(self) -> dict[str, str]:
        """Serializable context for error payloads."""
        detail = {"kind": str(self.kind), "token": self.token, "reason": self.reason}
        if self.expected:
            detail["expected"] = self.expected
        return detail


class InvalidSeparatorError(TimeParseError):
    kind = ErrorKind.INVALID_SEPARATOR


class InvalidDurationError(TimeParseError):
    kind = ErrorKind.INVALID_DURATION


class InvalidDatetimeError(TimeParseError):
    kind = ErrorKind.INVALID_DATETIME


class UnsupportedPhraseError(TimeParseError):
    kind = ErrorKind.UNSUPPORTED_PHRASE


class UnrecognizedFormatError(TimeParseError):
    kind = ErrorKind.UNRECOGNIZED_FORMAT


class MalformedRangeError(TimeParseError):
    kind = ErrorKind.MALFORMED_RANGE
