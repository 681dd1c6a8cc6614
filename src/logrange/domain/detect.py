"""Format detection — classify a raw token before parsing it.

Order matters: a token containing the separator is a range (split at the
leftmost occurrence).  Otherwise the duration and absolute grammars only
overlap on bare integers; those read as compact datetimes when they fit
``YYYYMMDD[HH[MM[SS]]]`` and as minutes otherwise.  Anything left over goes
to the human-language fallback.
"""

from __future__ import annotations

from dataclasses import dataclass

from logrange.domain.errors import MalformedRangeError, UnrecognizedFormatError
from logrange.domain.grammar import RANGE_GRAMMAR, is_absolute, is_duration_shaped
from logrange.domain.types import FormatKind, TimeSpec


@dataclass(frozen=True)
class Detection:
    """Detector verdict for one token."""

    kind: FormatKind
    token: str
    left: str | None = None  # range halves, trimmed
    right: str | None = None


def split_range(token: str, separator: str) -> tuple[str, str] | None:
    """Split at the first *separator*; None when it does not occur.

    Raises:
        MalformedRangeError: If either half is empty.
    """
    head, sep, tail = token.partition(separator)
    if not sep:
        return None
    left, right = head.strip(), tail.strip()
    if not left or not right:
        side = "start" if not left else "end"
        raise MalformedRangeError(token, f"range {side} is empty", expected=RANGE_GRAMMAR)
    return left, right


def classify(token: str) -> FormatKind:
    """Classify a single (non-range) token."""
    if is_absolute(token):
        return FormatKind.ABSOLUTE
    if is_duration_shaped(token):
        return FormatKind.DURATION
    return FormatKind.HUMAN


def detect(token: str, separator: str) -> Detection:
    """Classify *token* as range, duration, absolute, or human language.

    Raises:
        UnrecognizedFormatError: If *token* is empty.
        MalformedRangeError: If the separator leaves an empty half.
    """
    text = token.strip()
    if not text:
        raise UnrecognizedFormatError(token, "time expression is empty")

    halves = split_range(text, separator)
    if halves is not None:
        return Detection(FormatKind.RANGE, text, left=halves[0], right=halves[1])
    return Detection(classify(text), text)


def describe_timespec(raw: str, separator: str) -> TimeSpec:
    """Break *raw* into its halves without resolving anything."""
    detection = detect(raw, separator)
    if detection.kind is FormatKind.RANGE:
        assert detection.left is not None
        return TimeSpec(raw=raw, separator=separator, left=detection.left, right=detection.right)
    return TimeSpec(raw=raw, separator=separator, left=detection.token)
