"""Compound duration parsing — ``1y2M3d4h5m6s`` into a :class:`Duration`.

Pure functions, no clock access.  Unit letters are case-significant
(``M`` months, ``m`` minutes) and must appear at most once, in canonical
order.  A bare integer is shorthand for minutes.
"""

from __future__ import annotations

import re

from logrange.domain.errors import InvalidDurationError
from logrange.domain.grammar import (
    BARE_MINUTES_PATTERN,
    DURATION_GRAMMAR,
    UNIT_FIELDS,
    UNIT_ORDER,
)
from logrange.domain.types import Duration

# One segment: everything up to (and including) the next letter.
_SEGMENT_PATTERN = re.compile(r"(?P<count>[^A-Za-z]*)(?P<unit>[A-Za-z])")


def _fail(token: str, reason: str) -> InvalidDurationError:
    return InvalidDurationError(token, reason, expected=DURATION_GRAMMAR)


def _parse_count(token: str, count: str, unit: str) -> int:
    if not count:
        raise _fail(token, f"unit '{unit}' has no count")
    if count.isdigit():
        return int(count)
    if count.startswith("-") and count[1:].isdigit():
        raise _fail(token, f"negative count {count!r} for unit '{unit}'")
    raise _fail(token, f"count {count!r} for unit '{unit}' is not a non-negative integer")


def parse_duration(token: str) -> Duration:
    """Parse a compound duration token.

    Raises:
        InvalidDurationError: On an empty token, an unknown, duplicate or
            out-of-order unit, a missing count, or a non-integer or
            negative count.

    Examples:
        >>> parse_duration("1h30m")
        Duration(years=0, months=0, days=0, hours=1, minutes=30, seconds=0)
        >>> str(parse_duration("90"))
        '90m'
    """
    text = token.strip()
    if not text:
        raise _fail(token, "duration is empty")

    if BARE_MINUTES_PATTERN.match(text):
        return Duration(minutes=int(text))

    counts: dict[str, int] = {}
    last_order = -1
    pos = 0
    for match in _SEGMENT_PATTERN.finditer(text):
        unit = match.group("unit")
        if unit not in UNIT_FIELDS:
            raise _fail(token, f"unknown unit '{unit}'")
        field = UNIT_FIELDS[unit]
        if field in counts:
            raise _fail(token, f"unit '{unit}' given more than once")
        order = UNIT_ORDER[unit]
        if order < last_order:
            raise _fail(token, f"unit '{unit}' is out of order")
        counts[field] = _parse_count(token, match.group("count"), unit)
        last_order = order
        pos = match.end()

    trailing = text[pos:]
    if trailing:
        raise _fail(token, f"trailing {trailing!r} has no unit")

    return Duration(**counts)
