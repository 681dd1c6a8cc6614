"""Absolute datetime parsing for ``YYYY[-]MM[-]DD[T| ][HH[:MM[:SS]]][Z]``.

Missing time components default to zero.  A trailing ``Z`` yields a UTC
instant; otherwise the caller-supplied timezone is attached.  The parser
never consults the operating system's timezone itself.
"""

from __future__ import annotations

import calendar
from datetime import UTC, datetime, tzinfo

from logrange.domain.errors import InvalidDatetimeError
from logrange.domain.grammar import ABSOLUTE_GRAMMAR, ABSOLUTE_PATTERN

# component -> (low, high); day is checked against the calendar separately.
_BOUNDS: dict[str, tuple[int, int]] = {
    "month": (1, 12),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
}


def _check(token: str, component: str, value: int) -> None:
    low, high = _BOUNDS[component]
    if not low <= value <= high:
        raise InvalidDatetimeError(
            token,
            f"{component} {value:02d} is outside {low}-{high}",
            expected=ABSOLUTE_GRAMMAR,
        )


def parse_absolute(token: str, tz: tzinfo) -> datetime:
    """Parse an absolute datetime token into an aware datetime.

    Args:
        token: Text matching the absolute grammar.
        tz: Timezone for tokens without a ``Z`` suffix.

    Raises:
        InvalidDatetimeError: If the token does not match the grammar or a
            component is out of range (month, day for that month and year,
            hour, minute, second).
    """
    match = ABSOLUTE_PATTERN.match(token.strip())
    if match is None:
        raise InvalidDatetimeError(
            token, "does not match the datetime grammar", expected=ABSOLUTE_GRAMMAR
        )

    year = int(match.group("year"))
    if year < 1:
        raise InvalidDatetimeError(token, "year 0000 is not valid", expected=ABSOLUTE_GRAMMAR)
    month = int(match.group("month"))
    _check(token, "month", month)

    day = int(match.group("day"))
    last_day = calendar.monthrange(year, month)[1]
    if not 1 <= day <= last_day:
        raise InvalidDatetimeError(
            token,
            f"day {day:02d} is outside 1-{last_day} for {year:04d}-{month:02d}",
            expected=ABSOLUTE_GRAMMAR,
        )

    clock: dict[str, int] = {}
    for component in ("hour", "minute", "second"):
        raw = match.group(component)
        value = int(raw) if raw is not None else 0
        _check(token, component, value)
        clock[component] = value

    zone = UTC if match.group("utc") else tz
    return datetime(year, month, day, tzinfo=zone, **clock)
