"""Value types produced by the resolution engine.

All of them are frozen: a resolution builds fresh values from the input
strings and the injected reference instant, and never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

from dateutil.relativedelta import relativedelta

from logrange.domain.grammar import DURATION_UNITS


class FormatKind(StrEnum):
    """Categories assigned by the format detector."""

    RANGE = "range"
    DURATION = "duration"
    ABSOLUTE = "absolute"
    HUMAN = "human"


@dataclass(frozen=True)
class Duration:
    """Calendar/clock span as non-negative counts per unit."""

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                msg = f"Duration.{f.name} must be an int, got {value!r}"
                raise TypeError(msg)
            if value < 0:
                msg = f"Duration.{f.name} must be non-negative, got {value}"
                raise ValueError(msg)

    def __str__(self) -> str:
        parts = [
            f"{getattr(self, name)}{letter}"
            for letter, name in DURATION_UNITS
            if getattr(self, name)
        ]
        return "".join(parts) or "0s"

    @property
    def is_zero(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def calendar_part(self) -> relativedelta:
        return relativedelta(years=self.years, months=self.months, days=self.days)

    def clock_part(self) -> timedelta:
        return timedelta(hours=self.hours, minutes=self.minutes, seconds=self.seconds)

    def add_to(self, instant: datetime) -> datetime:
        return self._shift(instant, 1)

    def subtract_from(self, instant: datetime) -> datetime:
        return self._shift(instant, -1)

    def _shift(self, instant: datetime, sign: int) -> datetime:
        # Calendar units move the local wall clock; clock units are elapsed time.
        shifted = instant + sign * self.calendar_part()
        clock = self.clock_part()
        if not clock or shifted.tzinfo is None:
            return shifted + sign * clock
        zone = shifted.tzinfo
        return (shifted.astimezone(UTC) + sign * clock).astimezone(zone)


@dataclass(frozen=True)
class TimeSpec:
    """Raw halves of a time expression plus the separator in effect."""

    raw: str
    separator: str
    left: str
    right: str | None = None

    @property
    def is_range(self) -> bool:
        return self.right is not None


@dataclass(frozen=True)
class ResolvedInterval:
    """Concrete search window.

    ``end`` of None means open-ended: the consumer bounds it at "now".
    Bounds are never reordered; see :attr:`is_inverted`.
    """

    start: datetime
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def is_inverted(self) -> bool:
        return self.end is not None and self.start > self.end

    def to_dict(self) -> dict[str, str | None]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end is not None else None,
        }

    def to_range_filter(self, field: str = "@timestamp") -> dict[str, Any]:
        """Render as a search-service range clause (``gte``/``lte``)."""
        bounds: dict[str, str] = {"gte": self.start.isoformat()}
        if self.end is not None:
            bounds["lte"] = self.end.isoformat()
        return {"range": {field: bounds}}
