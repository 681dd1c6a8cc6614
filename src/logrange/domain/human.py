"""Human-language fallback — "last friday at 2pm" into an instant.

The engine only depends on the :class:`HumanTimeParser` protocol:
``(text, now) -> datetime | None``.  :class:`DateparserHumanParser` is the
default implementation backed by the ``dateparser`` library; tests pass a
deterministic stub instead.

Only single-instant phrases are supported.  Phrases that describe a range
inside one token ("between 12 and 14") are rejected rather than silently
resolved to one of their bounds.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from logrange.domain.errors import UnrecognizedFormatError, UnsupportedPhraseError
from logrange.domain.grammar import ABSOLUTE_GRAMMAR, DURATION_GRAMMAR

logger = logging.getLogger(__name__)

_RANGE_PHRASE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bbetween\b.+\band\b", re.IGNORECASE),
    re.compile(r"\bfrom\b.+\b(?:to|until|till|through)\b", re.IGNORECASE),
)


class HumanTimeParser(Protocol):
    """Resolve free text to an instant relative to *now*, or return None."""

    def __call__(self, text: str, now: datetime) -> datetime | None: ...


class DateparserHumanParser:
    """:class:`HumanTimeParser` backed by ``dateparser``.

    Args:
        timezone: IANA name used for phrases without an explicit zone.
            None means the timezone of the reference instant.
        prefer_dates_from: ``"past"``, ``"future"`` or ``"current_period"``.
        languages: Restrict language detection (faster, more predictable).
    """

    def __init__(
        self,
        *,
        timezone: str | None = None,
        prefer_dates_from: str = "past",
        languages: Sequence[str] | None = ("en",),
    ) -> None:
        self.timezone = timezone
        self.prefer_dates_from = prefer_dates_from
        self.languages = list(languages) if languages else None

    def _settings(self, now: datetime) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "PREFER_DATES_FROM": self.prefer_dates_from,
            "RETURN_AS_TIMEZONE_AWARE": True,
            # dateparser expects a naive base expressed in TIMEZONE
            "RELATIVE_BASE": now.replace(tzinfo=None),
        }
        zone_name = self.timezone or getattr(now.tzinfo, "key", None) or now.tzname()
        if zone_name:
            settings["TIMEZONE"] = zone_name
            settings["TO_TIMEZONE"] = zone_name
        return settings

    def __call__(self, text: str, now: datetime) -> datetime | None:
        import dateparser

        return dateparser.parse(text, languages=self.languages, settings=self._settings(now))


def is_range_phrase(text: str) -> bool:
    """Check whether *text* describes a span rather than a single instant."""
    return any(p.search(text) for p in _RANGE_PHRASE_PATTERNS)


def resolve_human(text: str, now: datetime, parser: HumanTimeParser) -> datetime:
    """Resolve a free-text phrase to an aware datetime.

    Raises:
        UnsupportedPhraseError: If the phrase describes a range.
        UnrecognizedFormatError: If *parser* yields no instant.
    """
    if is_range_phrase(text):
        raise UnsupportedPhraseError(
            text,
            "phrase describes a range; use two expressions joined by the range separator",
        )

    result = parser(text, now)
    if result is None:
        raise UnrecognizedFormatError(
            text,
            "not a datetime, duration, or recognizable phrase",
            expected=f"{ABSOLUTE_GRAMMAR} | {DURATION_GRAMMAR}",
        )

    if result.tzinfo is None:
        result = result.replace(tzinfo=now.tzinfo)
    logger.debug("Human phrase %r resolved to %s", text, result.isoformat())
    return result
