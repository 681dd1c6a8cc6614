"""Range resolution — turn a raw time expression into a ResolvedInterval.

State progression for one resolution::

    INIT -> SEPARATOR_VALIDATED -> DETECTED -> LEFT_RESOLVED -> RIGHT_RESOLVED -> DONE

Any step may end in ERROR, which is absorbing: the typed
:class:`~logrange.domain.errors.TimeParseError` propagates and no partial
interval is produced.

Whole (non-range) tokens get detector -> grammar -> human-language
fallback.  Range halves do not: a half that looks like an absolute
datetime but fails validation is an error, never re-read as a phrase.

INVARIANT: ``now`` and ``separator`` are always explicit.  Nothing here
reads the system clock or global configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, tzinfo
from enum import StrEnum
from typing import Any

from logrange.domain.absolute import parse_absolute
from logrange.domain.detect import Detection, detect
from logrange.domain.duration import parse_duration
from logrange.domain.errors import InvalidDurationError, MalformedRangeError, TimeParseError
from logrange.domain.grammar import (
    DEFAULT_SEPARATOR,
    DURATION_GRAMMAR,
    RANGE_GRAMMAR,
    is_absolute,
    is_duration_shaped,
)
from logrange.domain.human import DateparserHumanParser, HumanTimeParser, resolve_human
from logrange.domain.separator import validate_separator
from logrange.domain.types import Duration, FormatKind, ResolvedInterval

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = Duration(hours=1)


class ResolverState(StrEnum):
    INIT = "init"
    SEPARATOR_VALIDATED = "separator_validated"
    DETECTED = "detected"
    LEFT_RESOLVED = "left_resolved"
    RIGHT_RESOLVED = "right_resolved"
    DONE = "done"
    ERROR = "error"


# (state, context) -> None; called on every transition.
TransitionObserver = Callable[[ResolverState, dict[str, Any]], None]


def _shift(duration: Duration, instant: datetime, sign: int, token: str) -> datetime:
    """Move *instant* by *duration*; a result outside the datetime range is an error."""
    try:
        return duration.add_to(instant) if sign > 0 else duration.subtract_from(instant)
    except (ValueError, OverflowError) as exc:
        raise InvalidDurationError(
            token, "duration moves the date out of range", expected=DURATION_GRAMMAR
        ) from exc


class RangeResolver:
    """Resolve time expressions against an injected reference instant.

    Args:
        human_parser: Fallback for phrases.  Defaults to
            :class:`DateparserHumanParser`.
        default_window: Look-back used when no expression is given.
        observer: Optional hook receiving each state transition.
    """

    def __init__(
        self,
        *,
        human_parser: HumanTimeParser | None = None,
        default_window: Duration = DEFAULT_WINDOW,
        observer: TransitionObserver | None = None,
    ) -> None:
        self.human_parser = human_parser or DateparserHumanParser()
        self.default_window = default_window
        self._observer = observer

    def _enter(self, state: ResolverState, **context: Any) -> None:
        logger.debug("resolver -> %s %s", state, context)
        if self._observer is not None:
            self._observer(state, context)

    def resolve(
        self,
        raw: str | None,
        *,
        now: datetime,
        separator: str = DEFAULT_SEPARATOR,
        tz: tzinfo | None = None,
    ) -> ResolvedInterval:
        """Resolve *raw* into an interval.

        Args:
            raw: The time expression; None or blank means the default window.
            now: Timezone-aware reference instant.
            separator: Range separator in effect for this call.
            tz: Timezone for datetimes without ``Z``.  Defaults to ``now``'s.

        Raises:
            TimeParseError: Any typed resolution failure.
            ValueError: If *now* is naive.
        """
        if now.tzinfo is None or now.utcoffset() is None:
            msg = "reference 'now' must be timezone-aware"
            raise ValueError(msg)
        zone = tz or now.tzinfo

        self._enter(ResolverState.INIT, raw=raw, separator=separator)
        try:
            interval = self._run(raw, now=now, separator=separator, tz=zone)
        except TimeParseError as exc:
            self._enter(ResolverState.ERROR, kind=str(exc.kind), token=exc.token)
            raise
        self._enter(ResolverState.DONE, **interval.to_dict())
        return interval

    def _run(
        self, raw: str | None, *, now: datetime, separator: str, tz: tzinfo
    ) -> ResolvedInterval:
        validate_separator(separator)
        self._enter(ResolverState.SEPARATOR_VALIDATED, separator=separator)

        if raw is None or not raw.strip():
            start = _shift(self.default_window, now, -1, str(self.default_window))
            self._enter(ResolverState.DETECTED, kind="default", window=str(self.default_window))
            return ResolvedInterval(start=start)

        detection = detect(raw, separator)
        self._enter(ResolverState.DETECTED, kind=str(detection.kind))

        if detection.kind is FormatKind.RANGE:
            return self._resolve_range(detection, now=now, tz=tz)
        return self._resolve_single(detection, now=now, tz=tz)

    def _resolve_single(
        self, detection: Detection, *, now: datetime, tz: tzinfo
    ) -> ResolvedInterval:
        token = detection.token
        if detection.kind is FormatKind.DURATION:
            start = _shift(parse_duration(token), now, -1, token)
        elif detection.kind is FormatKind.ABSOLUTE:
            start = parse_absolute(token, tz)
        else:
            start = resolve_human(token, now, self.human_parser)
        self._enter(ResolverState.LEFT_RESOLVED, start=start.isoformat())
        return ResolvedInterval(start=start)

    def _resolve_anchor(self, token: str, *, whole: str, now: datetime, tz: tzinfo) -> datetime:
        """Resolve one range half as an absolute-or-human instant."""
        if is_absolute(token):
            return parse_absolute(token, tz)
        if is_duration_shaped(token):
            raise MalformedRangeError(
                whole,
                f"{token!r} is a duration; a range bound must be a datetime",
                expected=RANGE_GRAMMAR,
            )
        return resolve_human(token, now, self.human_parser)

    def _resolve_range(
        self, detection: Detection, *, now: datetime, tz: tzinfo
    ) -> ResolvedInterval:
        assert detection.left is not None and detection.right is not None
        whole = detection.token

        left = self._resolve_anchor(detection.left, whole=whole, now=now, tz=tz)
        self._enter(ResolverState.LEFT_RESOLVED, left=left.isoformat())

        right_token = detection.right
        sign = right_token[0]
        if sign == "+":
            start, end = left, _shift(parse_duration(right_token[1:]), left, 1, right_token)
        elif sign == "-":
            start, end = _shift(parse_duration(right_token[1:]), left, -1, right_token), left
        else:
            start = left
            end = self._resolve_anchor(right_token, whole=whole, now=now, tz=tz)
        self._enter(ResolverState.RIGHT_RESOLVED, start=start.isoformat(), end=end.isoformat())

        if start > end:
            logger.info("Range start %s is after end %s", start.isoformat(), end.isoformat())
        return ResolvedInterval(start=start, end=end)


def resolve_interval(
    raw: str | None,
    *,
    now: datetime,
    separator: str = DEFAULT_SEPARATOR,
    tz: tzinfo | None = None,
    human_parser: HumanTimeParser | None = None,
    default_window: Duration = DEFAULT_WINDOW,
) -> ResolvedInterval:
    """Functional entry point; see :meth:`RangeResolver.resolve`."""
    resolver = RangeResolver(human_parser=human_parser, default_window=default_window)
    return resolver.resolve(raw, now=now, separator=separator, tz=tz)
