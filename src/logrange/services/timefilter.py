"""TimeFilterService — resolve a ``-t`` expression into a search window.

Bridges CLI-level inputs (optional separator flag, optional timezone name,
the reference instant read once by the caller) and the pure domain
resolver.  Typed domain failures become ``ServiceResult`` errors; the
caller decides how to report them and which exit code to use.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from logrange.domain.detect import describe_timespec, detect
from logrange.domain.errors import TimeParseError
from logrange.domain.grammar import DEFAULT_SEPARATOR
from logrange.domain.human import DateparserHumanParser, HumanTimeParser
from logrange.domain.resolver import RangeResolver
from logrange.domain.types import Duration, ResolvedInterval
from logrange.services.result import ServiceResult
from logrange.services.telemetry import resolver_span_observer, trace_span, traced

if TYPE_CHECKING:
    from logrange.config.settings import LograngeSettings

logger = logging.getLogger(__name__)

_OP = "resolve_time"


class TimeFilterService:
    """Resolves time expressions using configured defaults.

    Args:
        settings: Effective settings (separator default, window, timezone).
        human_parser: Override the human-language fallback (tests pass a stub).
    """

    def __init__(
        self,
        settings: LograngeSettings,
        *,
        human_parser: HumanTimeParser | None = None,
    ) -> None:
        self._settings = settings
        self._human_parser = human_parser

    # ------------------------------------------------------------------
    # Input resolution
    # ------------------------------------------------------------------

    def effective_separator(self, separator: str | None) -> str:
        """Flag value, else configured default, else ``/``.

        An explicit empty flag value is kept so validation can reject it.
        """
        if separator is not None:
            return separator
        return self._settings.search.range_separator or DEFAULT_SEPARATOR

    def _zone(self, timezone: str | None, now: datetime) -> tzinfo:
        name = timezone or self._settings.time.timezone
        if not name:
            return now.tzinfo  # type: ignore[return-value]
        return ZoneInfo(name)

    def _human(self, timezone: str | None) -> HumanTimeParser:
        if self._human_parser is not None:
            return self._human_parser
        cfg = self._settings.time
        return DateparserHumanParser(
            timezone=timezone or cfg.timezone or None,
            prefer_dates_from=cfg.prefer_dates_from,
            languages=cfg.languages,
        )

    # ------------------------------------------------------------------
    # resolve
    # ------------------------------------------------------------------

    @traced
    def resolve(
        self,
        expression: str | None,
        *,
        now: datetime,
        separator: str | None = None,
        timezone: str | None = None,
    ) -> ServiceResult:
        """Resolve *expression* against *now*.

        Args:
            expression: Raw time expression; None or blank selects the
                default look-back window.
            now: Timezone-aware reference instant.
            separator: Explicit range separator (``--sep``), if any.
            timezone: IANA timezone overriding the configured one.

        Returns:
            ServiceResult with ``start``, ``end``, ``kind``, ``separator``
            and the search ``filter`` clause on success.
        """
        if now.tzinfo is None:
            msg = "reference 'now' must be timezone-aware"
            raise ValueError(msg)
        sep = self.effective_separator(separator)

        with trace_span("timezone"):
            try:
                zone = self._zone(timezone, now)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                name = timezone or self._settings.time.timezone
                return ServiceResult.failure(
                    _OP,
                    "InvalidTimezone",
                    f"Unknown timezone: {name}",
                    detail={"timezone": name, "reason": str(exc)},
                )

        resolver = RangeResolver(
            human_parser=self._human(timezone),
            default_window=Duration(minutes=self._settings.search.default_window_minutes),
            observer=resolver_span_observer,
        )
        try:
            interval = resolver.resolve(
                expression, now=now.astimezone(zone), separator=sep, tz=zone
            )
        except TimeParseError as exc:
            logger.debug("Resolution failed: %s", exc)
            return ServiceResult.failure(_OP, str(exc.kind), _message(exc), detail=exc.to_detail())

        return ServiceResult(
            ok=True,
            op=_OP,
            data=self._payload(expression, sep, interval),
            warnings=_warnings(interval),
        )

    def _payload(
        self, expression: str | None, separator: str, interval: ResolvedInterval
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "expression": expression or "",
            "separator": separator,
            **interval.to_dict(),
            "open_ended": interval.is_open,
            "filter": interval.to_range_filter(self._settings.search.timestamp_field),
        }
        if expression and expression.strip():
            data["kind"] = str(detect(expression, separator).kind)
            spec = describe_timespec(expression, separator)
            data["left"] = spec.left
            data["right"] = spec.right
        else:
            data["kind"] = "default"
        return data


def _message(exc: TimeParseError) -> str:
    msg = f"{exc.reason}: {exc.token!r}"
    if exc.expected:
        msg += f" (expected {exc.expected})"
    return msg


def _warnings(interval: ResolvedInterval) -> list[str]:
    if interval.is_inverted:
        return ["Range start is after range end; bounds were kept as given"]
    return []
