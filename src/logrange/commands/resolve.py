"""Standalone command: resolve a time expression into a search window."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING

import click

from logrange.commands._base import LograngeCommand, add_eager_text_option
from logrange.config.logging import bind_invocation
from logrange.domain.grammar import (
    ABSOLUTE_GRAMMAR,
    DISALLOWED_SEPARATOR_CHARS,
    DURATION_GRAMMAR,
    RANGE_GRAMMAR,
)
from logrange.services.timefilter import TimeFilterService

if TYPE_CHECKING:
    from logrange.commands._context import AppContext

_RESOLVE_EXAMPLES = """\
  logrange resolve
      last 60 minutes (the default window)
  logrange resolve 1y8M4d8h30m2s
      reach back 1 year 8 months 4 days 8 hours 30 minutes 2 seconds
  logrange resolve 1h30m
  logrange resolve 90
      same as 90m (a bare number means minutes)
  logrange resolve 2015-06-20T20:48
  logrange resolve "2015-06-20 20:28Z"
  logrange resolve 2015-06-16T22:27:41/2015-06-18T22:27:41
  logrange resolve "2015-06-16T22:27:41 TO 2015-06-18T22:27:41" --sep " TO "
  logrange resolve "2015-06-23 17:45/-1M"
      2015-05-23 17:45 to 2015-06-23 17:45
  logrange resolve "2015-06-23 17:45/+15m"
      2015-06-23 17:45 to 2015-06-23 18:00
  logrange resolve "last friday at 13:00/last friday at 13:30"
  logrange resolve 2h --now 2015-06-23T12:00:00+00:00 --filter"""

_FORMATS = f"""\
Datetime:  {ABSOLUTE_GRAMMAR}
  date part may be separated from time by T, space, or nothing
  missing time components default to 0; append Z for UTC
Duration:  {DURATION_GRAMMAR}
  M is months, m is minutes; a bare number means minutes,
  except 8, 10, 12 or 14 digits, which are read as YYYYMMDD[HH[MM[SS]]]
Range:     {RANGE_GRAMMAR}
  + adds the duration to the start; - ends the range at the datetime
Human:     "10 minutes ago", "yesterday at 12:30pm", "last friday at 2pm"
  single instants only ("between 12 and 14" is rejected)
Disallowed separator characters: {" ".join(DISALLOWED_SEPARATOR_CHARS)} (and space)"""


def _parse_now(_ctx: click.Context, _param: click.Parameter, value: str | None) -> datetime:
    """Reference instant: ``--now`` if given, otherwise the system clock (read once)."""
    if value is None:
        return datetime.now().astimezone()
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not an ISO 8601 datetime") from exc
    return parsed if parsed.tzinfo is not None else parsed.astimezone()


@click.command(cls=LograngeCommand, examples=_RESOLVE_EXAMPLES)
@click.argument("expression", required=False)
@click.option("-t", "--time", "time_option", default=None, help="Time expression (alias).")
@click.option(
    "--sep",
    "separator",
    default=None,
    help="Range separator (default from config, else '/').",
)
@click.option(
    "--now",
    "now",
    default=None,
    callback=_parse_now,
    help="Pin the reference instant (ISO 8601).",
)
@click.option("--tz", "timezone", default=None, help="IANA timezone for datetimes without Z.")
@click.option("--filter", "as_filter", is_flag=True, help="Print only the range filter JSON.")
@click.pass_obj
def resolve(
    app: AppContext,
    expression: str | None,
    time_option: str | None,
    separator: str | None,
    now: datetime,
    timezone: str | None,
    as_filter: bool,
) -> None:
    """Resolve a datetime, duration, range, or phrase into a time window."""
    if expression is not None and time_option is not None:
        raise click.UsageError("Give the expression as an argument or with --time, not both.")
    raw = expression if expression is not None else time_option

    svc = TimeFilterService(app.settings)
    bind_invocation(command="resolve", separator=svc.effective_separator(separator))
    result = svc.resolve(raw, now=now, separator=separator, timezone=timezone)

    if as_filter and result.ok:
        click.echo(json.dumps(result.data["filter"]))
        return
    app.emit(result)


add_eager_text_option(
    resolve,
    "--formats",
    _FORMATS,
    heading="Accepted formats for '{command}':",
    help_text="Show accepted datetime, duration, and range formats.",
)
