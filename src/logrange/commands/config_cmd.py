"""Command group: inspect effective configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from logrange.commands._base import LograngeGroup
from logrange.services.config import ConfigService

if TYPE_CHECKING:
    from logrange.commands._context import AppContext

_CONFIG_EXAMPLES = """\
  logrange config get range-separator
  logrange config get --all
  LOGRANGE_SEARCH__RANGE_SEPARATOR=" TO " logrange config get range-separator"""


@click.group(cls=LograngeGroup, examples=_CONFIG_EXAMPLES)
def config() -> None:
    """Show configuration parameters (logrange.toml, LOGRANGE_* env vars)."""


@config.command(
    examples="""\
  logrange config get range-separator
  logrange --json config get --all"""
)
@click.argument("key", required=False)
@click.option("--all", "show_all", is_flag=True, help="Show every parameter.")
@click.pass_obj
def get(app: AppContext, key: str | None, show_all: bool) -> None:
    """Show one configuration parameter, or all of them."""
    if key is None and not show_all:
        raise click.UsageError("Name a parameter or pass --all.")
    if key is not None and show_all:
        raise click.UsageError("Use either a parameter name or --all, not both.")
    app.emit(ConfigService(app.settings).get(None if show_all else key))
