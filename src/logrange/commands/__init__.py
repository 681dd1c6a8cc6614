"""Subcommand modules for logrange.

Provides register_commands(), which imports command modules only when
the root group is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``config`` group and the ``resolve`` command."""
    from logrange.commands.config_cmd import config
    from logrange.commands.resolve import resolve

    cli.add_command(config)
    cli.add_command(resolve)
