"""Custom Click base classes with --examples support.

Provides LograngeCommand and LograngeGroup that accept an ``examples``
parameter.  When ``--examples`` is passed, the command prints usage
examples and exits, which keeps ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


def add_eager_text_option(
    cmd: click.Command, flag: str, text: str, *, heading: str, help_text: str
) -> None:
    """Attach an eager flag that prints *text* under *heading* and exits."""

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(heading.format(command=ctx.command_path) + "\n")
        click.echo(text)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            [flag],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show,
            help=help_text,
        )
    )


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    add_eager_text_option(
        cmd,
        "--examples",
        examples,
        heading="Examples for '{command}':",
        help_text="Show usage examples.",
    )


class LograngeCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class LograngeGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = LograngeCommand`` so subcommands accept the
    ``examples`` parameter without an explicit ``cls=``.
    """

    command_class = LograngeCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
