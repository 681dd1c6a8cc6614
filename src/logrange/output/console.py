"""Rich Console factory and theme for logrange output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LOGRANGE_THEME = Theme(
    {
        "lr.ok": "bold green",
        "lr.error": "bold red",
        "lr.warning": "bold yellow",
        "lr.op": "bold cyan",
        "lr.key": "dim",
        "lr.bound": "bold blue",
        "lr.open": "italic dim",
        "lr.kind.range": "magenta",
        "lr.kind.duration": "green",
        "lr.kind.absolute": "blue",
        "lr.kind.human": "yellow",
        "lr.kind.default": "dim",
    }
)


_KINDS = frozenset({"range", "duration", "absolute", "human", "default"})


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LOGRANGE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a detected expression kind."""
    return f"lr.kind.{kind}" if kind in _KINDS else ""
