"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from logrange.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from logrange.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    A resolved interval becomes ``start<TAB>end`` (end empty when open).
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "resolve_time":
        return f"{result.data.get('start', '')}\t{result.data.get('end') or ''}"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lr.ok")
    op = Text(f"  {result.op}", style="lr.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    line = Text(f"  {key}: ", style="lr.key")
    if isinstance(value, (dict, list)):
        line.append(json.dumps(value, separators=(",", ":")))
    else:
        line.append(str(value))
    console.print(line)


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("  WARNING ", style="lr.warning"), Text(warning))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with its annotations."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    line = Text(f"{prefix}")
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lr.error")
    op = Text(f"  {result.op}", style="lr.op")
    code = Text(f"  [{err.code}]" if err else "", style="lr.key")
    console.print(label, op, code, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Resolve renderer ──────────────────────────────────────────────────


def _render_interval(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a resolved time window as a two-row table."""
    data = result.data
    _status_line(console, result)

    kind = str(data.get("kind", ""))
    _field(console, "expression", data.get("expression") or "(none)")
    line = Text("  kind: ", style="lr.key")
    line.append(kind, style=style_for_kind(kind))
    console.print(line)
    if data.get("right") is not None:
        _field(console, "separator", repr(data.get("separator")))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Bound")
    table.add_column("Instant", style="lr.bound", no_wrap=True)
    table.add_row("start", str(data.get("start", "")))
    end = data.get("end")
    table.add_row("end", end if end else Text("open (now)", style="lr.open"))
    console.print(table)

    _render_warnings(console, result)
    if verbose:
        _field(console, "filter", data.get("filter", {}))
        _render_meta(console, result)


# ── Config renderer ───────────────────────────────────────────────────


def _render_config(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render configuration parameters as ``key: value`` lines."""
    for key, value in result.data.items():
        shown = repr(value) if isinstance(value, str) else str(value)
        console.print(Text(f"{key}:", style="lr.key"), Text(shown))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_warnings(console, result)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "resolve_time": _render_interval,
    "config_get": _render_config,
}
