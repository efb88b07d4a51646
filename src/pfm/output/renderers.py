"""Operation-specific Rich renderers for CommandResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pfm.output.console import create_console, get_output, style_for_kind
from pfm.services.result import ErrorKind, ErrorOrigin

if TYPE_CHECKING:
    from rich.console import Console

    from pfm.services.result import CommandError, CommandResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: CommandResult, *, verbose: bool = False) -> str:
    """Render a CommandResult to a styled string via Rich.

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


def render_quiet(result: CommandResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "help":
        return str(result.data.get("text", "")).rstrip("\n")
    if result.op == "version":
        return str(result.data.get("version", ""))
    if result.op == "set_asset":
        return str(result.data.get("id", ""))
    if result.op == "signup":
        return str(result.data.get("username", ""))
    return f"OK: {result.op}"


def remediation_hint(error: CommandError) -> str | None:
    """Suggest what to do next, depending on where the failure came from."""
    hint = error.detail.get("hint")
    if isinstance(hint, str) and hint:
        return hint
    if error.origin is ErrorOrigin.LOCAL:
        if error.kind is ErrorKind.INVALID_ARGUMENT:
            return "Fix the command arguments and try again (see --help)."
        return None
    if error.origin is ErrorOrigin.TRANSPORT:
        return "Check your network connection and --base-url, then retry."
    if error.kind is ErrorKind.INVALID_ARGUMENT:
        return "pfd rejected the values; adjust them and try again."
    if error.kind in (ErrorKind.PERMISSION_DENIED, ErrorKind.UNKNOWN):
        return "Contact the pfd administrator if this persists."
    return None


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: CommandResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="pfm.ok")
    op = Text(f"  {result.op}", style="pfm.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pfm.key")
    if key == "id" or key.endswith("_id") or key == "username":
        v = Text(str(value), style="pfm.id")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_span(console: Console, span: dict[str, Any], *, depth: int) -> None:
    """Print one telemetry span line, then its children indented."""
    name = span.get("name", "?")
    duration = span.get("duration_ms", 0.0)
    indent = "  " * depth
    console.print(Text(f"    {duration:>8.2f}ms  {indent}{name}", style="dim"))
    for child in span.get("children", []):
        _render_span(console, child, depth=depth + 1)


def _render_meta(console: Console, result: CommandResult) -> None:
    """Print meta block including the telemetry span (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry" and isinstance(v, dict):
            _render_span(console, v, depth=0)
        else:
            console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pfm.error")
    op = Text(f"  {result.op}", style="pfm.op")
    dash = Text(" — ")
    if err is not None and err.origin is ErrorOrigin.REMOTE:
        source = Text("pfd: ", style="pfm.origin")
        console.print(label, op, dash, source, Text(msg), sep="", end="")
    else:
        console.print(label, op, dash, Text(msg), sep="", end="")
    console.print()

    if err is None:
        return

    kind = Text.assemble(
        ("  kind: ", "pfm.key"),
        (err.kind.value, style_for_kind(err.kind)),
        f" ({err.origin.value})",
    )
    console.print(kind)

    hint = remediation_hint(err)
    if hint:
        console.print(Text("  hint: ", style="pfm.hint"), Text(hint), sep="", end="")
        console.print()

    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k == "hint":
                continue
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_set_asset(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    """Render the confirmed asset state as a field table."""
    _status_line(console, result)
    _field(console, "id", result.data.get("id", ""))

    fields = result.data.get("fields") or {}
    if fields:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Field", style="pfm.key")
        table.add_column("Value")
        for key in sorted(fields):
            table.add_row(str(key), str(fields[key]))
        console.print(table)
    else:
        _field(console, "fields", "(none)")

    if verbose:
        _render_meta(console, result)


def _render_signup(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "username", result.data.get("username", ""))
    _field(console, "token_issued", result.data.get("token_issued", False))
    if verbose:
        _render_meta(console, result)


def _render_help(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text(str(result.data.get("text", ""))), soft_wrap=True)


def _render_version(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    name = result.data.get("name", "pfm")
    version = result.data.get("version", "")
    console.print(Text(f"{name}, version {version}"))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "set_asset": _render_set_asset,
    "signup": _render_signup,
    "help": _render_help,
    "version": _render_version,
}
