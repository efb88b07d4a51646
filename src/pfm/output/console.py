"""Rich console and theme for pfm output.

Everything is rendered into an in-memory buffer and returned as a string,
so the caller decides whether it lands on stdout or stderr.  Rich emits no
escape codes when the buffer is not a terminal, which covers pipes and
``CliRunner``.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from pfm.services.result import ErrorKind

PFM_THEME = Theme(
    {
        "pfm.ok": "bold green",
        "pfm.error": "bold red",
        "pfm.warning": "bold yellow",
        "pfm.op": "bold cyan",
        "pfm.key": "dim",
        "pfm.id": "bold blue",
        "pfm.hint": "yellow",
        "pfm.origin": "magenta",
        # One style per exit-code band.
        "pfm.kind.usage": "yellow",
        "pfm.kind.state": "blue",
        "pfm.kind.access": "red",
        "pfm.kind.outage": "magenta",
        "pfm.kind.unknown": "bold red",
    }
)

_KIND_STYLES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_ARGUMENT: "pfm.kind.usage",
    ErrorKind.NOT_FOUND: "pfm.kind.state",
    ErrorKind.CONFLICT: "pfm.kind.state",
    ErrorKind.PERMISSION_DENIED: "pfm.kind.access",
    ErrorKind.UNAVAILABLE: "pfm.kind.outage",
    ErrorKind.UNKNOWN: "pfm.kind.unknown",
}

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a buffer-backed Console using :data:`PFM_THEME`.

    Args:
        no_color: Strip styling entirely.
        width: Fixed line width; defaults to :data:`DEFAULT_WIDTH` so output
            does not depend on the caller's terminal.
    """
    return Console(
        file=StringIO(),
        theme=PFM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Return everything written to a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console was not created by create_console()"
        raise TypeError(msg)
    return buffer.getvalue()


def style_for_kind(kind: ErrorKind) -> str:
    """Theme style for an error kind, shared by kinds with the same exit code."""
    return _KIND_STYLES.get(kind, "pfm.kind.unknown")
