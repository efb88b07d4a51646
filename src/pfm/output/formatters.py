"""Rich/JSON output helpers.

The CLI renders CommandResult for humans (Rich output, colors) or
machines (--json).  The formatter layer adapts CommandResult to the
requested output mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from pfm.services.result import CommandResult


class OutputSettings(BaseModel):
    """Output mode flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: CommandResult, *, settings: OutputSettings | None = None) -> str:
    """Format a CommandResult for display.

    ``--json`` wins over ``--quiet``, which wins over the Rich renderer.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        from pfm.output.renderers import render_quiet

        return render_quiet(result)

    from pfm.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
