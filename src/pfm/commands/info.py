"""Commands: help and version (answered locally, no pfd call)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pfm.commands._base import PfmCommand

if TYPE_CHECKING:
    from pfm.commands._context import AppContext


@click.command("help", cls=PfmCommand)
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Show usage for pfm."""
    from pfm.domain.commands import HelpCommand

    app: AppContext = ctx.obj
    root = ctx.find_root()
    app.run(HelpCommand(text=root.get_help()))


@click.command("version", cls=PfmCommand)
@click.pass_obj
def version_cmd(app: AppContext) -> None:
    """Show the pfm version."""
    from pfm.domain.commands import VersionCommand

    app.run(VersionCommand())
