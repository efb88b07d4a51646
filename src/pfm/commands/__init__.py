"""Subcommand modules for pfm.

Provides register_commands() which uses deferred imports to keep
``pfm --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the fixed set of subcommands on the root CLI group."""
    from pfm.commands.info import help_cmd, version_cmd
    from pfm.commands.set_cmd import set_cmd
    from pfm.commands.signup import signup

    cli.add_command(set_cmd)
    cli.add_command(signup)
    cli.add_command(help_cmd)
    cli.add_command(version_cmd)
