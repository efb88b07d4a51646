"""Command: create a pfd user account."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pfm.commands._base import PfmCommand

if TYPE_CHECKING:
    from pfm.commands._context import AppContext


def _prompt_password(
    ctx: click.Context, _param: click.Parameter, value: str | None
) -> str | None:
    """Ask for the password on stderr when neither the flag nor env gave one."""
    if value is not None or ctx.resilient_parsing:
        return value
    return click.prompt("Password", hide_input=True, err=True)


@click.command(
    cls=PfmCommand,
    examples="""\
  pfm signup --username bob
  pfm signup --username bob --password "correct horse battery staple"
  PFM_PASSWORD=... pfm --json signup --username bob""",
)
@click.option("--username", required=True, help="Should be unique.")
@click.option(
    "--password",
    envvar="PFM_PASSWORD",
    callback=_prompt_password,
    help="Use strong passwords.  Prompted for (on stderr) when omitted.",
)
@click.pass_obj
def signup(app: AppContext, username: str, password: str) -> None:
    """Create a new user."""
    from pydantic import SecretStr

    from pfm.domain.commands import SignupCommand

    app.run(SignupCommand(username=username, password=SecretStr(password)))
