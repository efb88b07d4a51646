"""Command: set fields on an asset."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pfm.commands._base import PfmCommand

if TYPE_CHECKING:
    from pfm.commands._context import AppContext


def _parse_fields(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> dict[str, str]:
    """Click callback: turn repeated ``key=value`` items into a mapping."""
    from pfm.domain.commands import parse_field_assignments

    try:
        return parse_field_assignments(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command(
    "set",
    cls=PfmCommand,
    examples="""\
  pfm set --id a1 --field color=red
  pfm set --id btc --field amount=0.5 --field note="cold wallet"
  pfm --json set --id a1 --field color=blue""",
)
@click.option("--id", "asset_id", required=True, help="Asset identifier.")
@click.option(
    "--field",
    "fields",
    multiple=True,
    callback=_parse_fields,
    metavar="KEY=VALUE",
    help="Field to set (repeatable).",
)
@click.pass_obj
def set_cmd(app: AppContext, asset_id: str, fields: dict[str, str]) -> None:
    """Set fields on an asset."""
    from pfm.domain.commands import SetAssetCommand

    app.run(SetAssetCommand(asset_id=asset_id, fields=fields))
