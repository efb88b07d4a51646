"""Root CLI group for pfm with global flags and command registration."""

from __future__ import annotations

import click

from pfm.commands import register_commands
from pfm.commands._base import PfmGroup
from pfm.commands._context import AppContext
from pfm.config.settings import PfmSettings


@click.group(
    "pfm",
    cls=PfmGroup,
    invoke_without_command=True,
    examples="""\
  pfm set --id a1 --field color=red
  pfm signup --username bob
  pfm --json version
  pfm -vv --base-url http://localhost:8000 set --id a1 --field amount=3""",
)
@click.option("-V", "--version", "show_version", is_flag=True, help="Show the version and exit.")
@click.option("-v", "--verbose", "verbosity", count=True, help="Increase log detail (-v info, -vv debug).")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Override config file path.",
)
@click.option("--base-url", default=None, help="pfd service base URL.")
@click.option(
    "--timeout",
    "timeout_seconds",
    default=None,
    type=click.FloatRange(min=0, min_open=True),
    help="Request timeout in seconds.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    show_version: bool,
    verbosity: int,
    json_output: bool,
    quiet: bool,
    log_json: bool,
    config_path: str | None,
    base_url: str | None,
    timeout_seconds: float | None,
) -> None:
    """pfm — command line client for the pfd service."""
    # Unset flags are left out so PFM_* variables and pfm.toml can supply them.
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbosity": verbosity,
        "log_json": log_json,
    }
    settings = PfmSettings.from_cli(
        config_path=config_path,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        **{name: value for name, value in flags.items() if value},
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)

    if show_version:
        from pfm.domain.commands import VersionCommand

        app.run(VersionCommand())
        ctx.exit(0)
    if ctx.invoked_subcommand is None:
        from pfm.domain.commands import HelpCommand

        app.run(HelpCommand(text=ctx.get_help()))


register_commands(cli)
