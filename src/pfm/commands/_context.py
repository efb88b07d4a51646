"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Owns the pfd client for the lifetime of one
invocation (opened lazily, closed when the Click context closes) and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from pfm.output.exit_codes import exit_code_for
from pfm.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pfm.config.models import ServiceConfig
    from pfm.config.settings import PfmSettings
    from pfm.domain.commands import Command
    from pfm.infrastructure.client import PfdClient
    from pfm.services.dispatcher import Dispatcher
    from pfm.services.result import CommandResult

logger = logging.getLogger(__name__)


def build_client(config: ServiceConfig) -> PfdClient:
    """Open a pfd client for *config*."""
    from pfm.infrastructure.client import PfdClient

    return PfdClient.from_config(config)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The client is lazily
    created on first use so ``help``, ``version`` and locally rejected
    commands never open a connection.
    """

    def __init__(self, settings: PfmSettings) -> None:
        self.settings = settings
        self._client: PfdClient | None = None
        self._dispatcher: Dispatcher | None = None

        # Configure structured logging
        from pfm.config.logging import configure_logging

        configure_logging(verbosity=settings.verbosity, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from pfm.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def client(self) -> PfdClient:
        """The pfd client (created lazily on first access)."""
        if self._client is None:
            logger.debug("opening pfd client for %s", self.settings.service.base_url)
            self._client = build_client(self.settings.service)
        return self._client

    @property
    def dispatcher(self) -> Dispatcher:
        if self._dispatcher is None:
            from pfm.services.dispatcher import Dispatcher

            self._dispatcher = Dispatcher(lambda: self.client)
        return self._dispatcher

    def close(self) -> None:
        """Release the client connection, if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def run(self, command: Command) -> None:
        """Dispatch *command* and emit its result."""
        self.emit(self.dispatcher.execute(command))

    def emit(self, result: CommandResult) -> None:
        """Format and output a CommandResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with the code for its ErrorKind.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(exit_code_for(result))
