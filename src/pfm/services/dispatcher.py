"""Dispatcher — the single entry point from a Command to a CommandResult.

Each invocation runs one linear pass:

    RECEIVED → VALIDATED → REMOTE_CALL_ISSUED → RESULT_MAPPED

``help`` and ``version`` skip straight to RESULT_MAPPED without a remote
call.  Local validation failures end the pass before the client is even
acquired, so an invalid command never opens a connection.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, assert_never

from pfm import __version__
from pfm.domain.commands import (
    HelpCommand,
    SetAssetCommand,
    SignupCommand,
    VersionCommand,
    validate_set_asset,
    validate_signup,
)
from pfm.services.result import CommandResult, ErrorKind, ErrorOrigin
from pfm.services.set_asset import SetAssetHandler
from pfm.services.signup import SignupHandler

if TYPE_CHECKING:
    from pfm.domain.commands import Command
    from pfm.domain.remote import RemoteServiceClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], "RemoteServiceClient"]

_OPS: dict[str, str] = {
    "set": "set_asset",
    "signup": "signup",
    "help": "help",
    "version": "version",
}


class Dispatcher:
    """Maps each Command variant to exactly one handler.

    Args:
        client_factory: Zero-argument callable returning the remote client.
            Called at most once per :meth:`execute`, and only for commands
            that passed local validation.
    """

    def __init__(self, client_factory: ClientFactory) -> None:
        self._client_factory = client_factory

    def execute(self, command: Command) -> CommandResult:
        """Run *command* and return its result.  Never raises ``Exception``."""
        logger.debug("command received: %s", command.kind)
        try:
            result = self._dispatch(command)
        except Exception as exc:
            logger.exception("unhandled error while executing %s", command.kind)
            result = CommandResult.failure(
                _OPS.get(command.kind, command.kind),
                ErrorKind.UNKNOWN,
                f"Unexpected error: {type(exc).__name__}: {exc}",
                origin=ErrorOrigin.LOCAL,
            )
        logger.debug("result mapped: op=%s ok=%s", result.op, result.ok)
        return result

    def _dispatch(self, command: Command) -> CommandResult:
        match command:
            case SetAssetCommand():
                problems = validate_set_asset(command)
                if problems:
                    return self._invalid("set_asset", problems)
                logger.debug("command validated: set asset_id=%s", command.asset_id)
                set_handler = SetAssetHandler(self._client_factory())
                logger.debug("remote call issued: set_asset")
                return set_handler.handle(command)
            case SignupCommand():
                problems = validate_signup(command)
                if problems:
                    return self._invalid("signup", problems)
                logger.debug("command validated: signup username=%s", command.username)
                signup_handler = SignupHandler(self._client_factory())
                logger.debug("remote call issued: signup")
                return signup_handler.handle(command)
            case HelpCommand():
                return CommandResult.success("help", {"text": command.text})
            case VersionCommand():
                return CommandResult.success("version", {"name": "pfm", "version": __version__})
            case _:
                assert_never(command)

    @staticmethod
    def _invalid(op: str, problems: list[str]) -> CommandResult:
        logger.debug("command rejected locally: %s", "; ".join(problems))
        return CommandResult.failure(
            op,
            ErrorKind.INVALID_ARGUMENT,
            " ".join(problems),
            origin=ErrorOrigin.LOCAL,
            detail={"problems": problems},
        )
