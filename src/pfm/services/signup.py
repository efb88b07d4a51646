"""SignupHandler — ``pfm signup``.

The password travels only inside :class:`SignupRequest`; the result
carries the public username and whether pfd issued a token, never the
password or the token itself.
"""

from __future__ import annotations

from pfm.domain.commands import SignupCommand
from pfm.domain.remote import SignupRequest
from pfm.infrastructure.errors import (
    RemoteServiceError,
    ServiceErrorReason,
    TransportError,
    UnexpectedResponseError,
)
from pfm.services.base import BaseHandler
from pfm.services.result import CommandResult, ErrorKind
from pfm.services.telemetry import remote_span, traced


class SignupHandler(BaseHandler):
    """Creates a pfd user account."""

    op = "signup"
    reason_kinds = {
        ServiceErrorReason.ALREADY_EXISTS: ErrorKind.CONFLICT,
        ServiceErrorReason.CONFLICT: ErrorKind.CONFLICT,
        ServiceErrorReason.INVALID_ARGUMENT: ErrorKind.INVALID_ARGUMENT,
        ServiceErrorReason.PERMISSION_DENIED: ErrorKind.PERMISSION_DENIED,
        ServiceErrorReason.UNAUTHENTICATED: ErrorKind.PERMISSION_DENIED,
    }

    @traced
    def handle(self, cmd: SignupCommand) -> CommandResult:
        request = SignupRequest(username=cmd.username, password=cmd.password)
        try:
            with remote_span("pfd.signup"):
                response = self._client.signup(request)
        except RemoteServiceError as exc:
            return self._service_failure(exc)
        except UnexpectedResponseError as exc:
            return self._unexpected_response(exc)
        except TransportError as exc:
            return self._transport_failure(exc)

        return CommandResult.success(
            self.op,
            {
                "username": response.user.username,
                "token_issued": response.auth_token is not None,
            },
        )
