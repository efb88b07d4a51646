"""SetAssetHandler — ``pfm set``.

Pipeline: BUILD REQUEST → CALL → MAP
"""

from __future__ import annotations

from pfm.domain.commands import SetAssetCommand
from pfm.domain.remote import SetAssetRequest
from pfm.infrastructure.errors import (
    RemoteServiceError,
    ServiceErrorReason,
    TransportError,
    UnexpectedResponseError,
)
from pfm.services.base import BaseHandler
from pfm.services.result import CommandResult, ErrorKind
from pfm.services.telemetry import remote_span, traced


class SetAssetHandler(BaseHandler):
    """Writes asset fields to pfd and reports the confirmed state."""

    op = "set_asset"
    reason_kinds = {
        ServiceErrorReason.NOT_FOUND: ErrorKind.NOT_FOUND,
        ServiceErrorReason.PERMISSION_DENIED: ErrorKind.PERMISSION_DENIED,
        ServiceErrorReason.UNAUTHENTICATED: ErrorKind.PERMISSION_DENIED,
        ServiceErrorReason.CONFLICT: ErrorKind.CONFLICT,
        ServiceErrorReason.ALREADY_EXISTS: ErrorKind.CONFLICT,
        ServiceErrorReason.INVALID_ARGUMENT: ErrorKind.INVALID_ARGUMENT,
    }

    @traced
    def handle(self, cmd: SetAssetCommand) -> CommandResult:
        # Identifier and fields go out exactly as given.
        request = SetAssetRequest(asset_id=cmd.asset_id, fields=dict(cmd.fields))
        try:
            with remote_span("pfd.set_asset"):
                state = self._client.set_asset(request)
        except RemoteServiceError as exc:
            return self._service_failure(exc)
        except UnexpectedResponseError as exc:
            return self._unexpected_response(exc)
        except TransportError as exc:
            return self._transport_failure(exc)

        return CommandResult.success(
            self.op,
            {"id": state.id, "fields": dict(state.fields)},
        )
