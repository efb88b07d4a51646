"""BaseHandler — shared foundation for the remote-call handlers.

Every handler receives a :class:`~pfm.domain.remote.RemoteServiceClient`
at construction time, issues exactly one call per :meth:`handle`, and
converts client exceptions into a failed :class:`CommandResult`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from pfm.infrastructure.errors import (
    RemoteServiceError,
    ServiceErrorReason,
    TransportError,
    UnexpectedResponseError,
)
from pfm.services.result import CommandResult, ErrorKind, ErrorOrigin

if TYPE_CHECKING:
    from pfm.domain.remote import RemoteServiceClient

logger = logging.getLogger(__name__)


class BaseHandler:
    """Abstract base for handlers that call pfd.

    Subclasses set :attr:`op` and :attr:`reason_kinds` (which service
    reasons they classify; everything else is ``UNKNOWN``).

    Usage::

        class SetAssetHandler(BaseHandler):
            op = "set_asset"

            def handle(self, cmd: SetAssetCommand) -> CommandResult:
                try:
                    state = self._client.set_asset(...)
                except RemoteServiceError as exc:
                    return self._service_failure(exc)
                ...
    """

    op: ClassVar[str] = ""
    reason_kinds: ClassVar[dict[ServiceErrorReason, ErrorKind]] = {}

    def __init__(self, client: RemoteServiceClient) -> None:
        self._client = client

    def _service_failure(self, exc: RemoteServiceError) -> CommandResult:
        """Classify a pfd-reported failure.  Never retried."""
        kind = self.reason_kinds.get(exc.reason, ErrorKind.UNKNOWN)
        logger.info(
            "pfd rejected %s: status=%s reason=%s kind=%s",
            self.op,
            exc.status_code,
            exc.reason,
            kind,
        )
        detail: dict[str, object] = {"status_code": exc.status_code, "reason": str(exc.reason)}
        if exc.code is not None:
            detail["service_code"] = exc.code
        return CommandResult.failure(
            self.op,
            kind,
            str(exc),
            origin=ErrorOrigin.REMOTE,
            detail=detail,
        )

    def _transport_failure(self, exc: TransportError) -> CommandResult:
        """Map a transport failure to UNAVAILABLE.  Never retried."""
        logger.info("pfd unavailable during %s: %s", self.op, exc)
        detail: dict[str, object] = {}
        if exc.hint:
            detail["hint"] = exc.hint
        return CommandResult.failure(
            self.op,
            ErrorKind.UNAVAILABLE,
            str(exc),
            origin=ErrorOrigin.TRANSPORT,
            detail=detail,
        )

    def _unexpected_response(self, exc: UnexpectedResponseError) -> CommandResult:
        """Map an unreadable success body to UNKNOWN; pfd may have applied the call."""
        logger.warning("pfd answered %s with an unreadable body: %s", self.op, exc)
        detail: dict[str, object] = {"status_code": exc.status_code, "body": exc.body}
        if exc.hint:
            detail["hint"] = exc.hint
        return CommandResult.failure(
            self.op,
            ErrorKind.UNKNOWN,
            str(exc),
            origin=ErrorOrigin.REMOTE,
            detail=detail,
        )
