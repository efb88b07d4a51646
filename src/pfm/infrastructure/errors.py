"""Exception hierarchy raised by the pfd client.

PfmError
├── RemoteServiceError       pfd answered with a failure status
├── UnexpectedResponseError  pfd answered 2xx with a body pfm cannot read
└── TransportError           no answer at all (connect error, timeout)

Handlers in the service layer translate these into CommandResult failures.
"""

from __future__ import annotations

from enum import StrEnum


class ServiceErrorReason(StrEnum):
    """Symbolic failure reasons pfd can report."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    CONFLICT = "conflict"
    PERMISSION_DENIED = "permission_denied"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN = "unknown"


_REASON_ALIASES: dict[str, ServiceErrorReason] = {
    "not_found": ServiceErrorReason.NOT_FOUND,
    "notfound": ServiceErrorReason.NOT_FOUND,
    "already_exists": ServiceErrorReason.ALREADY_EXISTS,
    "alreadyexists": ServiceErrorReason.ALREADY_EXISTS,
    "username_taken": ServiceErrorReason.ALREADY_EXISTS,
    "conflict": ServiceErrorReason.CONFLICT,
    "permission_denied": ServiceErrorReason.PERMISSION_DENIED,
    "forbidden": ServiceErrorReason.PERMISSION_DENIED,
    "unauthenticated": ServiceErrorReason.UNAUTHENTICATED,
    "unauthorized": ServiceErrorReason.UNAUTHENTICATED,
    "invalid_argument": ServiceErrorReason.INVALID_ARGUMENT,
    "validation_error": ServiceErrorReason.INVALID_ARGUMENT,
    "bad_request": ServiceErrorReason.INVALID_ARGUMENT,
}

_STATUS_REASONS: dict[int, ServiceErrorReason] = {
    400: ServiceErrorReason.INVALID_ARGUMENT,
    401: ServiceErrorReason.UNAUTHENTICATED,
    403: ServiceErrorReason.PERMISSION_DENIED,
    404: ServiceErrorReason.NOT_FOUND,
    409: ServiceErrorReason.CONFLICT,
    422: ServiceErrorReason.INVALID_ARGUMENT,
}


def classify_reason(code: str | int | None, status_code: int) -> ServiceErrorReason:
    """Resolve a reason from the body ``code`` first, then the HTTP status.

    Examples:
        >>> classify_reason("AlreadyExists", 400)
        <ServiceErrorReason.ALREADY_EXISTS: 'already_exists'>
        >>> classify_reason(404, 500)
        <ServiceErrorReason.NOT_FOUND: 'not_found'>
        >>> classify_reason(None, 503)
        <ServiceErrorReason.UNKNOWN: 'unknown'>
    """
    if isinstance(code, str) and code.strip():
        normalized = code.strip().lower().replace("-", "_").replace(" ", "_")
        if normalized in _REASON_ALIASES:
            return _REASON_ALIASES[normalized]
        if normalized.isdigit():
            return _STATUS_REASONS.get(int(normalized), ServiceErrorReason.UNKNOWN)
    if isinstance(code, int) and not isinstance(code, bool):
        return _STATUS_REASONS.get(code, ServiceErrorReason.UNKNOWN)
    return _STATUS_REASONS.get(status_code, ServiceErrorReason.UNKNOWN)


class PfmError(Exception):
    """Base exception for failures talking to pfd."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint


class RemoteServiceError(PfmError):
    """pfd received the request and reported a failure."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.code = code
        self.reason = classify_reason(code, status_code)


class UnexpectedResponseError(PfmError):
    """pfd accepted the request but its success body could not be read.

    The request may already have been applied.
    """

    def __init__(self, message: str, *, status_code: int, body: str) -> None:
        super().__init__(
            message,
            hint="pfd may have applied the request; check its state before retrying.",
        )
        self.status_code = status_code
        self.body = body


class TransportError(PfmError):
    """The request never got an answer (connection refused, timeout)."""
