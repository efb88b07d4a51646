"""CommandResult and CommandError — the normalized outcome of one invocation.

INVARIANT: Dispatcher.execute always returns exactly one CommandResult.
The renderer consumes it and selects the exit code; it never alters the
classification.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorKind(StrEnum):
    """Classification of a failed invocation."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNAVAILABLE = "UNAVAILABLE"
    UNKNOWN = "UNKNOWN"


class ErrorOrigin(StrEnum):
    """Where a failure was detected; drives the remediation hint."""

    LOCAL = "local"
    REMOTE = "remote"
    TRANSPORT = "transport"


class CommandError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    kind: ErrorKind
    message: str
    origin: ErrorOrigin = ErrorOrigin.LOCAL
    detail: dict[str, Any] = Field(default_factory=dict)


class CommandResult(BaseModel):
    """Return type of every dispatched command.

    Attributes:
        ok: Whether the command succeeded.
        op: Name of the operation (e.g. ``"set_asset"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing spans in verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: CommandError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(cls, op: str, data: dict[str, Any] | None = None) -> CommandResult:
        return cls(ok=True, op=op, data=data or {})

    @classmethod
    def failure(
        cls,
        op: str,
        kind: ErrorKind,
        message: str,
        *,
        origin: ErrorOrigin = ErrorOrigin.LOCAL,
        detail: dict[str, Any] | None = None,
    ) -> CommandResult:
        return cls(
            ok=False,
            op=op,
            error=CommandError(
                kind=kind,
                message=message,
                origin=origin,
                detail=detail or {},
            ),
        )
