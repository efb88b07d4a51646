"""Exit-code constants and the CommandResult → exit status mapping.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
Each ErrorKind lands in its own band; NOT_FOUND and CONFLICT share one
because both mean "the target's state on pfd is not what you assumed".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pfm.services.result import ErrorKind

if TYPE_CHECKING:
    from pfm.services.result import CommandResult

SUCCESS: int = 0
"""Command completed without error."""

UNKNOWN_ERROR: int = 1
"""pfd reported an error pfm could not classify, or pfm itself failed."""

INVALID_ARGUMENT: int = 2
"""Bad arguments, rejected locally or by pfd.  Matches Click's usage-error code."""

NOT_FOUND_OR_CONFLICT: int = 3
"""The asset or user does not exist, or already exists."""

UNAVAILABLE: int = 4
"""pfd could not be reached or did not answer in time."""

PERMISSION_DENIED: int = 5
"""pfd refused the request for the configured credentials."""

_KIND_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: INVALID_ARGUMENT,
    ErrorKind.NOT_FOUND: NOT_FOUND_OR_CONFLICT,
    ErrorKind.CONFLICT: NOT_FOUND_OR_CONFLICT,
    ErrorKind.PERMISSION_DENIED: PERMISSION_DENIED,
    ErrorKind.UNAVAILABLE: UNAVAILABLE,
    ErrorKind.UNKNOWN: UNKNOWN_ERROR,
}


def exit_code_for(result: CommandResult) -> int:
    """Return the process exit status for *result*."""
    if result.ok:
        return SUCCESS
    if result.error is None:
        return UNKNOWN_ERROR
    return _KIND_CODES.get(result.error.kind, UNKNOWN_ERROR)
