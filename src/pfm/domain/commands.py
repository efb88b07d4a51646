"""Command model — the closed set of subcommands pfm can dispatch.

Each variant is a frozen pydantic model tagged by ``kind``.  The CLI
builds exactly one of them per invocation; the dispatcher matches on the
concrete class.  Shape is checked here, business validation (non-empty
identifiers and credentials) happens in the ``validate_*`` helpers so the
dispatcher can report it as a classified error instead of a parse failure.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, SecretStr


class SetAssetCommand(BaseModel):
    """``pfm set`` — replace fields on one asset."""

    model_config = {"frozen": True}

    kind: Literal["set"] = "set"
    asset_id: str
    fields: dict[str, str] = Field(default_factory=dict)


class SignupCommand(BaseModel):
    """``pfm signup`` — create a user account."""

    model_config = {"frozen": True}

    kind: Literal["signup"] = "signup"
    username: str
    password: SecretStr


class HelpCommand(BaseModel):
    """``pfm help`` — show the root usage text."""

    model_config = {"frozen": True}

    kind: Literal["help"] = "help"
    text: str = ""


class VersionCommand(BaseModel):
    """``pfm version`` / ``pfm --version``."""

    model_config = {"frozen": True}

    kind: Literal["version"] = "version"


Command = Annotated[
    SetAssetCommand | SignupCommand | HelpCommand | VersionCommand,
    Field(discriminator="kind"),
]


# --- Field assignments (``--field key=value``) ---


def parse_field_assignment(raw: str) -> tuple[str, str]:
    """Split ``key=value`` on the first ``=``.

    The value is kept verbatim (it may itself contain ``=`` or be empty).

    Examples:
        >>> parse_field_assignment("color=red")
        ('color', 'red')
        >>> parse_field_assignment("note=a=b")
        ('note', 'a=b')
    """
    key, sep, value = raw.partition("=")
    if not sep:
        msg = f"Expected key=value, got {raw!r}"
        raise ValueError(msg)
    return key, value


def parse_field_assignments(raw_items: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Collect repeated ``key=value`` items into a mapping; later keys win."""
    fields: dict[str, str] = {}
    for raw in raw_items:
        key, value = parse_field_assignment(raw)
        fields[key] = value
    return fields


# --- Local validation ---


def validate_set_asset(cmd: SetAssetCommand) -> list[str]:
    """Return validation problems for a set command (empty list when valid)."""
    problems: list[str] = []
    if not cmd.asset_id.strip():
        problems.append("Asset identifier must not be empty (--id).")
    for key in cmd.fields:
        if not key.strip():
            problems.append("Field names must not be empty (--field key=value).")
            break
    return problems


def validate_signup(cmd: SignupCommand) -> list[str]:
    """Return validation problems for a signup command (empty list when valid)."""
    problems: list[str] = []
    if not cmd.username.strip():
        problems.append("Username must not be empty (--username).")
    if not cmd.password.get_secret_value():
        problems.append("Password must not be empty (--password).")
    return problems
