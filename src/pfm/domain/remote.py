"""Request/response shapes for the pfd API and the client contract.

Assumed wire contract (JSON over HTTPS):

* ``PUT /assets/{id}`` with ``{"fields": {...}}`` returns the asset state
  ``{"id": ..., "fields": {...}}``.
* ``POST /users/`` with ``{"username": ..., "password": ...}`` returns
  ``{"user": {"username": ...}, "auth_token": {"id": ...}}``.
* Failures carry ``{"code": ..., "message": ...}`` with a non-2xx status.

Asset fields are a flat mapping of string keys to string values.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class SetAssetRequest(BaseModel):
    """Body and path parameter for ``set_asset``."""

    model_config = {"frozen": True}

    asset_id: str
    fields: dict[str, str] = Field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        return {"fields": dict(self.fields)}


class AssetState(BaseModel):
    """Asset as confirmed by pfd after a write."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    fields: dict[str, str] = Field(default_factory=dict)


class SignupRequest(BaseModel):
    """Body for ``signup``.  The password stays masked outside :meth:`to_body`."""

    model_config = {"frozen": True}

    username: str
    password: SecretStr

    def to_body(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "password": self.password.get_secret_value(),
        }


class User(BaseModel):
    """Public view of a pfd user."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    username: str


class AuthToken(BaseModel):
    """Session token issued on signup."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: SecretStr


class SignupResponse(BaseModel):
    """Successful signup payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    user: User
    auth_token: AuthToken | None = None


class ApiError(BaseModel):
    """Error body returned by pfd alongside a non-2xx status."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str | int | None = None
    message: str = ""


class RemoteServiceClient(Protocol):
    """Contract the dispatcher's handlers depend on.

    Implementations raise :class:`~pfm.infrastructure.errors.RemoteServiceError`
    when pfd reports a failure,
    :class:`~pfm.infrastructure.errors.UnexpectedResponseError` when a
    success body cannot be read and
    :class:`~pfm.infrastructure.errors.TransportError` when no response
    arrives.  They must not retry.
    """

    def set_asset(self, request: SetAssetRequest) -> AssetState: ...

    def signup(self, request: SignupRequest) -> SignupResponse: ...
