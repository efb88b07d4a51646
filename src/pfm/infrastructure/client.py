"""httpx-backed pfd client.

This module is the only place that talks HTTP.  Every httpx exception is
caught here and re-raised as :class:`TransportError`; every non-2xx
response becomes a :class:`RemoteServiceError`; a 2xx body that does not
match the expected model becomes an :class:`UnexpectedResponseError`.
The transport is built with ``retries=0`` so each operation issues
exactly one request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from pfm import __version__
from pfm.domain.remote import (
    ApiError,
    AssetState,
    SetAssetRequest,
    SignupRequest,
    SignupResponse,
)
from pfm.infrastructure.errors import (
    RemoteServiceError,
    TransportError,
    UnexpectedResponseError,
)

if TYPE_CHECKING:
    from pfm.config.models import ServiceConfig

logger = logging.getLogger(__name__)

_BODY_EXCERPT = 500

M = TypeVar("M", bound=BaseModel)


class PfdClient:
    """Synchronous pfd API client.

    Satisfies :class:`~pfm.domain.remote.RemoteServiceClient` structurally.
    Use as a context manager (or call :meth:`close`) to release the
    connection pool.
    """

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> PfdClient:
        """Build a client for *config*; *transport* overrides the network layer."""
        headers = {
            "Accept": "application/json",
            "User-Agent": f"pfm/{__version__}",
        }
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"
        http = httpx.Client(
            base_url=config.base_url.rstrip("/"),
            headers=headers,
            timeout=config.timeout_seconds,
            transport=transport or httpx.HTTPTransport(retries=0),
        )
        return cls(http)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> PfdClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_asset(self, request: SetAssetRequest) -> AssetState:
        """``PUT /assets/{id}`` and return the confirmed asset state."""
        path = f"/assets/{quote(request.asset_id, safe='')}"
        response = self._send("PUT", path, request.to_body())
        return self._read(AssetState, response)

    def signup(self, request: SignupRequest) -> SignupResponse:
        """``POST /users/`` and return the created user."""
        response = self._send("POST", "/users/", request.to_body())
        return self._read(SignupResponse, response)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _send(self, method: str, path: str, body: dict[str, Any]) -> httpx.Response:
        logger.debug("pfd request: %s %s", method, path)
        try:
            response = self._http.request(method, path, json=body)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Timed out waiting for pfd: {exc}",
                hint="Retry later or raise --timeout.",
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Could not reach pfd: {exc}",
                hint="Check your network connection and --base-url.",
            ) from exc

        logger.debug("pfd response: %s %s -> %d", method, path, response.status_code)
        if not response.is_success:
            raise self._service_error(response)
        return response

    @staticmethod
    def _service_error(response: httpx.Response) -> RemoteServiceError:
        """Build a RemoteServiceError from an error response."""
        error: ApiError | None = None
        try:
            error = ApiError.model_validate(response.json())
        except (ValueError, ValidationError):
            error = None

        if error is not None and error.message:
            message = error.message
        else:
            message = response.text[:_BODY_EXCERPT] or response.reason_phrase or "Request failed"
        return RemoteServiceError(
            message,
            status_code=response.status_code,
            code=error.code if error is not None else None,
        )

    @staticmethod
    def _read(model_cls: type[M], response: httpx.Response) -> M:
        """Validate a success body against *model_cls*."""
        try:
            data = response.json() if response.content else {}
        except ValueError as exc:
            raise _unreadable(response, "a non-JSON body") from exc
        try:
            return model_cls.model_validate(data)
        except ValidationError as exc:
            raise _unreadable(
                response, f"an unexpected response shape ({exc.error_count()} error(s))"
            ) from exc


def _unreadable(response: httpx.Response, what: str) -> UnexpectedResponseError:
    return UnexpectedResponseError(
        f"pfd returned HTTP {response.status_code} with {what}.",
        status_code=response.status_code,
        body=response.text[:_BODY_EXCERPT],
    )
