"""Shared pytest fixtures and test helpers for pfm tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from pfm.config.models import ServiceConfig
from pfm.domain.remote import (
    AssetState,
    SetAssetRequest,
    SignupRequest,
    SignupResponse,
)
from pfm.infrastructure.client import PfdClient
from pfm.services.telemetry import disable_telemetry


class RecordingClient:
    """In-memory stand-in for the pfd client.

    Records every call.  Set :attr:`error` to make the next calls raise,
    or :attr:`asset` / :attr:`signup_response` to control the payloads.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.error: Exception | None = None
        self.asset: AssetState | None = None
        self.signup_response: SignupResponse | None = None
        self.configs: list[ServiceConfig] = []
        self.closed = False

    def set_asset(self, request: SetAssetRequest) -> AssetState:
        self.calls.append(("set_asset", request))
        if self.error is not None:
            raise self.error
        return self.asset or AssetState(id=request.asset_id, fields=dict(request.fields))

    def signup(self, request: SignupRequest) -> SignupResponse:
        self.calls.append(("signup", request))
        if self.error is not None:
            raise self.error
        if self.signup_response is not None:
            return self.signup_response
        return SignupResponse.model_validate(
            {"user": {"username": request.username}, "auth_token": {"id": "tok-123"}}
        )

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in an empty directory with no ``PFM_*`` variables.

    Keeps a developer's own pfm.toml or environment from leaking in.
    """
    for name in list(os.environ):
        if name.startswith("PFM_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_runtime_state() -> Generator[None]:
    """Undo the telemetry and logging setup a CLI invocation performs."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    disable_telemetry()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def recording_client() -> RecordingClient:
    """A fresh :class:`RecordingClient` for service-level tests."""
    return RecordingClient()


@pytest.fixture
def fake_client(
    recording_client: RecordingClient, monkeypatch: pytest.MonkeyPatch
) -> RecordingClient:
    """Route the CLI's pfd client to a :class:`RecordingClient`."""
    client = recording_client

    def build(config: ServiceConfig) -> RecordingClient:
        client.configs.append(config)
        return client

    monkeypatch.setattr("pfm.commands._context.build_client", build)
    return client


@pytest.fixture
def mock_pfd(monkeypatch: pytest.MonkeyPatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """Route the CLI's real PfdClient through an ``httpx.MockTransport``.

    Call the fixture with a request handler; it returns the list that
    collects every request sent.
    """

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def build(config: ServiceConfig) -> PfdClient:
            return PfdClient.from_config(config, transport=httpx.MockTransport(record))

        monkeypatch.setattr("pfm.commands._context.build_client", build)
        return seen

    return install
