"""Tests for the ``pfm signup`` command."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from pfm.cli import cli
from pfm.domain.remote import SignupResponse
from pfm.infrastructure.errors import RemoteServiceError, TransportError


class TestSignupSuccess:
    def test_with_password_flag(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(cli, ["signup", "--username", "bob", "--password", "s3cret"])
        assert result.exit_code == 0, result.output
        assert "bob" in result.stdout
        assert "s3cret" not in result.output
        assert "tok-123" not in result.output

        op, request = fake_client.calls[0]
        assert op == "signup"
        assert request.username == "bob"
        assert request.password.get_secret_value() == "s3cret"

    def test_password_prompt(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(cli, ["signup", "--username", "bob"], input="hunter2\n")
        assert result.exit_code == 0, result.output
        assert "Password" in result.output
        assert "hunter2" not in result.output
        _, request = fake_client.calls[0]
        assert request.password.get_secret_value() == "hunter2"

    def test_prompt_keeps_json_stdout_clean(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "signup", "--username", "bob"], input="hunter2\n"
        )
        assert result.exit_code == 0, result.output
        assert "Password" in result.stderr
        assert "Password" not in result.stdout
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["data"]["username"] == "bob"

    def test_password_from_env(
        self, cli_runner: CliRunner, fake_client: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PFM_PASSWORD", "from-env")
        result = cli_runner.invoke(cli, ["signup", "--username", "bob"])
        assert result.exit_code == 0, result.output
        _, request = fake_client.calls[0]
        assert request.password.get_secret_value() == "from-env"

    def test_json_output_hides_secrets(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "signup", "--username", "bob", "--password", "s3cret"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["data"] == {"username": "bob", "token_issued": True}
        assert "s3cret" not in result.stdout
        assert "tok-123" not in result.stdout

    def test_no_token_issued(self, cli_runner: CliRunner, fake_client: Any) -> None:
        fake_client.signup_response = SignupResponse.model_validate({"user": {"username": "bob"}})
        result = cli_runner.invoke(
            cli, ["--json", "signup", "--username", "bob", "--password", "pw"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["token_issued"] is False

    def test_quiet_prints_username(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(cli, ["-q", "signup", "--username", "bob", "--password", "pw"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "bob"


class TestSignupFailures:
    def test_empty_username(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(cli, ["signup", "--username", "", "--password", "pw"])
        assert result.exit_code == 2
        assert "Username must not be empty" in result.stderr
        assert fake_client.calls == []
        assert fake_client.configs == []

    def test_missing_username(self, cli_runner: CliRunner, fake_client: Any) -> None:
        result = cli_runner.invoke(cli, ["signup", "--password", "pw"])
        assert result.exit_code == 2
        assert fake_client.calls == []

    def test_username_taken(self, cli_runner: CliRunner, fake_client: Any) -> None:
        fake_client.error = RemoteServiceError(
            "Username already taken", status_code=400, code="username_taken"
        )
        result = cli_runner.invoke(
            cli, ["--json", "signup", "--username", "bob", "--password", "pw"]
        )
        assert result.exit_code == 3
        payload = json.loads(result.stderr)
        assert payload["error"]["kind"] == "CONFLICT"
        assert payload["error"]["detail"]["service_code"] == "username_taken"
        assert len(fake_client.calls) == 1

    def test_rejected_password(self, cli_runner: CliRunner, fake_client: Any) -> None:
        fake_client.error = RemoteServiceError("Password too short", status_code=422)
        result = cli_runner.invoke(cli, ["signup", "--username", "bob", "--password", "pw"])
        assert result.exit_code == 2
        assert "pfd: Password too short" in result.stderr

    def test_unavailable(self, cli_runner: CliRunner, fake_client: Any) -> None:
        fake_client.error = TransportError("Timed out waiting for pfd")
        result = cli_runner.invoke(cli, ["signup", "--username", "bob", "--password", "pw"])
        assert result.exit_code == 4
        assert "Timed out" in result.stderr


class TestSignupOverHttp:
    def test_post_request_shape(
        self, cli_runner: CliRunner, mock_pfd: Callable[..., list[httpx.Request]]
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                201, json={"user": {"username": "bob"}, "auth_token": {"id": "t0k"}}
            )

        seen = mock_pfd(handler)
        result = cli_runner.invoke(cli, ["signup", "--username", "bob", "--password", "s3cret"])
        assert result.exit_code == 0, result.output
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/users/"
        assert json.loads(request.content) == {"username": "bob", "password": "s3cret"}
        assert "t0k" not in result.output


def test_signup_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["signup", "--examples"])
    assert result.exit_code == 0
    assert "pfm signup --username" in result.output


def test_unreadable_success_body_is_not_reported_as_outage(
    cli_runner: CliRunner, mock_pfd: Callable[..., list[httpx.Request]]
) -> None:
    seen = mock_pfd(lambda request: httpx.Response(201, text="created"))
    result = cli_runner.invoke(cli, ["signup", "--username", "bob", "--password", "s3cret"])
    assert result.exit_code == 1
    assert len(seen) == 1
    assert "pfd returned HTTP 201 with a non-JSON body." in result.stderr
    assert "check its state before retrying" in result.stderr
