"""Tests for the format_result dispatcher and OutputSettings."""

import json

import pytest
from pydantic import ValidationError

from pfm.output.formatters import OutputSettings, format_result
from pfm.services.result import CommandResult, ErrorKind


def _ok(op: str = "set_asset", **data: object) -> CommandResult:
    return CommandResult.success(op, dict(data))


def _err(op: str = "set_asset", msg: str = "fail") -> CommandResult:
    return CommandResult.failure(op, ErrorKind.NOT_FOUND, msg)


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False

    def test_frozen(self) -> None:
        s = OutputSettings(json_output=True)
        with pytest.raises(ValidationError):
            s.quiet = True  # type: ignore[misc]


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok(id="a1"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "set_asset"
        assert data["data"]["id"] == "a1"

    def test_json_mode_error(self) -> None:
        output = format_result(_err(msg="Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["message"] == "Bad"
        assert data["error"]["kind"] == "NOT_FOUND"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_ok(id="a1"), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True


class TestFormatResultQuiet:
    def test_quiet_success(self) -> None:
        output = format_result(_ok(id="a1"), settings=OutputSettings(quiet=True))
        assert output == "a1"

    def test_quiet_error(self) -> None:
        output = format_result(_err(msg="gone"), settings=OutputSettings(quiet=True))
        assert output == "ERROR: set_asset — gone"


class TestFormatResultHuman:
    def test_default_settings(self) -> None:
        output = format_result(_ok(id="a1", fields={}))
        assert "OK" in output
        assert "a1" in output

    def test_verbose_passed_through(self) -> None:
        result = CommandResult.failure(
            "set_asset", ErrorKind.UNKNOWN, "boom", detail={"status_code": 500}
        )
        quiet = format_result(result)
        verbose = format_result(result, settings=OutputSettings(verbose=True))
        assert "status_code" not in quiet
        assert "status_code" in verbose
