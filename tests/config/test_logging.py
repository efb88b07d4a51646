"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from pfm.config.logging import (
    REDACTED,
    configure_logging,
    level_for_verbosity,
    redact_secrets,
)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pfm = logging.getLogger("pfm")
    pfm_level = pfm.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pfm.setLevel(pfm_level)


@pytest.mark.parametrize(
    ("verbosity", "level"),
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_level_for_verbosity(verbosity: int, level: int) -> None:
    assert level_for_verbosity(verbosity) == level


class TestConfigureLogging:
    def test_debug_verbosity(self) -> None:
        configure_logging(verbosity=2)
        assert logging.getLogger("pfm").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_quiet_by_default(self) -> None:
        configure_logging()
        assert logging.getLogger("pfm").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbosity=1, log_json=False)
        log = structlog.get_logger("pfm.test")
        log.warning("hello world", key="val")
        # Smoke test — verify no exception; format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=1, log_json=True)
        log = structlog.get_logger("pfm.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pfm.test"
        assert "timestamp" in parsed

    def test_stdlib_pfm_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbosity=2, log_json=True)

        logging.getLogger("pfm.infrastructure.client").debug("pfd request: PUT /assets/a1")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "pfd request: PUT /assets/a1"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "pfm.infrastructure.client"

    def test_info_hidden_at_default_verbosity(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=0, log_json=True)
        logging.getLogger("pfm.services.base").info("pfd rejected set_asset")
        assert capfd.readouterr().err == ""

    def test_http_library_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=2, log_json=True)

        logging.getLogger("httpx").debug("HTTP Request: PUT")
        logging.getLogger("httpcore").debug("connect_tcp.started")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbosity=1, log_json=False)
        configure_logging(verbosity=1, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_secret_keys_are_redacted(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=1, log_json=True)
        log = structlog.get_logger("pfm.test")
        log.warning("signup attempt", username="alice", password="hunter2")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["username"] == "alice"
        assert parsed["password"] == REDACTED
        assert "hunter2" not in json.dumps(parsed)


def test_redact_secrets_leaves_none_alone() -> None:
    event = {"event": "x", "token": None, "auth_token": "abc"}
    out = redact_secrets(None, "info", event)
    assert out["token"] is None
    assert out["auth_token"] == REDACTED
