"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from msgrules.config.logging import bind_command, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("msgrules")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("msgrules").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("msgrules").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("msgrules.test")
        log.debug("rule.selected", origin="incoming")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "rule.selected"
        assert parsed["origin"] == "incoming"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "msgrules.test"
        assert "timestamp" in parsed

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("msgrules.test").debug("quiet please")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_custom_stream(self) -> None:
        buf = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buf)
        structlog.get_logger("msgrules.test").debug("to buffer")
        assert json.loads(buf.getvalue())["event"] == "to buffer"


class TestBindCommand:
    def test_command_on_every_event(self) -> None:
        buf = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buf)
        bind_command("classify")
        structlog.get_logger("msgrules.test").debug("one")
        assert json.loads(buf.getvalue())["command"] == "classify"

    def test_none_clears(self) -> None:
        buf = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buf)
        bind_command("rules")
        bind_command(None)
        structlog.get_logger("msgrules.test").debug("two")
        assert "command" not in json.loads(buf.getvalue())
