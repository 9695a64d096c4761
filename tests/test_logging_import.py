"""
Test that imbibe_action.logging can be imported without circular import and logger works.
"""

from __future__ import annotations

import io
import json

import pytest


@pytest.fixture
def restore_logging():
    """Put structlog back on the env-derived config after a test reconfigures it."""
    yield
    from imbibe_action.config.env import get_log_format, get_log_level
    from imbibe_action.logging import configure_structlog

    configure_structlog(get_log_level(), get_log_format())


def _clear_env(monkeypatch, name):
    # setenv first so monkeypatch records the original state and restores it
    monkeypatch.setenv(name, "unset")
    monkeypatch.delenv(name)


def test_logging_import():
    """Import get_logger and use the logger."""
    from imbibe_action.logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    logger.info("test_message", key="value")


def test_bind_request_smoke():
    """bind_request adds request_id to the structlog context."""
    import structlog

    from imbibe_action.logging import bind_request

    bind_request("req-123")
    assert structlog.contextvars.get_contextvars()["request_id"] == "req-123"
    structlog.contextvars.clear_contextvars()


def test_configure_filters_level_and_renders_json(restore_logging):
    """WARNING level drops info lines; JSON lines carry event_type and logger."""
    from imbibe_action.logging import configure_structlog, get_logger

    buf = io.StringIO()
    configure_structlog("WARNING", "json", stream=buf)
    logger = get_logger("imbibe_action.tests")
    logger.info("hidden_event")
    logger.warning("shown_event", domain="imbibed.sol")

    lines = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert len(lines) == 1
    assert lines[0]["event_type"] == "shown_event"
    assert lines[0]["level"] == "warning"
    assert lines[0]["logger"] == "imbibe_action.tests"
    assert lines[0]["domain"] == "imbibed.sol"
    assert "timestamp" in lines[0]


def test_module_logger_follows_reconfiguration(restore_logging):
    """Loggers created at import time honor a later configure_structlog (main.py applies Settings)."""
    from imbibe_action.core import errors
    from imbibe_action.logging import configure_structlog

    buf = io.StringIO()
    configure_structlog("ERROR", "json", stream=buf)
    errors.logger.warning("below_threshold")
    errors.logger.error("above_threshold")
    assert [json.loads(line)["event_type"] for line in buf.getvalue().splitlines()] == ["above_threshold"]


def test_unknown_level_and_format_fall_back(restore_logging):
    from imbibe_action.logging import configure_structlog, get_logger

    buf = io.StringIO()
    configure_structlog("CHATTY", "xml", stream=buf)
    get_logger("t").info("fallback_event")
    assert json.loads(buf.getvalue())["event_type"] == "fallback_event"


def test_log_settings_read_from_dotenv(tmp_path, monkeypatch):
    """LOG_LEVEL / LOG_FORMAT set only in .env are visible to the logging config."""
    from imbibe_action.config import env

    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("LOG_LEVEL=warning\nLOG_FORMAT=console\n")
    monkeypatch.setattr(env, "_ENV_PATH", dotenv_file)
    _clear_env(monkeypatch, "LOG_LEVEL")
    _clear_env(monkeypatch, "LOG_FORMAT")

    assert env.get_log_level() == "WARNING"
    assert env.get_log_format() == "console"


def test_process_env_wins_over_dotenv(tmp_path, monkeypatch):
    from imbibe_action.config import env

    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("LOG_LEVEL=warning\n")
    monkeypatch.setattr(env, "_ENV_PATH", dotenv_file)
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert env.get_log_level() == "DEBUG"
