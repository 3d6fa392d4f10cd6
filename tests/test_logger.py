"""Tests for log-level resolution and how mdtimeline modules report through logging."""

import logging

import pytest

import mdtimeline.config as config
import mdtimeline.utils.logger as logger_utils
from mdtimeline.host.buffer import BufferHost


@pytest.fixture(autouse=True)
def _restore_root_level():
    """Keeps root logger level changes local to each test."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    yield
    root_logger.setLevel(original_level)


def test_configure_logging_defaults_to_info(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Default configuration should resolve to INFO when LOG_LEVEL is unset."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert logger_utils.configure_logging() == logging.INFO


def test_configure_logging_reads_log_level_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Environment LOG_LEVEL should define the default when no explicit level exists."""
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert logger_utils.configure_logging() == logging.WARNING


def test_configure_logging_explicit_level_overrides_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Explicit runtime level should override LOG_LEVEL."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    assert logger_utils.configure_logging("debug") == logging.DEBUG


def test_configure_logging_falls_back_on_unknown_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Unrecognized level names resolve to INFO."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert logger_utils.configure_logging("chatty") == logging.INFO


def test_get_logger_does_not_reapply_env_after_explicit_configuration(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Once configured, later logger retrieval should not reset level from environment."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    logger_utils.configure_logging("INFO")

    logger_utils.get_logger("mdtimeline.test")

    assert logging.getLogger().level == logging.INFO


def test_configure_logging_sets_handler_level_during_first_initialization() -> None:
    """First-time basicConfig path should align handler level with resolved level."""
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_configured = logger_utils._LOGGING_CONFIGURED

    for handler in original_handlers:
        root_logger.removeHandler(handler)
    logger_utils._LOGGING_CONFIGURED = False

    try:
        applied_level = logger_utils.configure_logging("WARNING")

        assert applied_level == logging.WARNING
        assert root_logger.handlers
        assert all(handler.level == logging.WARNING for handler in root_logger.handlers)
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        for handler in original_handlers:
            root_logger.addHandler(handler)
        logger_utils._LOGGING_CONFIGURED = original_configured


def test_configure_logging_accepts_numeric_levels() -> None:
    """Numeric levels pass through unchanged."""
    assert logger_utils.configure_logging(logging.DEBUG) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_treats_blank_env_as_unset(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A whitespace-only LOG_LEVEL falls back to INFO."""
    monkeypatch.setenv("LOG_LEVEL", "   ")

    assert logger_utils.configure_logging() == logging.INFO


def test_settings_warnings_are_attributed_to_config_module(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Ignored environment values are logged by mdtimeline.config."""
    caplog.set_level(logging.WARNING)
    monkeypatch.setenv("MDTIMELINE_FORMAT", "verbose")

    config.reload_settings()

    records = [record for record in caplog.records if "MDTIMELINE_FORMAT" in record.getMessage()]
    assert [record.name for record in records] == ["mdtimeline.config"]
    assert records[0].levelno == logging.WARNING


def test_host_notifications_are_logged_at_their_level(caplog: pytest.LogCaptureFixture) -> None:
    """User notifications from the buffer host also reach the log."""
    caplog.set_level(logging.INFO)
    host = BufferHost()

    host.notify_user("Timeline disabled", logging.INFO)
    host.notify_user("Invalid timeline format 'x'.", logging.WARNING)

    levels = [
        (record.name, record.levelno, record.getMessage())
        for record in caplog.records
        if record.name == "mdtimeline.host.buffer"
    ]
    assert levels == [
        ("mdtimeline.host.buffer", logging.INFO, "Timeline disabled"),
        ("mdtimeline.host.buffer", logging.WARNING, "Invalid timeline format 'x'."),
    ]
