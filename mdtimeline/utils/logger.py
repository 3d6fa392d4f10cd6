"""Log-level resolution and process-wide logging configuration."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_LOGGING_CONFIGURED = False


def _resolve_level(level: str | int | None) -> int:
    """Resolves an explicit level, then LOG_LEVEL, then INFO."""
    candidate: str | int | None = level
    if candidate is None:
        candidate = os.getenv(_LOG_LEVEL_ENV, "").strip() or None
    if candidate is None:
        return logging.INFO
    if isinstance(candidate, int):
        return candidate
    resolved = logging.getLevelName(candidate.strip().upper())
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def configure_logging(level: str | int | None = None) -> int:
    """Configures root logging and returns the applied level.

    Args:
        level: Explicit level name or number. When omitted, the LOG_LEVEL
            environment variable is used, falling back to INFO.

    Returns:
        The numeric level applied to the root logger.
    """
    global _LOGGING_CONFIGURED

    applied_level = _resolve_level(level)
    root_logger = logging.getLogger()
    if not _LOGGING_CONFIGURED and not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=applied_level)
        for handler in root_logger.handlers:
            handler.setLevel(applied_level)
    root_logger.setLevel(applied_level)
    _LOGGING_CONFIGURED = True
    return applied_level


def get_logger(name: str) -> logging.Logger:
    """Returns a module logger, configuring logging on first use only."""
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return logging.getLogger(name)
