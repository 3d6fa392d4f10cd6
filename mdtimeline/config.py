"""Typed configuration for reading-time estimation and the command-line tool.

Two layers live here:

- ``EstimatorConfig`` is the value every pipeline stage reads. One
  ``Timeline`` controller owns one instance and replaces it through its
  setters, so independent documents never share configuration.
- ``AppConfig`` holds process defaults read from the environment by
  ``reload_settings`` and cached for ``get_settings``.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from threading import Lock

from mdtimeline.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_WORDS_PER_MINUTE = 200.0


class DisplayFormat(StrEnum):
    """Closed set of annotation display formats."""

    FULL = "full"
    RANGE = "range"
    SHORT = "short"


DEFAULT_DISPLAY_FORMAT = DisplayFormat.FULL


@dataclass(frozen=True)
class EstimatorConfig:
    """Settings read by every stage of one estimation pass."""

    words_per_minute: float = DEFAULT_WORDS_PER_MINUTE
    display_format: DisplayFormat = DEFAULT_DISPLAY_FORMAT
    enabled: bool = True


def parse_display_format(value: object) -> DisplayFormat:
    """Validates a display format against the closed enum.

    Raises:
        ValueError: If ``value`` is not one of ``full``, ``range`` or ``short``.
    """
    if isinstance(value, DisplayFormat):
        return value
    if isinstance(value, str):
        try:
            return DisplayFormat(value.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(repr(item.value) for item in DisplayFormat)
    raise ValueError(f"Invalid timeline format {value!r}. Expected one of {choices}.")


def validate_words_per_minute(value: object) -> float:
    """Returns ``value`` as a positive finite reading rate.

    Raises:
        ValueError: If ``value`` is not a number or is not strictly positive.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Words per minute must be a number, got {value!r}.")
    try:
        rate = float(value)
    except ValueError as err:
        raise ValueError(f"Words per minute must be a number, got {value!r}.") from err
    if not math.isfinite(rate) or rate <= 0.0:
        raise ValueError(f"Words per minute must be positive, got {value!r}.")
    return rate


@dataclass(frozen=True)
class AppConfig:
    """Process defaults resolved from the environment."""

    words_per_minute: float = DEFAULT_WORDS_PER_MINUTE
    display_format: DisplayFormat = DEFAULT_DISPLAY_FORMAT
    enabled: bool = True
    timelines_folder: Path = Path("./timelines")

    def estimator(self) -> EstimatorConfig:
        """Builds the estimator configuration seeded from these defaults."""
        return EstimatorConfig(
            words_per_minute=self.words_per_minute,
            display_format=self.display_format,
            enabled=self.enabled,
        )


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

_SETTINGS: AppConfig | None = None
_SETTINGS_LOCK = Lock()


def _read_env(name: str) -> str | None:
    """Returns a stripped environment value, treating blanks as unset."""
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    stripped = raw_value.strip()
    return stripped or None


def _read_words_per_minute() -> float:
    raw_value = _read_env("MDTIMELINE_WORDS_PER_MINUTE")
    if raw_value is None:
        return DEFAULT_WORDS_PER_MINUTE
    try:
        return validate_words_per_minute(raw_value)
    except ValueError as err:
        logger.warning("Ignoring MDTIMELINE_WORDS_PER_MINUTE: %s", err)
        return DEFAULT_WORDS_PER_MINUTE


def _read_display_format() -> DisplayFormat:
    raw_value = _read_env("MDTIMELINE_FORMAT")
    if raw_value is None:
        return DEFAULT_DISPLAY_FORMAT
    try:
        return parse_display_format(raw_value)
    except ValueError as err:
        logger.warning("Ignoring MDTIMELINE_FORMAT: %s", err)
        return DEFAULT_DISPLAY_FORMAT


def _read_enabled() -> bool:
    raw_value = _read_env("MDTIMELINE_ENABLED")
    if raw_value is None:
        return True
    normalized = raw_value.lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning("Ignoring MDTIMELINE_ENABLED: unrecognized boolean %r.", raw_value)
    return True


def _build_settings() -> AppConfig:
    """Reads every setting from the current environment."""
    timelines_folder = _read_env("MDTIMELINE_TIMELINES_DIR")
    return AppConfig(
        words_per_minute=_read_words_per_minute(),
        display_format=_read_display_format(),
        enabled=_read_enabled(),
        timelines_folder=Path(timelines_folder or "./timelines"),
    )


def reload_settings() -> AppConfig:
    """Re-reads settings from the environment and caches the result."""
    global _SETTINGS

    with _SETTINGS_LOCK:
        _SETTINGS = _build_settings()
        return _SETTINGS


def get_settings() -> AppConfig:
    """Returns cached settings, loading them on first access."""
    if _SETTINGS is None:
        return reload_settings()
    return _SETTINGS
