"""Rendering of reading-time windows as annotation strings.

All components are derived from a whole number of seconds,
``floor(minutes * 60)``, so hours, minutes and seconds never drift apart.

Display formats:
    - full:  [00:00:00 - 00:01:30 @ 01:30]
    - range: [00:00:00 - 00:01:30]
    - short: [00:00:00]
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from typing import NamedTuple

from mdtimeline.config import DEFAULT_DISPLAY_FORMAT, DisplayFormat, parse_display_format
from mdtimeline.utils.logger import get_logger

logger = get_logger(__name__)


def minutes_to_seconds(minutes: float) -> int:
    """Floors a minute value to whole seconds."""
    return math.floor(minutes * 60)


def minutes_to_hhmmss(minutes: float) -> str:
    """Formats minutes as ``HH:MM:SS`` with an unbounded hour field."""
    total_seconds = minutes_to_seconds(minutes)
    hours, remaining = divmod(total_seconds, 3600)
    mins, secs = divmod(remaining, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def minutes_to_mmss(minutes: float) -> str:
    """Formats minutes as ``MM:SS`` with an unbounded minute field."""
    mins, secs = divmod(minutes_to_seconds(minutes), 60)
    return f"{mins:02d}:{secs:02d}"


class TimeRangeFormatter(ABC):
    """Abstract base class for annotation formatters."""

    @abstractmethod
    def format_range(self, start_minutes: float, duration_minutes: float) -> str:
        """Render one section's reading window."""
        pass


class FullFormatter(TimeRangeFormatter):
    """Start, end and duration: ``[HH:MM:SS - HH:MM:SS @ MM:SS]``."""

    def format_range(self, start_minutes: float, duration_minutes: float) -> str:
        start_time = minutes_to_hhmmss(start_minutes)
        end_time = minutes_to_hhmmss(start_minutes + duration_minutes)
        duration = minutes_to_mmss(duration_minutes)
        return f"[{start_time} - {end_time} @ {duration}]"


class RangeFormatter(TimeRangeFormatter):
    """Start and end: ``[HH:MM:SS - HH:MM:SS]``."""

    def format_range(self, start_minutes: float, duration_minutes: float) -> str:
        start_time = minutes_to_hhmmss(start_minutes)
        end_time = minutes_to_hhmmss(start_minutes + duration_minutes)
        return f"[{start_time} - {end_time}]"


class ShortFormatter(TimeRangeFormatter):
    """Start only: ``[HH:MM:SS]``."""

    def format_range(self, start_minutes: float, duration_minutes: float) -> str:
        return f"[{minutes_to_hhmmss(start_minutes)}]"


FORMATTERS: dict[DisplayFormat, TimeRangeFormatter] = {
    DisplayFormat.FULL: FullFormatter(),
    DisplayFormat.RANGE: RangeFormatter(),
    DisplayFormat.SHORT: ShortFormatter(),
}


def format_time_range(
    start_minutes: float,
    duration_minutes: float,
    display_format: DisplayFormat | str = DEFAULT_DISPLAY_FORMAT,
) -> str:
    """Renders a reading window in the requested display format.

    Raises:
        ValueError: If ``display_format`` is not a known format.
    """
    formatter = FORMATTERS[parse_display_format(display_format)]
    return formatter.format_range(start_minutes, duration_minutes)


class ParsedTimeRange(NamedTuple):
    """Whole-second components recovered from a rendered annotation."""

    start_seconds: int
    end_seconds: int | None
    duration_seconds: int | None


_CLOCK = r"(\d{2,}):(\d{2}):(\d{2})"
_TIME_RANGE_PATTERN = re.compile(
    rf"^\[{_CLOCK}(?: - {_CLOCK}(?: @ (\d{{2,}}):(\d{{2}}))?)?\]$"
)


def _clock_seconds(hours: str, minutes: str, seconds: str) -> int:
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds)


def parse_time_range(text: str) -> ParsedTimeRange:
    """Parses a ``full``, ``range`` or ``short`` annotation into seconds.

    Raises:
        ValueError: If ``text`` is not a rendered annotation.
    """
    match = _TIME_RANGE_PATTERN.match(text.strip())
    if match is None:
        logger.debug("Unparseable time range: %s", text)
        raise ValueError(f"Invalid time range annotation: {text!r}")

    groups = match.groups()
    start = _clock_seconds(*groups[0:3])
    end = _clock_seconds(*groups[3:6]) if groups[3] is not None else None
    duration = None
    if groups[6] is not None:
        duration = int(groups[6]) * 60 + int(groups[7])
    return ParsedTimeRange(start, end, duration)
