"""Reading-time estimation and cumulative timeline assembly."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from mdtimeline.config import EstimatorConfig, validate_words_per_minute
from mdtimeline.domain import Section, TimelineEntry
from mdtimeline.text.word_counter import count_prose_words
from mdtimeline.utils.logger import get_logger
from mdtimeline.utils.time_format import format_time_range

logger = get_logger(__name__)


class SectionEstimate(NamedTuple):
    """Word total and reading minutes for one section."""

    word_count: int
    minutes: float
    in_fence: bool


def estimate_minutes(
    lines: Sequence[str],
    *,
    words_per_minute: float,
    in_fence: bool = False,
) -> SectionEstimate:
    """Estimates reading minutes for ``lines`` at the given rate.

    Args:
        lines: Section content lines in document order.
        words_per_minute: Positive reading rate.
        in_fence: Fence flag carried in from the preceding lines.

    Returns:
        The prose word count, ``words / words_per_minute`` unrounded, and
        the fence flag after the last line.

    Raises:
        ValueError: If ``words_per_minute`` is not positive.
    """
    rate = validate_words_per_minute(words_per_minute)
    word_count, in_fence = count_prose_words(lines, in_fence)
    return SectionEstimate(word_count, word_count / rate, in_fence)


def build_timeline(
    sections: Sequence[Section],
    lines: Sequence[str],
    config: EstimatorConfig,
) -> list[TimelineEntry]:
    """Assigns cumulative start offsets to sections in document order.

    The fence flag is carried through the whole document: rows outside any
    section (front matter, header rows, dropped sections) still open and
    close fences. Sections that estimate to zero minutes are skipped and do
    not move the running offset.

    Args:
        sections: Sections from ``extract_sections``, in document order.
        lines: The same document snapshot the sections were cut from.
        config: Reading rate and display format for this pass.

    Returns:
        One entry per section with a positive reading time.
    """
    timeline: list[TimelineEntry] = []
    cumulative_minutes = 0.0
    in_fence = False
    cursor = 0

    for section in sections:
        if section.content_start > cursor:
            _, in_fence = count_prose_words(lines[cursor : section.content_start], in_fence)
        estimate = estimate_minutes(
            section.lines,
            words_per_minute=config.words_per_minute,
            in_fence=in_fence,
        )
        in_fence = estimate.in_fence
        cursor = max(cursor, section.content_end + 1)

        if estimate.minutes <= 0:
            logger.debug("Skipping section %r without prose.", section.header.title)
            continue

        timeline.append(
            TimelineEntry(
                header=section.header,
                section=section,
                word_count=estimate.word_count,
                duration_minutes=estimate.minutes,
                start_minutes=cumulative_minutes,
                display=format_time_range(
                    cumulative_minutes,
                    estimate.minutes,
                    config.display_format,
                ),
            )
        )
        cumulative_minutes += estimate.minutes

    logger.debug(
        "Timeline built with %d entries totalling %.3f minutes.",
        len(timeline),
        cumulative_minutes,
    )
    return timeline
