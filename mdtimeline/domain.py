"""Domain data structures for headers, sections, and timeline entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Position(NamedTuple):
    """A 0-based (row, column) location in a document."""

    row: int
    column: int


class HeaderNode(NamedTuple):
    """A header as reported by the structural parser.

    ``end_position`` is exclusive: a header that includes its trailing newline
    ends at ``(row + 1, 0)``.
    """

    level: int
    title: str
    start_position: Position
    end_position: Position


@dataclass(frozen=True)
class Section:
    """Body content attributed to exactly one header."""

    header: HeaderNode
    content_start: int
    content_end: int
    lines: tuple[str, ...]


@dataclass(frozen=True)
class TimelineEntry:
    """One annotated section with its reading-time window in minutes."""

    header: HeaderNode
    section: Section
    word_count: int
    duration_minutes: float
    start_minutes: float
    display: str

    @property
    def end_minutes(self) -> float:
        return self.start_minutes + self.duration_minutes

    @property
    def row(self) -> int:
        """Row the annotation is anchored to."""
        return self.header.start_position.row

    def as_dict(self) -> dict[str, object]:
        """Returns a structured record with 1-based row locations."""
        start = self.header.start_position
        end = self.header.end_position
        return {
            "header": {
                "level": self.header.level,
                "title": self.header.title,
                "time_range": self.display,
                "location": {
                    "start": {"row": start.row + 1, "col": start.column},
                    "ending": {"row": end.row + 1, "col": end.column},
                },
            },
            "content": {
                "word_count": self.word_count,
                "reading_time": {"minutes": self.duration_minutes},
                "location": {
                    "start": {"row": self.section.content_start + 1, "col": 0},
                    "ending": {"row": self.section.content_end + 1, "col": -1},
                },
            },
        }
