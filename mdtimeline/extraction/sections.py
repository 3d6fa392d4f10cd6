"""Partitioning of a document into header-owned sections."""

from __future__ import annotations

import re
from collections.abc import Sequence

from mdtimeline.domain import HeaderNode, Section
from mdtimeline.utils.logger import get_logger

logger = get_logger(__name__)

_HEADER_LINE_PATTERN = re.compile(r"^#+ ")


def has_content(lines: Sequence[str]) -> bool:
    """Returns whether any non-blank line survives trimming blank edges."""
    start = 0
    end = len(lines) - 1
    while start <= end and not lines[start].strip():
        start += 1
    while end >= start and not lines[end].strip():
        end -= 1
    return start <= end


def _content_start_row(header: HeaderNode) -> int:
    """Returns the first row after the header's own span."""
    end = header.end_position
    if end.column == 0:
        return max(end.row, header.start_position.row + 1)
    return end.row + 1


def _section_for(
    header: HeaderNode,
    next_header: HeaderNode | None,
    lines: Sequence[str],
) -> Section:
    """Builds the section owned by ``header``, clamped to the document."""
    last_row = len(lines) - 1
    content_start = _content_start_row(header)
    if next_header is not None:
        content_end = next_header.start_position.row - 1
    else:
        content_end = last_row
    content_end = min(content_end, last_row)

    content: tuple[str, ...] = ()
    if content_end >= content_start:
        content = tuple(lines[content_start : content_end + 1])
        if content and _HEADER_LINE_PATTERN.match(content[0]):
            content = content[1:]
            content_start += 1
    return Section(
        header=header,
        content_start=content_start,
        content_end=content_end,
        lines=content,
    )


def extract_sections(
    headers: Sequence[HeaderNode],
    lines: Sequence[str],
) -> list[Section]:
    """Splits ``lines`` into the ordered sections owned by ``headers``.

    A leading level-1 header is the document title and owns no section.
    Every other header owns the rows up to the next header's start row, or up
    to the end of the document. Sections whose lines are all blank are
    discarded.

    Args:
        headers: Header nodes in any order.
        lines: Read-only snapshot of every document line.

    Returns:
        Sections with content, in document order.
    """
    ordered = sorted(headers, key=lambda header: header.start_position.row)
    sections: list[Section] = []
    for index, header in enumerate(ordered):
        if index == 0 and header.level == 1:
            continue
        next_header = ordered[index + 1] if index + 1 < len(ordered) else None
        section = _section_for(header, next_header, lines)
        if has_content(section.lines):
            sections.append(section)

    logger.debug(
        "Extracted %d sections from %d headers over %d lines.",
        len(sections),
        len(ordered),
        len(lines),
    )
    return sections
