"""In-memory Markdown documents and a host that annotates them.

``BufferHost`` satisfies ``DocumentHost`` for ``MarkdownBuffer`` documents so
the pipeline can run outside an editor: from the command line, in tests, or
behind any tool that keeps Markdown text in memory.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from mdtimeline.domain import HeaderNode, Position
from mdtimeline.runtime.contracts import ParserUnavailableError
from mdtimeline.text.classifier import is_fence_delimiter
from mdtimeline.utils.logger import get_logger

logger = get_logger(__name__)

MARKDOWN_FILETYPE = "markdown"
MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".mdown", ".mkd"})

_ATX_HEADER_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$")


def parse_atx_headers(lines: Sequence[str]) -> list[HeaderNode]:
    """Finds ATX headers outside fenced code blocks.

    Headers without text (a bare ``##``) are ignored. Each header spans its
    whole row; the span ends at the start of the next row, or at the end of
    the row for the final line.
    """
    headers: list[HeaderNode] = []
    in_fence = False
    for row, line in enumerate(lines):
        if is_fence_delimiter(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        match = _ATX_HEADER_PATTERN.match(line)
        if match is None:
            continue
        title = match.group(2).strip()
        if not title:
            continue
        if row + 1 < len(lines):
            end = Position(row + 1, 0)
        else:
            end = Position(row, len(line))
        headers.append(
            HeaderNode(
                level=len(match.group(1)),
                title=title,
                start_position=Position(row, 0),
                end_position=end,
            )
        )
    return headers


def _filetype_for(path: Path) -> str:
    if path.suffix.lower() in MARKDOWN_SUFFIXES:
        return MARKDOWN_FILETYPE
    return path.suffix.lstrip(".").lower() or "text"


@dataclass
class MarkdownBuffer:
    """Editable text held as a list of lines."""

    name: str
    lines: list[str] = field(default_factory=list)
    filetype: str = MARKDOWN_FILETYPE

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "untitled.md",
        filetype: str = MARKDOWN_FILETYPE,
    ) -> MarkdownBuffer:
        return cls(name=name, lines=text.splitlines(), filetype=filetype)

    @classmethod
    def from_path(cls, path: str | Path) -> MarkdownBuffer:
        """Loads a file, inferring its filetype from the suffix."""
        file_path = Path(path)
        text = file_path.read_text(encoding="utf-8")
        return cls.from_text(
            text,
            name=file_path.as_posix(),
            filetype=_filetype_for(file_path),
        )

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def set_lines(self, start_row: int, end_row: int, replacement: Sequence[str]) -> None:
        """Replaces rows ``[start_row, end_row)`` with ``replacement``."""
        self.lines[start_row:end_row] = list(replacement)


@dataclass
class BufferHost:
    """Document host that keeps annotations and notifications in memory."""

    parser_available: bool = True
    annotations: dict[str, dict[int, str]] = field(default_factory=dict)
    notifications: list[tuple[str, int]] = field(default_factory=list)

    def get_headers(self, document: MarkdownBuffer) -> list[HeaderNode]:
        if not self.parser_available:
            raise ParserUnavailableError(f"No Markdown parser for {document.name}.")
        return parse_atx_headers(document.lines)

    def get_lines(self, document: MarkdownBuffer, start_row: int, end_row: int) -> list[str]:
        return document.lines[start_row:end_row]

    def get_line_count(self, document: MarkdownBuffer) -> int:
        return len(document.lines)

    def is_supported(self, document: MarkdownBuffer) -> bool:
        return document.filetype == MARKDOWN_FILETYPE

    def clear_annotations(self, document: MarkdownBuffer) -> None:
        self.annotations.pop(document.name, None)

    def set_annotation(self, document: MarkdownBuffer, row: int, text: str) -> None:
        self.annotations.setdefault(document.name, {})[row] = text

    def annotations_for(self, document: MarkdownBuffer) -> dict[int, str]:
        """Returns a copy of the row-to-text annotations of ``document``."""
        return dict(self.annotations.get(document.name, {}))

    def notify_user(self, message: str, level: int) -> None:
        self.notifications.append((message, level))
        logger.log(level, message)
