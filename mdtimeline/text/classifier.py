"""Line-level separation of prose from Markdown markup and fenced code."""

from __future__ import annotations

import re
from typing import NamedTuple

FENCE_DELIMITER = "```"

_LINK_PATTERN = re.compile(r"\[.*?\]\(.*?\)")
_BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_PATTERN = re.compile(r"\*(.*?)\*")
_INLINE_CODE_PATTERN = re.compile(r"`.*?`")
_BULLET_MARKER_PATTERN = re.compile(r"^\s*(?:-\s*)+")
_ORDERED_MARKER_PATTERN = re.compile(r"^\s*(?:\d+\.\s*)+")


class ClassifiedLine(NamedTuple):
    """Prose left on a line and the fence flag after reading it."""

    text: str
    in_fence: bool


def is_fence_delimiter(line: str) -> bool:
    """Returns whether ``line`` opens or closes a fenced code block."""
    return line.lstrip().startswith(FENCE_DELIMITER)


def _strip_list_markers(text: str) -> str:
    """Removes leading bullet and ordered-list markers, nested ones included."""
    previous = None
    while previous != text:
        previous = text
        text = _BULLET_MARKER_PATTERN.sub("", text, count=1)
        text = _ORDERED_MARKER_PATTERN.sub("", text, count=1)
    return text


def clean_line(line: str) -> str:
    """Strips links, emphasis, inline code, and list markers from prose.

    Link and inline-code text is dropped entirely; emphasis keeps its inner
    text. Passes repeat until nothing changes, since removing emphasis can
    expose a new link or code span. Every change shortens the line, so the
    loop ends.
    """
    previous = None
    text = line
    while previous != text:
        previous = text
        text = _LINK_PATTERN.sub("", text)
        text = _BOLD_PATTERN.sub(r"\1", text)
        text = _ITALIC_PATTERN.sub(r"\1", text)
        text = _INLINE_CODE_PATTERN.sub("", text)
        text = _strip_list_markers(text)
    return text


def classify_line(line: str, in_fence: bool) -> ClassifiedLine:
    """Returns the countable prose of ``line`` and the updated fence flag.

    Fence delimiters toggle the flag and contribute nothing; every line inside
    a fence is reported as empty.
    """
    if is_fence_delimiter(line):
        return ClassifiedLine("", not in_fence)
    if in_fence:
        return ClassifiedLine("", True)
    return ClassifiedLine(clean_line(line), False)
