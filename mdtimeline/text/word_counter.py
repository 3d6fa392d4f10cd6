"""Whitespace word counting over cleaned prose."""

from __future__ import annotations

from collections.abc import Iterable

from mdtimeline.text.classifier import classify_line


def count_words(text: str) -> int:
    """Counts maximal runs of non-whitespace characters in ``text``."""
    return len(text.split())


def count_prose_words(lines: Iterable[str], in_fence: bool = False) -> tuple[int, bool]:
    """Counts prose words across ``lines``, carrying the fence flag.

    Args:
        lines: Raw document lines in order.
        in_fence: Whether the first line is already inside a fenced block.

    Returns:
        The word total and the fence flag after the last line.
    """
    total = 0
    for line in lines:
        text, in_fence = classify_line(line, in_fence)
        if text:
            total += count_words(text)
    return total, in_fence
