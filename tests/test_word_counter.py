"""Tests for whitespace word counting."""

import pytest

from mdtimeline.text.word_counter import count_prose_words, count_words


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", 0),
        ("   \t  ", 0),
        ("one", 1),
        ("one two  three", 3),
        ("  leading and trailing  ", 3),
        ("tabs\tand\nnewlines", 3),
    ],
)
def test_count_words_splits_on_whitespace(text: str, expected: int) -> None:
    """Maximal whitespace-delimited runs are words."""
    assert count_words(text) == expected


def test_count_prose_words_skips_fenced_code() -> None:
    """Fenced lines are excluded and the fence flag is returned."""
    lines = ["intro words here", "```", "x = 1 + 2", "```", "outro"]

    assert count_prose_words(lines) == (4, False)


def test_count_prose_words_carries_open_fence() -> None:
    """An unterminated fence leaves the flag set for the next caller."""
    words, in_fence = count_prose_words(["prose", "```", "code"])

    assert words == 1
    assert in_fence is True
    assert count_prose_words(["still code", "```", "prose again"], in_fence) == (2, False)
