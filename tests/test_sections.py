"""Behavior tests for section extraction."""

from mdtimeline.domain import HeaderNode, Position
from mdtimeline.extraction.sections import extract_sections, has_content
from mdtimeline.host.buffer import parse_atx_headers


def _header(level: int, title: str, row: int) -> HeaderNode:
    """Builds a header spanning its full row, newline included."""
    return HeaderNode(level, title, Position(row, 0), Position(row + 1, 0))


def test_has_content_rejects_empty_and_blank_ranges() -> None:
    """No lines and blank-only lines are both empty content."""
    assert has_content([]) is False
    assert has_content(["", "   ", "\t"]) is False
    assert has_content(["", "text", ""]) is True


def test_extract_sections_skips_leading_title() -> None:
    """A first-level-1 header is front matter and owns no section."""
    lines = ["# Title", "intro", "## A", "body"]
    headers = parse_atx_headers(lines)

    sections = extract_sections(headers, lines)

    assert [section.header.title for section in sections] == ["A"]
    assert sections[0].lines == ("body",)
    assert (sections[0].content_start, sections[0].content_end) == (3, 3)


def test_extract_sections_times_non_leading_level_one_headers() -> None:
    """Only the first header is treated as a title."""
    lines = ["## Intro", "text", "# Part Two", "more text"]

    sections = extract_sections(parse_atx_headers(lines), lines)

    assert [section.header.title for section in sections] == ["Intro", "Part Two"]


def test_extract_sections_keeps_first_header_when_not_level_one() -> None:
    """A leading level-2 header owns its content."""
    lines = ["## Only", "words"]

    sections = extract_sections(parse_atx_headers(lines), lines)

    assert [section.header.title for section in sections] == ["Only"]


def test_extract_sections_sorts_out_of_order_headers() -> None:
    """Headers are put in document order before partitioning."""
    lines = ["## A", "alpha", "## B", "beta"]
    headers = [_header(2, "B", 2), _header(2, "A", 0)]

    sections = extract_sections(headers, lines)

    assert [(s.header.title, s.lines) for s in sections] == [
        ("A", ("alpha",)),
        ("B", ("beta",)),
    ]


def test_extract_sections_discards_blank_sections() -> None:
    """Whitespace-only content produces no section."""
    lines = ["## Empty", "", "   ", "## Full", "words"]

    sections = extract_sections(parse_atx_headers(lines), lines)

    assert [section.header.title for section in sections] == ["Full"]


def test_extract_sections_drops_header_line_from_content() -> None:
    """A header span that ends on its own row must not leak into content."""
    lines = ["## A", "alpha beta"]
    header = HeaderNode(2, "A", Position(0, 0), Position(0, 4))
    misreported = HeaderNode(2, "A", Position(0, 0), Position(0, 0))

    assert extract_sections([header], lines)[0].lines == ("alpha beta",)
    assert extract_sections([misreported], lines)[0].lines == ("alpha beta",)


def test_extract_sections_guard_drops_header_looking_first_line() -> None:
    """If the parser reports an early end row, the header line is still dropped."""
    lines = ["## A", "### hidden", "words"]
    header = HeaderNode(2, "A", Position(0, 0), Position(1, 0))

    sections = extract_sections([header], lines)

    assert sections[0].lines == ("words",)
    assert sections[0].content_start == 2


def test_extract_sections_tolerates_overlapping_headers() -> None:
    """An inverted content range yields an empty, discarded section."""
    lines = ["## A", "## B", "body"]
    overlapping = [
        HeaderNode(2, "A", Position(0, 0), Position(2, 0)),
        HeaderNode(2, "B", Position(1, 0), Position(2, 0)),
    ]

    sections = extract_sections(overlapping, lines)

    assert [section.header.title for section in sections] == ["B"]


def test_extract_sections_clamps_to_document_end() -> None:
    """Header positions past the end of the document produce nothing."""
    lines = ["## A", "text"]
    headers = [_header(2, "A", 0), _header(2, "Ghost", 7)]

    sections = extract_sections(headers, lines)

    assert [(s.header.title, s.lines) for s in sections] == [("A", ("text",))]


def test_extract_sections_returns_empty_without_headers() -> None:
    """A document without headers has no sections."""
    assert extract_sections([], ["just", "prose"]) == []
