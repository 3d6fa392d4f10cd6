"""Host-environment contract consumed by the timeline pipeline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, TypeAlias, TypeVar

from mdtimeline.domain import HeaderNode

DocumentT = TypeVar("DocumentT")


class ParserUnavailableError(RuntimeError):
    """Raised by a host that has no structural parser for a document."""


class DocumentHost(Protocol[DocumentT]):
    """Structural access and annotation surface supplied by the editor."""

    def get_headers(self, document: DocumentT) -> Sequence[HeaderNode]:
        """Header nodes of ``document``; may raise ``ParserUnavailableError``."""
        ...

    def get_lines(self, document: DocumentT, start_row: int, end_row: int) -> Sequence[str]:
        """Lines ``[start_row, end_row)`` of ``document``."""
        ...

    def get_line_count(self, document: DocumentT) -> int:
        """Number of lines in ``document``."""
        ...

    def is_supported(self, document: DocumentT) -> bool:
        """Whether ``document`` is of the recognized type."""
        ...

    def clear_annotations(self, document: DocumentT) -> None:
        """Removes every annotation previously set on ``document``."""
        ...

    def set_annotation(self, document: DocumentT, row: int, text: str) -> None:
        """Anchors ``text`` to the end of ``row``."""
        ...

    def notify_user(self, message: str, level: int) -> None:
        """Shows ``message`` at a ``logging`` level; fire and forget."""
        ...


DeferCallable: TypeAlias = Callable[[Callable[[], None]], None]
