"""Timeline pipeline seam between a document host and the estimator.

``compute_timeline`` is a pure function of headers, a line snapshot and an
``EstimatorConfig``. ``Timeline`` binds it to one document on one host: it
owns the configuration, rewrites every annotation on each pass, and routes
change notifications through a ``RecomputeScheduler``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Generic, TypeVar

from mdtimeline.config import (
    DEFAULT_DISPLAY_FORMAT,
    DEFAULT_WORDS_PER_MINUTE,
    DisplayFormat,
    EstimatorConfig,
    get_settings,
    parse_display_format,
    validate_words_per_minute,
)
from mdtimeline.domain import HeaderNode, TimelineEntry
from mdtimeline.estimation.reading_time import build_timeline
from mdtimeline.extraction.sections import extract_sections
from mdtimeline.runtime.contracts import DeferCallable, DocumentHost, ParserUnavailableError
from mdtimeline.runtime.scheduler import DeferredQueue, RecomputeScheduler
from mdtimeline.utils.logger import get_logger

DocumentT = TypeVar("DocumentT")

logger = get_logger(__name__)


def compute_timeline(
    headers: Sequence[HeaderNode],
    lines: Sequence[str],
    config: EstimatorConfig,
) -> list[TimelineEntry]:
    """Runs section extraction and estimation over one document snapshot."""
    snapshot = tuple(lines)
    sections = extract_sections(headers, snapshot)
    return build_timeline(sections, snapshot, config)


class Timeline(Generic[DocumentT]):
    """Reading-time annotations for one document on one host.

    Without an explicit ``defer`` hook, deferred passes go to the running
    asyncio loop when there is one and otherwise wait in ``deferred`` until
    the host calls ``run_deferred`` on its next tick.
    """

    def __init__(
        self,
        host: DocumentHost[DocumentT],
        document: DocumentT,
        *,
        config: EstimatorConfig | None = None,
        defer: DeferCallable | None = None,
    ) -> None:
        self.host = host
        self.document = document
        self._config = self._checked_config(
            config if config is not None else get_settings().estimator()
        )
        self._timeline: list[TimelineEntry] = []
        self._deferred = DeferredQueue()
        self._scheduler = RecomputeScheduler(
            self._deferred_recompute,
            defer=defer if defer is not None else self._defer_to_loop_or_queue,
        )

    @property
    def config(self) -> EstimatorConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def timeline(self) -> list[TimelineEntry]:
        """Entries from the most recent pass."""
        return list(self._timeline)

    @property
    def scheduler(self) -> RecomputeScheduler:
        return self._scheduler

    @property
    def deferred(self) -> DeferredQueue:
        """Passes waiting for ``run_deferred`` when no asyncio loop is running."""
        return self._deferred

    def run_deferred(self) -> int:
        """Runs queued passes for this tick and returns how many ran."""
        return self._deferred.run_pending()

    def configure(
        self,
        *,
        words_per_minute: float | None = None,
        display_format: DisplayFormat | str | None = None,
        enabled: bool | None = None,
    ) -> EstimatorConfig:
        """Applies the supplied options, rejecting invalid ones with a warning.

        Omitted options keep their current value. An invalid rate or format
        is reported to the user and the previous value is retained; the other
        options are still applied.

        Returns:
            The configuration now in effect.
        """
        changes: dict[str, object] = {}
        if words_per_minute is not None:
            try:
                changes["words_per_minute"] = validate_words_per_minute(words_per_minute)
            except ValueError as err:
                self._reject(err, retained=self._config.words_per_minute)
        if display_format is not None:
            try:
                changes["display_format"] = parse_display_format(display_format)
            except ValueError as err:
                self._reject(err, retained=self._config.display_format.value)
        if enabled is not None:
            changes["enabled"] = bool(enabled)

        if changes:
            self._config = replace(self._config, **changes)
            logger.debug("Timeline configuration updated: %s", self._config)
        return self._config

    def set_words_per_minute(self, wpm: float | None = None) -> EstimatorConfig:
        """Sets the reading rate; ``None`` restores the default rate."""
        return self.configure(
            words_per_minute=DEFAULT_WORDS_PER_MINUTE if wpm is None else wpm
        )

    def set_format(self, display_format: DisplayFormat | str) -> bool:
        """Switches display format and recomputes when the format is valid.

        Returns:
            True when the format was accepted.
        """
        try:
            accepted = parse_display_format(display_format)
        except ValueError as err:
            self._reject(err, retained=self._config.display_format.value)
            return False
        self._config = replace(self._config, display_format=accepted)
        self.recompute()
        return True

    def toggle(self) -> bool:
        """Flips the enabled flag, recomputing or clearing accordingly.

        Returns:
            The new enabled state.
        """
        self._config = replace(self._config, enabled=not self._config.enabled)
        if self._config.enabled:
            self.recompute()
        else:
            self.clear()
        state = "enabled" if self._config.enabled else "disabled"
        self.host.notify_user(f"Timeline {state}", logging.INFO)
        return self._config.enabled

    def clear(self) -> None:
        """Removes every annotation from the document."""
        self.host.clear_annotations(self.document)

    def notify_changed(self) -> bool:
        """Entry point for document edits and loads; debounced.

        Returns:
            True when this notification scheduled a pass.
        """
        return self._scheduler.notify()

    def recompute(self) -> list[TimelineEntry]:
        """Runs a full pass immediately, bypassing the debounce.

        Returns:
            The new timeline; empty when disabled or when the pass is skipped.
        """
        if not self._config.enabled:
            logger.debug("Timeline disabled; skipping recompute.")
            return []
        if not self.host.is_supported(self.document):
            logger.debug("Document type not recognized; skipping recompute.")
            return []
        try:
            headers = self.host.get_headers(self.document)
        except ParserUnavailableError as err:
            logger.debug("No structural parser available; skipping recompute: %s", err)
            return []

        line_count = self.host.get_line_count(self.document)
        lines = tuple(self.host.get_lines(self.document, 0, line_count))
        timeline = compute_timeline(headers, lines, self._config)

        self.host.clear_annotations(self.document)
        for entry in timeline:
            self.host.set_annotation(self.document, entry.row, entry.display)
        self._timeline = timeline

        logger.debug(
            "Annotated %d of %d headers over %d lines.",
            len(timeline),
            len(headers),
            line_count,
        )
        return list(timeline)

    update = recompute

    def _deferred_recompute(self) -> None:
        if not self._config.enabled or not self.host.is_supported(self.document):
            return
        self.recompute()

    def _defer_to_loop_or_queue(self, callback: Callable[[], None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deferred.schedule(callback)
            return
        loop.call_soon(callback)

    def _checked_config(self, config: EstimatorConfig) -> EstimatorConfig:
        """Replaces invalid rate or format values with the defaults."""
        words_per_minute = DEFAULT_WORDS_PER_MINUTE
        try:
            words_per_minute = validate_words_per_minute(config.words_per_minute)
        except ValueError as err:
            self._reject(err, retained=DEFAULT_WORDS_PER_MINUTE)
        display_format = DEFAULT_DISPLAY_FORMAT
        try:
            display_format = parse_display_format(config.display_format)
        except ValueError as err:
            self._reject(err, retained=DEFAULT_DISPLAY_FORMAT.value)
        return EstimatorConfig(
            words_per_minute=words_per_minute,
            display_format=display_format,
            enabled=bool(config.enabled),
        )

    def _reject(self, err: ValueError, *, retained: object) -> None:
        message = f"{err} Keeping {retained!r}."
        logger.warning(message)
        self.host.notify_user(message, logging.WARNING)
