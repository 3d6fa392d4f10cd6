"""Single-slot debounce that coalesces change notifications.

A notification moves the scheduler from idle to pending and defers exactly
one run. Further notifications while pending are merged into that run. The
deferred callback returns to idle before running, so a change that arrives
while a pass is executing schedules a fresh pass instead of being lost.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable
from enum import StrEnum

from mdtimeline.runtime.contracts import DeferCallable
from mdtimeline.utils.logger import get_logger

logger = get_logger(__name__)


class RecomputeState(StrEnum):
    """Scheduler states."""

    IDLE = "idle"
    PENDING = "pending"


class DeferredQueue:
    """Callbacks queued for the next tick of a single-threaded host loop."""

    def __init__(self) -> None:
        self._callbacks: deque[Callable[[], None]] = deque()

    def __len__(self) -> int:
        return len(self._callbacks)

    def schedule(self, callback: Callable[[], None]) -> None:
        """Queues ``callback`` for the next ``run_pending`` call."""
        self._callbacks.append(callback)

    def run_pending(self) -> int:
        """Runs the callbacks queued before this tick and returns how many ran.

        Callbacks scheduled while the tick runs wait for the next tick.
        """
        due = len(self._callbacks)
        for _ in range(due):
            self._callbacks.popleft()()
        return due


def asyncio_defer(callback: Callable[[], None]) -> None:
    """Defers ``callback`` to the running asyncio loop."""
    asyncio.get_running_loop().call_soon(callback)


class RecomputeScheduler:
    """Two-state debounce around one recompute callable."""

    def __init__(self, run: Callable[[], object], *, defer: DeferCallable = asyncio_defer) -> None:
        self._run = run
        self._defer = defer
        self._state = RecomputeState.IDLE

    @property
    def state(self) -> RecomputeState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is RecomputeState.PENDING

    def notify(self) -> bool:
        """Schedules one deferred run unless one is already pending.

        Returns:
            True when this call scheduled a run, False when it was coalesced.
        """
        if self._state is RecomputeState.PENDING:
            logger.debug("Recompute already pending; notification coalesced.")
            return False
        self._state = RecomputeState.PENDING
        try:
            self._defer(self._execute)
        except Exception:
            self._state = RecomputeState.IDLE
            raise
        return True

    def _execute(self) -> None:
        self._state = RecomputeState.IDLE
        self._run()
