"""
Timer scheduling for the engine.

The engine never sleeps; it asks a Scheduler to call back later and keeps
the returned handle so it can cancel. Two implementations exist:

- ManualScheduler: a virtual millisecond clock advanced explicitly. Used by
  headless hosts and by tests that check expiry timing.
- QtTimerScheduler (in a11y.qt_adapter): backed by QTimer on a Qt event loop.

Usage:
    scheduler = ManualScheduler()
    handle = scheduler.call_later(1000, clear_text)
    scheduler.advance(999)   # nothing yet
    scheduler.advance(1)     # clear_text() runs
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

# Queue length below which cancelled entries are left for advance() to skip
COMPACT_MIN_QUEUE = 32


class TimerHandle(Protocol):
    """A pending callback that can be cancelled."""

    def cancel(self) -> None:
        """Cancel the callback. Cancelling a fired or cancelled timer is a no-op."""
        ...

    @property
    def active(self) -> bool:
        ...


class Scheduler(Protocol):
    """Source of time and delayed callbacks."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        ...


class ManualTimer:
    """Handle for a callback queued on a ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self._callback: Optional[Callable[[], None]] = callback

    @property
    def active(self) -> bool:
        return self._callback is not None

    def cancel(self) -> None:
        self._callback = None

    def _fire(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class ManualScheduler:
    """Deterministic scheduler driven by advance()."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        self._discard_cancelled()
        timer = ManualTimer(self._now + max(0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    def advance(self, delta_ms: float) -> int:
        """
        Move the clock forward, firing every timer that comes due.

        Timers fire in due order (ties in scheduling order) with the clock
        set to their due time, so callbacks that schedule again see the
        right "now".

        Returns:
            Number of callbacks fired.
        """
        target = self._now + max(0.0, delta_ms)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self._now = due
            timer._fire()
            fired += 1
        self._now = target
        return fired

    def _discard_cancelled(self) -> None:
        """Drop cancelled timers so repeated cancel/reschedule cannot grow the queue."""
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)
        if len(self._queue) > COMPACT_MIN_QUEUE and self.pending * 2 < len(self._queue):
            self._queue = [entry for entry in self._queue if entry[2].active]
            heapq.heapify(self._queue)

    @property
    def pending(self) -> int:
        """Number of timers that have neither fired nor been cancelled."""
        return sum(1 for _, _, timer in self._queue if timer.active)

    @property
    def queued(self) -> int:
        """Entries held, including cancelled ones not yet discarded."""
        return len(self._queue)
