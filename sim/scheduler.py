#!/usr/bin/env python3
"""
sim/scheduler.py
================
Cooperative, single-threaded timer source for :class:`sim.motion.MotionSimulator`.

The simulator only needs ``call_later(delay_s, callback, *args)``
returning a handle with ``cancel()``.  A running :mod:`asyncio` event
loop already satisfies that contract; :class:`VirtualClock` provides the
same interface with manually advanced time for tests, the headless demo
and the Pygame viewer.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable, List, Optional, Protocol, Tuple


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


class TimerHandle:
    """A pending callback on a :class:`VirtualClock`."""

    __slots__ = ("when", "_callback", "_args", "_cancelled")

    def __init__(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        self._callback(*self._args)


class VirtualClock:
    """Deterministic scheduler whose time only moves on :meth:`advance`.

    Callbacks fire in deadline order (FIFO for equal deadlines) and may
    schedule further callbacks, which fire within the same
    :meth:`advance` call when their deadline is reached.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        """Current simulated time in seconds."""
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        handle = TimerHandle(self._now + max(0.0, float(delay)), callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        """Number of scheduled, non-cancelled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled())

    def next_deadline(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def advance(self, seconds: float) -> int:
        """Move time forward by *seconds*, firing every due callback.

        Returns
        -------
        int
            Number of callbacks fired.
        """
        return self._advance_to(self._now + max(0.0, float(seconds)))

    def _advance_to(self, target: float) -> int:
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target:
                break
            when, _, handle = heapq.heappop(self._queue)
            self._now = when
            handle._run()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self, max_callbacks: int = 100_000) -> int:
        """Fire callbacks in order until none remain.

        Raises
        ------
        RuntimeError
            If more than *max_callbacks* fire (a callback keeps rescheduling itself).
        """
        fired = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None:
                return fired
            if fired >= max_callbacks:
                raise RuntimeError(f"clock still busy after {max_callbacks} callbacks")
            fired += self._advance_to(deadline)

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled():
            heapq.heappop(self._queue)
