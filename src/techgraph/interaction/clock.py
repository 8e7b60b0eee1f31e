"""
Scheduling primitives.

Everything time-driven (debounce windows, simulation ticks) goes through a
``Clock`` so that the same code runs on an asyncio loop in production and on
a ``VirtualClock`` in tests, where time only moves when ``advance`` is
called. All callbacks run on the caller's thread.
"""

import asyncio
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Milliseconds-based scheduler."""

    def now(self) -> float: ...

    def call_later(self, delay_ms: float, callback: Callback) -> Cancellable: ...


class _Scheduled:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """
    Deterministic clock for tests and headless runs.

    Callbacks due at the same instant run in scheduling order.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, _Scheduled]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callback) -> _Scheduled:
        handle = _Scheduled(self._now + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, ms: float) -> int:
        """
        Move time forward, running every callback that falls due.

        Callbacks scheduled while advancing also run if they fall inside the
        window. Returns the number of callbacks executed.
        """
        target = self._now + ms
        executed = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
            executed += 1
        self._now = target
        return executed

    def run_until_quiet(self, max_callbacks: int = 100_000) -> int:
        """Run queued callbacks, jumping time forward, until none remain."""
        executed = 0
        while executed < max_callbacks:
            live = [entry for entry in self._queue if not entry[2].cancelled]
            if not live:
                break
            executed += self.advance(min(entry[0] for entry in live) - self._now)
        return executed


class AsyncioClock:
    """
    Clock backed by an asyncio event loop.

    Without an explicit loop it must be created from inside a coroutine.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._loop.time() * 1000

    def call_later(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return self._loop.call_later(max(0.0, delay_ms) / 1000, callback)


class Timer:
    """
    A single-slot timer.

    Scheduling a new callback cancels the pending one, so at most one
    callback per timer is ever outstanding.
    """

    def __init__(self, clock: Clock):
        self._clock = clock
        self._handle: Optional[Cancellable] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callback, delay_ms: float) -> None:
        self.cancel_pending()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = self._clock.call_later(delay_ms, fire)

    def cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
