"""
scheduler.py — Auto-Advance Timers
===================================
The playback controller never sleeps.  It asks a scheduler to call it back
later and keeps the returned handle so it can cancel it.

    handle = scheduler.call_later(0.4, callback)
    handle.cancel()                 # guaranteed: callback will not run

Two schedulers:
  - TickScheduler    – polled.  The host calls tick() from its own loop (a
                       request handler, a UI timer, a test).  Deterministic
                       with an injected clock.
  - AsyncioScheduler – thin wrapper over loop.call_later for async hosts.

Both are single-threaded: callbacks run on the caller's thread, inside
tick() or the event loop, never concurrently with a cancel().
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Polled scheduler
# ---------------------------------------------------------------------------
class TimerHandle:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due:       float              = due
        self.callback:  Callable[[], None] = callback
        self.cancelled: bool               = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"TimerHandle(due={self.due:.3f}, {state})"


class TickScheduler:
    """
    Attributes:
        clock : Zero-arg callable returning seconds (time.monotonic by default).
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or time.monotonic
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()
        self._firing_at: Optional[float] = None

    def now(self) -> float:
        # while a callback fires, "now" is its due time, so a callback that
        # re-schedules itself stays on a fixed cadence when polls run late
        return self._firing_at if self._firing_at is not None else self.clock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now() + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def tick(self, now: Optional[float] = None) -> int:
        """Fire every callback due by `now`, in due order.  Returns how many ran."""
        now = self.clock() if now is None else now
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._firing_at = handle.due
            try:
                handle.callback()
            finally:
                self._firing_at = None
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)


# ---------------------------------------------------------------------------
# asyncio scheduler
# ---------------------------------------------------------------------------
class AsyncioScheduler:
    """Schedules on an asyncio loop (the running loop if none is given)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)
