"""
Scheduler adapters.

ManualScheduler keeps virtual time and only fires callbacks from advance();
AsyncioScheduler hands the delay to an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field

from sitepulse.adapters.subscription import CallbackSubscription


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by advance()."""

    def __init__(self) -> None:
        self._now = 0.0
        self._timers: list[tuple[_Timer, CallbackSubscription]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> CallbackSubscription:
        timer = _Timer(self._now + max(0.0, delay_seconds), next(self._seq), callback)
        handle = CallbackSubscription(timer.cancel)
        heapq.heappush(self._timers, (timer, handle))
        return handle

    def advance(self, seconds: float) -> int:
        """Move virtual time forward, firing due timers in order. Returns fired count."""
        target = self._now + seconds
        fired = 0
        while self._timers and self._timers[0][0].due <= target:
            timer, handle = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self._now = timer.due
            handle.stop()  # a fired timer is no longer active
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def pending(self) -> int:
        return sum(1 for timer, _ in self._timers if not timer.cancelled)


class AsyncioScheduler:
    """call_later on an asyncio event loop (the running one by default)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> CallbackSubscription:
        loop = self._loop or asyncio.get_running_loop()
        timer: asyncio.TimerHandle | None = None

        def cancel() -> None:
            if timer is not None:
                timer.cancel()

        handle = CallbackSubscription(cancel)

        def fire() -> None:
            handle.stop()
            callback()

        timer = loop.call_later(delay_seconds, fire)
        return handle
