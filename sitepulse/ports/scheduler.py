from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from sitepulse.ports.page import Subscription


class SchedulerPort(Protocol):
    """One-shot delayed callbacks on the page's event loop."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Subscription:
        """Run callback once after the delay. stop() on the handle cancels it."""
        ...
