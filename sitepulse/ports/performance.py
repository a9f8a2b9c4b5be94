"""
Performance port.

Wraps the browser performance timeline: the single navigation timing entry
of the current page load, and a live feed of paint / vitals entries.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol

from sitepulse.domain.signals import NavigationTiming, PerformanceEntry
from sitepulse.ports.page import Subscription

EntryHandler = Callable[[PerformanceEntry], None]


class PerformancePort(Protocol):
    def navigation_entry(self) -> NavigationTiming | None:
        """Navigation timing for the current load, or None if unavailable."""
        ...

    def observe(self, entry_types: Iterable[str], handler: EntryHandler) -> Subscription:
        """Deliver each new entry of the given types until stopped."""
        ...
