from __future__ import annotations

from collections.abc import Iterable

from sitepulse.adapters.subscription import CallbackSubscription
from sitepulse.domain.signals import NavigationTiming, PerformanceEntry
from sitepulse.ports.performance import EntryHandler


class StaticPerformanceSource:
    """
    PerformancePort backed by values the host pushes in.

    set_navigation() stores the navigation entry for the current load;
    record() delivers a paint / vitals entry to matching observers.
    """

    def __init__(self, navigation: NavigationTiming | None = None) -> None:
        self._navigation = navigation
        self._observers: list[tuple[frozenset[str], EntryHandler]] = []

    def set_navigation(self, navigation: NavigationTiming | None) -> None:
        self._navigation = navigation

    def navigation_entry(self) -> NavigationTiming | None:
        return self._navigation

    def observe(self, entry_types: Iterable[str], handler: EntryHandler) -> CallbackSubscription:
        observer = (frozenset(entry_types), handler)
        self._observers.append(observer)
        return CallbackSubscription(lambda: self._observers.remove(observer))

    def record(self, entry: PerformanceEntry) -> None:
        for types, handler in list(self._observers):
            if entry.entry_type in types:
                handler(entry)

    def observer_count(self) -> int:
        return len(self._observers)
