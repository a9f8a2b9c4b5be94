"""
Performance component - Page load timing and web vitals.

PerformanceCollector reads the navigation timing entry once per page load,
after a short settle delay, and reports each derived duration that is
strictly positive. WebVitalsObserver forwards paint / vitals entries for
the lifetime of the page as non-interaction events.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from sitepulse.components.telemetry import EventKind, Tracker, round_half_up
from sitepulse.domain.signals import LoadSignal, NavigationTiming, PerformanceEntry
from sitepulse.ports.page import PagePort, Subscription
from sitepulse.ports.performance import PerformancePort
from sitepulse.ports.scheduler import SchedulerPort
from sitepulse.rules.models import PerformanceRules

from .models import METRIC_NAMES, NavigationMetrics

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def _delta(end: float | None, start: float | None) -> float | None:
    if end is None or start is None:
        return None
    return end - start


def derive_navigation_metrics(timing: NavigationTiming) -> NavigationMetrics:
    """
    Derive the five load durations (ms) from a navigation entry.

    A metric is None when either of its marks is missing.
    """
    return {
        "dns_time": _delta(timing.domain_lookup_end, timing.domain_lookup_start),
        "connection_time": _delta(timing.connect_end, timing.connect_start),
        "request_time": _delta(timing.response_end, timing.request_start),
        "dom_processing": _delta(timing.dom_content_loaded_event_end, timing.response_end),
        "total_time": _delta(timing.load_event_end, timing.fetch_start),
    }


def reportable_metrics(metrics: NavigationMetrics) -> list[tuple[str, int]]:
    """Metrics worth reporting, in order, rounded. Non-positive or missing ones are skipped."""
    result: list[tuple[str, int]] = []
    for name in METRIC_NAMES:
        value = metrics.get(name)
        if value is not None and math.isfinite(value) and value > 0:
            result.append((name, round_half_up(value)))
    return result


# --- Collectors ---


class PerformanceCollector:
    """
    One navigation timing sample per page load.

    Args:
        path_provider: Returns the current page path for the page_url parameter.
    """

    def __init__(
        self,
        tracker: Tracker,
        page: PagePort,
        scheduler: SchedulerPort,
        performance: PerformancePort,
        path_provider: Callable[[], str],
        rules: PerformanceRules | None = None,
    ) -> None:
        self._tracker = tracker
        self._page = page
        self._scheduler = scheduler
        self._performance = performance
        self._path_provider = path_provider
        self._rules = rules or tracker.rules.performance
        self._load_subscription: Subscription | None = None
        self._pending: Subscription | None = None
        self._sampled = False

    @property
    def sampled(self) -> bool:
        return self._sampled

    @property
    def pending(self) -> bool:
        return self._pending is not None and self._pending.active

    def start(self) -> None:
        if self._load_subscription is not None or not self._tracker.enabled:
            return
        self._load_subscription = self._page.observe("load", self.handle_load)

    def stop(self) -> None:
        if self._load_subscription is not None:
            self._load_subscription.stop()
            self._load_subscription = None
        if self._pending is not None:
            self._pending.stop()
            self._pending = None

    def handle_load(self, signal: LoadSignal) -> None:
        if self._sampled or self.pending:
            return
        self._pending = self._scheduler.call_later(
            self._rules.settle_delay_seconds, self.collect
        )

    def collect(self) -> list[tuple[str, int]]:
        """Read navigation timing and report it. Runs once per page load."""
        self._pending = None
        if self._sampled:
            return []
        self._sampled = True

        timing = self._performance.navigation_entry()
        if timing is None:
            logger.debug("No navigation timing entry available")
            return []

        reported = reportable_metrics(derive_navigation_metrics(timing))
        page_url = self._path_provider()
        for name, value in reported:
            self._tracker.emit_kind(
                EventKind.PERFORMANCE_METRIC,
                label=name,
                value=value,
                parameters={"metric_name": name, "page_url": page_url},
            )
        return reported


class WebVitalsObserver:
    """Forwards every observed paint / vitals entry until stopped."""

    def __init__(
        self,
        tracker: Tracker,
        performance: PerformancePort,
        rules: PerformanceRules | None = None,
    ) -> None:
        self._tracker = tracker
        self._performance = performance
        self._rules = rules or tracker.rules.performance
        self._subscription: Subscription | None = None

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        if self._subscription is not None or not self._tracker.enabled:
            return
        self._subscription = self._performance.observe(
            self._rules.vital_entry_types, self.handle_entry
        )

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.stop()
            self._subscription = None

    def handle_entry(self, entry: PerformanceEntry) -> None:
        if not math.isfinite(entry.start_time):
            logger.debug("Skipping %s entry with start time %r", entry.name, entry.start_time)
            return
        self._tracker.emit_kind(
            EventKind.WEB_VITAL,
            label=entry.name,
            value=round_half_up(entry.start_time),
            non_interaction=True,
        )
