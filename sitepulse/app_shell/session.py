"""
Tracking session.

Session-scoped context object that owns every component for one browsing
session. The host creates it at session start, forwards navigation and
content mount/unmount, and closes it at session end. Closing stops every
observer and cancels any pending timer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sitepulse.adapters.clock import SystemClock
from sitepulse.components.background import TechnicalBackgroundClassifier
from sitepulse.components.engagement import EngagementObservers
from sitepulse.components.funnel import FunnelStage, FunnelTracker
from sitepulse.components.geo import GeographicTracker
from sitepulse.components.interactions import (
    CodeSnippetTracker,
    FormTracker,
    SearchTracker,
)
from sitepulse.components.performance import PerformanceCollector, WebVitalsObserver
from sitepulse.components.reading import ReadingProgressSampler
from sitepulse.components.telemetry import SinkPort, Tracker
from sitepulse.domain.signals import BrowserEnvironment
from sitepulse.ports.clock import ClockPort
from sitepulse.ports.page import PagePort
from sitepulse.ports.performance import PerformancePort
from sitepulse.ports.scheduler import SchedulerPort
from sitepulse.rules.models import TrackingRules

logger = logging.getLogger(__name__)


def page_url(path: str, query: str = "") -> str:
    """Path plus query string, as reported in page views."""
    query = query.lstrip("?")
    return f"{path}?{query}" if query else path


@dataclass
class TrackingSession:
    tracker: Tracker
    page: PagePort
    scheduler: SchedulerPort
    performance: PerformancePort
    environment: BrowserEnvironment
    funnel: FunnelTracker
    classifier: TechnicalBackgroundClassifier
    geo: GeographicTracker
    engagement: EngagementObservers
    collector: PerformanceCollector
    vitals: WebVitalsObserver
    search: SearchTracker
    snippets: CodeSnippetTracker
    current_path: str = "/"
    reader: ReadingProgressSampler | None = None
    _started: bool = field(default=False, repr=False)

    @classmethod
    def create(
        cls,
        *,
        tracking_id: str | None,
        sink: SinkPort | None,
        page: PagePort,
        scheduler: SchedulerPort,
        performance: PerformancePort,
        environment: BrowserEnvironment | None = None,
        clock: ClockPort | None = None,
        rules: TrackingRules | None = None,
    ) -> TrackingSession:
        environment = environment or BrowserEnvironment()
        tracker = Tracker(tracking_id, sink, clock or SystemClock(), rules)
        classifier = TechnicalBackgroundClassifier(tracker)

        # Filled in below; observers read the live path through these closures
        session: TrackingSession

        def current_url() -> str:
            return f"{environment.scheme}://{environment.hostname}{session.current_path}"

        def current_path() -> str:
            return session.current_path

        session = cls(
            tracker=tracker,
            page=page,
            scheduler=scheduler,
            performance=performance,
            environment=environment,
            funnel=FunnelTracker(tracker, environment.referrer),
            classifier=classifier,
            geo=GeographicTracker(tracker, environment),
            engagement=EngagementObservers(
                tracker,
                page,
                environment.hostname,
                classifier=classifier,
                base_url=current_url,
            ),
            collector=PerformanceCollector(
                tracker, page, scheduler, performance, current_path
            ),
            vitals=WebVitalsObserver(tracker, performance),
            search=SearchTracker(tracker),
            snippets=CodeSnippetTracker(tracker),
        )
        return session

    @property
    def enabled(self) -> bool:
        return self.tracker.enabled

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, path: str = "/", query: str = "", title: str | None = None) -> None:
        """Mount the session on its first page."""
        if self._started:
            return
        self._started = True
        if not self.enabled:
            logger.info("Tracking disabled: no tracking id or sink")
            return

        self.current_path = path
        self.tracker.bootstrap(
            title if title is not None else self.environment.page_title,
            page_url(path, query),
        )
        self.geo.start()
        self.geo.assign_variant()
        self.engagement.start()
        self.collector.start()
        self.vitals.start()
        self.navigate(path, query, title)
        logger.info("Tracking session started on %s", path)

    def close(self) -> None:
        """Tear down every observer. Safe to call more than once."""
        self.unmount_post()
        self.engagement.stop()
        self.collector.stop()
        self.vitals.stop()
        if self._started and self.enabled:
            logger.info("Tracking session closed")
        self._started = False

    def __enter__(self) -> TrackingSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Navigation and content
    # ------------------------------------------------------------------

    def navigate(self, path: str, query: str = "", title: str | None = None) -> None:
        """Route change: report the page view and the funnel stage for the path."""
        self.current_path = path
        if not self.enabled:
            return
        self.tracker.track_page_view(
            page_url(path, query),
            title if title is not None else self.environment.page_title,
        )
        self.funnel.on_navigate(path)

    def mount_post(self, slug: str) -> ReadingProgressSampler:
        """A post view mounted: start reading progress and count a technical read."""
        self.unmount_post()
        self.reader = ReadingProgressSampler(self.tracker, self.page, slug)
        self.reader.activate()
        if self.enabled:
            self.funnel.advance_to(FunnelStage.INTEREST)
            self.classifier.record_interaction()
        return self.reader

    def unmount_post(self) -> None:
        if self.reader is not None:
            self.reader.deactivate()
            self.reader = None

    # ------------------------------------------------------------------
    # Conversion actions
    # ------------------------------------------------------------------

    def form(self, form_name: str) -> FormTracker:
        return FormTracker(self.tracker, form_name, self.funnel)

    def track_service_inquiry(self, service_type: str, inquiry_value: float | None = None) -> None:
        self.funnel.track_service_inquiry(service_type, inquiry_value)

    def advance_funnel(self, stage: FunnelStage) -> None:
        self.funnel.advance_to(stage)

    def track_search(self, query: str, results_count: int | None = None) -> None:
        self.search.track_search(query, results_count)

    def track_page_view(
        self,
        url: str,
        title: str | None = None,
        custom_parameters: Mapping[str, Any] | None = None,
    ) -> None:
        self.tracker.track_page_view(url, title, custom_parameters)
