"""
Unit tests for Engagement component.
"""

from __future__ import annotations

import math

import pytest

from sitepulse.adapters.clock import FixedClock
from sitepulse.adapters.page import InMemoryPage
from sitepulse.adapters.sinks import RecordingSink
from sitepulse.components.background import TechnicalBackgroundClassifier
from sitepulse.components.telemetry import Tracker
from sitepulse.domain.signals import ClickSignal, ElementInfo, ScrollSignal

from ..component import (
    CodeInteractionObserver,
    EngagementObservers,
    ExternalLinkObserver,
    ScrollDepthObserver,
    _Observer,
    classify_link,
    is_code_target,
    is_download,
    next_depth_threshold,
    resolve_hostname,
)

HOST = "example.com"


def click(**element: object) -> ClickSignal:
    return ClickSignal(target=ElementInfo.model_validate(element))


def scroll_to(percent: float) -> ScrollSignal:
    return ScrollSignal(scroll_y=percent * 10, document_height=2000, viewport_height=1000)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def page() -> InMemoryPage:
    return InMemoryPage()


@pytest.fixture
def tracker(sink: RecordingSink) -> Tracker:
    return Tracker("G-TEST", sink, FixedClock())


# --- Pure Functions ---


class TestIsCodeTarget:
    def test_code_element(self) -> None:
        assert is_code_target(ElementInfo(tag_name="code"))

    def test_inside_pre(self) -> None:
        assert is_code_target(ElementInfo(tag_name="SPAN", ancestors=("CODE", "PRE")))

    def test_plain_paragraph(self) -> None:
        assert not is_code_target(ElementInfo(tag_name="P", ancestors=("ARTICLE",)))


class TestLinks:
    @pytest.mark.parametrize(
        "href,download,expected",
        [
            ("/files/report.PDF", None, True),
            ("https://x.org/a.zip", None, True),
            ("https://x.org/a.zip?v=1", None, False),
            ("https://x.org/page", "", True),
            ("https://x.org/page", None, False),
        ],
    )
    def test_is_download(self, href: str, download: str | None, expected: bool) -> None:
        assert is_download(href, download) is expected

    def test_resolve_relative(self) -> None:
        assert resolve_hostname("/about", "https://example.com/blog/") == "example.com"

    def test_resolve_unparseable(self) -> None:
        assert resolve_hostname("http://[broken", "https://example.com/") == "unknown"

    def test_same_host_is_internal(self) -> None:
        assert not classify_link("https://EXAMPLE.com/x", HOST).is_external

    def test_host_appearing_in_path_is_still_external(self) -> None:
        link = classify_link("https://evil.io/?next=example.com", HOST)
        assert link.is_external
        assert link.destination_domain == "evil.io"

    def test_subdomain_is_external(self) -> None:
        assert classify_link("https://docs.example.com/", HOST).is_external


class TestNextDepthThreshold:
    def test_grid(self) -> None:
        assert next_depth_threshold(25, 0) == 25
        assert next_depth_threshold(30, 25) is None
        assert next_depth_threshold(25, 25) is None
        assert next_depth_threshold(50, 75) is None


# --- Observers ---


class TestCodeInteractionObserver:
    def test_reports_and_counts(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        classifier = TechnicalBackgroundClassifier(tracker)
        observer = CodeInteractionObserver(tracker, page, classifier)
        observer.start()

        page.dispatch(click(tag_name="CODE", text="x" * 80))
        page.dispatch(click(tag_name="SPAN", ancestors=["PRE"]))
        page.dispatch(click(tag_name="P", text="prose"))

        first, second = sink.events("code_interaction")
        assert first.payload["event_label"] == "x" * 50
        assert first.payload["event_category"] == "technical_engagement"
        assert second.payload["event_label"] == "code_snippet"
        assert classifier.interactions == 2

    def test_stop(self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink) -> None:
        observer = CodeInteractionObserver(tracker, page)
        observer.start()
        observer.stop()
        page.dispatch(click(tag_name="CODE"))
        assert sink.calls == []
        assert page.listener_count() == 0


class TestExternalLinkObserver:
    def test_external_download(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        observer = ExternalLinkObserver(tracker, page, HOST)
        observer.start()

        page.dispatch(click(tag_name="A", text="Paper", href="https://arxiv.org/paper.pdf"))

        (call,) = sink.events("external_link_click")
        assert call.payload == {
            "event_category": "navigation",
            "event_label": "https://arxiv.org/paper.pdf",
            "custom_map": {
                "link_text": "Paper",
                "destination_domain": "arxiv.org",
                "is_download": True,
            },
        }

    def test_internal_and_non_anchor_ignored(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        observer = ExternalLinkObserver(
            tracker, page, HOST, base_url=lambda: "https://example.com/blog/post"
        )
        observer.start()

        page.dispatch(click(tag_name="A", href="/contact"))
        page.dispatch(click(tag_name="A", href="other-post"))
        page.dispatch(click(tag_name="A"))
        page.dispatch(click(tag_name="BUTTON", href="https://github.com"))
        assert sink.calls == []

    def test_link_text_truncated(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        ExternalLinkObserver(tracker, page, HOST).start()
        page.dispatch(click(tag_name="A", text="t" * 70, href="https://github.com/x"))
        (call,) = sink.events()
        assert call.payload["custom_map"]["link_text"] == "t" * 50
        assert call.payload["custom_map"]["is_download"] is False


class TestScrollDepthObserver:
    def test_quartiles_once(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        ScrollDepthObserver(tracker, page).start()
        for percent in range(0, 101):
            page.dispatch(scroll_to(percent))
        page.dispatch(scroll_to(25))

        calls = sink.events("scroll_depth")
        assert [c.payload["event_label"] for c in calls] == ["25%", "50%", "75%", "100%"]
        assert [c.payload["value"] for c in calls] == [25, 50, 75, 100]

    def test_skipped_grid_point_not_backfilled(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        ScrollDepthObserver(tracker, page).start()
        page.dispatch(scroll_to(60))
        page.dispatch(scroll_to(75))
        assert [c.payload["value"] for c in sink.events()] == [75]

    def test_non_finite_scroll_ignored(
        self, tracker: Tracker, page: InMemoryPage, sink: RecordingSink
    ) -> None:
        ScrollDepthObserver(tracker, page).start()
        page.dispatch(ScrollSignal(scroll_y=math.inf, document_height=2000, viewport_height=1000))
        page.dispatch(scroll_to(25))
        assert [c.payload["value"] for c in sink.events()] == [25]


class TestEngagementObservers:
    def test_observer_base_is_abstract(self, tracker: Tracker, page: InMemoryPage) -> None:
        with pytest.raises(TypeError):
            _Observer(tracker, page)  # type: ignore[abstract]

    def test_start_stop_together(self, tracker: Tracker, page: InMemoryPage) -> None:
        with EngagementObservers(tracker, page, HOST) as observers:
            assert observers.active
            assert page.listener_count("click") == 2
            assert page.listener_count("scroll") == 1
        assert not observers.active
        assert page.listener_count() == 0

    def test_disabled_never_subscribes(self, page: InMemoryPage) -> None:
        observers = EngagementObservers(Tracker("", None, FixedClock()), page, HOST)
        observers.start()
        assert not observers.active
        assert page.listener_count() == 0

    def test_start_twice_keeps_one_listener_each(
        self, tracker: Tracker, page: InMemoryPage
    ) -> None:
        observers = EngagementObservers(tracker, page, HOST)
        observers.start()
        observers.start()
        assert page.listener_count() == 3
