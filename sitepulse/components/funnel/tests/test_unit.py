"""
Unit tests for Funnel component.
"""

from __future__ import annotations

import pytest

from sitepulse.adapters.clock import FixedClock
from sitepulse.adapters.sinks import RecordingSink
from sitepulse.components.telemetry import Tracker

from ..component import FunnelTracker, resolve_stage, traffic_source
from ..models import FunnelStage


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def tracker(sink: RecordingSink) -> Tracker:
    return Tracker("G-TEST", sink, FixedClock())


class TestResolveStage:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/", FunnelStage.AWARENESS),
            ("/blog", FunnelStage.INTEREST),
            ("/blog/intro-to-rag", FunnelStage.INTEREST),
            ("/contact", FunnelStage.CONSIDERATION),
            ("/services/consulting", FunnelStage.CONSIDERATION),
            ("/about/contact-us", FunnelStage.CONSIDERATION),
            ("/about", None),
            ("", None),
        ],
    )
    def test_paths(self, path: str, expected: FunnelStage | None) -> None:
        assert resolve_stage(path) == expected

    def test_blog_rule_wins_over_contact(self) -> None:
        assert resolve_stage("/blog/how-to-contact-us") == FunnelStage.INTEREST

    def test_conversion_never_from_path(self) -> None:
        assert resolve_stage("/conversion") is None


class TestFunnelStage:
    def test_ordered_by_journey(self) -> None:
        assert FunnelStage.AWARENESS < FunnelStage.INTEREST < FunnelStage.CONSIDERATION
        assert FunnelStage.CONVERSION > FunnelStage.CONSIDERATION
        assert sorted(FunnelStage, reverse=True)[0] == FunnelStage.CONVERSION

    def test_rank(self) -> None:
        assert [s.rank for s in FunnelStage] == [0, 1, 2, 3]


class TestTrafficSource:
    def test_direct(self) -> None:
        assert traffic_source("") == "direct"
        assert traffic_source(None) == "direct"

    def test_referrer_hostname(self) -> None:
        assert traffic_source("https://www.google.com/search?q=x") == "www.google.com"

    def test_unparseable(self) -> None:
        assert traffic_source("not a url") == "unknown"
        assert traffic_source("http://[broken") == "unknown"


class TestFunnelTracker:
    def test_on_navigate_reports_stage(self, tracker: Tracker, sink: RecordingSink) -> None:
        funnel = FunnelTracker(tracker, "https://news.ycombinator.com/item?id=1")
        assert funnel.on_navigate("/blog/post") == FunnelStage.INTEREST

        (call,) = sink.events("funnel_progression")
        assert call.payload == {
            "event_category": "conversion",
            "event_label": "interest_news.ycombinator.com",
            "custom_map": {
                "funnel_stage": "interest",
                "traffic_source": "news.ycombinator.com",
            },
        }

    def test_unmatched_path_reports_nothing(self, tracker: Tracker, sink: RecordingSink) -> None:
        funnel = FunnelTracker(tracker)
        assert funnel.on_navigate("/about") is None
        assert sink.calls == []

    def test_no_dedup(self, tracker: Tracker, sink: RecordingSink) -> None:
        funnel = FunnelTracker(tracker)
        funnel.on_navigate("/")
        funnel.on_navigate("/")
        assert len(sink.events("funnel_progression")) == 2

    def test_advance_accepts_any_order(self, tracker: Tracker, sink: RecordingSink) -> None:
        funnel = FunnelTracker(tracker)
        funnel.advance_to(FunnelStage.CONVERSION)
        funnel.advance_to(FunnelStage.AWARENESS)
        labels = [c.payload["event_label"] for c in sink.events()]
        assert labels == ["conversion_direct", "awareness_direct"]

    def test_service_inquiry_then_conversion(
        self, tracker: Tracker, sink: RecordingSink
    ) -> None:
        FunnelTracker(tracker).track_service_inquiry("ai_consulting", 5000)

        inquiry, conversion = sink.events()
        assert inquiry.target == "service_inquiry"
        assert inquiry.payload["value"] == 5000
        assert inquiry.payload["custom_map"] == {
            "service_type": "ai_consulting",
            "inquiry_source": "website",
        }
        assert conversion.payload["custom_map"]["funnel_stage"] == "conversion"
