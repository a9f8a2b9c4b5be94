"""
Unit tests for Background component.
"""

from __future__ import annotations

import pytest

from sitepulse.adapters.clock import FixedClock
from sitepulse.adapters.sinks import RecordingSink
from sitepulse.components.telemetry import Tracker
from sitepulse.rules.models import BackgroundRules

from ..component import TechnicalBackgroundClassifier, classify_background
from ..models import TechnicalBackground


class TestClassifyBackground:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, TechnicalBackground.BEGINNER),
            (5, TechnicalBackground.BEGINNER),
            (6, TechnicalBackground.INTERMEDIATE),
            (10, TechnicalBackground.INTERMEDIATE),
            (11, TechnicalBackground.ADVANCED),
            (20, TechnicalBackground.ADVANCED),
            (21, TechnicalBackground.EXPERT),
            (500, TechnicalBackground.EXPERT),
        ],
    )
    def test_thresholds(self, count: int, expected: TechnicalBackground) -> None:
        assert classify_background(count) == expected

    def test_monotonic(self) -> None:
        order = list(TechnicalBackground)
        ranks = [order.index(classify_background(n)) for n in range(40)]
        assert ranks == sorted(ranks)

    def test_custom_rules(self) -> None:
        rules = BackgroundRules(intermediate_above=1, advanced_above=2, expert_above=3)
        assert classify_background(2, rules) == TechnicalBackground.INTERMEDIATE
        assert classify_background(4, rules) == TechnicalBackground.EXPERT


class TestTechnicalBackgroundClassifier:
    def test_reports_on_every_interaction(self) -> None:
        sink = RecordingSink()
        classifier = TechnicalBackgroundClassifier(Tracker("G-TEST", sink, FixedClock()))

        seen = [classifier.record_interaction() for _ in range(21)]

        assert seen[0] == TechnicalBackground.BEGINNER
        assert seen[5] == TechnicalBackground.INTERMEDIATE
        assert seen[10] == TechnicalBackground.ADVANCED
        assert seen[20] == TechnicalBackground.EXPERT
        assert classifier.interactions == 21

        configs = sink.configs()
        assert len(configs) == 21
        assert configs[0].payload == {"custom_map": {"technical_background": "beginner"}}
        assert configs[-1].payload == {"custom_map": {"technical_background": "expert"}}

    def test_disabled_does_not_count(self) -> None:
        sink = RecordingSink()
        classifier = TechnicalBackgroundClassifier(Tracker("", sink, FixedClock()))
        classifier.record_interaction()
        assert classifier.interactions == 0
        assert sink.calls == []

    def test_technical_time(self) -> None:
        classifier = TechnicalBackgroundClassifier(Tracker("", None, FixedClock()))
        classifier.add_technical_time(12.5)
        classifier.add_technical_time(-3)
        assert classifier.technical_seconds == 12.5
