"""
Background component - Technical background inference.

Counts qualifying interactions with technical content (code clicks, post
reads) and maps the count to an ordinal category. The category is
recomputed and re-reported as a session dimension on every interaction,
not only when a threshold is crossed.
"""

from __future__ import annotations

import logging

from sitepulse.components.telemetry import Tracker
from sitepulse.rules.models import BackgroundRules

from .models import TechnicalBackground

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND_RULES = BackgroundRules()


def classify_background(
    count: int,
    rules: BackgroundRules = DEFAULT_BACKGROUND_RULES,
) -> TechnicalBackground:
    """
    Map an interaction count to a category.

    Defaults: >20 expert, >10 advanced, >5 intermediate, otherwise beginner.
    Non-decreasing in `count`.
    """
    if count > rules.expert_above:
        return TechnicalBackground.EXPERT
    if count > rules.advanced_above:
        return TechnicalBackground.ADVANCED
    if count > rules.intermediate_above:
        return TechnicalBackground.INTERMEDIATE
    return TechnicalBackground.BEGINNER


class TechnicalBackgroundClassifier:
    """Session-scoped interaction counter. Dies with the session."""

    def __init__(self, tracker: Tracker, rules: BackgroundRules | None = None) -> None:
        self._tracker = tracker
        self._rules = rules or tracker.rules.background
        self._interactions = 0
        self._technical_seconds = 0.0

    @property
    def interactions(self) -> int:
        return self._interactions

    @property
    def technical_seconds(self) -> float:
        return self._technical_seconds

    @property
    def background(self) -> TechnicalBackground:
        return classify_background(self._interactions, self._rules)

    def record_interaction(self) -> TechnicalBackground:
        """Count one qualifying interaction and report the resulting category."""
        if not self._tracker.enabled:
            return self.background

        self._interactions += 1
        background = classify_background(self._interactions, self._rules)
        logger.debug("Interaction %d -> %s", self._interactions, background.value)
        self._tracker.configure({"technical_background": background.value})
        return background

    def add_technical_time(self, seconds: float) -> None:
        """Accumulate time spent on technical content (kept locally, not reported)."""
        if seconds > 0:
            self._technical_seconds += seconds
