"""
Reading component - Per-post reading progress.

Turns the continuous scroll stream of one content unit into discrete
reading-progress milestones plus a single completion event.

Invariants:
- Milestones are multiples of the step, strictly increasing, each once
- Completion fires at most once per activation
- Deactivation leaves no listener behind
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from sitepulse.components.telemetry import EventKind, Tracker, round_half_up
from sitepulse.domain.signals import ScrollSignal
from sitepulse.ports.page import PagePort, Subscription
from sitepulse.rules.models import ReadingRules

from .models import ReadingProgressState, ScrollDecision

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def compute_scroll_percent(
    scroll_y: float,
    document_height: float,
    viewport_height: float,
) -> int:
    """
    Scroll position as a whole percentage of the scrollable distance.

    Content that fits the viewport has nothing to scroll and reads as 0%,
    as does a non-finite position or height.
    The result is clamped to [0, 100].
    """
    scrollable = document_height - viewport_height
    if scrollable <= 0:
        return 0
    ratio = scroll_y / scrollable * 100
    if not math.isfinite(ratio):
        return 0
    percent = round_half_up(ratio)
    return max(0, min(100, percent))


def decide_scroll(
    state: ReadingProgressState,
    percent: int,
    milestone_step: int = 10,
    completion_threshold: int = 90,
) -> ScrollDecision:
    """
    Decide what a scroll at `percent` emits, given the current state.

    Completion is judged against the milestone reached *before* this
    signal, so reaching exactly the threshold still completes.
    """
    complete = (
        not state.completed
        and percent >= completion_threshold
        and state.max_milestone < completion_threshold
    )
    milestone = None
    if percent > state.max_milestone and percent % milestone_step == 0:
        milestone = percent
    return ScrollDecision(percent=percent, milestone=milestone, complete=complete)


def elapsed_seconds(start: datetime, now: datetime) -> int:
    return round_half_up((now - start).total_seconds())


def estimate_reading_time(text: str, words_per_minute: int = 200) -> int:
    """Estimated minutes to read `text`, rounded up."""
    words = len(text.split())
    return math.ceil(words / words_per_minute)


# --- Sampler ---


class ReadingProgressSampler:
    """
    Reading progress for one content unit.

    Use as a context manager, or call activate() / deactivate() from the
    view's mount and unmount hooks.
    """

    def __init__(
        self,
        tracker: Tracker,
        page: PagePort,
        content_id: str,
        rules: ReadingRules | None = None,
    ) -> None:
        self._tracker = tracker
        self._page = page
        self._content_id = content_id
        self._rules = rules or tracker.rules.reading
        self._state: ReadingProgressState | None = None
        self._subscription: Subscription | None = None

    @property
    def content_id(self) -> str:
        return self._content_id

    @property
    def state(self) -> ReadingProgressState | None:
        return self._state

    @property
    def active(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def activate(self) -> None:
        """Start a fresh activation: reset state and attach the scroll listener."""
        self.deactivate()
        self._state = ReadingProgressState(
            content_id=self._content_id,
            start_time=self._tracker.clock.now_utc(),
        )
        if not self._tracker.enabled:
            return
        self._subscription = self._page.observe("scroll", self.handle_scroll)
        logger.debug("Reading progress active for %s", self._content_id)

    def deactivate(self) -> None:
        if self._subscription is not None:
            self._subscription.stop()
            self._subscription = None
            logger.debug("Reading progress stopped for %s", self._content_id)

    def __enter__(self) -> ReadingProgressSampler:
        self.activate()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.deactivate()

    def handle_scroll(self, signal: ScrollSignal) -> None:
        state = self._state
        if state is None:
            return

        percent = compute_scroll_percent(
            signal.scroll_y, signal.document_height, signal.viewport_height
        )
        decision = decide_scroll(
            state,
            percent,
            self._rules.milestone_step,
            self._rules.completion_threshold,
        )
        if decision.milestone is None and not decision.complete:
            return

        spent = elapsed_seconds(state.start_time, self._tracker.clock.now_utc())

        if decision.milestone is not None:
            state.max_milestone = decision.milestone
            self._emit_progress(decision.milestone, spent)

        if decision.complete:
            state.completed = True
            self._tracker.emit_kind(
                EventKind.BLOG_POST_COMPLETE,
                label=self._content_id,
                value=spent,
                parameters={
                    "reading_time_seconds": spent,
                    "completion_percentage": percent,
                },
            )

    def track_manual_progress(self, percentage: int) -> None:
        """Report an explicit progress value without touching sampler state."""
        start = self._state.start_time if self._state else self._tracker.clock.now_utc()
        self._emit_progress(percentage, elapsed_seconds(start, self._tracker.clock.now_utc()))

    def _emit_progress(self, percentage: int, spent: int) -> None:
        self._tracker.emit_kind(
            EventKind.READING_PROGRESS,
            label=self._content_id,
            value=percentage,
            parameters={
                "time_spent_seconds": spent,
                "progress_percentage": percentage,
            },
        )
