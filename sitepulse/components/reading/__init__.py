"""
Reading component - Per-post reading progress.
"""

from .component import (
    ReadingProgressSampler,
    compute_scroll_percent,
    decide_scroll,
    elapsed_seconds,
    estimate_reading_time,
)
from .models import ReadingProgressState, ScrollDecision

__all__ = [
    "ReadingProgressSampler",
    "compute_scroll_percent",
    "decide_scroll",
    "elapsed_seconds",
    "estimate_reading_time",
    "ReadingProgressState",
    "ScrollDecision",
]
