"""
Reading component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ReadingProgressState:
    """
    Progress of one content unit during one activation.

    Owned by a single sampler; only scroll handling mutates it.
    """

    content_id: str
    start_time: datetime
    max_milestone: int = 0
    completed: bool = False


@dataclass(frozen=True)
class ScrollDecision:
    """What one scroll signal should emit."""

    percent: int
    milestone: int | None = None  # Set when a new milestone was reached
    complete: bool = False  # Set when the unit was completed by this signal
