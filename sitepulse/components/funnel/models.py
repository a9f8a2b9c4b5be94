"""
Funnel component models.
"""

from __future__ import annotations

from enum import Enum


class FunnelStage(str, Enum):
    """Marketing funnel stages. Ordered by journey position, not by name."""

    AWARENESS = "awareness"
    INTEREST = "interest"
    CONSIDERATION = "consideration"
    CONVERSION = "conversion"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FunnelStage):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FunnelStage):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FunnelStage):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FunnelStage):
            return NotImplemented
        return self.rank >= other.rank


_ORDER = list(FunnelStage)
