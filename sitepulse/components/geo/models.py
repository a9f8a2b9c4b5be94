from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

UNKNOWN = "unknown"


class Variant(str, Enum):
    """Geographic experiment bucket."""

    EUROPE = "europe"
    ASIA = "asia"
    AMERICAS = "americas"
    DEFAULT = "default"


@dataclass(frozen=True)
class GeoAssignment:
    """Market inference for one session. Computed once, never re-derived."""

    timezone: str
    locale: str
    market: str = UNKNOWN
    region: str = UNKNOWN
