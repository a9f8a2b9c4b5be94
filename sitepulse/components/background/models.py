from __future__ import annotations

from enum import Enum


class TechnicalBackground(str, Enum):
    """Inferred technical sophistication, least to most."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"
