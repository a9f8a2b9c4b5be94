"""
Background component - Technical background inference.
"""

from .component import TechnicalBackgroundClassifier, classify_background
from .models import TechnicalBackground

__all__ = [
    "TechnicalBackground",
    "TechnicalBackgroundClassifier",
    "classify_background",
]
