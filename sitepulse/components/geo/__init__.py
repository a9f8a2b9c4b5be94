"""
Geo component - Geographic market inference and variant assignment.
"""

from .component import GeographicTracker, assign_variant, infer_market
from .models import UNKNOWN, GeoAssignment, Variant

__all__ = [
    "GeoAssignment",
    "GeographicTracker",
    "UNKNOWN",
    "Variant",
    "assign_variant",
    "infer_market",
]
