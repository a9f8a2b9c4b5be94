"""
Funnel component - Conversion funnel stage resolution.
"""

from .component import FunnelTracker, resolve_stage, traffic_source
from .models import FunnelStage

__all__ = [
    "FunnelStage",
    "FunnelTracker",
    "resolve_stage",
    "traffic_source",
]
