"""
Performance component - Page load timing and web vitals.
"""

from .component import (
    PerformanceCollector,
    WebVitalsObserver,
    derive_navigation_metrics,
    reportable_metrics,
)
from .models import METRIC_NAMES, MetricName, NavigationMetrics

__all__ = [
    "METRIC_NAMES",
    "MetricName",
    "NavigationMetrics",
    "PerformanceCollector",
    "WebVitalsObserver",
    "derive_navigation_metrics",
    "reportable_metrics",
]
