from __future__ import annotations

from typing import Literal

MetricName = Literal[
    "dns_time",
    "connection_time",
    "request_time",
    "dom_processing",
    "total_time",
]

# Emission order
METRIC_NAMES: tuple[MetricName, ...] = (
    "dns_time",
    "connection_time",
    "request_time",
    "dom_processing",
    "total_time",
)

NavigationMetrics = dict[MetricName, float | None]
