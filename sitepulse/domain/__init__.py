"""Host-facing value types."""

from .signals import (
    BrowserEnvironment,
    ClickSignal,
    ElementInfo,
    LoadSignal,
    NavigationTiming,
    PerformanceEntry,
    ScrollSignal,
    Signal,
    SignalKind,
)

__all__ = [
    "BrowserEnvironment",
    "ClickSignal",
    "ElementInfo",
    "LoadSignal",
    "NavigationTiming",
    "PerformanceEntry",
    "ScrollSignal",
    "Signal",
    "SignalKind",
]
