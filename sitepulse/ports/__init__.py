"""Host-facing ports shared by every component."""

from .clock import ClockPort
from .page import PagePort, SignalHandler, Subscription
from .performance import EntryHandler, PerformancePort
from .scheduler import SchedulerPort

__all__ = [
    "ClockPort",
    "EntryHandler",
    "PagePort",
    "PerformancePort",
    "SchedulerPort",
    "SignalHandler",
    "Subscription",
]
