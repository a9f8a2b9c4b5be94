"""
Telemetry component - Event taxonomy and emission facade.
"""

from .component import (
    Tracker,
    build_event_payload,
    round_half_up,
    truncate,
    validate_event,
)
from .models import (
    CATALOG,
    Event,
    EventKind,
    SinkCall,
    SinkCommand,
    TelemetryValidationError,
)
from .ports import SinkPort

__all__ = [
    # Facade
    "Tracker",
    # Pure functions
    "build_event_payload",
    "round_half_up",
    "truncate",
    "validate_event",
    # Models
    "CATALOG",
    "Event",
    "EventKind",
    "SinkCall",
    "SinkCommand",
    "TelemetryValidationError",
    # Ports
    "SinkPort",
]
