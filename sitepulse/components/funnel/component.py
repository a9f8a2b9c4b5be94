"""
Funnel component - Conversion funnel stage resolution.

Maps the current navigation path to a funnel stage and reports it. Stages
are derived, never stored: every navigation re-resolves from the path.

No dedup and no ordering checks. Re-renders of the same page emit the
same stage again, and advance_to() accepts any stage in any order; the
consumer reconstructs the funnel.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from sitepulse.components.telemetry import EventKind, Tracker

from .models import FunnelStage

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def resolve_stage(path: str) -> FunnelStage | None:
    """
    Resolve the funnel stage for a navigation path.

    First matching rule wins:
    - "/"                                -> awareness
    - starts with "/blog"                -> interest
    - contains "contact" or "services"   -> consideration

    Conversion is never resolved from a path; see FunnelTracker.advance_to.
    """
    if path == "/":
        return FunnelStage.AWARENESS
    if path.startswith("/blog"):
        return FunnelStage.INTEREST
    if "contact" in path or "services" in path:
        return FunnelStage.CONSIDERATION
    return None


def traffic_source(referrer: str | None) -> str:
    """
    Traffic source for funnel labels: the referrer's hostname.

    Returns "direct" without a referrer and "unknown" when it can't be parsed.
    """
    if not referrer:
        return "direct"
    try:
        hostname = urlparse(referrer).hostname
    except ValueError:
        return "unknown"
    return hostname or "unknown"


# --- Tracker ---


class FunnelTracker:
    def __init__(self, tracker: Tracker, referrer: str | None = None) -> None:
        self._tracker = tracker
        self._source = traffic_source(referrer)

    @property
    def source(self) -> str:
        return self._source

    def on_navigate(self, path: str) -> FunnelStage | None:
        """Resolve and report the stage for a route change (or initial mount)."""
        stage = resolve_stage(path)
        if stage is not None:
            self.advance_to(stage)
        return stage

    def advance_to(self, stage: FunnelStage) -> None:
        """Report a stage as-is. Used directly for conversion actions."""
        logger.debug("Funnel stage %s (source=%s)", stage.value, self._source)
        self._tracker.emit_kind(
            EventKind.FUNNEL_PROGRESSION,
            label=f"{stage.value}_{self._source}",
            parameters={
                "funnel_stage": stage.value,
                "traffic_source": self._source,
            },
        )

    def track_service_inquiry(self, service_type: str, inquiry_value: float | None = None) -> None:
        """Report a service inquiry, then the conversion stage."""
        self._tracker.emit_kind(
            EventKind.SERVICE_INQUIRY,
            label=service_type,
            value=inquiry_value,
            parameters={
                "service_type": service_type,
                "inquiry_source": "website",
            },
        )
        self.advance_to(FunnelStage.CONVERSION)
