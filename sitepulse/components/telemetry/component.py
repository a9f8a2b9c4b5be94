"""
Telemetry component - Event taxonomy and emission facade.

Every semantic payload the engine produces leaves through Tracker. It is the
single point of contact with the analytics sink.

Invariants:
- A disabled tracker (no tracking id, or no sink) makes zero sink calls
- One emit() is at most one sink call: no batching, retry or dedup
- Sink failures never reach the caller
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from sitepulse.ports.clock import ClockPort
from sitepulse.rules.models import DEFAULT_RULES, TrackingRules

from .models import (
    CATALOG,
    Event,
    EventKind,
    SinkCall,
    SinkCommand,
    TelemetryValidationError,
)
from .ports import SinkPort

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def validate_event(event: Event) -> list[TelemetryValidationError]:
    """
    Check an event against the emission preconditions.

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[TelemetryValidationError] = []

    if not isinstance(event.action, str) or not event.action:
        errors.append(
            TelemetryValidationError(
                code="MISSING_ACTION",
                message="Event action must be a non-empty string",
                field_name="action",
            )
        )
    if not isinstance(event.category, str) or not event.category:
        errors.append(
            TelemetryValidationError(
                code="MISSING_CATEGORY",
                message="Event category must be a non-empty string",
                field_name="category",
            )
        )
    if not errors and (event.action, event.category) not in CATALOG:
        errors.append(
            TelemetryValidationError(
                code="UNKNOWN_EVENT",
                message=f"'{event.action}/{event.category}' is not in the event catalog",
                field_name="action",
            )
        )

    if event.value is not None:
        if isinstance(event.value, bool) or not isinstance(event.value, int | float):
            errors.append(
                TelemetryValidationError(
                    code="INVALID_VALUE",
                    message="Event value must be a number",
                    field_name="value",
                )
            )
        elif not math.isfinite(event.value):
            errors.append(
                TelemetryValidationError(
                    code="INVALID_VALUE",
                    message="Event value must be finite",
                    field_name="value",
                )
            )

    if any(not isinstance(key, str) for key in event.parameters):
        errors.append(
            TelemetryValidationError(
                code="INVALID_PARAMETERS",
                message="Event parameter keys must be strings",
                field_name="parameters",
            )
        )

    return errors


def build_event_payload(event: Event) -> dict[str, Any]:
    """
    Shape an event for the sink's "event" command.

    Keys with no value are left out, as the browser transport drops them.
    """
    payload: dict[str, Any] = {"event_category": event.category}
    if event.label is not None:
        payload["event_label"] = event.label
    if event.value is not None:
        payload["value"] = event.value
    if event.parameters:
        payload["custom_map"] = dict(event.parameters)
    if event.non_interaction:
        payload["non_interaction"] = True
    return payload


def round_half_up(value: float) -> int:
    """Round like the browser does (0.5 goes up, not to even)."""
    return math.floor(value + 0.5)


def truncate(text: str | None, length: int) -> str:
    return (text or "")[:length]


# --- Emission Facade ---


class Tracker:
    """
    Normalizes events and forwards them to the sink.

    Args:
        tracking_id: Analytics property id. Empty disables tracking.
        sink: The external sink, or None when the host provides none.
        clock: Time source, used for the bootstrap "js" call.
        rules: Tracking rules (bootstrap flags and dimension maps).
    """

    def __init__(
        self,
        tracking_id: str | None,
        sink: SinkPort | None,
        clock: ClockPort,
        rules: TrackingRules | None = None,
    ) -> None:
        self._tracking_id = tracking_id or ""
        self._sink = sink
        self._clock = clock
        self._rules = rules or DEFAULT_RULES

    @property
    def enabled(self) -> bool:
        return bool(self._tracking_id) and self._sink is not None

    @property
    def tracking_id(self) -> str:
        return self._tracking_id

    @property
    def clock(self) -> ClockPort:
        return self._clock

    @property
    def rules(self) -> TrackingRules:
        return self._rules

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def emit(self, event: Event) -> bool:
        """
        Forward one event to the sink.

        Returns:
            True if a sink call was attempted, False if tracking is
            disabled or the event was invalid and dropped.
        """
        if not self.enabled:
            return False

        errors = validate_event(event)
        if errors:
            logger.warning(
                "Dropping invalid event %r: %s",
                event.action,
                "; ".join(e.message for e in errors),
            )
            return False

        return self._report("event", event.action, build_event_payload(event))

    def emit_kind(
        self,
        kind: EventKind,
        label: str | None = None,
        value: float | None = None,
        parameters: Mapping[str, Any] | None = None,
        non_interaction: bool = False,
    ) -> bool:
        """Shorthand for emit(kind.event(...))."""
        return self.emit(kind.event(label, value, parameters, non_interaction))

    # ------------------------------------------------------------------
    # Session-scoped configuration
    # ------------------------------------------------------------------

    def configure(self, custom_map: Mapping[str, Any]) -> bool:
        """Update session dimensions (background, market, ...)."""
        if not self.enabled:
            return False
        return self._report("config", self._tracking_id, {"custom_map": dict(custom_map)})

    def track_page_view(
        self,
        url: str,
        title: str | None = None,
        custom_parameters: Mapping[str, Any] | None = None,
    ) -> bool:
        if not self.enabled:
            return False
        payload: dict[str, Any] = {"page_location": url}
        if title is not None:
            payload["page_title"] = title
        if custom_parameters:
            payload["custom_map"] = dict(custom_parameters)
        return self._report("config", self._tracking_id, payload)

    def bootstrap(self, page_title: str, page_location: str) -> bool:
        """
        Initialise the sink for a new session.

        Sends the "js" timestamp call, the property config with custom
        dimension names and privacy flags, then the web-vitals metric names.
        """
        if not self.enabled:
            return False

        boot = self._rules.bootstrap
        self._report("js", self._clock.now_utc(), {})
        self._report(
            "config",
            self._tracking_id,
            {
                "page_title": page_title,
                "page_location": page_location,
                "enhanced_ecommerce": boot.enhanced_ecommerce,
                "custom_map": dict(boot.dimensions),
                "send_page_view": boot.send_page_view,
                "site_speed_sample_rate": boot.site_speed_sample_rate,
                "anonymize_ip": boot.anonymize_ip,
                "respect_dnt": boot.respect_dnt,
            },
        )
        self._report("config", self._tracking_id, {"custom_map": dict(boot.vital_metrics)})
        logger.info("Tracking bootstrapped for %s", page_location)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _report(self, command: SinkCommand, target: Any, payload: dict[str, Any]) -> bool:
        if self._sink is None:
            return False
        try:
            self._sink.report(SinkCall(command=command, target=target, payload=payload))
        except Exception:
            # Fire-and-forget; never retried
            logger.warning("Sink rejected %s call for %r", command, target, exc_info=True)
        return True
