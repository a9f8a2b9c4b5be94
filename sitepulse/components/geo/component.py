"""
Geo component - Geographic market inference and variant assignment.

Two separate classifiers over the browser timezone:

- infer_market(): fine-grained (market, region) pairs, reported as a
  session dimension
- assign_variant(): coarse experiment bucket, reported as an event

They serve different consumers at different granularity and are kept apart.
"""

from __future__ import annotations

import logging

from sitepulse.components.telemetry import EventKind, Tracker
from sitepulse.domain.signals import BrowserEnvironment
from sitepulse.rules.models import GeoRules

from .models import UNKNOWN, GeoAssignment, Variant

logger = logging.getLogger(__name__)

DEFAULT_GEO_RULES = GeoRules()


# --- Pure Functions (Functional Core) ---


def infer_market(timezone: str | None, rules: GeoRules = DEFAULT_GEO_RULES) -> tuple[str, str]:
    """
    Map an IANA timezone to (market, region). First matching rule wins.

    Returns ("unknown", "unknown") when nothing matches.
    """
    tz = timezone or ""
    for rule in rules.markets:
        if any(pattern in tz for pattern in rule.patterns):
            return rule.market, rule.region
    return UNKNOWN, UNKNOWN


def assign_variant(timezone: str | None, rules: GeoRules = DEFAULT_GEO_RULES) -> Variant:
    """Bucket a timezone by its region prefix (Europe/, Asia/, America/)."""
    tz = timezone or ""
    for prefix, variant in rules.variants.items():
        if prefix in tz:
            return Variant(variant)
    return Variant.DEFAULT


# --- Tracker ---


class GeographicTracker:
    """One-shot geography for a session."""

    def __init__(
        self,
        tracker: Tracker,
        environment: BrowserEnvironment,
        rules: GeoRules | None = None,
    ) -> None:
        self._tracker = tracker
        self._environment = environment
        self._rules = rules or tracker.rules.geo
        self._assignment: GeoAssignment | None = None
        self._variant: Variant | None = None

    @property
    def assignment(self) -> GeoAssignment | None:
        return self._assignment

    @property
    def variant(self) -> Variant | None:
        return self._variant

    def start(self) -> GeoAssignment | None:
        """Infer and report the market. Later calls return the first result."""
        if not self._tracker.enabled:
            return None
        if self._assignment is not None:
            return self._assignment

        timezone = self._environment.timezone or ""
        locale = self._environment.locale or ""
        market, region = infer_market(timezone, self._rules)
        self._assignment = GeoAssignment(
            timezone=timezone, locale=locale, market=market, region=region
        )
        logger.debug("Geo market %s/%s for %r", market, region, timezone)
        self._tracker.configure(
            {
                "timezone": timezone,
                "language": locale,
                "inferred_market": market,
                "inferred_region": region,
            }
        )
        return self._assignment

    def assign_variant(self) -> Variant:
        """Pick and report the experiment variant. Later calls return the first result."""
        if self._variant is not None:
            return self._variant
        if not self._tracker.enabled:
            return Variant.DEFAULT

        timezone = self._environment.timezone or ""
        self._variant = assign_variant(timezone, self._rules)
        self._tracker.emit_kind(
            EventKind.VARIANT_ASSIGNMENT,
            label=self._variant.value,
            parameters={"timezone": timezone, "variant": self._variant.value},
        )
        return self._variant
