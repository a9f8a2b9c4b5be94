"""
Telemetry component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from .models import SinkCall


class SinkPort(Protocol):
    """The external analytics sink."""

    def report(self, call: SinkCall) -> None:
        """Forward one call. Delivery is the sink's concern."""
        ...
