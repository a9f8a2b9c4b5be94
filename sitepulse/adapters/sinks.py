"""
Sink adapters.

The real sink lives in the browser (a global gtag-style function). These
adapters cover everything else:

- CallableSink: wraps any callable with the sink(command, target, payload)
  shape, e.g. a bridge into the page
- LoggingSink: logs each call instead of sending it (local development)
- RecordingSink: keeps calls in memory for assertions and replay output
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sitepulse.components.telemetry.models import SinkCall, SinkCommand

logger = logging.getLogger(__name__)


class CallableSink:
    def __init__(self, fn: Callable[[str, str | datetime, dict[str, Any]], Any]) -> None:
        self._fn = fn

    def report(self, call: SinkCall) -> None:
        self._fn(call.command, call.target, call.payload)


@dataclass
class LoggingSink:
    """Sink that logs instead of sending."""

    log_level: int = logging.INFO

    def report(self, call: SinkCall) -> None:
        logger.log(self.log_level, "sink %s %s %s", call.command, call.target, call.payload)


@dataclass
class RecordingSink:
    """Sink that stores every call in order."""

    calls: list[SinkCall] = field(default_factory=list)

    def report(self, call: SinkCall) -> None:
        self.calls.append(call)

    # --- Test helpers ---

    def events(self, action: str | None = None) -> list[SinkCall]:
        """All "event" calls, optionally filtered by action."""
        return [
            c
            for c in self.calls
            if c.command == "event" and (action is None or c.target == action)
        ]

    def configs(self) -> list[SinkCall]:
        return [c for c in self.calls if c.command == "config"]

    def of(self, command: SinkCommand) -> list[SinkCall]:
        return [c for c in self.calls if c.command == command]

    def clear(self) -> None:
        self.calls.clear()
