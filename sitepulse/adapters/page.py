"""
In-memory page.

Implements PagePort for hosts that forward signals from elsewhere (a
browser bridge, the replay CLI, tests). dispatch() delivers a signal to
every handler currently attached for its kind, in attach order.
"""

from __future__ import annotations

import logging

from sitepulse.adapters.subscription import CallbackSubscription
from sitepulse.domain.signals import (
    ClickSignal,
    LoadSignal,
    ScrollSignal,
    Signal,
    SignalKind,
)
from sitepulse.ports.page import SignalHandler

logger = logging.getLogger(__name__)

_KIND_BY_TYPE: dict[type, SignalKind] = {
    ScrollSignal: "scroll",
    ClickSignal: "click",
    LoadSignal: "load",
}


class InMemoryPage:
    def __init__(self) -> None:
        self._handlers: dict[SignalKind, list[SignalHandler]] = {
            "scroll": [],
            "click": [],
            "load": [],
        }

    def observe(self, kind: SignalKind, handler: SignalHandler) -> CallbackSubscription:
        handlers = self._handlers[kind]
        handlers.append(handler)

        def release() -> None:
            handlers.remove(handler)

        return CallbackSubscription(release)

    def dispatch(self, signal: Signal) -> int:
        """Deliver a signal. Returns the number of handlers invoked."""
        kind = _KIND_BY_TYPE[type(signal)]
        # Snapshot: a handler may detach itself or others while running
        handlers = list(self._handlers[kind])
        logger.debug("Dispatching %s to %d handler(s)", kind, len(handlers))
        for handler in handlers:
            handler(signal)
        return len(handlers)

    def listener_count(self, kind: SignalKind | None = None) -> int:
        if kind is not None:
            return len(self._handlers[kind])
        return sum(len(h) for h in self._handlers.values())
