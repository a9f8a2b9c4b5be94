"""
Page port.

The hosting page owns the real scroll/click/load listeners. Components ask
the port to observe a signal kind and get back a Subscription; calling
stop() on it detaches the handler. Teardown of a view means stopping every
subscription the view acquired.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from sitepulse.domain.signals import SignalKind

SignalHandler = Callable[[Any], None]


class Subscription(Protocol):
    """Handle for a listener or a scheduled callback."""

    def stop(self) -> None:
        """Release the listener. Calling stop() twice is harmless."""
        ...

    @property
    def active(self) -> bool:
        """True until stop() has been called (or a timer has fired)."""
        ...


class PagePort(Protocol):
    """Signal source for one document."""

    def observe(self, kind: SignalKind, handler: SignalHandler) -> Subscription:
        """Attach a handler for scroll, click or load signals."""
        ...
