from __future__ import annotations

from collections.abc import Callable


class CallbackSubscription:
    """Subscription whose stop() runs a release callback exactly once."""

    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Callable[[], None] | None = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def stop(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()
