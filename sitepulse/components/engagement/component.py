"""
Engagement component - Page-level interaction observers.

Three independent listeners on the document:

- CodeInteractionObserver: clicks on code, feeding the background classifier
- ExternalLinkObserver: clicks on anchors leaving the site
- ScrollDepthObserver: page-wide scroll depth on a 25% grid

Each observer owns its subscriptions and releases them in stop().
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from urllib.parse import urljoin, urlparse

from sitepulse.components.background import TechnicalBackgroundClassifier
from sitepulse.components.reading import compute_scroll_percent
from sitepulse.components.telemetry import EventKind, Tracker, truncate
from sitepulse.domain.signals import ClickSignal, ElementInfo, ScrollSignal
from sitepulse.ports.page import PagePort, Subscription
from sitepulse.rules.models import EngagementRules

from .models import UNKNOWN_HOST, LinkClassification

logger = logging.getLogger(__name__)

DEFAULT_ENGAGEMENT_RULES = EngagementRules()


# --- Pure Functions (Functional Core) ---


def is_code_target(element: ElementInfo) -> bool:
    """A click counts as code interaction on <code> or anywhere inside <pre>."""
    return element.is_tag("CODE") or element.closest("PRE")


def download_pattern(extensions: Iterable[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return re.compile(rf"\.({alternatives})$", re.IGNORECASE)


_DEFAULT_DOWNLOAD_PATTERN = download_pattern(DEFAULT_ENGAGEMENT_RULES.download_extensions)


def is_download(
    href: str,
    download_attribute: str | None = None,
    pattern: re.Pattern[str] = _DEFAULT_DOWNLOAD_PATTERN,
) -> bool:
    """True for anchors with a download attribute or a known file extension."""
    return download_attribute is not None or bool(pattern.search(href))


def resolve_hostname(href: str, base_url: str) -> str:
    """
    Hostname of `href` resolved against the current page URL.

    Returns "unknown" for URLs that can't be parsed.
    """
    try:
        hostname = urlparse(urljoin(base_url, href)).hostname
    except ValueError:
        return UNKNOWN_HOST
    return hostname or UNKNOWN_HOST


def classify_link(
    href: str,
    document_hostname: str,
    download_attribute: str | None = None,
    base_url: str | None = None,
    pattern: re.Pattern[str] = _DEFAULT_DOWNLOAD_PATTERN,
) -> LinkClassification:
    base = base_url or f"https://{document_hostname}/"
    destination = resolve_hostname(href, base)
    return LinkClassification(
        href=href,
        destination_domain=destination,
        is_external=destination.lower() != document_hostname.lower(),
        is_download=is_download(href, download_attribute, pattern),
    )


def next_depth_threshold(percent: int, max_reached: int, step: int = 25) -> int | None:
    """Return `percent` if it is a new grid crossing, else None."""
    if percent > max_reached and percent % step == 0:
        return percent
    return None


# --- Observers ---


class _Observer(ABC):
    """Shared start/stop bookkeeping."""

    def __init__(self, tracker: Tracker, page: PagePort) -> None:
        self._tracker = tracker
        self._page = page
        self._subscriptions: list[Subscription] = []

    @property
    def active(self) -> bool:
        return bool(self._subscriptions)

    def start(self) -> None:
        if self._subscriptions or not self._tracker.enabled:
            return
        self._subscriptions = self._subscribe()

    def stop(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.stop()

    @abstractmethod
    def _subscribe(self) -> list[Subscription]:
        """Attach the observer's listeners and return their subscriptions."""


class CodeInteractionObserver(_Observer):
    def __init__(
        self,
        tracker: Tracker,
        page: PagePort,
        classifier: TechnicalBackgroundClassifier | None = None,
        rules: EngagementRules | None = None,
    ) -> None:
        super().__init__(tracker, page)
        self._classifier = classifier
        self._rules = rules or tracker.rules.engagement

    def _subscribe(self) -> list[Subscription]:
        return [self._page.observe("click", self.handle_click)]

    def handle_click(self, signal: ClickSignal) -> None:
        target = signal.target
        if not is_code_target(target):
            return

        preview = truncate(target.text, self._rules.code_preview_length)
        self._tracker.emit_kind(
            EventKind.CODE_INTERACTION,
            label=preview or "code_snippet",
        )
        if self._classifier is not None:
            self._classifier.record_interaction()


class ExternalLinkObserver(_Observer):
    def __init__(
        self,
        tracker: Tracker,
        page: PagePort,
        document_hostname: str,
        base_url: Callable[[], str] | None = None,
        rules: EngagementRules | None = None,
    ) -> None:
        super().__init__(tracker, page)
        self._hostname = document_hostname
        self._base_url = base_url
        self._rules = rules or tracker.rules.engagement
        self._pattern = download_pattern(self._rules.download_extensions)

    def _subscribe(self) -> list[Subscription]:
        return [self._page.observe("click", self.handle_click)]

    def handle_click(self, signal: ClickSignal) -> None:
        target = signal.target
        if not target.is_tag("A") or not target.href:
            return

        link = classify_link(
            target.href,
            self._hostname,
            target.download,
            base_url=self._base_url() if self._base_url else None,
            pattern=self._pattern,
        )
        if not link.is_external:
            return

        logger.debug("External link to %s", link.destination_domain)
        self._tracker.emit_kind(
            EventKind.EXTERNAL_LINK_CLICK,
            label=target.href,
            parameters={
                "link_text": truncate(target.text, self._rules.link_text_length),
                "destination_domain": link.destination_domain,
                "is_download": link.is_download,
            },
        )


class ScrollDepthObserver(_Observer):
    """Page-wide scroll depth. Independent of per-post reading progress."""

    def __init__(
        self,
        tracker: Tracker,
        page: PagePort,
        rules: EngagementRules | None = None,
    ) -> None:
        super().__init__(tracker, page)
        self._rules = rules or tracker.rules.engagement
        self._max_scroll = 0

    @property
    def max_scroll(self) -> int:
        return self._max_scroll

    def _subscribe(self) -> list[Subscription]:
        return [self._page.observe("scroll", self.handle_scroll)]

    def handle_scroll(self, signal: ScrollSignal) -> None:
        percent = compute_scroll_percent(
            signal.scroll_y, signal.document_height, signal.viewport_height
        )
        threshold = next_depth_threshold(
            percent, self._max_scroll, self._rules.scroll_depth_step
        )
        if threshold is None:
            return

        self._max_scroll = threshold
        self._tracker.emit_kind(
            EventKind.SCROLL_DEPTH,
            label=f"{threshold}%",
            value=threshold,
        )


class EngagementObservers:
    """All page-level observers for one page view, started and stopped together."""

    def __init__(
        self,
        tracker: Tracker,
        page: PagePort,
        document_hostname: str,
        classifier: TechnicalBackgroundClassifier | None = None,
        base_url: Callable[[], str] | None = None,
    ) -> None:
        self.code = CodeInteractionObserver(tracker, page, classifier)
        self.links = ExternalLinkObserver(tracker, page, document_hostname, base_url)
        self.scroll = ScrollDepthObserver(tracker, page)

    @property
    def active(self) -> bool:
        return self.code.active or self.links.active or self.scroll.active

    def start(self) -> None:
        self.code.start()
        self.links.start()
        self.scroll.start()

    def stop(self) -> None:
        self.code.stop()
        self.links.stop()
        self.scroll.stop()

    def __enter__(self) -> EngagementObservers:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
