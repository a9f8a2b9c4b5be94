"""
Host signal types.

Value objects the hosting page hands to the engine: scroll and click
signals, the clicked element, navigation timing and performance entries,
and the browser-reported environment. The engine never inspects a real DOM;
the host bridge resolves everything into these shapes first.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

SignalKind = Literal["scroll", "click", "load"]


class ElementInfo(BaseModel):
    """A clicked element, already resolved by the host."""

    model_config = ConfigDict(frozen=True)

    tag_name: str
    text: str = ""
    href: str | None = None  # Absolute or relative, as written on the anchor
    download: str | None = None  # None when the attribute is absent
    ancestors: tuple[str, ...] = ()  # Tag names, nearest parent first

    def is_tag(self, tag: str) -> bool:
        return self.tag_name.upper() == tag.upper()

    def closest(self, tag: str) -> bool:
        """True if this element or any ancestor has the given tag."""
        wanted = tag.upper()
        return self.is_tag(wanted) or any(a.upper() == wanted for a in self.ancestors)


class ScrollSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    scroll_y: float
    document_height: float
    viewport_height: float


class ClickSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: ElementInfo


class LoadSignal(BaseModel):
    model_config = ConfigDict(frozen=True)


Signal = ScrollSignal | ClickSignal | LoadSignal


class NavigationTiming(BaseModel):
    """
    Navigation timing entry for one page load.

    Marks are milliseconds relative to the navigation start. Hosts that
    cannot report a mark leave it as None.
    """

    model_config = ConfigDict(frozen=True)

    fetch_start: float | None = None
    domain_lookup_start: float | None = None
    domain_lookup_end: float | None = None
    connect_start: float | None = None
    connect_end: float | None = None
    request_start: float | None = None
    response_end: float | None = None
    dom_content_loaded_event_end: float | None = None
    load_event_end: float | None = None


class PerformanceEntry(BaseModel):
    """A paint / vitals entry (first-contentful-paint, layout-shift, ...)."""

    model_config = ConfigDict(frozen=True)

    name: str
    entry_type: str
    start_time: float = 0.0


class BrowserEnvironment(BaseModel):
    """Facts the browser reports once per session."""

    model_config = ConfigDict(frozen=True)

    hostname: str = "localhost"
    timezone: str | None = None  # IANA name, e.g. "Europe/London"
    locale: str | None = None  # e.g. "en-GB"
    referrer: str = ""
    page_title: str = ""
    scheme: str = "https"
