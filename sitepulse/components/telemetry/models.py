"""
Telemetry component models.

The closed catalog of event kinds, the Event value, and the shape of a call
into the analytics sink.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

SinkCommand = Literal["js", "config", "event"]


# --- Event Catalog ---


class EventKind(Enum):
    """Every event the engine may emit, as (action, category)."""

    # Code and technical content
    CODE_SNIPPET_COPY = ("code_snippet_copy", "technical_engagement")
    CODE_SNIPPET_VIEW = ("code_snippet_view", "technical_engagement")
    CODE_INTERACTION = ("code_interaction", "technical_engagement")
    DIAGRAM_INTERACTION = ("diagram_interaction", "technical_engagement")
    TECHNICAL_DEMO_VIEW = ("technical_demo_view", "technical_engagement")
    API_DOCUMENTATION_VIEW = ("api_docs_view", "technical_engagement")

    # Reading
    BLOG_POST_READ = ("blog_post_read", "content_engagement")
    READING_PROGRESS = ("reading_progress", "content_engagement")
    BLOG_POST_COMPLETE = ("blog_post_complete", "content_engagement")
    SCROLL_DEPTH = ("scroll_depth", "engagement")

    # Conversion
    CONTACT_FORM_VIEW = ("contact_form_view", "conversion")
    CONTACT_FORM_SUBMIT = ("contact_form_submit", "conversion")
    CONTACT_FORM_SUCCESS = ("contact_form_success", "conversion")
    SERVICE_INQUIRY = ("service_inquiry", "conversion")
    FUNNEL_PROGRESSION = ("funnel_progression", "conversion")

    # Navigation and search
    EXTERNAL_LINK_CLICK = ("external_link_click", "navigation")
    SEARCH_PERFORM = ("search_perform", "search")

    # Geography
    VARIANT_ASSIGNMENT = ("variant_assignment", "geographic_testing")

    # Performance
    PERFORMANCE_METRIC = ("performance_metric", "site_performance")
    WEB_VITAL = ("web_vital", "web_vitals")

    @property
    def action(self) -> str:
        return self.value[0]

    @property
    def category(self) -> str:
        return self.value[1]

    def event(
        self,
        label: str | None = None,
        value: float | None = None,
        parameters: Mapping[str, Any] | None = None,
        non_interaction: bool = False,
    ) -> Event:
        """Build an Event of this kind."""
        return Event(
            action=self.action,
            category=self.category,
            label=label,
            value=value,
            parameters=parameters or {},
            non_interaction=non_interaction,
        )


CATALOG: frozenset[tuple[str, str]] = frozenset(kind.value for kind in EventKind)


# --- Event ---


@dataclass(frozen=True)
class Event:
    """
    A single semantic occurrence.

    Immutable and identity-free: it exists only for the duration of one
    emit() call and is never stored by the engine.
    """

    action: str
    category: str
    label: str | None = None
    value: float | None = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    non_interaction: bool = False

    def __post_init__(self) -> None:
        # Freeze the caller's mapping so later mutation cannot leak in
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))


# --- Sink Call ---


@dataclass(frozen=True)
class SinkCall:
    """One outbound call: sink(command, target, payload)."""

    command: SinkCommand
    target: str | datetime
    payload: dict[str, Any] = field(default_factory=dict)


# --- Validation Error ---


@dataclass(frozen=True)
class TelemetryValidationError:
    code: str
    message: str
    field_name: str | None = None
