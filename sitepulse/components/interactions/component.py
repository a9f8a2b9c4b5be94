"""
Interactions component - Forms, search and content views.

Explicit calls made by page widgets (contact forms, search box, code
blocks, diagrams) rather than observed signals.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sitepulse.components.funnel import FunnelStage, FunnelTracker
from sitepulse.components.telemetry import EventKind, Tracker, truncate

logger = logging.getLogger(__name__)

CONTENT_VIEW_KINDS = frozenset(
    {
        EventKind.BLOG_POST_READ,
        EventKind.DIAGRAM_INTERACTION,
        EventKind.TECHNICAL_DEMO_VIEW,
        EventKind.API_DOCUMENTATION_VIEW,
    }
)


def snippet_label(code: str, language: str | None) -> str:
    return f"{language or 'unknown'}_{truncate(code, 30)}"


def _epoch_millis(tracker: Tracker) -> int:
    return int(tracker.clock.now_utc().timestamp() * 1000)


class FormTracker:
    """
    Lifecycle of one named form.

    When a funnel tracker is given, a successful submit also reports the
    conversion stage.
    """

    def __init__(
        self,
        tracker: Tracker,
        form_name: str,
        funnel: FunnelTracker | None = None,
    ) -> None:
        self._tracker = tracker
        self._form_name = form_name
        self._funnel = funnel

    def track_view(self) -> None:
        self._tracker.emit_kind(EventKind.CONTACT_FORM_VIEW, label=self._form_name)

    def track_submit(self, form_data: Mapping[str, Any] | None = None) -> None:
        self._tracker.emit_kind(
            EventKind.CONTACT_FORM_SUBMIT,
            label=self._form_name,
            parameters={
                "form_name": self._form_name,
                "fields_filled": len(form_data) if form_data else 0,
                "submission_timestamp": _epoch_millis(self._tracker),
            },
        )

    def track_success(self, response_time_ms: float | None = None) -> None:
        parameters: dict[str, Any] = {"form_name": self._form_name}
        if response_time_ms is not None:
            parameters["response_time_ms"] = response_time_ms
        self._tracker.emit_kind(
            EventKind.CONTACT_FORM_SUCCESS,
            label=self._form_name,
            value=response_time_ms,
            parameters=parameters,
        )
        if self._funnel is not None:
            self._funnel.advance_to(FunnelStage.CONVERSION)


class SearchTracker:
    def __init__(self, tracker: Tracker) -> None:
        self._tracker = tracker

    def track_search(self, query: str, results_count: int | None = None) -> None:
        parameters: dict[str, Any] = {
            "search_query": query,
            "search_timestamp": _epoch_millis(self._tracker),
        }
        if results_count is not None:
            parameters["results_count"] = results_count
        self._tracker.emit_kind(
            EventKind.SEARCH_PERFORM,
            label=query,
            value=results_count,
            parameters=parameters,
        )


class CodeSnippetTracker:
    """Views and copies of rendered code blocks."""

    def __init__(self, tracker: Tracker) -> None:
        self._tracker = tracker

    def track_view(self, code: str, language: str | None = None) -> None:
        self._tracker.emit_kind(
            EventKind.CODE_SNIPPET_VIEW,
            label=snippet_label(code, language),
            parameters={
                "language": language or "unknown",
                "code_length": len(code),
            },
        )

    def track_copy(self, code: str, language: str | None = None) -> None:
        self._tracker.emit_kind(
            EventKind.CODE_SNIPPET_COPY,
            label=snippet_label(code, language),
            parameters={
                "language": language or "unknown",
                "code_length": len(code),
                "snippet_preview": truncate(code, 100),
            },
        )


def track_content_view(
    tracker: Tracker,
    kind: EventKind,
    label: str,
    parameters: Mapping[str, Any] | None = None,
) -> bool:
    """
    Report a view of a piece of technical content.

    Returns False without reporting when `kind` is not a content-view kind.
    """
    if kind not in CONTENT_VIEW_KINDS:
        logger.warning("%s is not a content view event", kind.name)
        return False
    return tracker.emit_kind(kind, label=label, parameters=parameters)
