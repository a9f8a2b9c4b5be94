"""
Session replay.

Drives a TrackingSession from a recorded list of steps, one JSON object per
line. Time is virtual: "wait" steps move the clock and fire due timers, so
a replay is deterministic.

Example:
    {"type": "session", "hostname": "example.com", "timezone": "Europe/Paris"}
    {"type": "start", "path": "/blog/intro"}
    {"type": "mount", "slug": "intro"}
    {"type": "scroll", "scroll_y": 500, "document_height": 2000, "viewport_height": 1000}
    {"type": "load", "navigation": {"fetch_start": 0, "load_event_end": 900}}
    {"type": "wait", "seconds": 1}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from sitepulse.adapters.clock import FixedClock
from sitepulse.adapters.page import InMemoryPage
from sitepulse.adapters.performance import StaticPerformanceSource
from sitepulse.adapters.scheduler import ManualScheduler
from sitepulse.adapters.sinks import RecordingSink
from sitepulse.app_shell.session import TrackingSession
from sitepulse.components.funnel import FunnelStage
from sitepulse.components.telemetry import SinkCall
from sitepulse.domain.signals import (
    BrowserEnvironment,
    ClickSignal,
    ElementInfo,
    LoadSignal,
    NavigationTiming,
    PerformanceEntry,
    ScrollSignal,
)
from sitepulse.rules.models import TrackingRules

logger = logging.getLogger(__name__)


# --- Step Models ---


class SessionStep(BaseModel):
    type: Literal["session"]
    hostname: str = "localhost"
    timezone: str | None = None
    locale: str | None = None
    referrer: str = ""
    page_title: str = ""


class StartStep(BaseModel):
    type: Literal["start"]
    path: str = "/"
    query: str = ""
    title: str | None = None


class NavigateStep(BaseModel):
    type: Literal["navigate"]
    path: str
    query: str = ""
    title: str | None = None


class MountStep(BaseModel):
    type: Literal["mount"]
    slug: str


class UnmountStep(BaseModel):
    type: Literal["unmount"]


class ScrollStep(BaseModel):
    type: Literal["scroll"]
    scroll_y: float
    document_height: float
    viewport_height: float


class ClickStep(BaseModel):
    type: Literal["click"]
    target: ElementInfo


class LoadStep(BaseModel):
    type: Literal["load"]
    navigation: NavigationTiming | None = None


class VitalStep(BaseModel):
    type: Literal["vital"]
    name: str
    entry_type: str
    start_time: float = 0.0


class WaitStep(BaseModel):
    type: Literal["wait"]
    seconds: float = Field(ge=0)


class AdvanceStep(BaseModel):
    type: Literal["advance"]
    stage: FunnelStage


class InquiryStep(BaseModel):
    type: Literal["inquiry"]
    service_type: str
    value: float | None = None


class SearchStep(BaseModel):
    type: Literal["search"]
    query: str
    results_count: int | None = None


class FormStep(BaseModel):
    type: Literal["form"]
    name: str
    action: Literal["view", "submit", "success"]
    fields: dict[str, Any] | None = None
    response_time_ms: float | None = None


ReplayStep = Annotated[
    SessionStep
    | StartStep
    | NavigateStep
    | MountStep
    | UnmountStep
    | ScrollStep
    | ClickStep
    | LoadStep
    | VitalStep
    | WaitStep
    | AdvanceStep
    | InquiryStep
    | SearchStep
    | FormStep,
    Field(discriminator="type"),
]

_STEP_ADAPTER: TypeAdapter[ReplayStep] = TypeAdapter(ReplayStep)


def parse_steps(lines: Iterable[str]) -> list[ReplayStep]:
    """
    Parse JSON-lines replay input. Blank lines and # comments are skipped.
    Raises ValueError naming the offending line.
    """
    steps: list[ReplayStep] = []
    for number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            steps.append(_STEP_ADAPTER.validate_json(text))
        except ValueError as e:
            raise ValueError(f"Invalid replay step on line {number}: {e}") from e
    return steps


def load_steps(path: Path) -> list[ReplayStep]:
    with open(path) as f:
        return parse_steps(f)


# --- Replay ---


@dataclass
class ReplayResult:
    calls: list[SinkCall]
    steps: int


def sink_call_to_json(call: SinkCall) -> dict[str, Any]:
    target = call.target if isinstance(call.target, str) else call.target.isoformat()
    return {"command": call.command, "target": target, "payload": call.payload}


def replay(
    steps: list[ReplayStep],
    tracking_id: str | None,
    rules: TrackingRules | None = None,
) -> ReplayResult:
    """Run steps through a fresh session backed by in-memory adapters."""
    sink = RecordingSink()
    page = InMemoryPage()
    scheduler = ManualScheduler()
    performance = StaticPerformanceSource()
    clock = FixedClock()

    environment = BrowserEnvironment()
    remaining = list(steps)
    if remaining and isinstance(remaining[0], SessionStep):
        first = remaining.pop(0)
        assert isinstance(first, SessionStep)
        environment = BrowserEnvironment(
            hostname=first.hostname,
            timezone=first.timezone,
            locale=first.locale,
            referrer=first.referrer,
            page_title=first.page_title,
        )

    session = TrackingSession.create(
        tracking_id=tracking_id,
        sink=sink,
        page=page,
        scheduler=scheduler,
        performance=performance,
        environment=environment,
        clock=clock,
        rules=rules,
    )

    with session:
        for step in remaining:
            _apply(step, session, page, scheduler, performance, clock)

    logger.info("Replayed %d steps, %d sink calls", len(steps), len(sink.calls))
    return ReplayResult(calls=list(sink.calls), steps=len(steps))


def _apply(
    step: ReplayStep,
    session: TrackingSession,
    page: InMemoryPage,
    scheduler: ManualScheduler,
    performance: StaticPerformanceSource,
    clock: FixedClock,
) -> None:
    if isinstance(step, SessionStep):
        logger.warning("Ignoring 'session' step after the first line")
    elif isinstance(step, StartStep):
        session.start(step.path, step.query, step.title)
    elif isinstance(step, NavigateStep):
        session.navigate(step.path, step.query, step.title)
    elif isinstance(step, MountStep):
        session.mount_post(step.slug)
    elif isinstance(step, UnmountStep):
        session.unmount_post()
    elif isinstance(step, ScrollStep):
        page.dispatch(
            ScrollSignal(
                scroll_y=step.scroll_y,
                document_height=step.document_height,
                viewport_height=step.viewport_height,
            )
        )
    elif isinstance(step, ClickStep):
        page.dispatch(ClickSignal(target=step.target))
    elif isinstance(step, LoadStep):
        performance.set_navigation(step.navigation)
        page.dispatch(LoadSignal())
    elif isinstance(step, VitalStep):
        performance.record(
            PerformanceEntry(
                name=step.name, entry_type=step.entry_type, start_time=step.start_time
            )
        )
    elif isinstance(step, WaitStep):
        clock.advance(step.seconds)
        scheduler.advance(step.seconds)
    elif isinstance(step, AdvanceStep):
        session.advance_funnel(step.stage)
    elif isinstance(step, InquiryStep):
        session.track_service_inquiry(step.service_type, step.value)
    elif isinstance(step, SearchStep):
        session.track_search(step.query, step.results_count)
    elif isinstance(step, FormStep):
        form = session.form(step.name)
        if step.action == "view":
            form.track_view()
        elif step.action == "submit":
            form.track_submit(step.fields)
        else:
            form.track_success(step.response_time_ms)


def dumps_calls(calls: Iterable[SinkCall]) -> str:
    return "\n".join(json.dumps(sink_call_to_json(c), sort_keys=True) for c in calls)
