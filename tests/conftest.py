from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import pytest

from sitepulse.adapters.clock import FixedClock
from sitepulse.adapters.page import InMemoryPage
from sitepulse.adapters.performance import StaticPerformanceSource
from sitepulse.adapters.scheduler import ManualScheduler
from sitepulse.adapters.sinks import RecordingSink
from sitepulse.app_shell.session import TrackingSession
from sitepulse.domain.signals import BrowserEnvironment
from sitepulse.rules.loader import load_rules

ROOT = Path(__file__).resolve().parent.parent


@dataclass
class Harness:
    """A TrackingSession wired to in-memory adapters."""

    session: TrackingSession
    sink: RecordingSink
    page: InMemoryPage
    scheduler: ManualScheduler
    performance: StaticPerformanceSource
    clock: FixedClock

    def wait(self, seconds: float) -> None:
        self.clock.advance(seconds)
        self.scheduler.advance(seconds)


def make_harness(
    tracking_id: str = "G-TEST",
    environment: BrowserEnvironment | None = None,
    sink: RecordingSink | None = None,
) -> Harness:
    sink = sink if sink is not None else RecordingSink()
    page = InMemoryPage()
    scheduler = ManualScheduler()
    performance = StaticPerformanceSource()
    clock = FixedClock(datetime(2026, 1, 14, 12, 0, 0, tzinfo=UTC))
    session = TrackingSession.create(
        tracking_id=tracking_id,
        sink=sink,
        page=page,
        scheduler=scheduler,
        performance=performance,
        environment=environment
        or BrowserEnvironment(
            hostname="example.com",
            timezone="Europe/London",
            locale="en-GB",
            referrer="https://www.google.com/",
            page_title="Example",
        ),
        clock=clock,
        rules=load_rules(ROOT / "rules.yaml"),
    )
    return Harness(session, sink, page, scheduler, performance, clock)


@pytest.fixture
def harness() -> Harness:
    return make_harness()


@pytest.fixture
def disabled_harness() -> Harness:
    return make_harness(tracking_id="")


@pytest.fixture
def samples_dir() -> Path:
    return ROOT / "samples"


@pytest.fixture
def harness_factory():
    return make_harness
