from sitepulse.domain.signals import ClickSignal, ElementInfo, LoadSignal, ScrollSignal


def scroll(percent):
    return ScrollSignal(scroll_y=percent * 10, document_height=2000, viewport_height=1000)


# --- R1: Milestones ---
def test_R1_milestones_strictly_increasing(harness):
    """R1: Reading milestones are multiples of the step, each reported once."""
    harness.session.start("/blog/p")
    harness.session.mount_post("p")
    for percent in [5, 10, 10, 35, 20, 40, 41, 100, 60]:
        harness.page.dispatch(scroll(percent))

    values = [c.payload["value"] for c in harness.sink.events("reading_progress")]
    assert values == [10, 20, 40, 100]


# --- R2: Completion ---
def test_R2_completion_once_per_activation(harness):
    """R2: Completion fires at most once per mount, and again after a remount."""
    harness.session.start("/blog/p")
    harness.session.mount_post("p")
    harness.page.dispatch(scroll(95))
    harness.page.dispatch(scroll(100))
    harness.session.mount_post("p")
    harness.page.dispatch(scroll(100))

    assert len(harness.sink.events("blog_post_complete")) == 2


# --- R3: Disabled ---
def test_R3_no_tracking_id_no_calls(disabled_harness):
    """R3: Without a tracking id the sink is never called."""
    h = disabled_harness
    h.session.start("/")
    h.page.dispatch(ClickSignal(target=ElementInfo(tag_name="CODE")))
    h.page.dispatch(LoadSignal())
    h.wait(10)
    assert h.sink.calls == []


# --- R4: Teardown ---
def test_R4_teardown_leaves_nothing(harness):
    """R4: After close, signals reach no handler and no timer is pending."""
    harness.session.start("/blog/p")
    harness.session.mount_post("p")
    harness.page.dispatch(LoadSignal())
    harness.session.close()

    assert harness.page.dispatch(scroll(50)) == 0
    assert harness.page.dispatch(LoadSignal()) == 0
    assert harness.scheduler.pending() == 0


# --- R5: Background ---
def test_R5_background_monotonic_within_session(harness):
    """R5: The reported technical background never goes down."""
    order = ["beginner", "intermediate", "advanced", "expert"]
    harness.session.start("/blog")
    for _ in range(25):
        harness.page.dispatch(ClickSignal(target=ElementInfo(tag_name="CODE")))

    reported = [
        c.payload["custom_map"]["technical_background"]
        for c in harness.sink.configs()
        if "technical_background" in c.payload.get("custom_map", {})
    ]
    ranks = [order.index(r) for r in reported]
    assert ranks == sorted(ranks)
    assert reported[-1] == "expert"
