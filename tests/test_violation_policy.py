from __future__ import annotations

from escape_room.constants.quiz_constants import ProctoringPolicy
from escape_room.core.services.violation_policy import EscalationDecision, ViolationPolicy


def test_debounce_window_drops_events():
    policy = ViolationPolicy(ProctoringPolicy())

    assert policy.on_violation("Tab switch", 0) is EscalationDecision.WARNING
    assert policy.on_violation("Focus lost", 1999) is EscalationDecision.IGNORED
    assert policy.on_violation("Focus lost", 2000) is EscalationDecision.WARNING
    assert policy.state.count == 2


def test_debounce_measures_from_last_accepted_event():
    policy = ViolationPolicy(ProctoringPolicy())
    policy.on_violation("Tab switch", 0)
    policy.on_violation("Tab switch", 1500)

    assert policy.on_violation("Tab switch", 2100) is EscalationDecision.WARNING


def test_threshold_forces_submission_once():
    policy = ViolationPolicy(ProctoringPolicy())
    decisions = [policy.on_violation("Tab switch", t) for t in (0, 3000, 6000, 9000)]

    assert decisions == [
        EscalationDecision.WARNING,
        EscalationDecision.WARNING,
        EscalationDecision.FORCE_SUBMIT,
        EscalationDecision.IGNORED,
    ]
    assert policy.state.count == 4
    assert policy.state.forced_submission_pending is True
    assert policy.threshold_reached()


def test_custom_threshold():
    policy = ViolationPolicy(ProctoringPolicy(violation_threshold=1))

    assert policy.on_violation("Window resize", 0) is EscalationDecision.FORCE_SUBMIT


def test_dismiss_warning_only_when_visible():
    policy = ViolationPolicy(ProctoringPolicy())
    assert policy.dismiss_warning() is False

    policy.on_violation("Fullscreen exit", 0)
    assert policy.state.warning_visible is True
    assert policy.dismiss_warning() is True
    assert policy.state.warning_visible is False
    assert policy.state.count == 1
