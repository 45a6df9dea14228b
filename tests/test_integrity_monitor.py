from __future__ import annotations

import pytest

from escape_room.constants.quiz_constants import ProctoringPolicy
from escape_room.core.environment import KeyStroke, SignalKind
from escape_room.core.services.integrity_monitor import (
    IntegrityMonitor,
    is_forbidden_key,
    is_viewport_shrunk,
)

from fakes import FakeEnvironment


@pytest.mark.parametrize(
    "stroke",
    [
        KeyStroke("F12"),
        KeyStroke("I", ctrl=True, shift=True),
        KeyStroke("c", ctrl=True, shift=True),
        KeyStroke("i", meta=True, shift=True),
        KeyStroke("U", ctrl=True),
        KeyStroke("p", ctrl=True),
        KeyStroke("s", meta=True),
        KeyStroke("R", ctrl=True),
    ],
)
def test_forbidden_keys(stroke):
    assert is_forbidden_key(stroke)


@pytest.mark.parametrize(
    "stroke",
    [
        KeyStroke("a"),
        KeyStroke("U"),
        KeyStroke("I", shift=True),
        KeyStroke("C", ctrl=True),
        KeyStroke("F5"),
    ],
)
def test_allowed_keys(stroke):
    assert not is_forbidden_key(stroke)


def test_viewport_ratio():
    assert is_viewport_shrunk((1300, 1080), (1920, 1080), 0.7)
    assert is_viewport_shrunk((1920, 700), (1920, 1080), 0.7)
    assert not is_viewport_shrunk((1400, 800), (1920, 1080), 0.7)
    assert not is_viewport_shrunk((100, 100), (0, 0), 0.7)


@pytest.fixture
def monitored():
    environment = FakeEnvironment()
    reasons: list[str] = []
    blocked: list[bool] = []
    monitor = IntegrityMonitor(
        environment,
        ProctoringPolicy(),
        on_violation=reasons.append,
        on_navigation_blocked=lambda: blocked.append(True),
    )
    monitor.attach()
    return environment, monitor, reasons, blocked


def test_unarmed_monitor_ignores_window_signals(monitored):
    environment, _, reasons, _ = monitored
    environment.emit(SignalKind.VISIBILITY_HIDDEN)
    environment.emit(SignalKind.WINDOW_BLUR)

    assert reasons == []


def test_armed_monitor_names_each_signal(monitored):
    environment, monitor, reasons, _ = monitored
    monitor.arm()
    environment.request_fullscreen()

    environment.emit(SignalKind.FULLSCREEN_CHANGED)
    environment.exit_fullscreen()
    environment.emit(SignalKind.VISIBILITY_HIDDEN)
    environment.emit(SignalKind.WINDOW_BLUR)
    environment.viewport = (800, 1080)
    environment.emit(SignalKind.RESIZE)

    assert reasons == ["Fullscreen exit", "Tab switch", "Focus lost", "Window resize"]


def test_navigation_is_suppressed_and_not_a_violation(monitored):
    environment, _, reasons, blocked = monitored

    assert environment.emit(SignalKind.NAVIGATION_ATTEMPT) is True
    assert blocked == [True]
    assert reasons == []


def test_finished_monitor_is_inert(monitored):
    environment, monitor, reasons, blocked = monitored
    monitor.arm()
    monitor.finish()

    assert environment.emit(SignalKind.KEY_PRESS, KeyStroke("F12")) is False
    environment.emit(SignalKind.VISIBILITY_HIDDEN)
    environment.emit(SignalKind.NAVIGATION_ATTEMPT)

    assert reasons == []
    assert blocked == []
    assert monitor.armed is False


def test_detach_unsubscribes(monitored):
    environment, monitor, _, _ = monitored
    monitor.detach()

    assert environment.listener is None
