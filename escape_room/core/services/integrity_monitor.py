"""Translates raw environment signals into named integrity violations."""

from __future__ import annotations

import logging
from typing import Callable

from escape_room.constants.quiz_constants import ProctoringPolicy
from escape_room.core.environment import (
    EnvironmentEvent,
    EnvironmentMonitor,
    KeyStroke,
    SignalKind,
)

logger = logging.getLogger(__name__)

REASON_FULLSCREEN_EXIT = "Fullscreen exit"
REASON_TAB_SWITCH = "Tab switch"
REASON_FOCUS_LOST = "Focus lost"
REASON_WINDOW_RESIZE = "Window resize"
REASON_SUSPICIOUS_KEY = "Suspicious key activity"

_SHIFT_COMBO_KEYS = {"I", "C"}
_CTRL_KEYS = {"U", "P", "S", "R"}


def is_forbidden_key(stroke: KeyStroke) -> bool:
    """F12, Ctrl/Cmd+Shift+I, Ctrl/Cmd+Shift+C and Ctrl/Cmd+U/P/S/R."""
    key = stroke.key.upper()
    if key == "F12":
        return True
    command = stroke.ctrl or stroke.meta
    if command and stroke.shift and key in _SHIFT_COMBO_KEYS:
        return True
    return command and key in _CTRL_KEYS


def is_viewport_shrunk(
    viewport: tuple[int, int],
    screen: tuple[int, int],
    ratio: float,
) -> bool:
    view_w, view_h = viewport
    screen_w, screen_h = screen
    if screen_w <= 0 or screen_h <= 0:
        return False
    return view_w / screen_w < ratio or view_h / screen_h < ratio


class IntegrityMonitor:
    """Subscribes to an EnvironmentMonitor and reports violations while armed."""

    def __init__(
        self,
        environment: EnvironmentMonitor,
        policy: ProctoringPolicy,
        on_violation: Callable[[str], None],
        on_navigation_blocked: Callable[[], None],
    ) -> None:
        self._environment = environment
        self._policy = policy
        self._on_violation = on_violation
        self._on_navigation_blocked = on_navigation_blocked
        self._attached = False
        self._armed = False
        self._finished = False

    @property
    def armed(self) -> bool:
        return self._armed and not self._finished

    def attach(self) -> None:
        if self._attached:
            return
        self._environment.subscribe(self.handle_event)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        self._environment.unsubscribe()
        self._attached = False

    def arm(self) -> None:
        """Proctoring becomes active once the player has entered the proctored environment."""
        self._armed = True

    def finish(self) -> None:
        self._finished = True

    def handle_event(self, event: EnvironmentEvent) -> bool:
        if self._finished:
            return False

        if event.kind is SignalKind.NAVIGATION_ATTEMPT:
            self._on_navigation_blocked()
            return True

        if event.kind is SignalKind.KEY_PRESS:
            if event.key is None or not is_forbidden_key(event.key):
                return False
            self._on_violation(REASON_SUSPICIOUS_KEY)
            return True

        if not self._armed:
            return False

        reason = self._reason_for(event.kind)
        if reason is not None:
            self._on_violation(reason)
        return False

    def _reason_for(self, kind: SignalKind) -> str | None:
        if kind is SignalKind.FULLSCREEN_CHANGED:
            return None if self._environment.is_fullscreen() else REASON_FULLSCREEN_EXIT
        if kind is SignalKind.VISIBILITY_HIDDEN:
            return REASON_TAB_SWITCH
        if kind is SignalKind.WINDOW_BLUR:
            return REASON_FOCUS_LOST
        if kind is SignalKind.RESIZE:
            shrunk = is_viewport_shrunk(
                self._environment.viewport_size(),
                self._environment.screen_size(),
                self._policy.viewport_ratio,
            )
            return REASON_WINDOW_RESIZE if shrunk else None
        return None
