"""Capability interface over the player's window environment.

Raw signals (fullscreen changes, visibility, focus, resizes, key presses and
navigation attempts) are reported as ``EnvironmentEvent`` objects. The
integrity monitor decides which of them are violations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Protocol


class SignalKind(Enum):
    FULLSCREEN_CHANGED = auto()
    VISIBILITY_HIDDEN = auto()
    WINDOW_BLUR = auto()
    RESIZE = auto()
    KEY_PRESS = auto()
    NAVIGATION_ATTEMPT = auto()


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    ctrl: bool = False
    shift: bool = False
    meta: bool = False


@dataclass(frozen=True, slots=True)
class EnvironmentEvent:
    kind: SignalKind
    key: KeyStroke | None = None


# Listener returns True when the event should be suppressed (key eaten, navigation undone).
EnvironmentListener = Callable[[EnvironmentEvent], bool]


class EnvironmentMonitor(Protocol):
    def subscribe(self, listener: EnvironmentListener) -> None: ...

    def unsubscribe(self) -> None: ...

    def request_fullscreen(self) -> bool: ...

    def is_fullscreen(self) -> bool: ...

    def viewport_size(self) -> tuple[int, int]: ...

    def screen_size(self) -> tuple[int, int]: ...
