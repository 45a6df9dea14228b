"""Timing and background-I/O capability used by the level controller.

The controller never touches QTimer or threads directly; the Qt adapter in
``escape_room.ui.qt_adapters`` implements this protocol for the real UI
thread, and tests drive a manual clock.
"""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar

T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class Scheduler(Protocol):
    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` every ``interval_ms`` on the UI thread until cancelled."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` once after ``delay_ms`` on the UI thread unless cancelled."""

    def now_ms(self) -> float:
        """Monotonic milliseconds."""

    def run_io(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_failure: Callable[[Exception], None],
    ) -> None:
        """Run blocking ``work`` off the UI thread and deliver its outcome back on it."""
