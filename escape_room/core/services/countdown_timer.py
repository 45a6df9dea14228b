"""Single ticking clock for an active level session."""

from __future__ import annotations

from enum import Enum, auto
import logging
from typing import Callable

from escape_room.constants.quiz_constants import TIMER_INTERVAL_MS
from escape_room.core.scheduling import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class TimerState(Enum):
    STOPPED = auto()
    RUNNING = auto()
    EXPIRED = auto()


class CountdownTimer:
    """Decrements once per interval, floored at zero, and fires ``on_expired`` once."""

    def __init__(
        self,
        scheduler: Scheduler,
        remaining_seconds: int,
        on_tick: Callable[[int], None],
        on_expired: Callable[[], None],
        interval_ms: int = TIMER_INTERVAL_MS,
    ) -> None:
        self._scheduler = scheduler
        self._remaining = max(0, remaining_seconds)
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._interval_ms = interval_ms
        self._handle: TimerHandle | None = None
        self._state = TimerState.STOPPED

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    def start(self) -> None:
        if self._state is not TimerState.STOPPED:
            return
        if self._remaining <= 0:
            self._expire()
            return
        self._state = TimerState.RUNNING
        self._handle = self._scheduler.call_repeating(self._interval_ms, self._tick)

    def stop(self) -> None:
        self._cancel_handle()
        if self._state is TimerState.RUNNING:
            self._state = TimerState.STOPPED

    def _tick(self) -> None:
        if self._state is not TimerState.RUNNING:
            return
        self._remaining = max(self._remaining - 1, 0)
        self._on_tick(self._remaining)
        # on_tick may have stopped us (e.g. the session was submitted meanwhile).
        if self._remaining == 0 and self._state is TimerState.RUNNING:
            self._expire()

    def _expire(self) -> None:
        self._cancel_handle()
        self._state = TimerState.EXPIRED
        logger.info("Countdown expired")
        self._on_expired()

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
