from __future__ import annotations

from escape_room.core.services.countdown_timer import CountdownTimer, TimerState

from fakes import ManualScheduler


def make_timer(scheduler, seconds):
    ticks: list[int] = []
    expiries: list[bool] = []
    timer = CountdownTimer(scheduler, seconds, on_tick=ticks.append, on_expired=lambda: expiries.append(True))
    return timer, ticks, expiries


def test_ticks_once_per_second_and_expires_once():
    scheduler = ManualScheduler()
    timer, ticks, expiries = make_timer(scheduler, 3)
    timer.start()

    scheduler.advance(10_000)

    assert ticks == [2, 1, 0]
    assert expiries == [True]
    assert timer.state is TimerState.EXPIRED
    assert scheduler.active_handles() == []


def test_partial_interval_does_not_tick():
    scheduler = ManualScheduler()
    timer, ticks, _ = make_timer(scheduler, 5)
    timer.start()

    scheduler.advance(999)

    assert ticks == []
    assert timer.remaining_seconds == 5


def test_zero_remaining_expires_on_start():
    scheduler = ManualScheduler()
    timer, ticks, expiries = make_timer(scheduler, 0)
    timer.start()

    assert ticks == []
    assert expiries == [True]


def test_negative_remaining_is_floored():
    timer, _, _ = make_timer(ManualScheduler(), -20)
    assert timer.remaining_seconds == 0


def test_stop_cancels_future_ticks():
    scheduler = ManualScheduler()
    timer, ticks, expiries = make_timer(scheduler, 10)
    timer.start()
    scheduler.advance(2000)
    timer.stop()
    scheduler.advance(20_000)

    assert ticks == [9, 8]
    assert expiries == []
    assert timer.state is TimerState.STOPPED


def test_start_twice_keeps_a_single_clock():
    scheduler = ManualScheduler()
    timer, ticks, _ = make_timer(scheduler, 10)
    timer.start()
    timer.start()
    scheduler.advance(1000)

    assert ticks == [9]
    assert len(scheduler.active_handles()) == 1
