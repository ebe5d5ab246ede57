# tests/unit/runtime/test_debouncer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import asyncio

import pytest

from formstate.runtime.debouncer import Debouncer


@pytest.fixture
def calls():
    return []


@pytest.fixture
def debouncer(fake_timers, calls):
    return Debouncer(lambda *args: calls.append(args), 700, clock=fake_timers.clock, scheduler=fake_timers.schedule)


def test_fires_once_after_quiet_interval(debouncer, fake_timers, calls):
    debouncer.call("a", 1)
    fake_timers.advance(0.6)
    assert calls == []

    fake_timers.advance(0.2)
    assert calls == [("a", 1)]
    assert not debouncer.pending


def test_burst_coalesces_into_latest_arguments(debouncer, fake_timers, calls):
    for i in range(5):
        debouncer.call("v", i)
        fake_timers.advance(0.1)
    fake_timers.advance(0.8)

    assert calls == [("v", 4)]


def test_only_one_live_timer(debouncer, fake_timers):
    debouncer.call(1)
    debouncer.call(2)
    debouncer.call(3)

    assert len(fake_timers.live) == 1


def test_fires_when_timer_expires_exactly_at_deadline(fake_timers, calls):
    # 100.1 - 100.0 is slightly below 0.1 in floating point.
    debouncer = Debouncer(lambda *a: calls.append(a), 100, clock=fake_timers.clock, scheduler=fake_timers.schedule)
    debouncer.call("x")
    fake_timers.advance(0.1)

    assert calls == [("x",)]
    assert len(fake_timers.handles) == 1
    assert not debouncer.pending


def test_rearms_for_remaining_time_when_timer_fires_early(fake_timers, calls):
    lag = {"seconds": 0.0}
    debouncer = Debouncer(
        lambda *a: calls.append(a),
        700,
        clock=lambda: fake_timers.now - lag["seconds"],
        scheduler=fake_timers.schedule,
    )
    debouncer.call("x")
    lag["seconds"] = 0.3
    fake_timers.advance(0.7)

    assert calls == []
    assert len(fake_timers.live) == 1
    assert fake_timers.live[0].when == pytest.approx(fake_timers.now + 0.3)

    fake_timers.advance(0.4)
    assert calls == [("x",)]


def test_negative_elapsed_fires_immediately(fake_timers, calls):
    debouncer = Debouncer(lambda *a: calls.append(a), 700, clock=fake_timers.clock, scheduler=fake_timers.schedule)
    debouncer.call("late")
    handle = fake_timers.live[0]

    fake_timers.now -= 5.0
    handle.callback()

    assert calls == [("late",)]


def test_cancel_drops_pending_call(debouncer, fake_timers, calls):
    debouncer.call("gone")
    assert debouncer.pending

    debouncer.cancel()
    fake_timers.advance(1.0)

    assert calls == []
    assert not debouncer.pending
    assert fake_timers.live == []


def test_cancel_without_pending_call_is_noop(debouncer):
    debouncer.cancel()
    assert not debouncer.pending


def test_interval_is_in_seconds(debouncer):
    assert debouncer.interval == pytest.approx(0.7)


def test_zero_interval_fires_on_next_timer(fake_timers, calls):
    debouncer = Debouncer(lambda *a: calls.append(a), 0, clock=fake_timers.clock, scheduler=fake_timers.schedule)
    debouncer.call("now")
    fake_timers.advance(0)

    assert calls == [("now",)]


@pytest.mark.asyncio
async def test_default_scheduler_uses_running_loop(calls):
    fired = asyncio.Event()

    def callback(*args):
        calls.append(args)
        fired.set()

    debouncer = Debouncer(callback, 10)
    debouncer.call("a")
    debouncer.call("b")
    await asyncio.wait_for(fired.wait(), 1.0)

    assert calls == [("b",)]
