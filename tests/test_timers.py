import asyncio

import pytest

from ejectwheel.core.timers import AsyncioScheduler, FrameScheduler, TimerGroup


def test_frame_scheduler_fires_in_due_order():
    scheduler = FrameScheduler()
    fired = []
    scheduler.call_later(300, lambda: fired.append("c"))
    scheduler.call_later(100, lambda: fired.append("a"))
    scheduler.call_later(200, lambda: fired.append("b"))

    scheduler.update(150)
    assert fired == ["a"]

    scheduler.update(1000)
    assert fired == ["a", "b", "c"]
    assert scheduler.now() == 1150


def test_same_due_time_keeps_scheduling_order():
    scheduler = FrameScheduler()
    fired = []
    for name in "xyz":
        scheduler.call_later(50, lambda name=name: fired.append(name))

    scheduler.update(50)
    assert fired == ["x", "y", "z"]


def test_callback_sees_its_own_due_time():
    scheduler = FrameScheduler()
    seen = []
    scheduler.call_later(40, lambda: seen.append(scheduler.now()))

    scheduler.update(1000)
    assert seen == [40]


def test_chained_timer_scheduled_inside_callback():
    scheduler = FrameScheduler()
    fired = []

    def first():
        fired.append(("first", scheduler.now()))
        scheduler.call_later(100, lambda: fired.append(("second", scheduler.now())))

    scheduler.call_later(100, first)
    scheduler.update(1000)
    assert fired == [("first", 100), ("second", 200)]


def test_cancel_is_idempotent_and_prevents_firing():
    scheduler = FrameScheduler()
    fired = []
    handle = scheduler.call_later(100, lambda: fired.append(1))

    assert handle.cancel() is True
    assert handle.cancel() is False
    scheduler.update(500)

    assert fired == []
    assert handle.cancelled and not handle.fired


def test_cancel_after_fire_is_noop():
    scheduler = FrameScheduler()
    handle = scheduler.call_later(10, lambda: None)
    scheduler.update(10)

    assert handle.fired
    assert handle.cancel() is False


def test_timer_cancelled_by_earlier_callback_in_same_update():
    scheduler = FrameScheduler()
    fired = []
    later = scheduler.call_later(200, lambda: fired.append("later"))
    scheduler.call_later(100, later.cancel)

    scheduler.update(1000)
    assert fired == []


def test_run_all_follows_chains():
    scheduler = FrameScheduler()
    count = []

    def tick():
        count.append(1)
        if len(count) < 5:
            scheduler.call_later(100, tick)

    scheduler.call_later(100, tick)
    scheduler.run_all()
    assert len(count) == 5
    assert scheduler.pending == 0


def test_group_cancel_all_cancels_everything():
    scheduler = FrameScheduler()
    group = TimerGroup(scheduler)
    fired = []
    group.schedule("a", 100, lambda: fired.append("a"))
    group.schedule("b", 200, lambda: fired.append("b"))

    assert sorted(group.pending) == ["a", "b"]
    assert group.cancel_all() == 2
    assert group.cancel_all() == 0
    scheduler.update(1000)

    assert fired == []
    assert len(group) == 0


def test_group_generation_guards_stale_callbacks():
    fired = []

    class LeakyScheduler(FrameScheduler):
        """Ignores cancellation, like a callback already dequeued."""

        def call_later(self, delay_ms, callback, name="timer"):
            handle = super().call_later(delay_ms, callback, name)
            handle.cancel = lambda: False
            return handle

    scheduler = LeakyScheduler()
    group = TimerGroup(scheduler)
    group.schedule("a", 100, lambda: fired.append("a"))
    group.cancel_all()
    scheduler.update(1000)

    assert fired == []


def test_group_schedule_replaces_same_name():
    scheduler = FrameScheduler()
    group = TimerGroup(scheduler)
    fired = []
    group.schedule("t", 100, lambda: fired.append("old"))
    group.schedule("t", 300, lambda: fired.append("new"))

    scheduler.update(1000)
    assert fired == ["new"]


def test_group_forgets_fired_timers():
    scheduler = FrameScheduler()
    group = TimerGroup(scheduler)
    group.schedule("t", 100, lambda: None)
    assert "t" in group

    scheduler.update(100)
    assert "t" not in group
    assert group.pending == []


@pytest.mark.asyncio
async def test_asyncio_scheduler_fires_and_cancels():
    scheduler = AsyncioScheduler()
    fired = []
    scheduler.call_later(5, lambda: fired.append("kept"))
    cancelled = scheduler.call_later(5, lambda: fired.append("dropped"))
    cancelled.cancel()

    await asyncio.sleep(0.05)
    assert fired == ["kept"]
    assert cancelled.cancelled


@pytest.mark.asyncio
async def test_asyncio_group_cancel_all():
    group = TimerGroup(AsyncioScheduler())
    fired = []
    group.schedule("a", 5, lambda: fired.append("a"))
    group.cancel_all()
    group.cancel_all()

    await asyncio.sleep(0.05)
    assert fired == []
