from __future__ import annotations

import asyncio

import pytest

from playback.api.scheduling import create_tick_scheduler
from playback.runtime.scheduler import AsyncioTickScheduler, FrameTickScheduler


def test_schedule_once_runs_on_next_tick_only() -> None:
    scheduler = FrameTickScheduler()
    calls: list[str] = []
    scheduler.schedule_once(lambda: calls.append("once"))

    assert calls == []
    assert scheduler.tick() == 1
    assert calls == ["once"]
    assert scheduler.tick() == 0


def test_task_scheduled_during_tick_runs_on_following_tick() -> None:
    scheduler = FrameTickScheduler()
    calls: list[str] = []

    def outer() -> None:
        calls.append("outer")
        scheduler.schedule_once(lambda: calls.append("inner"))

    scheduler.schedule_once(outer)

    assert scheduler.tick() == 1
    assert calls == ["outer"]
    assert scheduler.queued_task_count == 1
    assert scheduler.tick() == 1
    assert calls == ["outer", "inner"]


def test_call_later_runs_when_due() -> None:
    scheduler = FrameTickScheduler()
    calls: list[str] = []
    scheduler.call_later(0.2, lambda: calls.append("once"))

    assert scheduler.advance(0.1) == 0
    assert calls == []
    assert scheduler.advance(0.1) == 1
    assert calls == ["once"]


def test_cancel_prevents_execution() -> None:
    scheduler = FrameTickScheduler()
    calls: list[str] = []
    handle = scheduler.schedule_once(lambda: calls.append("never"))
    scheduler.cancel(handle)

    assert scheduler.queued_task_count == 0
    assert scheduler.tick() == 0
    assert calls == []


def test_scheduler_validates_time_arguments() -> None:
    scheduler = FrameTickScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-0.1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)
    scheduler.advance(1.0)
    with pytest.raises(ValueError):
        scheduler.run_due(0.5)


def test_scheduler_counts_frames() -> None:
    scheduler = FrameTickScheduler()
    scheduler.tick()
    scheduler.advance(0.016)
    assert scheduler.frame_index == 2
    assert scheduler.now_seconds == pytest.approx(0.016)


def test_create_tick_scheduler_returns_frame_scheduler() -> None:
    assert isinstance(create_tick_scheduler(), FrameTickScheduler)


def test_asyncio_scheduler_defers_to_loop() -> None:
    calls: list[str] = []

    async def scenario() -> None:
        scheduler = AsyncioTickScheduler()
        scheduler.schedule_once(lambda: calls.append("ran"))
        cancelled = scheduler.schedule_once(lambda: calls.append("cancelled"))
        scheduler.cancel(cancelled)
        assert calls == []
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert calls == ["ran"]


def test_asyncio_scheduler_requires_loop_outside_running_loop() -> None:
    with pytest.raises(RuntimeError):
        AsyncioTickScheduler()


def test_asyncio_scheduler_with_injected_loop_accepts_sync_writes() -> None:
    loop = asyncio.new_event_loop()
    try:
        scheduler = AsyncioTickScheduler(loop)
        calls: list[str] = []
        scheduler.schedule_once(lambda: calls.append("ran"))
        assert scheduler.loop is loop
        assert calls == []
        loop.run_until_complete(asyncio.sleep(0))
        assert calls == ["ran"]
    finally:
        loop.close()
