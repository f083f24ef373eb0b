from __future__ import annotations

from playback.runtime.notifications import NotificationScheduler
from playback.runtime.scheduler import FrameTickScheduler
from playback.runtime.state_store import AttributeStore
from playback.runtime.stats import LoaderStats
from tests.playback.helpers import GenerationRecorder


def _wire(
    ticks: FrameTickScheduler,
    stats: LoaderStats | None = None,
) -> tuple[AttributeStore, NotificationScheduler]:
    holder: dict[str, AttributeStore] = {}
    notifier = NotificationScheduler(ticks, lambda: holder["store"].generation, stats=stats)
    store = AttributeStore(on_change=notifier.arm)
    holder["store"] = store
    return store, notifier


def test_burst_of_writes_flushes_once_with_final_generation() -> None:
    ticks = FrameTickScheduler()
    store, notifier = _wire(ticks)
    recorder = GenerationRecorder()
    notifier.subscribe(recorder)

    for value in range(5):
        store.set("timestamp", value)

    assert notifier.pending
    assert ticks.queued_task_count == 1
    assert recorder.generations == []

    ticks.tick()

    assert recorder.generations == [5]
    assert not notifier.pending


def test_unchanged_writes_never_arm_a_tick() -> None:
    ticks = FrameTickScheduler()
    store, notifier = _wire(ticks)
    store.set("timestamp", 3)
    ticks.tick()

    store.set("timestamp", 3)
    store.set("timestamp", 3)

    assert not notifier.pending
    assert ticks.queued_task_count == 0
    assert store.generation == 1


def test_listeners_notified_in_subscription_order_with_duplicates() -> None:
    ticks = FrameTickScheduler()
    store, notifier = _wire(ticks)
    order: list[str] = []

    def first(generation: int) -> None:
        order.append(f"first:{generation}")

    def second(generation: int) -> None:
        order.append(f"second:{generation}")

    notifier.subscribe(first)
    notifier.subscribe(second)
    notifier.subscribe(first)
    store.set("lookAhead", 1)
    ticks.tick()

    assert order == ["first:1", "second:1", "first:1"]


def test_unsubscribe_removes_first_match_only() -> None:
    ticks = FrameTickScheduler()
    store, notifier = _wire(ticks)
    recorder = GenerationRecorder()
    notifier.subscribe(recorder)
    notifier.subscribe(recorder)
    notifier.unsubscribe(recorder)
    notifier.unsubscribe(lambda generation: None)

    store.set("timestamp", 1)
    ticks.tick()

    assert notifier.listener_count == 1
    assert recorder.generations == [1]


def test_write_during_flush_arms_a_distinct_tick() -> None:
    ticks = FrameTickScheduler()
    store, notifier = _wire(ticks)
    seen: list[int] = []

    def listener(generation: int) -> None:
        seen.append(generation)
        if generation == 1:
            store.set("timestamp", 2)

    notifier.subscribe(listener)
    store.set("timestamp", 1)

    ticks.tick()
    assert seen == [1]
    assert notifier.pending

    ticks.tick()
    assert seen == [1, 2]
    assert not notifier.pending


def test_failing_listener_does_not_block_others_or_leave_tick_pending() -> None:
    ticks = FrameTickScheduler()
    stats = LoaderStats()
    store, notifier = _wire(ticks, stats)
    recorder = GenerationRecorder()

    def broken(generation: int) -> None:
        raise RuntimeError("listener exploded")

    notifier.subscribe(broken)
    notifier.subscribe(recorder)
    store.set("timestamp", 7)
    ticks.tick()

    assert recorder.generations == [1]
    assert not notifier.pending
    assert stats.get("loader-listener-error") == 1
    assert stats.get("loader-flush") == 1

    store.set("timestamp", 8)
    assert notifier.pending


def test_dispose_cancels_pending_tick_and_clears_listeners() -> None:
    ticks = FrameTickScheduler()
    store, notifier = _wire(ticks)
    recorder = GenerationRecorder()
    notifier.subscribe(recorder)
    store.set("timestamp", 1)

    notifier.dispose()
    ticks.tick()
    store.set("timestamp", 2)

    assert recorder.generations == []
    assert notifier.listener_count == 0
    assert not notifier.pending
    assert ticks.queued_task_count == 0
    assert store.generation == 2


class ConnectorError(Exception):
    pass


def test_listener_raising_custom_exception_does_not_stop_flush() -> None:
    ticks = FrameTickScheduler()
    stats = LoaderStats()
    store, notifier = _wire(ticks, stats)
    seen: list[int] = []

    def broken(generation: int) -> None:
        raise ConnectorError("source went away")

    notifier.subscribe(broken)
    notifier.subscribe(seen.append)
    store.set("timestamp", 10)
    ticks.tick()

    assert seen == [1]
    assert not notifier.pending
    assert stats.get("loader-listener-error") == 1
