"""Tick schedulers backing deferred change notification."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]


@dataclass(slots=True)
class _Task:
    task_id: int
    due_seconds: float
    callback: TaskCallback
    cancelled: bool = False


class FrameTickScheduler:
    """Host-driven deferred task scheduler.

    The host advances the clock once per frame. Tasks enqueued while a
    frame is running never run in that same frame, so a callback that
    schedules another zero-delay task gets a distinct, later tick.
    """

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []
        self._frame_index = 0

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def queued_task_count(self) -> int:
        """Return count of active queued tasks."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    def schedule_once(self, callback: TaskCallback) -> int:
        """Arm callback for the next frame."""
        return self.call_later(0.0, callback)

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback after delay."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        task_id = self._next_task_id
        self._next_task_id += 1
        due_seconds = self._now_seconds + delay_seconds
        self._tasks[task_id] = _Task(task_id=task_id, due_seconds=due_seconds, callback=callback)
        heappush(self._queue, (due_seconds, task_id))
        return task_id

    def cancel(self, handle: object) -> None:
        """Cancel a scheduled task if it exists."""
        if not isinstance(handle, int):
            return
        task = self._tasks.get(handle)
        if task is not None:
            task.cancelled = True

    def tick(self) -> int:
        """Run one frame without advancing the clock."""
        return self.run_due(self._now_seconds)

    def advance(self, delta_seconds: float) -> int:
        """Advance scheduler clock and run due callbacks."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Run callbacks due at or before `now_seconds` as one frame."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        self._frame_index += 1
        frame_cutoff_id = self._next_task_id
        deferred: list[tuple[float, int]] = []
        executed = 0
        try:
            while self._queue and self._queue[0][0] <= self._now_seconds:
                entry = heappop(self._queue)
                task_id = entry[1]
                if task_id >= frame_cutoff_id:
                    deferred.append(entry)
                    continue
                task = self._tasks.pop(task_id, None)
                if task is None or task.cancelled:
                    continue
                task.callback()
                executed += 1
        finally:
            for entry in deferred:
                heappush(self._queue, entry)
        return executed


class AsyncioTickScheduler:
    """Tick scheduler bound to an asyncio event loop's `call_soon`.

    The loop is resolved once, at construction. Outside a running loop an
    explicit `loop` is required; otherwise construction raises
    `RuntimeError`, so store writes never fail for lack of a loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def schedule_once(self, callback: TaskCallback) -> asyncio.Handle:
        return self._loop.call_soon(callback)

    def cancel(self, handle: object) -> None:
        if isinstance(handle, asyncio.Handle):
            handle.cancel()
