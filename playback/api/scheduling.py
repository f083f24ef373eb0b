"""Public tick-scheduling API contracts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

TickCallback = Callable[[], None]
TickHandle = object


class TickScheduler(Protocol):
    """Host scheduling primitive used to defer change notification.

    `schedule_once` runs callback at the next scheduling opportunity,
    never synchronously inside the call.
    """

    def schedule_once(self, callback: TickCallback) -> TickHandle:
        """Arm a single-shot callback and return its handle."""

    def cancel(self, handle: TickHandle) -> None:
        """Cancel a pending callback if it has not run yet."""


def create_tick_scheduler() -> TickScheduler:
    """Create default host-driven frame tick scheduler."""
    from playback.runtime.scheduler import FrameTickScheduler

    return FrameTickScheduler()
