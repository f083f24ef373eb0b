"""Coalescing change notification for loader listeners."""

from __future__ import annotations

import logging
from collections.abc import Callable

from playback.api.loader import GenerationListener
from playback.api.scheduling import TickHandle, TickScheduler
from playback.runtime.errors import log_recoverable
from playback.runtime.logging import get_playback_logger
from playback.runtime.stats import FLUSH_COUNTER, LISTENER_ERROR_COUNTER

_LOG = get_playback_logger("notify")


class NotificationScheduler:
    """Batches any number of writes into one flush per scheduling tick.

    Only one tick is pending at a time. The pending flag is cleared before
    listeners run, so a write made by a listener arms a new tick instead of
    joining the flush in progress. Listener failures are logged and counted
    and do not stop the remaining listeners.
    """

    def __init__(
        self,
        tick_scheduler: TickScheduler,
        generation_source: Callable[[], int],
        *,
        stats: object | None = None,
    ) -> None:
        self._tick_scheduler = tick_scheduler
        self._generation_source = generation_source
        self._stats = stats
        self._listeners: list[GenerationListener] = []
        self._pending_handle: TickHandle | None = None
        self._disposed = False

    @property
    def pending(self) -> bool:
        return self._pending_handle is not None

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: GenerationListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: GenerationListener) -> None:
        for index, registered in enumerate(self._listeners):
            if registered is listener:
                del self._listeners[index]
                return

    def arm(self) -> None:
        """Request a flush at the next tick unless one is already pending."""
        if self._disposed or self._pending_handle is not None:
            return
        self._pending_handle = self._tick_scheduler.schedule_once(self._flush)

    def dispose(self) -> None:
        """Cancel any pending tick and drop all listeners."""
        handle = self._pending_handle
        self._pending_handle = None
        self._disposed = True
        if handle is not None:
            self._tick_scheduler.cancel(handle)
        self._listeners.clear()

    def _flush(self) -> None:
        self._pending_handle = None
        if self._disposed:
            return
        generation = self._generation_source()
        listeners = tuple(self._listeners)
        self._bump(FLUSH_COUNTER)
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "flush generation=%d listeners=%d",
                generation,
                len(listeners),
                extra={"generation": generation},
            )
        for listener in listeners:
            try:
                listener(generation)
            except Exception:
                self._bump(LISTENER_ERROR_COUNTER)
                log_recoverable(
                    _LOG,
                    "listener failed during flush generation=%d",
                    generation,
                    level=logging.WARNING,
                )

    def _bump(self, name: str) -> None:
        stats = self._stats
        if stats is not None and hasattr(stats, "bump"):
            stats.bump(name)
