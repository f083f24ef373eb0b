"""Named-event bus used by loaders to talk to their consumers."""

from __future__ import annotations

import logging
from typing import Any, Self

from playback.api.events import EventCallback
from playback.runtime.errors import log_recoverable
from playback.runtime.logging import get_playback_logger
from playback.runtime.stats import CALLBACK_ERROR_COUNTER, event_counter_name

_LOG = get_playback_logger("events")


class LoaderEventBus:
    """Simple in-process pub/sub keyed by event type name.

    Callbacks run synchronously in registration order. A failing callback
    does not stop the rest; the first failure is re-raised after every
    callback has been attempted.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, list[EventCallback]] = {}
        self._stats: object | None = None

    def set_stats(self, stats: object | None) -> None:
        """Attach optional stats registry used for emit counts."""
        self._stats = stats

    def on(self, event_type: str, callback: EventCallback) -> Self:
        self._callbacks.setdefault(str(event_type), []).append(callback)
        return self

    def off(self, event_type: str, callback: EventCallback) -> Self:
        callbacks = self._callbacks.get(str(event_type))
        if callbacks:
            for index, registered in enumerate(callbacks):
                if registered is callback:
                    del callbacks[index]
                    break
        return self

    def emit(self, event_type: str, payload: Any = None) -> int:
        """Emit one event and return number of invoked callbacks."""
        name = str(event_type)
        invoked = 0
        first_error: BaseException | None = None
        for callback in tuple(self._callbacks.get(name, ())):
            invoked += 1
            try:
                callback(name, payload)
            except Exception as exc:
                self._bump(CALLBACK_ERROR_COUNTER)
                log_recoverable(_LOG, "event callback failed event=%s", name, level=logging.WARNING)
                if first_error is None:
                    first_error = exc
        self._bump(event_counter_name(name))
        if first_error is not None:
            raise first_error
        return invoked

    def callback_count(self, event_type: str) -> int:
        return len(self._callbacks.get(str(event_type), ()))

    def clear(self) -> None:
        self._callbacks.clear()

    def _bump(self, name: str) -> None:
        stats = self._stats
        if stats is not None and hasattr(stats, "bump"):
            stats.bump(name)


EventBus = LoaderEventBus
