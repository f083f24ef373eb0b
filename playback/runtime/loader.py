"""Base playback loader: time control and memoized views over loader state."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from collections.abc import Mapping
from numbers import Real
from typing import Any, Self

from playback.api.events import EventCallback
from playback.api.loader import Frame, GenerationListener, LogMetadata, LogSynchronizer, StateKey
from playback.api.scheduling import TickScheduler
from playback.runtime.config import LoaderConfig, get_loader_config
from playback.runtime.events import LoaderEventBus
from playback.runtime.logging import get_playback_logger, setup_playback_logging
from playback.runtime.notifications import NotificationScheduler
from playback.runtime.scheduler import FrameTickScheduler
from playback.runtime.selectors import create_selector
from playback.runtime.state_store import AttributeStore
from playback.runtime.stats import LoaderStats, NoopLoaderStats, create_loader_stats
from playback.runtime.time_series import TimeSeriesResult, extract_time_series

_LOG = get_playback_logger("loader")


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class PlaybackLoader:
    """Playback state shared by every log connector.

    Holds the current timestamp, look-ahead, stream settings and log
    metadata, and exposes memoized views over them. Writes are batched:
    subscribers get one call per scheduling tick with the generation
    reached. Connection lifecycle is left to subclasses.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        tick_scheduler: TickScheduler | None = None,
        config: LoaderConfig | None = None,
        stats: LoaderStats | NoopLoaderStats | None = None,
    ) -> None:
        self.options: dict[str, Any] = dict(options or {})
        self._config = config
        self._tick_scheduler = tick_scheduler if tick_scheduler is not None else FrameTickScheduler()
        if stats is None:
            stats = create_loader_stats(enabled=self.config.metrics_enabled)
        self._stats = stats
        if self.options.get("debug"):
            setup_playback_logging(replace(self.config, log_level="DEBUG"), force=True)

        self._events = LoaderEventBus()
        self._events.set_stats(stats)
        self._notifications = NotificationScheduler(
            self._tick_scheduler,
            lambda: self._store.generation,
            stats=stats,
        )
        self._store = AttributeStore(on_change=self._notifications.arm)

        self._select_streams = create_selector(
            self,
            [self.get_stream_settings, self._get_streams],
            _visible_streams,
            name="streams",
        )
        self._select_log_start_time = create_selector(
            self, self.get_metadata, self._log_start_time, name="log_start_time"
        )
        self._select_log_end_time = create_selector(
            self, self.get_metadata, _log_end_time, name="log_end_time"
        )
        # `get_streams` is only an input to trigger recomputation; the
        # synchronizer reads stream data itself.
        self._select_current_frame = create_selector(
            self,
            [
                self.get_log_synchronizer,
                self.get_stream_settings,
                self.get_current_time,
                self.get_look_ahead,
                self.get_streams,
            ],
            _current_frame,
            name="current_frame",
        )
        self._select_time_series = create_selector(
            self,
            [self.get_metadata, self.get_streams],
            extract_time_series,
            name="time_series",
        )

    @property
    def config(self) -> LoaderConfig:
        return self._config if self._config is not None else get_loader_config()

    @property
    def stats(self) -> LoaderStats | NoopLoaderStats:
        return self._stats

    @property
    def tick_scheduler(self) -> TickScheduler:
        return self._tick_scheduler

    @property
    def generation(self) -> int:
        return self._store.generation

    # Events

    def on(self, event_type: str, callback: EventCallback) -> Self:
        self._events.on(event_type, callback)
        return self

    def off(self, event_type: str, callback: EventCallback) -> Self:
        self._events.off(event_type, callback)
        return self

    def emit(self, event_type: str, payload: Any = None) -> int:
        return self._events.emit(event_type, payload)

    # Listeners

    def subscribe(self, listener: GenerationListener) -> None:
        self._notifications.subscribe(listener)

    def unsubscribe(self, listener: GenerationListener) -> None:
        self._notifications.unsubscribe(listener)

    # State

    def get(self, key: StateKey | str) -> Any:
        return self._store.get(key)

    def set(self, key: StateKey | str, value: Any) -> None:
        self._store.set(key, value)

    # Connection

    def is_open(self) -> bool:
        return False

    def connect(self) -> None:
        raise NotImplementedError(f"{type(self).__name__}.connect is not implemented")

    def close(self) -> None:
        raise NotImplementedError(f"{type(self).__name__}.close is not implemented")

    def dispose(self) -> None:
        """Release the pending tick, listeners and event callbacks."""
        self._notifications.dispose()
        self._events.clear()

    # Time control

    def seek(self, timestamp: float) -> None:
        metadata = self.get_metadata()
        if metadata is not None and _is_orderable(timestamp):
            start_time = self.get_log_start_time()
            end_time = self.get_log_end_time()
            if is_finite_number(start_time) and is_finite_number(end_time):
                clamped = clamp(timestamp, start_time, end_time)
                if clamped != timestamp and _LOG.isEnabledFor(logging.DEBUG):
                    _LOG.debug("seek clamped %s -> %s", timestamp, clamped)
                timestamp = clamped
        self._store.set(StateKey.TIMESTAMP, timestamp)

    def set_look_ahead(self, look_ahead: float) -> None:
        self._store.set(StateKey.LOOK_AHEAD, look_ahead)

    def update_stream_settings(self, settings: Mapping[str, Any]) -> None:
        stream_settings = self.get_stream_settings() or {}
        self._store.set(StateKey.STREAM_SETTINGS, {**stream_settings, **settings})

    # Derived reads

    def get_current_time(self) -> float | None:
        return self._store.get(StateKey.TIMESTAMP)

    def get_look_ahead(self) -> float | None:
        return self._store.get(StateKey.LOOK_AHEAD)

    def get_metadata(self) -> LogMetadata | None:
        return self._store.get(StateKey.METADATA)

    def get_stream_settings(self) -> Mapping[str, Any] | None:
        return self._store.get(StateKey.STREAM_SETTINGS)

    def get_log_synchronizer(self) -> LogSynchronizer | None:
        return self._store.get(StateKey.LOG_SYNCHRONIZER)

    def _get_streams(self) -> Mapping[str, Any] | None:
        return self._store.get(StateKey.STREAMS)

    def get_streams(self) -> Mapping[str, Any] | None:
        """Return streams enabled in the stream settings."""
        return self._select_streams.evaluate()

    def get_log_start_time(self) -> float | None:
        return self._select_log_start_time.evaluate()

    def get_log_end_time(self) -> float | None:
        return self._select_log_end_time.evaluate()

    def get_current_frame(self) -> Frame | None:
        return self._select_current_frame.evaluate()

    def get_time_series(self) -> TimeSeriesResult:
        return self._select_time_series.evaluate()

    def get_buffer_range(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.get_buffer_range is not implemented")

    def get_buffer_start(self) -> float | None:
        return self.get_log_start_time()

    def get_buffer_end(self) -> float | None:
        return self.get_log_end_time()

    # Connector hooks

    def _set_metadata(self, metadata: LogMetadata) -> None:
        self._store.set(StateKey.METADATA, metadata)
        streams = metadata.get("streams")
        if streams:
            self._store.set(StateKey.STREAM_SETTINGS, streams)
        timestamp = self.get_current_time()
        new_timestamp = timestamp if is_finite_number(timestamp) else metadata.get("start_time")
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "metadata installed streams=%d seek=%s",
                len(streams) if streams else 0,
                new_timestamp,
            )
        if is_finite_number(new_timestamp):
            self.seek(new_timestamp)

    def _set_log_synchronizer(self, synchronizer: LogSynchronizer | None) -> None:
        self._store.set(StateKey.LOG_SYNCHRONIZER, synchronizer)

    def _set_streams(self, streams: Mapping[str, Any] | None) -> None:
        self._store.set(StateKey.STREAMS, streams)

    def _log_start_time(self, metadata: LogMetadata | None) -> float | None:
        if metadata is None:
            return None
        start_time = metadata.get("start_time")
        if not start_time:
            return start_time
        return start_time + self.config.time_window


def _is_orderable(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


def _log_end_time(metadata: LogMetadata | None) -> float | None:
    if metadata is None:
        return None
    return metadata.get("end_time")


def _visible_streams(
    stream_settings: Mapping[str, Any] | None,
    streams: Mapping[str, Any] | None,
) -> Mapping[str, Any] | None:
    if stream_settings is None or streams is None:
        return streams
    return {name: stream for name, stream in streams.items() if stream_settings.get(name)}


def _current_frame(
    synchronizer: LogSynchronizer | None,
    stream_settings: Mapping[str, Any] | None,
    timestamp: float | None,
    look_ahead: float | None,
    _streams: Mapping[str, Any] | None,
) -> Frame | None:
    if synchronizer is not None and is_finite_number(timestamp):
        synchronizer.set_time(timestamp)
        synchronizer.set_look_ahead_time_offset(look_ahead)
        return synchronizer.get_current_frame(stream_settings)
    return None
