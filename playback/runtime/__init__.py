"""Playback runtime modules."""

from playback.api.events import LoaderEventType
from playback.api.loader import StateKey
from playback.runtime.config import LoaderConfig, get_loader_config, load_loader_config, set_loader_config
from playback.runtime.events import EventBus, LoaderEventBus
from playback.runtime.loader import PlaybackLoader, clamp, is_finite_number
from playback.runtime.logging import (
    configure_playback_logging,
    get_playback_logger,
    setup_playback_logging,
)
from playback.runtime.notifications import NotificationScheduler
from playback.runtime.scheduler import AsyncioTickScheduler, FrameTickScheduler
from playback.runtime.selectors import MemoizedSelector, create_selector
from playback.runtime.state_store import AttributeStore, values_unchanged
from playback.runtime.stats import LoaderStats, NoopLoaderStats, StatsSnapshot, create_loader_stats
from playback.runtime.time_series import TimeSeries, TimeSeriesResult, extract_time_series

__all__ = [
    "AsyncioTickScheduler",
    "AttributeStore",
    "EventBus",
    "FrameTickScheduler",
    "LoaderConfig",
    "LoaderEventBus",
    "LoaderEventType",
    "LoaderStats",
    "MemoizedSelector",
    "NoopLoaderStats",
    "NotificationScheduler",
    "PlaybackLoader",
    "StateKey",
    "StatsSnapshot",
    "TimeSeries",
    "TimeSeriesResult",
    "clamp",
    "configure_playback_logging",
    "create_loader_stats",
    "create_selector",
    "extract_time_series",
    "get_loader_config",
    "get_playback_logger",
    "is_finite_number",
    "load_loader_config",
    "set_loader_config",
    "setup_playback_logging",
    "values_unchanged",
]
