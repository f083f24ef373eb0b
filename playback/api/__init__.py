"""Public playback API contracts."""

from playback.api.events import EventBus, EventCallback, LoaderEventType, create_event_bus
from playback.api.loader import (
    Frame,
    GenerationListener,
    LogConnector,
    LogMetadata,
    LogSynchronizer,
    StateKey,
)
from playback.api.logging import PlaybackLoggingConfig
from playback.api.scheduling import TickHandle, TickScheduler, create_tick_scheduler

__all__ = [
    "EventBus",
    "EventCallback",
    "Frame",
    "GenerationListener",
    "LoaderEventType",
    "LogConnector",
    "LogMetadata",
    "LogSynchronizer",
    "PlaybackLoggingConfig",
    "StateKey",
    "TickHandle",
    "TickScheduler",
    "create_event_bus",
    "create_tick_scheduler",
]
