"""Public loader collaborator contracts."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any, Protocol, TypeAlias, runtime_checkable

Frame: TypeAlias = Any
LogMetadata: TypeAlias = Mapping[str, Any]
GenerationListener = Callable[[int], None]


class StateKey(StrEnum):
    """Closed set of attributes held by a loader's store."""

    TIMESTAMP = "timestamp"
    LOOK_AHEAD = "lookAhead"
    METADATA = "metadata"
    STREAM_SETTINGS = "streamSettings"
    STREAMS = "streams"
    LOG_SYNCHRONIZER = "logSynchronizer"


@runtime_checkable
class LogSynchronizer(Protocol):
    """Stateful time-query collaborator that assembles frames.

    The synchronizer retains the last time and look-ahead it was given.
    """

    def set_time(self, timestamp: float) -> None:
        """Set playback time."""

    def set_look_ahead_time_offset(self, offset: float | None) -> None:
        """Set look-ahead offset relative to playback time."""

    def get_current_frame(self, stream_settings: Mapping[str, Any] | None) -> Frame | None:
        """Return frame for the last set time and look-ahead."""


@runtime_checkable
class LogConnector(Protocol):
    """Connection capability implemented by concrete loaders."""

    def is_open(self) -> bool:
        """Return whether the data source is open."""

    def connect(self) -> None:
        """Open the data source."""

    def close(self) -> None:
        """Close the data source."""

    def get_buffer_range(self) -> Any:
        """Return loaded buffer range."""
