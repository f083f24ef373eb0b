from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from playback.runtime.loader import PlaybackLoader


class FakeSynchronizer:
    def __init__(self, frame: object = "frame") -> None:
        self.frame = frame
        self.calls: list[tuple[str, Any]] = []
        self.time: float | None = None
        self.look_ahead: float | None = None

    def set_time(self, timestamp: float) -> None:
        self.calls.append(("set_time", timestamp))
        self.time = timestamp

    def set_look_ahead_time_offset(self, offset: float | None) -> None:
        self.calls.append(("set_look_ahead_time_offset", offset))
        self.look_ahead = offset

    def get_current_frame(self, stream_settings: Mapping[str, Any] | None) -> object:
        self.calls.append(("get_current_frame", stream_settings))
        return self.frame


class ConnectedLoader(PlaybackLoader):
    """Minimal connector standing in for file and live sources."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._open = False

    def is_open(self) -> bool:
        return self._open

    def connect(self) -> None:
        self._open = True
        self.emit("ready")

    def close(self) -> None:
        self._open = False
        self.emit("finish")

    def get_buffer_range(self) -> list[tuple[float, float]]:
        start, end = self.get_buffer_start(), self.get_buffer_end()
        return [(start, end)] if start is not None and end is not None else []


class GenerationRecorder:
    def __init__(self) -> None:
        self.generations: list[int] = []

    def __call__(self, generation: int) -> None:
        self.generations.append(generation)
