"""Reactive playback state core for telemetry log loaders."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playback.api.scheduling import TickScheduler
    from playback.runtime.loader import PlaybackLoader


def create_loader(*, tick_scheduler: "TickScheduler | None" = None) -> "PlaybackLoader":
    """Create a base playback loader with runtime-owned defaults."""
    from playback.runtime.loader import PlaybackLoader

    return PlaybackLoader(tick_scheduler=tick_scheduler)

__all__ = ["create_loader"]
