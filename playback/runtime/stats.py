"""Diagnostic counters for loader activity."""

from __future__ import annotations

from dataclasses import dataclass, field

FLUSH_COUNTER = "loader-flush"
LISTENER_ERROR_COUNTER = "loader-listener-error"
CALLBACK_ERROR_COUNTER = "loader-callback-error"


def event_counter_name(event_type: str) -> str:
    return f"loader-{event_type}"


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    """Read-only counter snapshot for debug overlays and loggers."""

    counters: dict[str, int] = field(default_factory=dict)
    flush_count: int = 0

    def top(self, limit: int = 3) -> list[tuple[str, int]]:
        return sorted(self.counters.items(), key=lambda item: item[1], reverse=True)[:limit]


class NoopLoaderStats:
    """No-op stats for zero-impact disabled mode."""

    def bump(self, name: str, count: int = 1) -> None:
        _ = (name, count)

    def get(self, name: str) -> int:
        _ = name
        return 0

    def reset(self) -> None:
        return None

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot()


class LoaderStats:
    """Small in-memory named counter registry."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def bump(self, name: str, count: int = 1) -> None:
        normalized = str(name).strip()
        if not normalized:
            return
        self._counters[normalized] = self._counters.get(normalized, 0) + int(count)

    def get(self, name: str) -> int:
        return self._counters.get(str(name).strip(), 0)

    def reset(self) -> None:
        self._counters = {}

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            counters=dict(self._counters),
            flush_count=self._counters.get(FLUSH_COUNTER, 0),
        )


def create_loader_stats(*, enabled: bool) -> LoaderStats | NoopLoaderStats:
    """Factory returning enabled stats or no-op implementation."""
    if not enabled:
        return NoopLoaderStats()
    return LoaderStats()
