"""Public loader event bus API contracts."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol, Self

EventCallback = Callable[[str, Any], None]


class LoaderEventType(StrEnum):
    """Event types recognized by loader consumers.

    The core never decides when these fire; connectors emit them.
    """

    READY = "ready"
    UPDATE = "update"
    FINISH = "finish"
    ERROR = "error"


class EventBus(Protocol):
    """Public named-event pub/sub contract."""

    def on(self, event_type: str, callback: EventCallback) -> Self:
        """Register callback for event type."""

    def off(self, event_type: str, callback: EventCallback) -> Self:
        """Remove first registration of callback for event type."""

    def emit(self, event_type: str, payload: Any = None) -> int:
        """Invoke callbacks for event type and return invocation count."""


def create_event_bus() -> EventBus:
    """Create default loader event bus implementation."""
    from playback.runtime.events import LoaderEventBus

    return LoaderEventBus()
