"""Versioned attribute store for loader state."""

from __future__ import annotations

from collections.abc import Callable
from numbers import Real
from typing import Any

from playback.api.loader import StateKey

_SCALAR_TYPES = (str, bytes, bool, type(None))


def values_unchanged(previous: Any, value: Any) -> bool:
    """Return True when `value` would not be a change over `previous`.

    Identity for objects and collections, equality for primitives. NaN is
    never equal to itself, so writing NaN always counts as a change.
    """
    if previous is value:
        return not _is_nan(value)
    if isinstance(previous, bool) or isinstance(value, bool):
        return type(previous) is type(value) and previous == value
    if isinstance(previous, Real) and isinstance(value, Real):
        return previous == value
    if isinstance(previous, _SCALAR_TYPES) and type(previous) is type(value):
        return previous == value
    return False


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and value != value


def resolve_state_key(key: StateKey | str) -> StateKey:
    """Return the known attribute key or raise for unknown names."""
    try:
        return StateKey(key)
    except ValueError:
        raise KeyError(f"unknown loader state key: {key!r}") from None


class AttributeStore:
    """Key/value store whose generation counts logically distinct writes."""

    def __init__(self, *, on_change: Callable[[], None] | None = None) -> None:
        self._values: dict[StateKey, Any] = {}
        self._generation = 0
        self._on_change = on_change

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, key: StateKey | str) -> Any:
        return self._values.get(resolve_state_key(key))

    def set(self, key: StateKey | str, value: Any) -> bool:
        """Write value and return whether it changed the store."""
        state_key = resolve_state_key(key)
        if values_unchanged(self._values.get(state_key), value):
            return False
        self._values[state_key] = value
        self._generation += 1
        if self._on_change is not None:
            self._on_change()
        return True

    def snapshot(self) -> dict[str, Any]:
        """Return shallow copy of written attributes keyed by name."""
        return {key.value: value for key, value in self._values.items()}
