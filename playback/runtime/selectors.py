"""Memoized derivations over declared input producers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from playback.runtime.state_store import values_unchanged

InputProducer = Callable[[], Any]
_UNSET = object()


class MemoizedSelector:
    """Derivation cache keyed on the values of its declared inputs.

    Every input producer runs on each evaluation. The combiner only runs
    when at least one input differs from the previous evaluation;
    otherwise the cached output is returned as the same object. Inputs
    may themselves be selectors, in which case an unchanged upstream
    output leaves this selector cached too.

    The cache is only as fresh as the declared inputs: the combiner must
    not read state it did not declare.
    """

    __slots__ = (
        "_combiner",
        "_context",
        "_inputs",
        "_last_inputs",
        "_last_output",
        "_name",
        "_recompute_count",
    )

    def __init__(
        self,
        context: object,
        inputs: InputProducer | Sequence[InputProducer],
        combiner: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> None:
        producers = (inputs,) if callable(inputs) else tuple(inputs)
        if not producers:
            raise ValueError("selector needs at least one input producer")
        self._context = context
        self._inputs: tuple[InputProducer, ...] = producers
        self._combiner = combiner
        self._name = name or getattr(combiner, "__name__", "selector")
        self._last_inputs: tuple[Any, ...] | object = _UNSET
        self._last_output: Any = None
        self._recompute_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def context(self) -> object:
        return self._context

    @property
    def recompute_count(self) -> int:
        """Number of times the combiner has run."""
        return self._recompute_count

    def evaluate(self) -> Any:
        current = tuple(producer() for producer in self._inputs)
        previous = self._last_inputs
        if previous is not _UNSET and _inputs_unchanged(previous, current):
            return self._last_output
        output = self._combiner(*current)
        self._last_inputs = current
        self._last_output = output
        self._recompute_count += 1
        return output

    __call__ = evaluate

    def reset(self) -> None:
        """Drop cached inputs so the next evaluation recomputes."""
        self._last_inputs = _UNSET
        self._last_output = None

    def __repr__(self) -> str:
        return f"MemoizedSelector(name={self._name!r}, inputs={len(self._inputs)})"


def _inputs_unchanged(previous: Any, current: tuple[Any, ...]) -> bool:
    if len(previous) != len(current):
        return False
    return all(values_unchanged(old, new) for old, new in zip(previous, current))


def create_selector(
    context: object,
    inputs: InputProducer | Sequence[InputProducer],
    combiner: Callable[..., Any],
    *,
    name: str | None = None,
) -> MemoizedSelector:
    """Build a memoized selector owned by `context`."""
    return MemoizedSelector(context, inputs, combiner, name=name)
