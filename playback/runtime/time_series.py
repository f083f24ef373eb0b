"""Time-series extraction over loader metadata and visible streams."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

TIME_SERIES_CATEGORIES = frozenset({"time_series", "TIME_SERIES"})


@dataclass(frozen=True, slots=True)
class TimeSeries:
    """Samples of one time-series stream, sorted by time."""

    stream_name: str
    times: np.ndarray
    values: np.ndarray
    unit: str | None = None

    def __len__(self) -> int:
        return int(self.times.shape[0])


@dataclass(frozen=True, slots=True)
class TimeSeriesResult:
    """Extracted series plus declared streams that had no visible data."""

    series: dict[str, TimeSeries] = field(default_factory=dict)
    missing_streams: tuple[str, ...] = ()

    @property
    def is_loading(self) -> bool:
        return bool(self.missing_streams)


def extract_time_series(
    metadata: Mapping[str, Any] | None,
    streams: Mapping[str, Any] | None,
) -> TimeSeriesResult:
    """Collect time-series streams declared in metadata."""
    if not metadata:
        return TimeSeriesResult()
    declared = metadata.get("streams") or {}
    visible = streams or {}
    series: dict[str, TimeSeries] = {}
    missing: list[str] = []
    for stream_name, descriptor in declared.items():
        if not _is_time_series(descriptor):
            continue
        samples = visible.get(stream_name)
        if samples is None:
            missing.append(stream_name)
            continue
        times, values = _sample_arrays(samples)
        series[stream_name] = TimeSeries(
            stream_name=stream_name,
            times=times,
            values=values,
            unit=descriptor.get("units") if isinstance(descriptor, Mapping) else None,
        )
    return TimeSeriesResult(series=series, missing_streams=tuple(missing))


def _is_time_series(descriptor: Any) -> bool:
    if not isinstance(descriptor, Mapping):
        return False
    return descriptor.get("category") in TIME_SERIES_CATEGORIES


def _sample_arrays(samples: Iterable[Any]) -> tuple[np.ndarray, np.ndarray]:
    pairs: list[tuple[float, float]] = []
    for sample in samples:
        if isinstance(sample, Mapping):
            time, value = sample.get("time"), sample.get("value")
        else:
            time, value = sample
        if time is None or value is None:
            continue
        pairs.append((float(time), float(value)))
    if not pairs:
        empty = np.empty(0, dtype=np.float64)
        return empty, empty.copy()
    data = np.asarray(pairs, dtype=np.float64)
    order = np.argsort(data[:, 0], kind="stable")
    return data[order, 0], data[order, 1]
