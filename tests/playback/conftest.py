from __future__ import annotations

import pytest

from playback.runtime.config import LoaderConfig
from playback.runtime.loader import PlaybackLoader
from playback.runtime.scheduler import FrameTickScheduler
from playback.runtime.stats import LoaderStats
from tests.playback.helpers import FakeSynchronizer


@pytest.fixture
def ticks() -> FrameTickScheduler:
    return FrameTickScheduler()


@pytest.fixture
def config() -> LoaderConfig:
    return LoaderConfig(time_window=5.0)


@pytest.fixture
def stats() -> LoaderStats:
    return LoaderStats()


@pytest.fixture
def loader(ticks: FrameTickScheduler, config: LoaderConfig, stats: LoaderStats) -> PlaybackLoader:
    return PlaybackLoader(tick_scheduler=ticks, config=config, stats=stats)


@pytest.fixture
def synchronizer() -> FakeSynchronizer:
    return FakeSynchronizer()
