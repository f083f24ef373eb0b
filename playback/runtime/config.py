"""Centralized loader configuration sourced from environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

DEFAULT_TIME_WINDOW = 0.4


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Immutable loader configuration.

    `time_window` shifts the log start time forward so that the first
    seekable timestamp has a full window of data behind it.
    """

    time_window: float = DEFAULT_TIME_WINDOW
    metrics_enabled: bool = True
    log_level: str = "INFO"
    log_format: str = "text"  # text|json
    log_file: str | None = None


_LOADER_CONFIG: ContextVar[LoaderConfig | None] = ContextVar("playback_loader_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with playback-prefixed override."""
    value = _raw("PLAYBACK_LOG_LEVEL", env=env)
    if value is None:
        value = _text("LOG_LEVEL", default, env=env)
    return value.strip().upper()


def _log_format(raw: str) -> str:
    value = raw.strip().lower()
    return value if value in {"text", "json"} else "text"


def load_loader_config(*, env: Mapping[str, str] | None = None) -> LoaderConfig:
    return LoaderConfig(
        time_window=_float("PLAYBACK_TIME_WINDOW", DEFAULT_TIME_WINDOW, env=env),
        metrics_enabled=_flag("PLAYBACK_METRICS", True, env=env),
        log_level=resolve_log_level_name(env=env),
        log_format=_log_format(_text("PLAYBACK_LOG_FORMAT", "text", env=env)),
        log_file=_raw("PLAYBACK_LOG_FILE", env=env) or None,
    )


def initialize_loader_config(*, env: Mapping[str, str] | None = None) -> LoaderConfig:
    config = load_loader_config(env=env)
    _LOADER_CONFIG.set(config)
    return config


def set_loader_config(config: LoaderConfig) -> LoaderConfig:
    _LOADER_CONFIG.set(config)
    return config


def get_loader_config() -> LoaderConfig:
    config = _LOADER_CONFIG.get()
    if config is not None:
        return config
    return initialize_loader_config()


__all__ = [
    "DEFAULT_TIME_WINDOW",
    "LoaderConfig",
    "get_loader_config",
    "initialize_loader_config",
    "load_loader_config",
    "resolve_log_level_name",
    "set_loader_config",
]
