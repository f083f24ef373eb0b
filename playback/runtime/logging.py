"""Logging for the playback namespace, driven by `LoaderConfig`.

Handlers are installed on the `playback` logger only, so embedding hosts
keep ownership of the root logger.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from playback.api.logging import PlaybackLoggingConfig
from playback.runtime.config import LoaderConfig, get_loader_config

LOGGER_NAMESPACE = "playback"
_QUEUE_LISTENER: QueueListener | None = None
_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra=` fields land under `fields`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRIBUTES}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def logging_config_from(config: LoaderConfig) -> PlaybackLoggingConfig:
    """Map loader configuration onto the logging pipeline settings."""
    return PlaybackLoggingConfig(
        level_name=config.log_level,
        console_format=config.log_format,
        file_path=config.log_file,
        file_format="json",
    )


def configure_playback_logging(config: PlaybackLoggingConfig) -> logging.Logger:
    """Replace handlers on the playback logger; file output goes through a queue."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.handlers.clear()
    logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    if not config.file_path:
        logger.addHandler(console_handler)
        return logger

    file_path = Path(config.file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_resolve_formatter(config.file_format))

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    logger.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(
        log_queue, console_handler, file_handler, respect_handler_level=True
    )
    _QUEUE_LISTENER.start()
    return logger


def setup_playback_logging(
    config: LoaderConfig | None = None,
    *,
    force: bool = False,
) -> logging.Logger:
    """Configure playback logging from `config` unless handlers already exist."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    if logger.handlers and not force:
        return logger
    active = config if config is not None else get_loader_config()
    return configure_playback_logging(logging_config_from(active))


def get_playback_logger(name: str) -> logging.Logger:
    """Return logger under the playback namespace."""
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
