"""Shared runtime exception policy helpers."""

from __future__ import annotations

import logging


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *args: object,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated callback exceptions."""
    logger.log(level, message, *args, exc_info=True)
