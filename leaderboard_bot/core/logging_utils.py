"""Logging helpers that keep configuration consistent across modules."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "leaderboard_bot"


def _coerce_level(level: Union[int, str]) -> int:
    """Accept ``logging`` constants or names such as ``"debug"``; unknown names fall back to INFO."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_library_logging(
    *,
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    handlers: Optional[Iterable[logging.Handler]] = None,
) -> logging.Logger:
    """Return the package logger configured with the common format.

    Cog and store modules log through ``logging.getLogger(__name__)``, so
    everything under ``leaderboard_bot.*`` ends up on these handlers.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_coerce_level(level))
    logger.handlers.clear()

    for handler in handlers or [logging.StreamHandler()]:
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Shortcut that returns a namespaced child logger."""

    return logging.getLogger(PACKAGE_LOGGER).getChild(name)


__all__ = ["configure_library_logging", "get_logger"]
