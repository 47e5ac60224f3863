"""Logging setup for strands grid generation."""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"
ROOT_LOGGER_NAME = "strands"


def parse_level(level: Union[int, str]) -> int:
    """Map ``"debug"``, ``"INFO"`` or ``20`` style values to a logging level.

    Unknown names fall back to INFO.
    """

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Route every record through a single handler on ``stream`` (stderr).

    Attempts are thrown away by the dozen, so attempt progress goes to INFO
    and per-path search detail to DEBUG.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(parse_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
