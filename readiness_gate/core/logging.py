from __future__ import annotations

import logging
import sys


def level_number(level: str) -> int:
    """Map a level name such as ``"debug"`` to its number; ValueError if unknown."""

    lvl = logging.getLevelName(level.strip().upper())
    if not isinstance(lvl, int):
        raise ValueError(f"unknown log level {level!r}")
    return lvl


def configure_logging(level: str, fmt: str = "%(message)s") -> None:
    """Send every record to stderr; stdout belongs to the wrapped command."""

    try:
        lvl = level_number(level)
    except ValueError:
        lvl = logging.INFO

    logging.basicConfig(level=lvl, format=fmt, stream=sys.stderr, force=True)
