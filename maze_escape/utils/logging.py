"""Logging setup shared by the API server and the headless runner."""

from __future__ import annotations

import logging
import sys

# Per-request access lines drown out game events at the default tick rate.
_NOISY_LOGGERS = ("uvicorn.access", "watchfiles")


def setup_logging(level: str = "INFO", stream=None) -> logging.Handler:
    """Configure the root logger for game output and return the installed handler.

    Game modules log under ``maze_escape.*``; third-party access logs are
    held at WARNING unless *level* is DEBUG.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-32s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    quiet_level = numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
    return handler
