"""Logging setup for the ``roadgen`` package logger."""

from __future__ import annotations

import logging
from typing import Optional


PACKAGE_LOGGER = "roadgen"

SUMMARY_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
# Per-tile decisions come in bursts, so DEBUG output carries the source line.
TRACE_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s:%(lineno)d | %(message)s"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Install a single stream handler on the ``roadgen`` logger.

    A run may discard and restart whole grids several times, so attempt and
    pass summaries go to INFO while per-tile placements, dead ends and
    rejected terminals stay at DEBUG. Only the package logger is touched;
    the host application's root configuration is left alone.
    """

    handler = logging.StreamHandler()
    fmt = TRACE_FORMAT if level <= logging.DEBUG else SUMMARY_FORMAT
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``roadgen`` namespace, configuring it lazily."""

    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure_logging()
    name = name or PACKAGE_LOGGER
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
