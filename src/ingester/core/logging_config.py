"""Logging setup for the ingester.

All loggers live under the ``ingester`` namespace so a single call to
``setup_logging`` configures the CLI, the API and the pipeline alike.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "ingester"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Install a single console handler on the ``ingester`` logger.

    Calling it again replaces the handler rather than stacking another one.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return ``ingester.<name>``, or the root ingester logger."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
