"""Opt-in file logging.

The picker owns the terminal while it runs, so log records never go to the
console. Setting ``UJUST_PICKER_LOG`` to a file path turns on DEBUG logging
into that file; otherwise the package logger only has a ``NullHandler``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "UJUST_PICKER_LOG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "ujust_picker"


def setup_logging(log_path: str | None = None) -> logging.Logger:
    """Configure the package logger and return it."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    target = log_path if log_path is not None else os.environ.get(LOG_ENV_VAR, "").strip()
    if not target:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return logger

    handler = logging.FileHandler(Path(target).expanduser(), encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.debug("logging to %s", target)
    return logger


__all__ = ["LOG_ENV_VAR", "setup_logging"]
