from __future__ import annotations

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "alpaca_api"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers:
        return root
    level = getattr(logging, os.getenv("ALPACA_API_LOG_LEVEL", "INFO").upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return root


def get_logger(name: str, *, level: Optional[int] = None) -> logging.Logger:
    """Module logger below the ``alpaca_api`` package logger.

    The single stream handler lives on the package logger; module loggers
    propagate to it. Level comes from ALPACA_API_LOG_LEVEL (default INFO).

    Policy:
    - DEBUG: every dispatch (method, URL, status), capability registration, pagination transitions
    - INFO: market-open waits, client construction from presets
    - WARNING: non-2xx responses
    - Credentials are never logged.
    """

    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
