"""Logger setup shared by the whole package."""

from __future__ import annotations

import logging

from .config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL

# common logger name for every sudokuengine module
LOGGER_NAME = "sudokuengine"


def get_logger() -> logging.Logger:
    """
    Return the package logger.

    A stream handler is attached the first time, so library users get
    readable output without configuring logging themselves; applications
    that configure the root logger can still adjust the level.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)

    return logger


def set_verbosity(verbose: bool) -> None:
    get_logger().setLevel(logging.DEBUG if verbose else LOG_LEVEL)
