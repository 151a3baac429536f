"""Logging utilities."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger with a single stderr handler.

    Repeated calls with the same name return the same logger without
    stacking handlers.

    Args:
        name: Logger name (usually ``__name__``)
        level: Logging level for a newly configured logger

    Returns:
        Configured logging.Logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger
