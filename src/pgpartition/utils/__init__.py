"""Utilities module for pgpartition."""

from pgpartition.utils.logger import get_logger
from pgpartition.utils.seeds import seed_everything
from pgpartition.utils.timing import Timer, timer

__all__ = [
    "get_logger",
    "seed_everything",
    "Timer",
    "timer",
]
