"""Timing utilities."""

import time
from contextlib import contextmanager
from typing import Generator, Optional

import torch


class Timer:
    """Context manager timing a block and the rate of items it processed."""

    def __init__(self, name: str = "Operation", items: int = 0, device: str = "cpu"):
        """
        Initialize timer.

        Args:
            name: Name/description of the operation being timed
            items: Number of keys processed inside the block (for rate)
            device: Device string ("cpu", "cuda", or "auto"); CUDA work is
                synchronized before reading the clock
        """
        self.name = name
        self.items = items
        self.start_time: Optional[float] = None
        self.elapsed_time: Optional[float] = None

        if device == "auto":
            device = "cuda" if torch.cuda.is_available() else "cpu"
        self.sync = device == "cuda"

    def __enter__(self) -> "Timer":
        if self.sync:
            torch.cuda.synchronize()
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.sync:
            torch.cuda.synchronize()
        self.elapsed_time = time.perf_counter() - self.start_time

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds."""
        if self.elapsed_time is None:
            raise ValueError("Timer has not been used as context manager yet")
        return self.elapsed_time

    @property
    def rate(self) -> float:
        """Items per second (0.0 for an instantaneous block)."""
        if self.elapsed <= 0:
            return 0.0
        return self.items / self.elapsed

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "items": self.items,
            "elapsed_s": self.elapsed,
            "items_per_s": self.rate,
        }


@contextmanager
def timer(name: str = "Operation", items: int = 0, device: str = "cpu") -> Generator[Timer, None, None]:
    """Convenience wrapper around :class:`Timer`."""
    with Timer(name, items=items, device=device) as t:
        yield t
