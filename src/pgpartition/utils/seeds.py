"""Seed management for reproducible key generation."""

import random

import numpy as np
import torch


def seed_everything(seed: int) -> None:
    """Set all random seeds for deterministic behavior.

    Sets seeds for Python random, NumPy, and PyTorch (CPU and CUDA). Only
    key generation in tests and benchmarks is random; the hash itself is not.

    Args:
        seed: Random seed value (should be non-negative integer)
    """
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)
