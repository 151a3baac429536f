"""Diagnostic functions for partition load distribution."""

from typing import Dict, Union

import numpy as np
import torch

IndexArray = Union[torch.Tensor, np.ndarray, list]


def _as_numpy(indices: IndexArray) -> np.ndarray:
    if isinstance(indices, torch.Tensor):
        return indices.detach().cpu().numpy().reshape(-1)
    return np.asarray(indices, dtype=np.int64).reshape(-1)


def partition_loads(indices: IndexArray, num_partitions: int) -> np.ndarray:
    """
    Count keys per partition.

    Args:
        indices: Partition indices of any shape (flattened)
        num_partitions: Number of partitions

    Returns:
        Array of counts per partition, shape [num_partitions]

    Raises:
        ValueError: If any index lies outside [0, num_partitions)
    """
    idx = _as_numpy(indices)
    if idx.size and (idx.min() < 0 or idx.max() >= num_partitions):
        raise ValueError(
            f"indices must lie in [0, {num_partitions}), "
            f"got range [{idx.min()}, {idx.max()}]"
        )
    return np.bincount(idx, minlength=num_partitions)


def gini_of_load(loads: np.ndarray) -> float:
    """
    Compute Gini coefficient from load array.

    Empty partitions count, so a key set landing in a single partition
    scores close to 1.

    Args:
        loads: Array of load values

    Returns:
        Gini coefficient (0 = uniform, 1 = maximum inequality)
    """
    loads = np.asarray(loads, dtype=np.float64)
    n = len(loads)
    if n == 0 or loads.sum() == 0:
        return 0.0

    sorted_loads = np.sort(loads)
    cumsum = np.cumsum(sorted_loads)
    gini = (2 * np.sum(np.arange(1, n + 1) * sorted_loads)) / (n * cumsum[-1]) - (n + 1) / n

    return float(gini)


def max_load(indices: IndexArray, num_partitions: int) -> int:
    """Number of keys in the most loaded partition."""
    return int(partition_loads(indices, num_partitions).max())


def load_summary(indices: IndexArray, num_partitions: int) -> Dict:
    """
    Compute a compact summary of how keys spread over partitions.

    Args:
        indices: Partition indices of any shape (flattened)
        num_partitions: Number of partitions

    Returns:
        Dictionary with:
        - total_keys: int
        - num_partitions: int
        - nonempty_partitions: int
        - mean_load: float
        - std_load: float
        - min_load: int
        - max_load: int
        - imbalance: float (max_load / mean_load, 1.0 is perfect balance)
        - gini: float
    """
    loads = partition_loads(indices, num_partitions)
    total = int(loads.sum())
    mean_load = float(loads.mean())

    return {
        "total_keys": total,
        "num_partitions": int(num_partitions),
        "nonempty_partitions": int(np.count_nonzero(loads)),
        "mean_load": mean_load,
        "std_load": float(loads.std()),
        "min_load": int(loads.min()),
        "max_load": int(loads.max()),
        "imbalance": float(loads.max() / mean_load) if total else 0.0,
        "gini": gini_of_load(loads),
    }
