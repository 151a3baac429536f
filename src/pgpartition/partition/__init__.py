"""Partition index computation, batch assignment, routing and diagnostics."""

from .batch import (
    MAX_VECTORIZED_PARTITIONS,
    hash_extended16_tensor,
    hash_extended32_tensor,
    hash_extended64_tensor,
    hash_extended_tensor,
    partition_indices,
    partition_indices16,
    partition_indices32,
    partition_indices64,
)
from .diagnostics import gini_of_load, load_summary, max_load, partition_loads
from .indexer import (
    KeyType,
    PartitionIndexer,
    hash_extended,
    hash_extended16,
    hash_extended32,
    hash_extended64,
    partition_index,
    partition_index16,
    partition_index32,
    partition_index64,
    reduce_hash,
)
from .levels import HashPartitionScheme

__all__ = [
    # Scalar
    "KeyType",
    "PartitionIndexer",
    "hash_extended",
    "hash_extended16",
    "hash_extended32",
    "hash_extended64",
    "partition_index",
    "partition_index16",
    "partition_index32",
    "partition_index64",
    "reduce_hash",
    # Batch
    "MAX_VECTORIZED_PARTITIONS",
    "hash_extended_tensor",
    "hash_extended16_tensor",
    "hash_extended32_tensor",
    "hash_extended64_tensor",
    "partition_indices",
    "partition_indices16",
    "partition_indices32",
    "partition_indices64",
    # Multi-level
    "HashPartitionScheme",
    # Diagnostics
    "partition_loads",
    "gini_of_load",
    "max_load",
    "load_summary",
]
