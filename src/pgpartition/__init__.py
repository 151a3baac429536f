"""pgpartition: PostgreSQL hash-partition routing outside the database."""

from .config import PartitionConfig, load_config
from .constants import DEFAULT_MAGIC, DEFAULT_SEED
from .errors import InvalidPartitionCount
from .hashing import hash_uint32_extended, hash_uint32_extended_tensor
from .partition import (
    HashPartitionScheme,
    KeyType,
    PartitionIndexer,
    gini_of_load,
    hash_extended,
    hash_extended16,
    hash_extended16_tensor,
    hash_extended32,
    hash_extended32_tensor,
    hash_extended64,
    hash_extended64_tensor,
    hash_extended_tensor,
    load_summary,
    max_load,
    partition_index,
    partition_index16,
    partition_index32,
    partition_index64,
    partition_indices,
    partition_indices16,
    partition_indices32,
    partition_indices64,
    partition_loads,
)
from .utils import Timer, get_logger, seed_everything

__version__ = "0.1.0"

__all__ = [
    # Constants and errors
    "DEFAULT_SEED",
    "DEFAULT_MAGIC",
    "InvalidPartitionCount",
    # Hashing
    "hash_uint32_extended",
    "hash_uint32_extended_tensor",
    "hash_extended",
    "hash_extended16",
    "hash_extended32",
    "hash_extended64",
    # Partition index
    "KeyType",
    "PartitionIndexer",
    "partition_index",
    "partition_index16",
    "partition_index32",
    "partition_index64",
    # Batch
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
    # Config and utils
    "PartitionConfig",
    "load_config",
    "get_logger",
    "seed_everything",
    "Timer",
]
