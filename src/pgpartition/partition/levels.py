"""Multi-level hash partitioning.

A table hash-partitioned on a key, whose partitions are themselves
hash-partitioned on the same key, routes a row level by level. PostgreSQL
hashes the key with the same seed at every level, so each level's index
depends only on the key and that level's partition count.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from pgpartition.constants import DEFAULT_MAGIC, DEFAULT_SEED
from pgpartition.errors import check_num_partitions
from pgpartition.partition.batch import partition_indices
from pgpartition.partition.indexer import KeyType, PartitionIndexer

if TYPE_CHECKING:
    import torch


@dataclass(frozen=True)
class HashPartitionScheme:
    """Hash partitioning layout of one key column.

    Attributes:
        levels: Partition counts per level, outermost first
        key_type: Declared type of the partition key
        seed: 64-bit hash seed
        magic: 64-bit constant added before reduction
    """

    levels: tuple[int, ...]
    key_type: KeyType = KeyType.INT8
    seed: int = DEFAULT_SEED
    magic: int = DEFAULT_MAGIC

    def __post_init__(self) -> None:
        """Validate parameters and normalize field types."""
        levels = tuple(self.levels)
        if not levels:
            raise ValueError("levels must contain at least one partition count")
        for n in levels:
            if isinstance(n, bool) or not isinstance(n, int):
                raise ValueError(f"partition counts must be integers, got {n!r}")
            check_num_partitions(n)
        # Use object.__setattr__ because dataclass is frozen
        object.__setattr__(self, "levels", levels)
        object.__setattr__(self, "key_type", KeyType.parse(self.key_type))
        object.__setattr__(self, "_indexer", PartitionIndexer(self.seed, self.magic))

    @property
    def depth(self) -> int:
        return len(self.levels)

    @property
    def leaf_count(self) -> int:
        """Total number of leaf partitions."""
        return math.prod(self.levels)

    def route(self, value: int) -> tuple[int, ...]:
        """Partition index at every level for ``value``.

        Example:
            >>> HashPartitionScheme(levels=(4, 2)).route(42)
            (2, 0)
        """
        return tuple(
            self._indexer.index(value, n, self.key_type) for n in self.levels
        )

    def route_tensor(self, values: "torch.Tensor") -> "torch.LongTensor":
        """Vectorized :meth:`route`.

        Args:
            values: 1-D integer tensor of key values [B]

        Returns:
            Index paths of shape [B, depth]
        """
        import torch

        columns = [
            partition_indices(values, n, self.key_type, self.seed, self.magic)
            for n in self.levels
        ]
        return torch.stack(columns, dim=-1)

    def leaf_ordinal(self, path: Sequence[int]) -> int:
        """Flatten an index path into a leaf number in [0, leaf_count).

        Raises:
            ValueError: If the path length or any index is out of range
        """
        if len(path) != self.depth:
            raise ValueError(f"path must have {self.depth} entries, got {len(path)}")
        ordinal = 0
        for idx, n in zip(path, self.levels):
            if not (0 <= idx < n):
                raise ValueError(f"index {idx} out of range for level of {n} partitions")
            ordinal = ordinal * n + idx
        return ordinal

    def leaf(self, value: int) -> int:
        """Leaf number that ``value`` routes to."""
        return self.leaf_ordinal(self.route(value))
