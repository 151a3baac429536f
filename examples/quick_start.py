"""Quick start guide for pgpartition.

Demonstrates:
1. Partition index of single bigint / integer keys
2. Why the declared key type matters
3. Multi-level (sub-partitioned) routing
4. Bulk assignment and load diagnostics
5. Invalid partition count handling
"""

import torch

import pgpartition
from pgpartition import HashPartitionScheme, InvalidPartitionCount


def example_1_single_keys():
    """Example 1: one key at a time."""
    print("=" * 60)
    print("Example 1: Single keys")
    print("=" * 60)

    for value, n in [(1, 16), (-1, 16), (540364, 16), (9223372036854775807, 2048)]:
        idx = pgpartition.partition_index64(value, n)
        print(f"bigint {value} with MODULUS {n} -> REMAINDER {idx}")
    print(f"integer 2147483647 with MODULUS 32 -> REMAINDER {pgpartition.partition_index32(2147483647, 32)}")
    print()


def example_2_key_types():
    """Example 2: the same number declared with different widths."""
    print("=" * 60)
    print("Example 2: Key types")
    print("=" * 60)

    value = 2**32
    print(f"{value} as bigint  -> {pgpartition.partition_index64(value, 16)}")
    print(f"{value} as integer -> {pgpartition.partition_index32(value, 16)} (wrapped to 0)")
    print("Values inside the integer range hash identically for both types:")
    print(f"  -1 as bigint -> {pgpartition.partition_index64(-1, 16)}, "
          f"as integer -> {pgpartition.partition_index32(-1, 16)}")
    print()


def example_3_multi_level():
    """Example 3: table partitioned 4 ways, each partition split 2 ways."""
    print("=" * 60)
    print("Example 3: Multi-level routing")
    print("=" * 60)

    scheme = HashPartitionScheme(levels=(4, 2))
    for value in [1, 42, 123456789, -4]:
        path = scheme.route(value)
        print(f"{value}: l1={path[0]} l2={path[1]} (leaf {scheme.leaf(value)} of {scheme.leaf_count})")
    print()


def example_4_bulk():
    """Example 4: a million keys at once."""
    print("=" * 60)
    print("Example 4: Bulk assignment")
    print("=" * 60)

    keys = torch.arange(1_000_000, dtype=torch.int64)
    indices = pgpartition.partition_indices64(keys, 64)
    summary = pgpartition.load_summary(indices, 64)
    print(f"min/max rows per partition: {summary['min_load']}/{summary['max_load']}")
    print(f"imbalance: {summary['imbalance']:.4f}, gini: {summary['gini']:.4f}")
    print()


def example_5_errors():
    """Example 5: a partition count must be positive."""
    print("=" * 60)
    print("Example 5: Invalid partition count")
    print("=" * 60)

    try:
        pgpartition.partition_index64(1, 0)
    except InvalidPartitionCount as e:
        print(f"InvalidPartitionCount: {e} (num_partitions={e.num_partitions})")
    print()


if __name__ == "__main__":
    example_1_single_keys()
    example_2_key_types()
    example_3_multi_level()
    example_4_bulk()
    example_5_errors()
