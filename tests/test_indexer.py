"""Tests for scalar partition index computation."""

import pytest

from pgpartition import (
    DEFAULT_MAGIC,
    DEFAULT_SEED,
    InvalidPartitionCount,
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
)
from pgpartition.hashing.lookup3 import hash_uint32_extended
from pgpartition.partition.indexer import reduce_hash

# Frozen reference vectors: (value, num_partitions, expected index),
# default seed and magic constant
BIGINT_VECTORS = [
    (1, 16, 8),
    (0, 16, 0),
    (-1, 16, 5),
    (540364, 16, 2),
    (540365, 16, 15),
    (2147483647, 32, 31),
    (-2147483648, 32, 22),
    (9223372036854775807, 64, 54),
    (-9223372036854775808, 64, 63),
    (123456789012345, 1024, 430),
    (9223372036854775807, 2048, 758),
    (123123123123123123, 4096, 3934),
    (100, 8, 1),
    (-10, 8, 7),
    (12345, 8, 4),
    (1, 1000, 976),
    (-1, 1000, 805),
    (1, 2147483647, 1592515807),
    (1, 2147483648, 639313976),
]

INT4_VECTORS = [
    (1, 16, 8),
    (0, 16, 0),
    (-1, 16, 5),
    (123456, 16, 14),
    (2147483647, 32, 31),
    (-2147483648, 32, 22),
    (98765, 8, 1),
    (-2147483648, 16, 6),
    (987654, 3, 2),
]

# Same keys reduced without the magic constant
INT4_NO_MAGIC_VECTORS = [
    (1, 16, 5),
    (0, 16, 13),
    (-1, 16, 2),
    (123456, 16, 11),
    (2147483647, 32, 28),
    (-2147483648, 32, 19),
]


@pytest.mark.parametrize("value,num_partitions,expected", BIGINT_VECTORS)
def test_bigint_known_vectors(value, num_partitions, expected):
    """Test bigint partition indexes against frozen vectors."""
    assert partition_index64(value, num_partitions) == expected


@pytest.mark.parametrize("value,num_partitions,expected", INT4_VECTORS)
def test_int4_known_vectors(value, num_partitions, expected):
    """Test integer partition indexes against frozen vectors."""
    assert partition_index32(value, num_partitions) == expected


@pytest.mark.parametrize("value,num_partitions,expected", INT4_NO_MAGIC_VECTORS)
def test_int4_without_magic(value, num_partitions, expected):
    """magic=0 reduces the bare hashint4extended value."""
    assert partition_index32(value, num_partitions, magic=0) == expected
    assert partition_index32(value, num_partitions, magic=0) == hash_extended32(value) % num_partitions


def test_hash_extended64_sign_folding():
    """Negative bigints fold the complemented high half into the low half."""
    # -1: lo = 0xFFFFFFFF, hi = 0xFFFFFFFF, lo ^ ~hi = 0xFFFFFFFF
    assert hash_extended64(-1) == hash_uint32_extended(0xFFFFFFFF, DEFAULT_SEED)
    # 2^32: lo = 0, hi = 1, lo ^ hi = 1
    assert hash_extended64(2**32) == hash_uint32_extended(1, DEFAULT_SEED)
    # -(2^32): lo = 0, hi = 0xFFFFFFFF, lo ^ ~hi = 0
    assert hash_extended64(-(2**32)) == hash_uint32_extended(0, DEFAULT_SEED)
    # Extremes fold onto the opposite int4 bound
    assert hash_extended64(2**63 - 1) == hash_uint32_extended(0x80000000, DEFAULT_SEED)
    assert hash_extended64(-(2**63)) == hash_uint32_extended(0x7FFFFFFF, DEFAULT_SEED)


def test_hash_extended32_no_folding():
    """Integer keys are hashed as their 32-bit pattern."""
    assert hash_extended32(-1) == hash_uint32_extended(0xFFFFFFFF, DEFAULT_SEED)
    assert hash_extended32(-2147483648) == 4938542303000433043


def test_int_range_values_hash_alike_across_widths(int32_bounds):
    """bigint values inside the int4 range hash like the equal int4 value."""
    for value in int32_bounds + [123456, -98765]:
        assert hash_extended64(value) == hash_extended32(value)


def test_width_sensitivity():
    """The same number maps differently depending on the declared width."""
    # Outside the int4 range, the integer path wraps the value
    assert partition_index32(2**32, 16) == 0
    assert partition_index64(2**32, 16) == 8
    assert partition_index32(2**32, 16) != partition_index64(2**32, 16)
    # Reduced without the magic constant, the integer path differs for -1
    assert partition_index32(-1, 16, magic=0) != partition_index64(-1, 16)


def test_values_wrap_to_declared_width():
    """Out-of-range values wrap like a C cast instead of raising."""
    assert partition_index64(2**64 + 5, 16) == partition_index64(5, 16) == 13
    assert partition_index32(2**31, 32) == partition_index32(-(2**31), 32)
    assert partition_index16(70000, 16) == partition_index32(70000 - 65536, 16) == 15


def test_int2_matches_int4_in_range():
    """smallint keys hash like the equal integer (hashint2extended)."""
    for value in [-32768, -1, 0, 1, 32767]:
        assert hash_extended16(value) == hash_extended32(value)


@pytest.mark.parametrize("num_partitions", [1, 2, 3, 7, 16, 1000, 2**31, 2**40])
def test_index_range(num_partitions, int64_bounds):
    """Every index lies in [0, num_partitions)."""
    for value in int64_bounds:
        assert 0 <= partition_index64(value, num_partitions) < num_partitions
        assert 0 <= partition_index32(value, num_partitions) < num_partitions
        assert 0 <= partition_index16(value, num_partitions) < num_partitions


def test_single_partition_collapse(int64_bounds):
    """With one partition every key lands in partition 0."""
    for value in int64_bounds + [12345, -99]:
        assert partition_index64(value, 1) == 0
        assert partition_index32(value, 1) == 0


def test_determinism():
    """Repeated calls return identical results."""
    for value in [0, -1, 540364, 2**63 - 1]:
        first = partition_index64(value, 97, seed=123, magic=456)
        assert all(partition_index64(value, 97, seed=123, magic=456) == first for _ in range(5))


@pytest.mark.parametrize("num_partitions", [0, -1, -16])
@pytest.mark.parametrize("fn", [partition_index64, partition_index32, partition_index16])
def test_invalid_partition_count(fn, num_partitions):
    """Non-positive partition counts raise InvalidPartitionCount."""
    with pytest.raises(InvalidPartitionCount, match="Number of partitions must be positive") as exc_info:
        fn(1, num_partitions)
    assert exc_info.value.num_partitions == num_partitions
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.parametrize("key_type", ["int2", "int4", "int8"])
def test_invalid_partition_count_generic(key_type):
    """partition_index and reduce_hash validate the count themselves."""
    with pytest.raises(InvalidPartitionCount):
        partition_index(1, 0, key_type)
    with pytest.raises(InvalidPartitionCount):
        reduce_hash(hash_extended(1, key_type), -3)


def test_magic_wraparound():
    """hash + magic wraps modulo 2^64 before reduction."""
    h = hash_extended64(-1)
    assert h + DEFAULT_MAGIC >= 2**64
    assert reduce_hash(h, 1000) == (h + DEFAULT_MAGIC - 2**64) % 1000
    assert reduce_hash(2**64 - 1, 10, magic=1) == 0


def test_custom_seed_changes_result():
    """A non-default seed selects a different hash family."""
    assert partition_index64(1, 16, seed=0) == 9
    assert hash_extended64(1, seed=0) != hash_extended64(1)


def test_key_type_parse():
    """Test SQL type name resolution."""
    assert KeyType.parse("bigint") is KeyType.INT8
    assert KeyType.parse("INT8") is KeyType.INT8
    assert KeyType.parse("integer") is KeyType.INT4
    assert KeyType.parse("int") is KeyType.INT4
    assert KeyType.parse(" smallint ") is KeyType.INT2
    assert KeyType.parse(KeyType.INT4) is KeyType.INT4
    assert KeyType.INT2.bits == 16
    with pytest.raises(ValueError, match="key type must be one of"):
        KeyType.parse("numeric")


def test_dispatch_by_key_type():
    """Generic functions dispatch to the per-type hash."""
    assert hash_extended(2**32, "bigint") == hash_extended64(2**32)
    assert hash_extended(2**32, "integer") == hash_extended32(2**32)
    assert partition_index(540364, 16, "int8") == 2
    assert partition_index(123456, 16, KeyType.INT4) == 14


def test_partition_indexer():
    """PartitionIndexer bundles seed and magic."""
    default = PartitionIndexer()
    assert default.index(540364, 16) == 2
    assert default.index(123456, 16, "integer") == 14
    assert default.hash(1) == 5968994663651403477

    no_magic = PartitionIndexer(magic=0)
    assert no_magic.index(-1, 16, "int4") == 2

    with pytest.raises(ValueError, match="seed must be uint64"):
        PartitionIndexer(seed=-1)
    with pytest.raises(ValueError, match="magic must be uint64"):
        PartitionIndexer(magic=2**64)
