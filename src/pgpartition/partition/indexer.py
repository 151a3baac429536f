"""Partition index computation for integer partition keys.

Mirrors how PostgreSQL routes a row of a ``PARTITION BY HASH`` table: the
key is hashed with the type's extended hash function and the partition
seed, the magic constant is added with uint64 wraparound, and the sum is
reduced by the partition count (the ``MODULUS`` of the partition bounds).
"""

from dataclasses import dataclass
from enum import Enum

from pgpartition.constants import DEFAULT_MAGIC, DEFAULT_SEED
from pgpartition.errors import check_num_partitions
from pgpartition.hashing.lookup3 import MASK32, hash_uint32_extended, to_int64, u64


class KeyType(Enum):
    """Declared integer type of the partition key column."""

    INT2 = "int2"
    INT4 = "int4"
    INT8 = "int8"

    @classmethod
    def parse(cls, name) -> "KeyType":
        """Resolve a SQL type name (``bigint``, ``int4``, ...) to a KeyType.

        Raises:
            ValueError: If the name is not a supported integer type
        """
        if isinstance(name, KeyType):
            return name
        key = str(name).strip().lower()
        if key not in _TYPE_ALIASES:
            raise ValueError(
                f"key type must be one of {sorted(_TYPE_ALIASES)}, got {name!r}"
            )
        return _TYPE_ALIASES[key]

    @property
    def bits(self) -> int:
        return {"int2": 16, "int4": 32, "int8": 64}[self.value]


_TYPE_ALIASES = {
    "int2": KeyType.INT2,
    "smallint": KeyType.INT2,
    "int4": KeyType.INT4,
    "int": KeyType.INT4,
    "integer": KeyType.INT4,
    "int8": KeyType.INT8,
    "bigint": KeyType.INT8,
}


def hash_extended64(value: int, seed: int = DEFAULT_SEED) -> int:
    """Extended hash of a bigint key (PostgreSQL ``hashint8extended``).

    The two 32-bit halves are folded into one word so that bigint values
    inside the int4 range hash like the equal int4 value.

    Args:
        value: Key value, wrapped to int64
        seed: 64-bit seed

    Returns:
        Unsigned 64-bit hash
    """
    val = to_int64(value)
    lohalf = val & MASK32
    hihalf = (val >> 32) & MASK32

    if val >= 0:
        lohalf ^= hihalf
    else:
        lohalf ^= ~hihalf & MASK32

    return hash_uint32_extended(lohalf, seed)


def hash_extended32(value: int, seed: int = DEFAULT_SEED) -> int:
    """Extended hash of an integer key (PostgreSQL ``hashint4extended``).

    Args:
        value: Key value, wrapped to int32
        seed: 64-bit seed

    Returns:
        Unsigned 64-bit hash
    """
    return hash_uint32_extended(value & MASK32, seed)


def hash_extended16(value: int, seed: int = DEFAULT_SEED) -> int:
    """Extended hash of a smallint key (PostgreSQL ``hashint2extended``).

    The value is wrapped to int16 and sign-extended to int32 before hashing.
    """
    val16 = ((value & 0xFFFF) ^ 0x8000) - 0x8000
    return hash_uint32_extended(val16 & MASK32, seed)


_HASHERS = {
    KeyType.INT2: hash_extended16,
    KeyType.INT4: hash_extended32,
    KeyType.INT8: hash_extended64,
}


def hash_extended(value: int, key_type="int8", seed: int = DEFAULT_SEED) -> int:
    """Extended hash of ``value`` using the hash function of ``key_type``."""
    return _HASHERS[KeyType.parse(key_type)](value, seed)


def reduce_hash(hash_value: int, num_partitions: int, magic: int = DEFAULT_MAGIC) -> int:
    """Fold a raw 64-bit hash into a partition index.

    Computes ``((hash_value + magic) mod 2^64) mod num_partitions``.

    Raises:
        InvalidPartitionCount: If num_partitions <= 0
    """
    check_num_partitions(num_partitions)
    return u64(hash_value + u64(magic)) % num_partitions


def partition_index64(
    value: int,
    num_partitions: int,
    seed: int = DEFAULT_SEED,
    magic: int = DEFAULT_MAGIC,
) -> int:
    """Partition index of a bigint key.

    Args:
        value: Partition key value (bigint)
        num_partitions: Number of partitions (modulus) at this level
        seed: 64-bit hash seed
        magic: 64-bit constant added to the hash before reduction

    Returns:
        Partition index in [0, num_partitions)

    Raises:
        InvalidPartitionCount: If num_partitions <= 0

    Example:
        >>> partition_index64(1, 16)
        8
    """
    return reduce_hash(hash_extended64(value, seed), num_partitions, magic)


def partition_index32(
    value: int,
    num_partitions: int,
    seed: int = DEFAULT_SEED,
    magic: int = DEFAULT_MAGIC,
) -> int:
    """Partition index of an integer (int4) key.

    Same reduction as :func:`partition_index64`, including the magic
    constant; pass ``magic=0`` to reduce the bare ``hashint4extended``.

    Raises:
        InvalidPartitionCount: If num_partitions <= 0
    """
    return reduce_hash(hash_extended32(value, seed), num_partitions, magic)


def partition_index16(
    value: int,
    num_partitions: int,
    seed: int = DEFAULT_SEED,
    magic: int = DEFAULT_MAGIC,
) -> int:
    """Partition index of a smallint (int2) key."""
    return reduce_hash(hash_extended16(value, seed), num_partitions, magic)


def partition_index(
    value: int,
    num_partitions: int,
    key_type="int8",
    seed: int = DEFAULT_SEED,
    magic: int = DEFAULT_MAGIC,
) -> int:
    """Partition index of ``value`` declared as ``key_type``."""
    return reduce_hash(hash_extended(value, key_type, seed), num_partitions, magic)


@dataclass(frozen=True)
class PartitionIndexer:
    """Seed and magic constant bundled for repeated index computation.

    Attributes:
        seed: 64-bit hash seed
        magic: 64-bit constant added before reduction
    """

    seed: int = DEFAULT_SEED
    magic: int = DEFAULT_MAGIC

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not (0 <= self.seed < 2**64):
            raise ValueError("seed must be uint64")
        if not (0 <= self.magic < 2**64):
            raise ValueError("magic must be uint64")

    def hash(self, value: int, key_type="int8") -> int:
        """Raw extended hash of ``value`` under this indexer's seed."""
        return hash_extended(value, key_type, self.seed)

    def index(self, value: int, num_partitions: int, key_type="int8") -> int:
        """Partition index of ``value`` for ``num_partitions`` partitions."""
        return partition_index(value, num_partitions, key_type, self.seed, self.magic)
