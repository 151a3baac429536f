"""Batch partition assignment over torch tensors.

Vectorized counterparts of :mod:`pgpartition.partition.indexer`. Every
function here returns, element for element, exactly what the scalar
function returns for the same key; tests enforce bit-exact equality.
"""

from typing import TYPE_CHECKING

from pgpartition.constants import DEFAULT_MAGIC, DEFAULT_SEED
from pgpartition.errors import check_num_partitions
from pgpartition.hashing.lookup3 import MASK32, u64
from pgpartition.hashing.lookup3_tensor import combine_words, hash_uint32_extended_words
from pgpartition.partition.indexer import KeyType, partition_index
from pgpartition.utils.logger import get_logger

if TYPE_CHECKING:
    import torch

logger = get_logger(__name__)

# Largest count the word-wise modulo handles without int64 overflow:
# (hi % n) * (2^32 % n) < n^2 <= 2^62
MAX_VECTORIZED_PARTITIONS = 1 << 31


def _check_keys(values) -> "torch.LongTensor":
    """Validate a key tensor and return it as int64."""
    import torch

    if not isinstance(values, torch.Tensor):
        raise TypeError(f"values must be torch.Tensor, got {type(values)}")
    if values.dtype.is_floating_point or values.dtype.is_complex or values.dtype == torch.bool:
        raise TypeError(f"values must have an integer dtype, got {values.dtype}")
    return values.long()


def _fold_int8(values: "torch.LongTensor") -> "torch.LongTensor":
    """hashint8extended half folding: lo ^ hi, or lo ^ ~hi for negative keys."""
    import torch

    lohalf = values & MASK32
    hihalf = (values >> 32) & MASK32
    return torch.where(values >= 0, lohalf ^ hihalf, lohalf ^ (~hihalf & MASK32))


def _key_words(values: "torch.LongTensor", key_type: KeyType) -> "torch.LongTensor":
    """Map typed keys to the 32-bit word fed to the lookup3 hash."""
    if key_type is KeyType.INT8:
        return _fold_int8(values)
    if key_type is KeyType.INT2:
        values = ((values & 0xFFFF) ^ 0x8000) - 0x8000
    return values & MASK32


def _hash_words(values, key_type, seed: int):
    keys = _check_keys(values)
    return hash_uint32_extended_words(_key_words(keys, KeyType.parse(key_type)), seed)


def hash_extended_tensor(values: "torch.Tensor", key_type="int8", seed: int = DEFAULT_SEED) -> "torch.LongTensor":
    """Vectorized extended hash of typed keys.

    Args:
        values: Integer tensor of key values (any shape)
        key_type: Declared key type (``bigint``, ``int4``, ...)
        seed: 64-bit seed

    Returns:
        int64 tensor of the same shape holding the uint64 hash bit patterns
    """
    hi, lo = _hash_words(values, key_type, seed)
    return combine_words(hi, lo)


def hash_extended64_tensor(values: "torch.Tensor", seed: int = DEFAULT_SEED) -> "torch.LongTensor":
    """Vectorized ``hashint8extended``."""
    return hash_extended_tensor(values, KeyType.INT8, seed)


def hash_extended32_tensor(values: "torch.Tensor", seed: int = DEFAULT_SEED) -> "torch.LongTensor":
    """Vectorized ``hashint4extended``."""
    return hash_extended_tensor(values, KeyType.INT4, seed)


def hash_extended16_tensor(values: "torch.Tensor", seed: int = DEFAULT_SEED) -> "torch.LongTensor":
    """Vectorized ``hashint2extended``."""
    return hash_extended_tensor(values, KeyType.INT2, seed)


def partition_indices(
    values: "torch.Tensor",
    num_partitions: int,
    key_type="int8",
    seed: int = DEFAULT_SEED,
    magic: int = DEFAULT_MAGIC,
) -> "torch.LongTensor":
    """Partition indices for a tensor of typed keys.

    The magic constant is added word-wise with carry, and the uint64 sum
    ``hi * 2^32 + lo`` is reduced as ``((hi % n) * (2^32 % n) + lo) % n``.
    Counts above ``MAX_VECTORIZED_PARTITIONS`` are computed element-wise
    with the scalar function.

    Args:
        values: Integer tensor of key values (any shape)
        num_partitions: Number of partitions
        key_type: Declared key type
        seed: 64-bit seed
        magic: 64-bit constant added before reduction

    Returns:
        int64 tensor of the same shape, values in [0, num_partitions)

    Raises:
        InvalidPartitionCount: If num_partitions <= 0
        TypeError: If values is not an integer tensor
    """
    import torch

    check_num_partitions(num_partitions)
    key_type = KeyType.parse(key_type)
    keys = _check_keys(values)

    if num_partitions > MAX_VECTORIZED_PARTITIONS:
        logger.debug(
            "num_partitions=%d exceeds vectorized range, using scalar path for %d keys",
            num_partitions,
            keys.numel(),
        )
        flat = [
            partition_index(v, num_partitions, key_type, seed, magic)
            for v in keys.flatten().tolist()
        ]
        return torch.tensor(flat, dtype=torch.long, device=keys.device).view(keys.shape)

    hi, lo = hash_uint32_extended_words(_key_words(keys, key_type), seed)

    magic = u64(magic)
    lo = lo + (magic & MASK32)
    carry = lo >> 32
    lo = lo & MASK32
    hi = (hi + (magic >> 32) + carry) & MASK32

    word_mod = (1 << 32) % num_partitions
    return ((hi % num_partitions) * word_mod + lo) % num_partitions


def partition_indices64(values, num_partitions: int, seed: int = DEFAULT_SEED, magic: int = DEFAULT_MAGIC):
    """Vectorized :func:`pgpartition.partition.indexer.partition_index64`."""
    return partition_indices(values, num_partitions, KeyType.INT8, seed, magic)


def partition_indices32(values, num_partitions: int, seed: int = DEFAULT_SEED, magic: int = DEFAULT_MAGIC):
    """Vectorized :func:`pgpartition.partition.indexer.partition_index32`."""
    return partition_indices(values, num_partitions, KeyType.INT4, seed, magic)


def partition_indices16(values, num_partitions: int, seed: int = DEFAULT_SEED, magic: int = DEFAULT_MAGIC):
    """Vectorized :func:`pgpartition.partition.indexer.partition_index16`."""
    return partition_indices(values, num_partitions, KeyType.INT2, seed, magic)
