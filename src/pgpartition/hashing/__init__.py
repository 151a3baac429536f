"""lookup3 hashing primitives (scalar and vectorized)."""

from .lookup3 import (
    JHASH_INITVAL,
    MASK32,
    MASK64,
    final,
    hash_uint32_extended,
    mix,
    rot32,
    to_int64,
    u32,
    u64,
)
from .lookup3_tensor import (
    combine_words,
    hash_uint32_extended_tensor,
    hash_uint32_extended_words,
)

__all__ = [
    "MASK32",
    "MASK64",
    "JHASH_INITVAL",
    "u32",
    "u64",
    "to_int64",
    "rot32",
    "mix",
    "final",
    "hash_uint32_extended",
    "hash_uint32_extended_words",
    "hash_uint32_extended_tensor",
    "combine_words",
]
