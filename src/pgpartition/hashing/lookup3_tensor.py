"""Vectorized lookup3 over torch tensors.

Tensor twin of :mod:`pgpartition.hashing.lookup3`. State words are held in
``torch.int64`` tensors with values in [0, 2^32); every arithmetic step is
masked back to 32 bits, so no intermediate can overflow int64 and results
are bit-exact with the scalar implementation on CPU and CUDA.
"""

from typing import TYPE_CHECKING

from pgpartition.hashing.lookup3 import JHASH_INITVAL, MASK32, u64

if TYPE_CHECKING:
    import torch

# Added to a non-negative int64 to flip its sign bit without overflow
_INT64_MIN = -(1 << 63)


def rot32_tensor(x: "torch.LongTensor", bits: int) -> "torch.LongTensor":
    """Rotate 32-bit words (held in int64) left by ``bits``.

    x < 2^32 and bits <= 31, so ``x << bits`` stays below 2^63.
    """
    return ((x << bits) | (x >> (32 - bits))) & MASK32


def mix_tensor(a, b, c):
    """Vectorized lookup3 ``mix``; see :func:`pgpartition.hashing.lookup3.mix`."""
    a = (a - c) & MASK32
    a = a ^ rot32_tensor(c, 4)
    c = (c + b) & MASK32

    b = (b - a) & MASK32
    b = b ^ rot32_tensor(a, 6)
    a = (a + c) & MASK32

    c = (c - b) & MASK32
    c = c ^ rot32_tensor(b, 8)
    b = (b + a) & MASK32

    a = (a - c) & MASK32
    a = a ^ rot32_tensor(c, 16)
    c = (c + b) & MASK32

    b = (b - a) & MASK32
    b = b ^ rot32_tensor(a, 19)
    a = (a + c) & MASK32

    c = (c - b) & MASK32
    c = c ^ rot32_tensor(b, 4)
    b = (b + a) & MASK32

    return a, b, c


def final_tensor(a, b, c):
    """Vectorized lookup3 ``final``; see :func:`pgpartition.hashing.lookup3.final`."""
    c = c ^ b
    c = (c - rot32_tensor(b, 14)) & MASK32
    a = a ^ c
    a = (a - rot32_tensor(c, 11)) & MASK32
    b = b ^ a
    b = (b - rot32_tensor(a, 25)) & MASK32
    c = c ^ b
    c = (c - rot32_tensor(b, 16)) & MASK32
    a = a ^ c
    a = (a - rot32_tensor(c, 4)) & MASK32
    b = b ^ a
    b = (b - rot32_tensor(a, 14)) & MASK32
    c = c ^ b
    c = (c - rot32_tensor(b, 24)) & MASK32
    return a, b, c


def hash_uint32_extended_words(
    keys: "torch.LongTensor", seed: int
) -> tuple["torch.LongTensor", "torch.LongTensor"]:
    """Vectorized ``hash_uint32_extended`` returning the hash as two words.

    Args:
        keys: Integer tensor of key words (masked to 32 bits)
        seed: 64-bit seed

    Returns:
        (hi, lo) int64 tensors holding the upper and lower 32 bits of the hash
    """
    import torch

    seed = u64(seed)
    keys = keys.long() & MASK32

    a = torch.full_like(keys, JHASH_INITVAL)
    b = torch.full_like(keys, JHASH_INITVAL)
    c = torch.full_like(keys, JHASH_INITVAL)

    if seed != 0:
        a = (a + (seed >> 32)) & MASK32
        b = (b + (seed & MASK32)) & MASK32
        a, b, c = mix_tensor(a, b, c)

    a = (a + keys) & MASK32
    _, b, c = final_tensor(a, b, c)

    return b, c


def combine_words(hi: "torch.LongTensor", lo: "torch.LongTensor") -> "torch.LongTensor":
    """Pack 32-bit word pairs into int64 tensors holding the uint64 bit pattern.

    Values >= 2^63 come out negative (two's complement), which is how
    torch.int64 stores unsigned 64-bit hashes.
    """
    import torch

    packed = ((hi & 0x7FFFFFFF) << 32) | lo
    return torch.where(hi >= 0x80000000, packed + _INT64_MIN, packed)


def hash_uint32_extended_tensor(keys: "torch.LongTensor", seed: int) -> "torch.LongTensor":
    """Vectorized ``hash_uint32_extended``.

    Args:
        keys: Integer tensor of key words
        seed: 64-bit seed

    Returns:
        int64 tensor of the same shape; element i has the bit pattern of
        ``hash_uint32_extended(keys[i], seed)``
    """
    hi, lo = hash_uint32_extended_words(keys, seed)
    return combine_words(hi, lo)
