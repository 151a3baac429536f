"""Bob Jenkins' lookup3 mixing as compiled into PostgreSQL.

This module reproduces the ``mix``/``final`` macros of PostgreSQL's
``src/common/hashfn.c`` and ``hash_bytes_uint32_extended``, the function
behind ``hashint4extended``/``hashint8extended``. All functions operate on
Python ints and reduce every intermediate result to 32 bits, so the output
is identical to the C implementation on any platform.
"""

# Word masks for uint32/uint64 wrap semantics
MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

# hash_bytes_uint32_extended initial state:
# golden ratio + sizeof(uint32) + PostgreSQL's fixed offset
JHASH_INITVAL = (0x9E3779B9 + 4 + 3923095) & MASK32


def u32(x: int) -> int:
    """Force integer into unsigned 32-bit domain.

    Args:
        x: Input integer (can be negative or any size)

    Returns:
        Unsigned 32-bit integer (value modulo 2^32)
    """
    return x & MASK32


def u64(x: int) -> int:
    """Force integer into unsigned 64-bit domain.

    Args:
        x: Input integer (can be negative or any size)

    Returns:
        Unsigned 64-bit integer (value modulo 2^64)
    """
    return x & MASK64


def to_int64(x: int) -> int:
    """Reinterpret the low 64 bits of x as a signed (two's complement) int64."""
    x = u64(x)
    return x - (1 << 64) if x >= (1 << 63) else x


def rot32(value: int, bits: int) -> int:
    """Rotate a 32-bit word left by ``bits`` (pg_rotate_left32).

    Args:
        value: Word to rotate (masked to 32 bits)
        bits: Rotation amount in [1, 31]

    Returns:
        Rotated 32-bit word
    """
    value = u32(value)
    return u32((value << bits) | (value >> (32 - bits)))


def mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    """lookup3 ``mix(a, b, c)``: reversibly mix three 32-bit words.

    Args:
        a, b, c: Internal state words

    Returns:
        Mixed (a, b, c)
    """
    a = u32(a - c)
    a ^= rot32(c, 4)
    c = u32(c + b)

    b = u32(b - a)
    b ^= rot32(a, 6)
    a = u32(a + c)

    c = u32(c - b)
    c ^= rot32(b, 8)
    b = u32(b + a)

    a = u32(a - c)
    a ^= rot32(c, 16)
    c = u32(c + b)

    b = u32(b - a)
    b ^= rot32(a, 19)
    a = u32(a + c)

    c = u32(c - b)
    c ^= rot32(b, 4)
    b = u32(b + a)

    return a, b, c


def final(a: int, b: int, c: int) -> tuple[int, int, int]:
    """lookup3 ``final(a, b, c)``: final mixing of three 32-bit words.

    Args:
        a, b, c: Internal state words

    Returns:
        Finalized (a, b, c); the hash is taken from b and c
    """
    c ^= b
    c = u32(c - rot32(b, 14))
    a ^= c
    a = u32(a - rot32(c, 11))
    b ^= a
    b = u32(b - rot32(a, 25))
    c ^= b
    c = u32(c - rot32(b, 16))
    a ^= c
    a = u32(a - rot32(c, 4))
    b ^= a
    b = u32(b - rot32(a, 14))
    c ^= b
    c = u32(c - rot32(b, 24))
    return a, b, c


def hash_uint32_extended(key: int, seed: int) -> int:
    """64-bit seeded hash of a single 32-bit word.

    Equivalent to PostgreSQL's ``hash_bytes_uint32_extended(k, seed)``.

    Args:
        key: Key word (masked to 32 bits)
        seed: 64-bit seed (masked to 64 bits); 0 skips the seeding round

    Returns:
        Unsigned 64-bit hash ``(b << 32) | c``

    Example:
        >>> hash_uint32_extended(1, 0x7A5B22367996DCFD)
        5968994663651403477
    """
    key = u32(key)
    seed = u64(seed)

    a = b = c = JHASH_INITVAL

    if seed != 0:
        a = u32(a + (seed >> 32))
        b = u32(b + (seed & MASK32))
        a, b, c = mix(a, b, c)

    a = u32(a + key)
    _, b, c = final(a, b, c)

    return (b << 32) | c
