"""Pure 32-bit integer hashing used by the ticket generator.

All functions are stateless and depend only on their arguments; results
match JavaScript ``Math.imul`` / ``>>> 0`` arithmetic bit for bit.
"""

from __future__ import annotations

MASK32 = 0xFFFFFFFF

FNV_OFFSET = 0x811C9DC5
FNV_PRIME = 0x01000193


def imul32(a: int, b: int) -> int:
    """Low 32 bits of ``a * b`` as an unsigned int."""

    return (int(a) * int(b)) & MASK32


def fnv1a32(text: str) -> int:
    """FNV-1a over the UTF-16 code units of ``text``."""

    h = FNV_OFFSET
    data = str(text).encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = imul32(h, FNV_PRIME)
    return h


def mix32(x: int) -> int:
    """Finalizer-style avalanche of a 32-bit value."""

    x &= MASK32
    x ^= x >> 16
    x = imul32(x, 0x7FEB352D)
    x ^= x >> 15
    x = imul32(x, 0x846CA68B)
    x ^= x >> 16
    return x & MASK32
