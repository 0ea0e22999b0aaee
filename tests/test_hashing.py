from __future__ import annotations

from pension720.utils.hashing import MASK32, fnv1a32, imul32, mix32


def test_fnv1a32_reference_values():
    assert fnv1a32("") == 0x811C9DC5
    assert fnv1a32("a") == 0xE40C292C


def test_imul32_wraps_like_32bit_multiply():
    assert imul32(0xFFFFFFFF, 2) == 0xFFFFFFFE
    assert imul32(-1, 1) == 0xFFFFFFFF
    assert imul32(3, 5) == 15


def test_mix32_is_pure_and_bounded():
    assert mix32(0) == 0
    values = [mix32(i) for i in range(1, 200)]
    assert values == [mix32(i) for i in range(1, 200)]
    assert all(0 <= v <= MASK32 for v in values)
    assert len(set(values)) == len(values)


def test_mix32_ignores_bits_above_32():
    assert mix32(1 << 32 | 7) == mix32(7)
