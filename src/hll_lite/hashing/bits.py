"""32-bit integer helpers shared by the hash backends.

Python ints never overflow, so any backend that is specified in terms
of fixed-width machine arithmetic has to wrap explicitly after every
step. Skipping a single wrap changes every hash downstream of it.
"""
from __future__ import annotations

MASK32 = 0xFFFFFFFF
SIGN_BIT32 = 0x80000000


def to_int32(n: int) -> int:
    """Wrap an arbitrary int into the signed 32-bit range."""
    n &= MASK32
    return n - (1 << 32) if n & SIGN_BIT32 else n


def format_bits(n: int) -> str:
    """Render the low 32 bits of n as four 8-bit groups, MSB first.

    >>> format_bits(5)
    '00000000 00000000 00000000 00000101'
    """
    raw = format(n & MASK32, "032b")
    return " ".join(raw[i:i + 8] for i in range(0, 32, 8))
