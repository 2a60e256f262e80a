"""Jenkins one-at-a-time hash, 32-bit, the default backend.

Each character's code point is mixed in with an add, a left shift and
an xor with a right shift. A short finalization spreads the last
characters across the high bits, which matter most here because they
select the register:

    for c in value:
        h += c
        h += h << 10
        h ^= h >> 6
    h += h << 3
    h ^= h >> 6
    h += h << 16

The arithmetic is signed 32-bit two's complement: every addition and
left shift wraps, and `>>` propagates the sign bit. Python's `>>` on a
negative int is already arithmetic, so wrapping to int32 after each
step is all it takes to match other implementations bit for bit.

Not cryptographic. With 32 bits and 12 index bits there are only 20
bits left for run lengths, so registers saturate at 21 and the large
range correction kicks in well before 2^32 distinct values.
"""
from __future__ import annotations

from hll_lite.hashing.base import Hasher
from hll_lite.hashing.bits import to_int32

JENKINS32_ID = "jenkins32"


class Jenkins32(Hasher):
    """One-at-a-time 32-bit hash with seed 0. Supports precision <= 12."""

    hash_len = 32
    max_precision = 12

    def hash(self, value: str) -> int:
        h = 0
        for ch in value:
            h = to_int32(h + ord(ch))
            h = to_int32(h + (h << 10))
            h = to_int32(h ^ (h >> 6))
        h = to_int32(h + (h << 3))
        h = to_int32(h ^ (h >> 6))
        return to_int32(h + (h << 16))
