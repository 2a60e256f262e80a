"""Abstract base for hash backends.

A backend turns a string into a fixed-width hash and splits that hash
into the two numbers a HyperLogLog register update needs:

    reg_idx(h)     the top `precision` bits, choosing a register
    run_length(h)  position of the lowest 1-bit in the remaining bits

The split depends on the sketch's precision, so each backend instance
is bound to exactly one sketch configuration. Swap implementations by
registering a subclass in a HasherRegistry.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from hll_lite.sketch.config import SketchConfig


class Hasher(ABC):
    """Interface every hash backend implements.

    Subclasses set `hash_len` (total hash width in bits) and
    `max_precision` (largest supported index width). A configured
    precision above `max_precision` is clamped, never rejected; the
    sketch notices the clamp and logs it.
    """

    hash_len: ClassVar[int]
    max_precision: ClassVar[int]

    def __init__(self, config: SketchConfig) -> None:
        self.precision = min(config.precision, self.max_precision, self.hash_len)
        # Low bits hold the run-length value, high bits the register index
        self.value_bits = self.hash_len - self.precision
        self.value_mask = (1 << self.value_bits) - 1
        self.index_mask = (1 << self.precision) - 1

    @abstractmethod
    def hash(self, value: str) -> int:
        """Hash a string deterministically."""
        ...

    def run_length(self, h: int) -> int:
        """Index of the lowest set bit among the non-index bits.

        Returns `value_bits` when every non-index bit is zero.
        """
        masked = h & self.value_mask
        if masked == 0:
            return self.value_bits
        return (masked & -masked).bit_length() - 1

    def reg_idx(self, h: int) -> int:
        """Register index taken from the high `precision` bits."""
        return (h >> self.value_bits) & self.index_mask

    def __repr__(self) -> str:
        return f"{type(self).__name__}(precision={self.precision})"
