"""Fixed-size array of 8-bit HyperLogLog registers.

One byte per register is plenty: a register holds a run length plus
one, and no backend hashes wider than 255 bits. Backed by
array.array("B") so the whole sketch state is one contiguous buffer
that can be written to the wire without conversion.

Registers only ever go up. `observe` keeps the max of old and new,
and `union` takes the elementwise max, so neither can lose information.
"""
from __future__ import annotations

import array
from collections.abc import Iterator


class RegisterArray:
    """`size` unsigned byte counters, all starting at zero."""

    __slots__ = ("_regs",)

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"size must be positive, got {size}")
        self._regs = array.array("B", bytes(size))

    @classmethod
    def frombytes(cls, data: bytes) -> RegisterArray:
        """Register array holding a copy of `data`, one byte per register."""
        regs = cls(len(data))
        regs._regs = array.array("B", data)
        return regs

    def observe(self, idx: int, value: int) -> None:
        """Raise register `idx` to `value` if it is currently lower."""
        if value > self._regs[idx]:
            self._regs[idx] = value

    def zeros(self) -> int:
        """Number of registers that were never set."""
        return self._regs.count(0)

    def union(self, other: RegisterArray) -> RegisterArray:
        """New array holding the elementwise max of self and other."""
        if len(self) != len(other):
            raise ValueError(
                f"Cannot combine register arrays of length "
                f"{len(self)} and {len(other)}"
            )
        merged = RegisterArray(len(self))
        merged._regs = array.array("B", map(max, self._regs, other._regs))
        return merged

    def tobytes(self) -> bytes:
        return self._regs.tobytes()

    def __len__(self) -> int:
        return len(self._regs)

    def __iter__(self) -> Iterator[int]:
        return iter(self._regs)

    def __getitem__(self, idx: int) -> int:
        return self._regs[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegisterArray):
            return NotImplemented
        return self._regs == other._regs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RegisterArray(size={len(self)}, zeros={self.zeros()})"
