"""HyperLogLog cardinality estimator.

Answers "how many distinct values went into this stream?" in a fixed
amount of memory: 2**precision one-byte registers, 4 KB at the default
precision of 12, with roughly 1.6% standard error however many values
are added.

Each value is hashed by a pluggable backend (see hll_lite.hashing).
The top `precision` bits of the hash pick a register, and the register
keeps the largest "position of the lowest 1-bit, plus one" seen among
the remaining bits. Long runs of zeros are rare, so the registers
together carry a noisy log2 of the cardinality; estimate.py turns them
into a number.

Because a register only ever keeps a max, adding is idempotent and
order independent, and two sketches with the same shape merge by
taking the elementwise max. That makes sketches cheap to build on
separate workers and combine later.

Not thread safe. Shard ingestion across sketches and merge them, or
guard add() with a lock.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from hll_lite.hashing.registry import HasherRegistry, default_registry
from hll_lite.sketch.config import SketchConfig
from hll_lite.sketch.estimate import estimate_cardinality
from hll_lite.sketch.registers import RegisterArray

log = logging.getLogger(__name__)

# Below this the sketch has 8 or fewer registers and estimates get noisy
MIN_RECOMMENDED_PRECISION = 4


class IncompatibleSketchError(ValueError):
    """Raised when two sketches cannot be merged."""


class PrecisionMismatchError(IncompatibleSketchError):
    def __init__(self, lhs: int, rhs: int) -> None:
        self.lhs = lhs
        self.rhs = rhs
        super().__init__(
            f"Cannot merge sketches with different precision "
            f"(lhs={lhs} bits, rhs={rhs} bits)"
        )


class HasherMismatchError(IncompatibleSketchError):
    def __init__(self, lhs: str, rhs: str) -> None:
        self.lhs = lhs
        self.rhs = rhs
        super().__init__(
            f"Cannot merge sketches built with different hashers "
            f"(lhs={lhs!r}, rhs={rhs!r})"
        )


def _canonical(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


class HyperLogLog:
    """HyperLogLog sketch.

    Parameters:
        config: Sketch settings. Defaults to SketchConfig().
        registry: Where to look up `config.hasher_id`. Defaults to the
            process-wide default_registry.
        **options: Field overrides applied on top of `config`, e.g.
            HyperLogLog(precision=10).

    Raises:
        InvalidPrecisionError: precision is negative or not an int.
        BackendNotFoundError: the hasher id is not registered.

    If the backend supports less precision than requested, the sketch
    uses the backend's maximum and logs a warning. `config` always
    reflects the precision actually in use.
    """

    def __init__(
        self,
        config: SketchConfig | None = None,
        *,
        registry: HasherRegistry | None = None,
        **options: Any,
    ) -> None:
        if config is None:
            config = SketchConfig()
        if options:
            config = replace(config, **options)

        if config.precision < MIN_RECOMMENDED_PRECISION:
            log.warning(
                "Precision %d is below the recommended minimum of %d; "
                "estimates will be inaccurate",
                config.precision, MIN_RECOMMENDED_PRECISION,
            )

        self._registry = default_registry if registry is None else registry
        self._hasher = self._registry.build(config.hasher_id, config)
        if self._hasher.precision < config.precision:
            log.warning(
                "Hasher %r does not support precision above %d; "
                "using %d instead of %d",
                config.hasher_id, self._hasher.precision,
                self._hasher.precision, config.precision,
            )
            config = config.with_precision(self._hasher.precision)

        self._config = config
        self._registers = RegisterArray(config.num_registers)

    @property
    def config(self) -> SketchConfig:
        return self._config

    @property
    def precision(self) -> int:
        """Bits of hash used for the register index."""
        return self._config.precision

    @property
    def hasher_id(self) -> str:
        return self._config.hasher_id

    @property
    def hash_len(self) -> int:
        return self._hasher.hash_len

    @property
    def num_registers(self) -> int:
        return len(self._registers)

    @property
    def registers(self) -> bytes:
        """Snapshot of the register contents, one byte per register."""
        return self._registers.tobytes()

    def add(self, value: Any) -> None:
        """Add a value. Non-strings are counted by their str() form."""
        h = self._hasher.hash(_canonical(value))
        self._registers.observe(self._hasher.reg_idx(h), self._hasher.run_length(h) + 1)

    def update(self, values: Iterable[Any]) -> None:
        """Add every value from an iterable."""
        hasher = self._hasher
        observe = self._registers.observe
        for value in values:
            h = hasher.hash(_canonical(value))
            observe(hasher.reg_idx(h), hasher.run_length(h) + 1)

    def count(self) -> float:
        """Estimate the number of distinct values added.

        See estimate.py for the corrections applied. Depends only on the
        register contents, so equal registers always give equal counts.
        """
        return estimate_cardinality(
            self._registers,
            self._config.precision,
            self._hasher.hash_len,
            zeros=self._registers.zeros(),
            collision_adjustment=self._config.collision_adjustment,
            bound_adjustments=self._config.bound_adjustments,
        )

    def merge(self, other: HyperLogLog) -> HyperLogLog:
        """New sketch estimating the union of self and other.

        The result takes this sketch's config. Neither input changes.

        Raises:
            PrecisionMismatchError: precisions differ.
            HasherMismatchError: hasher ids differ.
        """
        if self.precision != other.precision:
            raise PrecisionMismatchError(self.precision, other.precision)
        if self.hasher_id != other.hasher_id:
            raise HasherMismatchError(self.hasher_id, other.hasher_id)
        merged = HyperLogLog(self._config, registry=self._registry)
        merged._registers = self._registers.union(other._registers)
        return merged

    def load_registers(self, data: bytes) -> None:
        """Replace the register contents in place.

        Used when rebuilding a sketch from serialized bytes. `data` must
        hold exactly one byte per register.
        """
        if len(data) != self.num_registers:
            raise ValueError(
                f"Expected {self.num_registers} register bytes, got {len(data)}"
            )
        self._registers = RegisterArray.frombytes(data)

    def serialize(self) -> bytes:
        """Binary form of this sketch, see codec.py."""
        from hll_lite.sketch.codec import serialize
        return serialize(self)

    @classmethod
    def deserialize(
        cls, data: bytes, registry: HasherRegistry | None = None
    ) -> HyperLogLog:
        """Rebuild a sketch from serialize() output."""
        from hll_lite.sketch.codec import deserialize
        return deserialize(data, registry=registry)

    def memory_bytes(self) -> int:
        """Memory used by the registers (1 byte each)."""
        return len(self._registers)

    def standard_error(self) -> float:
        """Theoretical relative standard error for this precision."""
        return 1.04 / math.sqrt(len(self._registers))

    def __repr__(self) -> str:
        return (
            f"HyperLogLog(hasher_id={self.hasher_id!r}, "
            f"precision={self.precision})"
        )


def merge(a: HyperLogLog, b: HyperLogLog) -> HyperLogLog:
    """Union of two sketches, see HyperLogLog.merge."""
    return a.merge(b)

