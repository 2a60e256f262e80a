"""Sketch configuration.

A config fixes everything that must agree between two sketches before
their registers can be combined: the hash backend and the precision.
The two adjustment flags only affect how `count()` reads the registers.

The dict form uses the camelCase keys of the wire format, so a config
written by another implementation of the same format loads unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from hll_lite.hashing.jenkins32 import JENKINS32_ID

DEFAULT_PRECISION = 12


class InvalidConfigError(ValueError):
    """Raised when a config field has the wrong type."""


class InvalidPrecisionError(InvalidConfigError):
    """Raised for a negative or non-integer precision."""


@dataclass(frozen=True, slots=True)
class SketchConfig:
    """Immutable per-sketch settings.

    Attributes:
        hasher_id: Registry id of the hash backend.
        precision: Hash bits used for the register index; the sketch has
            2**precision registers. Values below 4 work but are noisy.
        collision_adjustment: Apply the alpha bias constant.
        bound_adjustments: Apply the small and large range corrections.
    """
    hasher_id: str = JENKINS32_ID
    precision: int = DEFAULT_PRECISION
    collision_adjustment: bool = True
    bound_adjustments: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.hasher_id, str):
            raise InvalidConfigError(
                f"hasher_id must be a string, got {self.hasher_id!r}"
            )
        for name in ("collision_adjustment", "bound_adjustments"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigError(
                    f"{name} must be a bool, got {getattr(self, name)!r}"
                )
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise InvalidPrecisionError(
                f"precision must be an integer, got {self.precision!r}"
            )
        if self.precision < 0:
            raise InvalidPrecisionError(
                f"precision must be at least 0, got {self.precision}"
            )

    @property
    def num_registers(self) -> int:
        return 1 << self.precision

    def with_precision(self, precision: int) -> SketchConfig:
        return replace(self, precision=precision)

    def to_dict(self) -> dict[str, Any]:
        """Wire form. Key order is fixed so encodings are reproducible."""
        return {
            "hasherId": self.hasher_id,
            "precision": self.precision,
            "collisionAdjustment": self.collision_adjustment,
            "boundAdjustments": self.bound_adjustments,
        }

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> SketchConfig:
        """Build from wire form. Missing keys take defaults, extras are ignored."""
        defaults = cls()
        return cls(
            hasher_id=obj.get("hasherId", defaults.hasher_id),
            precision=obj.get("precision", defaults.precision),
            collision_adjustment=obj.get(
                "collisionAdjustment", defaults.collision_adjustment
            ),
            bound_adjustments=obj.get(
                "boundAdjustments", defaults.bound_adjustments
            ),
        )
