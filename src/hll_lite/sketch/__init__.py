"""HyperLogLog sketch, its configuration and binary codec.

Public API:
    HyperLogLog: the cardinality estimator (add / count / merge)
    SketchConfig: immutable per-sketch settings
    RegisterArray: the 8-bit register state
    merge: union of two compatible sketches
    serialize / deserialize: binary wire format
    Errors: InvalidConfigError, InvalidPrecisionError,
        IncompatibleSketchError, PrecisionMismatchError,
        HasherMismatchError, CodecError
"""

from hll_lite.sketch.codec import CodecError, deserialize, serialize
from hll_lite.sketch.config import (
    DEFAULT_PRECISION,
    InvalidConfigError,
    InvalidPrecisionError,
    SketchConfig,
)
from hll_lite.sketch.estimate import alpha, estimate_cardinality, harmonic_mean
from hll_lite.sketch.hyperloglog import (
    HasherMismatchError,
    HyperLogLog,
    IncompatibleSketchError,
    PrecisionMismatchError,
    merge,
)
from hll_lite.sketch.registers import RegisterArray

__all__ = [
    "DEFAULT_PRECISION",
    "CodecError",
    "HasherMismatchError",
    "HyperLogLog",
    "IncompatibleSketchError",
    "InvalidConfigError",
    "InvalidPrecisionError",
    "PrecisionMismatchError",
    "RegisterArray",
    "SketchConfig",
    "alpha",
    "deserialize",
    "estimate_cardinality",
    "harmonic_mean",
    "merge",
    "serialize",
]
