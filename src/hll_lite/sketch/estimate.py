"""Cardinality estimation from a register array.

The raw HyperLogLog estimate is alpha * m * Z, where Z is the harmonic
mean of 2**register over all m registers. The harmonic mean damps the
few registers that got lucky with a long run, and alpha corrects the
multiplicative bias that remains (mostly from hash collisions between
items landing in the same register).

Two range corrections follow, both triggered by the raw estimate:

  - small range: when raw < 2.5m and some registers are still zero,
    linear counting (m * ln(m / zeros)) is far more accurate.
  - large range: when raw > 2**hash_len / 30, collisions in the hash
    space itself start to hide distinct items, so scale back up with
    -2**L * ln(1 - raw / 2**L).

If every register is set the small range branch keeps the raw
estimate rather than switching formulas. That matches sketches
produced elsewhere, so counts stay comparable across tools.

References:
    Flajolet et al., "HyperLogLog: the analysis of a near-optimal
    cardinality estimation algorithm", 2007.
"""
from __future__ import annotations

import math
from collections.abc import Iterable

# alpha_m for precision 1..15, approximating the closed-form integral
_ALPHA_BY_PRECISION = (
    0.35119394711676189, 0.53243461399597255, 0.62560871093725783,
    0.67310202386766599, 0.69712263380102416, 0.70920845287002329,
    0.71527118996133942, 0.71830763819181383, 0.71982714782040011,
    0.72058722597645269, 0.72096734613621909, 0.72115742651737845,
    0.72125247178713563, 0.72129999569229111, 0.72132375796249839,
)


def alpha(precision: int) -> float:
    """Bias correction constant for 2**precision registers."""
    if 1 <= precision <= len(_ALPHA_BY_PRECISION):
        return _ALPHA_BY_PRECISION[precision - 1]
    m = 1 << precision
    return 0.7213 / (1.0 + 1.079 / m)


def harmonic_mean(values: Iterable[float]) -> float:
    n = 0
    total = 0.0
    for v in values:
        n += 1
        total += 1.0 / v
    return n / total


def _round_half_up(x: float) -> int:
    # round() would send 2.5 to 2
    return math.floor(x + 0.5)


def raw_estimate(
    registers: Iterable[int],
    precision: int,
    collision_adjustment: bool = True,
) -> int:
    """alpha * m * harmonic_mean(2**r), rounded half up."""
    m = 1 << precision
    z = harmonic_mean(2.0 ** r for r in registers)
    am = alpha(precision) if collision_adjustment else 1.0
    return _round_half_up(am * m * z)


def estimate_cardinality(
    registers: Iterable[int],
    precision: int,
    hash_len: int,
    *,
    zeros: int,
    collision_adjustment: bool = True,
    bound_adjustments: bool = True,
) -> float:
    """Bias-corrected cardinality estimate.

    Parameters:
        registers: All 2**precision register values.
        precision: Index bits of the sketch.
        hash_len: Hash width of the backend, bounding the hash space.
        zeros: Number of registers still at zero.
    """
    m = 1 << precision
    estimate = raw_estimate(registers, precision, collision_adjustment)
    if not bound_adjustments:
        return float(estimate)

    # Exact int: 2**64 and beyond would lose bits as a float
    hash_space = 1 << hash_len
    if estimate < 2.5 * m:
        if zeros == 0:
            return float(estimate)
        return m * math.log(m / zeros)
    if estimate > hash_space // 30:
        if estimate >= hash_space:
            # Saturated sketch, ln() would get a non-positive argument
            return math.inf
        return -hash_space * math.log(1.0 - estimate / hash_space)
    return float(estimate)
