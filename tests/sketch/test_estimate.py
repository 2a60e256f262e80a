"""Tests for the estimation math, driven by hand-built register states."""
from __future__ import annotations

import math

import pytest

from hll_lite.sketch import HyperLogLog, alpha, harmonic_mean
from hll_lite.sketch.estimate import estimate_cardinality, raw_estimate


def sketch_with(registers: bytes, **options) -> HyperLogLog:
    hll = HyperLogLog(**options)
    hll.load_registers(registers)
    return hll


class TestAlpha:
    def test_table_values(self):
        assert alpha(1) == pytest.approx(0.35119394711676189)
        assert alpha(4) == pytest.approx(0.67310202386766599)
        assert alpha(12) == pytest.approx(0.72115742651737845)
        assert alpha(15) == pytest.approx(0.72132375796249839)

    def test_asymptotic_formula_outside_table(self):
        assert alpha(16) == pytest.approx(0.7213 / (1 + 1.079 / 65536))
        assert alpha(0) == pytest.approx(0.7213 / (1 + 1.079))

    def test_monotonic_in_table(self):
        values = [alpha(p) for p in range(1, 16)]
        assert values == sorted(values)


class TestHarmonicMean:
    def test_equal_values(self):
        assert harmonic_mean([4.0, 4.0, 4.0]) == pytest.approx(4.0)

    def test_mixed_values(self):
        assert harmonic_mean([1.0, 2.0, 4.0]) == pytest.approx(3 / 1.75)


class TestRawEstimate:
    def test_rounds_to_nearest(self):
        # alpha off, m=2, registers (0, 0): 1 * 2 * 1 = 2
        assert raw_estimate([0, 0], 1, collision_adjustment=False) == 2
        # m=2, registers (1, 0): Z = 2 / 1.5, estimate = 2 * 4/3 = 2.67
        assert raw_estimate([1, 0], 1, collision_adjustment=False) == 3

    def test_all_registers_one(self):
        # alpha(12) * 4096 * 2 = 5907.72
        assert raw_estimate([1] * 4096, 12) == 5908


class TestCount:
    def test_empty_sketch_counts_zero(self):
        assert HyperLogLog().count() == 0

    def test_linear_counting(self):
        regs = bytearray(16)
        regs[3] = 1
        hll = sketch_with(bytes(regs), precision=4)
        assert hll.count() == pytest.approx(16 * math.log(16 / 15))

    def test_no_zero_registers_keeps_raw_estimate(self):
        hll = sketch_with(b"\x01" * 4096)
        # raw 5908 < 2.5 * 4096 but there is no zero register to count
        assert hll.count() == 5908

    def test_mid_range_is_raw(self):
        hll = sketch_with(b"\x04" * 4096)
        expected = math.floor(alpha(12) * 4096 * 16 + 0.5)
        assert hll.count() == expected

    def test_large_range_correction(self):
        hll = sketch_with(b"\x10" * 4096)
        raw = raw_estimate([16] * 4096, 12)
        assert raw > 2**32 // 30
        expected = -(2**32) * math.log(1 - raw / 2**32)
        assert hll.count() == pytest.approx(expected)
        assert hll.count() > raw

    def test_saturated_sketch(self):
        hll = sketch_with(b"\x15" * 4096)
        assert hll.count() == math.inf

    def test_bound_adjustments_disabled(self):
        regs = bytearray(16)
        regs[3] = 1
        hll = sketch_with(bytes(regs), precision=4, bound_adjustments=False)
        assert hll.count() == raw_estimate(regs, 4)

        big = sketch_with(b"\x10" * 4096, bound_adjustments=False)
        assert big.count() == raw_estimate([16] * 4096, 12)

    def test_collision_adjustment_disabled(self):
        hll = sketch_with(b"\x01" * 4096, collision_adjustment=False)
        assert hll.count() == 8192

    def test_large_range_uses_exact_hash_space(self):
        # 2**64 // 30 must not go through a float
        registers = [56] * 16
        raw = raw_estimate(registers, 4)
        assert raw > 2**64 // 30
        result = estimate_cardinality(registers, 4, 64, zeros=0)
        assert result == pytest.approx(-(2**64) * math.log(1 - raw / 2**64))

    def test_returns_float(self):
        assert isinstance(HyperLogLog().count(), float)
        assert isinstance(sketch_with(b"\x04" * 4096).count(), float)
