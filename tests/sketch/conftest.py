"""Shared helpers for sketch tests."""
from __future__ import annotations

import random

import pytest

from hll_lite.hashing import Jenkins32, default_registry
from hll_lite.sketch import HyperLogLog


SEED = 42

# Accuracy workload: "0" .. "1499999"
DISTINCT = 1_500_000

CUSTOM_ID = "my-custom-backend"


class CustomBackend(Jenkins32):
    """Reuses the default hash under a different id."""


def rel_error(estimate: float, expected: float) -> float:
    return abs(estimate - expected) / expected


def make_sketch(values, **options) -> HyperLogLog:
    hll = HyperLogLog(**options)
    hll.update(values)
    return hll


def shuffled(values, seed: int = SEED) -> list:
    out = list(values)
    random.Random(seed).shuffle(out)
    return out


@pytest.fixture()
def registry():
    """Private registry with the custom backend registered."""
    reg = default_registry.copy()
    reg.register(CUSTOM_ID, CustomBackend)
    return reg
