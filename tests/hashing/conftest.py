"""Shared fixtures for hash backend tests."""
from __future__ import annotations

import pytest

from hll_lite.hashing import Jenkins32, default_registry
from hll_lite.sketch.config import SketchConfig


CUSTOM_ID = "my-custom-backend"


class ShiftedJenkins(Jenkins32):
    """Jenkins32 with the bits rotated, so its registers differ."""

    def hash(self, value: str) -> int:
        h = super().hash(value) & 0xFFFFFFFF
        return ((h << 7) | (h >> 25)) & 0xFFFFFFFF


@pytest.fixture()
def registry():
    """Private copy of the default registry; registrations don't leak."""
    return default_registry.copy()


@pytest.fixture()
def jenkins():
    return Jenkins32(SketchConfig(precision=12))
