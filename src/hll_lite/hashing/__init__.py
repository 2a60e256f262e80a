"""Hash backends for HyperLogLog sketches.

Public API:
    Hasher: abstract backend interface (subclass to plug in a new hash)
    Jenkins32: default 32-bit one-at-a-time backend, id "jenkins32"
    HasherRegistry: id -> backend factory mapping
    default_registry: registry used when none is passed explicitly
    register / build: shortcuts for the default registry
    BackendNotFoundError: lookup of an unregistered id
"""

from hll_lite.hashing.base import Hasher
from hll_lite.hashing.bits import format_bits, to_int32
from hll_lite.hashing.jenkins32 import JENKINS32_ID, Jenkins32
from hll_lite.hashing.registry import (
    BackendNotFoundError,
    HasherRegistry,
    build,
    default_registry,
    register,
)

default_registry.register(JENKINS32_ID, Jenkins32)

__all__ = [
    "JENKINS32_ID",
    "BackendNotFoundError",
    "Hasher",
    "HasherRegistry",
    "Jenkins32",
    "build",
    "default_registry",
    "format_bits",
    "register",
    "to_int32",
]
