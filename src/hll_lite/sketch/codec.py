"""Binary codec for HyperLogLog sketches.

Layout (little-endian):
    N bytes: config as compact UTF-8 JSON, camelCase keys
    1 byte:  NUL terminator
    4 bytes: register count m (uint32)
    m bytes: registers in index order, one byte each

The JSON header makes the blob self-describing: a receiver learns the
hasher id and precision before touching the registers, and rebuilds
the sketch through the same constructor path as a fresh one (registry
lookup, precision clamp). Only then are the registers copied in.

This is the only persistence format. Sketches produced by other
implementations of the same layout load unchanged, provided the
hasher id they name is registered here.
"""
from __future__ import annotations

import json
import logging
import struct

from hll_lite.hashing.registry import HasherRegistry
from hll_lite.sketch.config import (
    InvalidConfigError,
    InvalidPrecisionError,
    SketchConfig,
)
from hll_lite.sketch.hyperloglog import HyperLogLog

log = logging.getLogger(__name__)

_COUNT = struct.Struct("<I")
_NUL = b"\x00"


class CodecError(ValueError):
    """Raised when bytes cannot be decoded into a sketch."""


def serialize(hll: HyperLogLog) -> bytes:
    """Encode a sketch's config and registers."""
    header = json.dumps(hll.config.to_dict(), separators=(",", ":"))
    registers = hll.registers
    return b"".join((
        header.encode("utf-8"),
        _NUL,
        _COUNT.pack(len(registers)),
        registers,
    ))


def _decode_config(raw: bytes) -> SketchConfig:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError(f"Malformed config header: {exc}") from exc
    if not isinstance(obj, dict):
        raise CodecError(
            f"Config header must be a JSON object, got {type(obj).__name__}"
        )
    try:
        return SketchConfig.from_dict(obj)
    except InvalidPrecisionError:
        raise
    except InvalidConfigError as exc:
        raise CodecError(f"Malformed config header: {exc}") from exc


def deserialize(data: bytes, registry: HasherRegistry | None = None) -> HyperLogLog:
    """Rebuild a sketch from serialize() output.

    Raises:
        CodecError: the bytes are truncated, malformed, or the register
            count does not match the config's precision.
        BackendNotFoundError: the hasher id is not registered.
        InvalidPrecisionError: the config carries a negative precision.
    """
    data = bytes(data)
    end = data.find(_NUL)
    if end < 0:
        raise CodecError("Config header is not NUL-terminated")
    config = _decode_config(data[:end])

    offset = end + 1
    if len(data) < offset + _COUNT.size:
        raise CodecError("Buffer ends before the register count")
    (count,) = _COUNT.unpack_from(data, offset)
    offset += _COUNT.size

    registers = data[offset:offset + count]
    if len(registers) != count:
        raise CodecError(
            f"Expected {count} register bytes, got {len(registers)}"
        )
    if len(data) != offset + count:
        raise CodecError(
            f"{len(data) - offset - count} unexpected trailing bytes"
        )

    hll = HyperLogLog(config, registry=registry)
    if count != hll.num_registers:
        raise CodecError(
            f"Register count {count} does not match precision "
            f"{hll.precision} ({hll.num_registers} registers)"
        )
    hll.load_registers(registers)
    log.debug("Decoded %r with %d registers", hll, count)
    return hll
