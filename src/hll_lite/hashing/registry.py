"""Registry of hash backends, keyed by string id.

The id is what a sketch's configuration stores, and what ends up in
serialized bytes. Deserializing a sketch therefore needs the same id to
be registered on the receiving side; a sketch built with a custom
backend cannot be rebuilt on a host that never registered it.

`default_registry` is the one used when a caller passes no registry.
Tests that register throwaway backends should work on a `copy()` so
nothing leaks into other tests.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from hll_lite.hashing.base import Hasher

if TYPE_CHECKING:
    from hll_lite.sketch.config import SketchConfig

log = logging.getLogger(__name__)

HasherFactory = Callable[["SketchConfig"], Hasher]


class BackendNotFoundError(LookupError):
    """Raised when a hasher id has no registered factory."""

    def __init__(self, hasher_id: str, known: list[str]) -> None:
        self.hasher_id = hasher_id
        super().__init__(
            f"No hasher backend registered under {hasher_id!r} "
            f"(known: {', '.join(known) or 'none'})"
        )


class HasherRegistry:
    """Maps hasher ids to factories that build a Hasher for a config."""

    def __init__(self) -> None:
        self._factories: dict[str, HasherFactory] = {}

    def register(self, hasher_id: str, factory: HasherFactory) -> None:
        """Register (or replace) the factory for `hasher_id`."""
        if hasher_id in self._factories:
            log.debug("Replacing hasher backend %r", hasher_id)
        else:
            log.debug("Registering hasher backend %r", hasher_id)
        self._factories[hasher_id] = factory

    def unregister(self, hasher_id: str) -> None:
        if hasher_id not in self._factories:
            raise BackendNotFoundError(hasher_id, self.ids())
        del self._factories[hasher_id]

    def build(self, hasher_id: str, config: SketchConfig) -> Hasher:
        """Instantiate the backend registered under `hasher_id`.

        Raises:
            BackendNotFoundError: if nothing is registered under that id.
        """
        try:
            factory = self._factories[hasher_id]
        except KeyError:
            raise BackendNotFoundError(hasher_id, self.ids()) from None
        return factory(config)

    def ids(self) -> list[str]:
        return sorted(self._factories)

    def copy(self) -> HasherRegistry:
        """Independent registry holding the same factories."""
        clone = HasherRegistry()
        clone._factories = dict(self._factories)
        return clone

    def __contains__(self, hasher_id: object) -> bool:
        return hasher_id in self._factories

    def __len__(self) -> int:
        return len(self._factories)


default_registry = HasherRegistry()


def register(hasher_id: str, factory: HasherFactory) -> None:
    """Register a backend in the default registry."""
    default_registry.register(hasher_id, factory)


def build(hasher_id: str, config: SketchConfig) -> Hasher:
    """Build a backend from the default registry."""
    return default_registry.build(hasher_id, config)
