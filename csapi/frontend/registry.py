"""Synthesized-type registry.

Holds every auxiliary declaration (result class, enum) discovered while
lowering, keyed by its generated name. One registry per generation run;
drain() finalizes it exactly once so each entry is emitted exactly once.
"""

from __future__ import annotations

from typing import Iterator

from ..errors import NameCollisionError, RegistryClosedError
from ..ir import ObjectShape, SynthesizedEnum

Shape = ObjectShape | SynthesizedEnum


def describe(shape: Shape) -> str:
    """Short human-readable form of a shape for error messages."""
    if isinstance(shape, SynthesizedEnum):
        return "enum(" + ", ".join(shape.values) + ")"
    return "{" + ", ".join(p.name for p in shape.properties) + "}"


class Registry:
    """Ordered mapping from synthesized name to registered shape."""

    def __init__(self, predefined: dict[str, tuple[str, ...]] | None = None) -> None:
        self._entries: dict[str, Shape] = {}
        self._order: list[str] = []
        self._predefined: dict[str, SynthesizedEnum] = {}
        self._closed: bool = False
        if predefined is not None:
            for name, values in predefined.items():
                self._predefined[name] = SynthesizedEnum(tuple(values))

    def register(self, key: str, shape: Shape) -> bool:
        """Register shape under key.

        Returns True when the entry is new, False when the identical entry
        already exists. A different shape under the same key is an error.
        """
        if self._closed:
            raise RegistryClosedError("cannot register '" + key + "' after drain")
        existing = self._entries.get(key)
        if existing is None:
            self._entries[key] = shape
            self._order.append(key)
            return True
        if existing == shape:
            return False
        raise NameCollisionError(
            "'" + key + "' is already registered as " + describe(existing)
            + ", cannot register " + describe(shape)
        )

    def use_predefined(self, key: str) -> bool:
        """Register a predefined enum by name. Returns True when newly registered."""
        shape = self._predefined.get(key)
        if shape is None:
            raise KeyError(key)
        return self.register(key, shape)

    def get(self, key: str) -> Shape | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[tuple[str, Shape]]:
        """Iterate entries in registration order, including ones added meanwhile."""
        i = 0
        while i < len(self._order):
            key = self._order[i]
            yield (key, self._entries[key])
            i += 1

    def drain(self) -> list[tuple[str, Shape]]:
        """Remove and return every entry in first-registration order. One-shot."""
        if self._closed:
            raise RegistryClosedError("registry has already been drained")
        result = [(key, self._entries[key]) for key in self._order]
        self._entries = {}
        self._order = []
        self._closed = True
        return result
