"""Explicit Unknown / Known(value) cache slot.

Using None for "unknown" doesn't work when None (or False) is itself
a meaningful cached value, so the known flag is tracked separately.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(slots=True)
class Cached(Generic[V]):
    _value: V | None = None
    _known: bool = False

    @property
    def known(self) -> bool:
        return self._known

    def get(self) -> V:
        if not self._known:
            raise LookupError("cache value is unknown")
        return self._value  # type: ignore[return-value]

    def is_known_as(self, value: V) -> bool:
        """True only if the cache is known and holds *value*."""
        return self._known and self._value == value

    def set(self, value: V) -> None:
        self._value = value
        self._known = True

    def invalidate(self) -> None:
        self._value = None
        self._known = False
