"""Store a single unique copy of any hashable object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Hashable, TypeVar

from irunique.storage_uniquer import UniqueStore, type_value_hash

T = TypeVar("T")


@dataclass(frozen=True)
class UniquedKey(Generic[T]):
    """Handle to a stored unique object; equal objects share one handle."""

    index: int
    kind: type


def _same(first: Any, second: Any) -> bool:
    return type(first) is type(second) and first == second


class UniquedAnyStore:
    """Holds one copy of each distinct saved value."""

    def __init__(self) -> None:
        self._store: UniqueStore[Any] = UniqueStore()

    def save(self, value: Hashable) -> UniquedKey:
        """Save ``value`` (or find its existing copy) and return its handle."""
        index = self._store.get_or_create_unique(value, type_value_hash(value), _same)
        return UniquedKey(index, type(value))

    def get(self, key: UniquedKey) -> Any:
        """Return the stored object that ``key`` refers to."""
        try:
            value = self._store.lookup(key.index)
        except KeyError:
            raise KeyError("Key not found in uniqued store") from None
        if type(value) is not key.kind:
            raise TypeError("Type mismatch in UniquedAny retrieval")
        return value