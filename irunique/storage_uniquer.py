"""Keep a single stored copy of equal objects, indexed by a type-aware hash."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")

_MASK_64 = (1 << 64) - 1


@dataclass(frozen=True)
class TypeValueHash:
    """Hash of a value computed together with the value's concrete type."""

    value: int

    def __int__(self) -> int:
        return self.value


def type_value_hash(value: Hashable) -> TypeValueHash:
    """Hash ``value`` and its type together, as an unsigned 64-bit number."""
    return TypeValueHash(hash((type(value), value)) & _MASK_64)


class UniqueStore(Generic[T]):
    """Owns objects so that each distinct object is stored only once.

    Objects are found by a caller-supplied hash and then compared with a
    caller-supplied predicate, so hash collisions are handled correctly.
    """

    def __init__(self) -> None:
        self._items: list[T] = []
        self._buckets: dict[TypeValueHash, list[int]] = {}

    def get_or_create_unique(
        self, item: T, hash_: TypeValueHash, eq: Callable[[T, T], bool]
    ) -> int:
        """Return the index of the stored copy equal to ``item``, storing it if new."""
        bucket = self._buckets.setdefault(hash_, [])
        for index in bucket:
            if eq(item, self._items[index]):
                return index
        self._items.append(item)
        index = len(self._items) - 1
        bucket.append(index)
        return index

    def get(self, hash_: TypeValueHash, is_: Callable[[T], bool]) -> Optional[int]:
        """Return the index of a stored object with ``hash_`` satisfying ``is_``."""
        return next(
            (index for index in self._buckets.get(hash_, ()) if is_(self._items[index])),
            None,
        )

    def lookup(self, index: int) -> T:
        """Return the stored object at ``index``."""
        if not 0 <= index < len(self._items):
            raise KeyError(index)
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)