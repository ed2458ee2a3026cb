"""An open, uniqued type system: each distinct type instance is stored once."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Generic, Optional, TypeVar, Union

from irunique.storage_uniquer import TypeValueHash, UniqueStore, type_value_hash

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
_TYPE_ID_RE = re.compile(rf"({_IDENT})\.({_IDENT})")


@dataclass(frozen=True)
class TypeName:
    """A type's name, not including its dialect."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TypeId:
    """A type's dialect together with its name, written ``dialect.name``."""

    dialect: str
    name: TypeName

    def __post_init__(self) -> None:
        if isinstance(self.name, str):
            object.__setattr__(self, "name", TypeName(self.name))

    @staticmethod
    def parse(text: str) -> "TypeId":
        """Parse ``dialect.name`` into a TypeId (the dialect is not validated)."""
        match = _TYPE_ID_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"Invalid type id {text!r}")
        return TypeId(match.group(1), TypeName(match.group(2)))

    def __str__(self) -> str:
        return f"{self.dialect}.{self.name}"


class Type:
    """Base for IR types.

    Subclasses set ``type_id_static`` and are usually frozen dataclasses, so
    that uniquing uses the concrete class and the contents. A type with
    mutable contents overrides ``hash_type`` and ``eq_type`` to ignore them.
    """

    type_id_static: ClassVar[TypeId]

    def hash_type(self) -> TypeValueHash:
        """Hash of this instance together with its class."""
        return type_value_hash(self)

    def eq_type(self, other: "Type") -> bool:
        """Is this instance equal to ``other``?"""
        return type(self) is type(other) and self == other

    def type_id(self) -> TypeId:
        """The static identifier of this instance's type."""
        return type(self).type_id_static


T = TypeVar("T", bound=Type)


class TypePtrError(Exception):
    """A pointer does not refer to an instance of the expected type."""

    def __init__(self, expected: str, provided: str) -> None:
        super().__init__(
            f"TypePtr mismatch: Constructing {expected} but provided {provided}"
        )
        self.expected = expected
        self.provided = provided


@dataclass(frozen=True)
class TypePtr(Generic[T]):
    """A pointer into a TypeStore that also records the pointee's class."""

    index: int
    type_class: type


class TypeStore:
    """Owns uniqued type instances and hands out pointers to them."""

    def __init__(self) -> None:
        self._store: UniqueStore[Type] = UniqueStore()

    def register_instance(self, instance: T) -> TypePtr[T]:
        """Register ``instance``; an equal, already registered one is reused."""
        index = self._store.get_or_create_unique(
            instance, instance.hash_type(), lambda new, old: new.eq_type(old)
        )
        return TypePtr(index, type(instance))

    def get_instance(self, instance: T) -> Optional[TypePtr[T]]:
        """Pointer to the registered instance equal to ``instance``, if any."""
        index = self._store.get(instance.hash_type(), instance.eq_type)
        return None if index is None else TypePtr(index, type(instance))

    def get_self_ptr(self, instance: Type) -> int:
        """Untyped pointer to the registered copy of ``instance``."""
        index = self._store.get(instance.hash_type(), instance.eq_type)
        if index is None:
            raise LookupError("Unregistered type object in existence")
        return index

    def deref(self, ptr: Union[int, TypePtr]) -> Type:
        """Return the instance a pointer refers to."""
        if isinstance(ptr, TypePtr):
            value = self._store.lookup(ptr.index)
            if type(value) is not ptr.type_class:
                raise TypeError("Type mismatch, inconsistent TypePtr")
            return value
        return self._store.lookup(ptr)

    def typed_ptr(self, ptr: int, type_class: type) -> TypePtr:
        """Make a typed pointer, checking that ``ptr`` refers to ``type_class``."""
        value = self._store.lookup(ptr)
        if type(value) is not type_class:
            raise TypePtrError(str(type_class.type_id_static), str(value.type_id()))
        return TypePtr(ptr, type_class)