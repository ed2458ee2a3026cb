"""Use-def and def-use chains between definitions and the operations using them.

A definition is either a value (an operation result or a block argument) or a
block. Each definition owns a :class:`DefNode` listing its uses, and each use
site, an operand or successor slot of an operation, holds a :class:`UseNode`
pointing back at the definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Iterator, TypeVar, Union

D = TypeVar("D", bound=Hashable)


class DefUseError(Exception):
    """The use-def graph was asked to do something inconsistent."""


@dataclass(frozen=True)
class Use:
    """A use of a definition: slot ``opd_idx`` of operation ``op``.

    The slot is an operand when the definition is a value and a successor
    when the definition is a block.
    """

    op: Hashable
    opd_idx: int


@dataclass(frozen=True)
class UseNode(Generic[D]):
    """Held at a use site; records the definition being used."""

    definition: D


@dataclass(frozen=True)
class OpResult:
    """A value defined as result ``res_idx`` of operation ``op``."""

    op: Hashable
    res_idx: int


@dataclass(frozen=True)
class BlockArgument:
    """A value defined as argument ``arg_idx`` of block ``block``."""

    block: Hashable
    arg_idx: int


Value = Union[OpResult, BlockArgument]


class DefNode(Generic[D]):
    """The set of uses of one definition, kept in insertion order."""

    def __init__(self) -> None:
        self._uses: dict[Use, None] = {}

    def has_use(self) -> bool:
        """Does the definition have any use?"""
        return bool(self._uses)

    def num_uses(self) -> int:
        """How many uses does the definition have?"""
        return len(self._uses)

    def has_use_of(self, use: Use) -> bool:
        """Is ``use`` one of the definition's uses?"""
        return use in self._uses

    def get_uses(self) -> list[Use]:
        """All uses of the definition."""
        return list(self._uses)

    def __iter__(self) -> Iterator[Use]:
        return iter(list(self._uses))

    def __len__(self) -> int:
        return len(self._uses)

    def add_use(self, self_descr: D, use: Use) -> UseNode[D]:
        """Track a new ``use`` and return the node to store at the use site."""
        if use in self._uses:
            raise DefUseError("Def: Attempt to insert an existing use")
        self._uses[use] = None
        return UseNode(self_descr)

    def remove_use(self, use: Use) -> None:
        """Stop tracking ``use``."""
        if use not in self._uses:
            raise DefUseError("Def: Attempt to remove a use that doesn't exist")
        self._uses.pop(use)

    def replace_some_uses_with(
        self,
        pred: Callable[[Use], bool],
        other: D,
        other_node: "DefNode[D]",
        set_use_node: Callable[[Use, UseNode[D]], None],
    ) -> None:
        """Move the uses satisfying ``pred`` over to the definition ``other``.

        ``other_node`` is the def node of ``other``; ``set_use_node`` is called
        for each moved use to store its new :class:`UseNode` at the use site.
        Replacing a definition with itself does nothing.
        """
        if other_node is self:
            return
        moved = [use for use in self._uses if pred(use)]
        for use in moved:
            set_use_node(use, other_node.add_use(other, use))
        for use in moved:
            self._uses.pop(use)