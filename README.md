# irunique

Building blocks for a compiler intermediate representation:

- storage that keeps a single copy of equal objects,
- an open type system whose instances are interned,
- bookkeeping for the def-use chains between definitions and their uses.

The package has no dependencies outside the standard library.

## Modules

### `irunique.storage_uniquer`

- `type_value_hash(value)` hashes a hashable value together with its Python
  type. It returns a `TypeValueHash`, a frozen dataclass around an unsigned
  64-bit number. `int(h)` returns that number.
- `UniqueStore` holds objects and finds them by hash and an equality
  predicate, so hash collisions are resolved correctly.
  - `get_or_create_unique(item, hash_, eq)` returns the index of a stored
    object equal to `item`. If none is stored yet, it stores `item` and returns
    the new index.
  - `get(hash_, is_)` returns the index of a stored object with that hash for
    which `is_` is true, or `None`.
  - `lookup(index)` returns the stored object. An unknown index raises
    `KeyError`.
  - `len(store)` is the number of stored objects.

### `irunique.uniqued_any`

`UniquedAnyStore` interns any hashable value.

- `save(value)` returns a `UniquedKey`. Values of the same type that compare
  equal get the same key. Equal values of different types, such as `1` and
  `1.0`, get different keys.
- `get(key)` returns the stored value. It raises `KeyError` if the key is
  unknown and `TypeError` if the stored value's type does not match the key.

```python
from irunique.uniqued_any import UniquedAnyStore

store = UniquedAnyStore()
a = store.save("Hello")
b = store.save("Hello")
assert a == b
assert store.get(a) == "Hello"
assert store.save("World") != a
```

### `irunique.types`

- `TypeName` is a type's name. `TypeId` is a dialect plus a `TypeName`, printed
  as `dialect.name`. `TypeId.parse("builtin.int")` reads that form. It checks
  only the syntax, not the dialect, and raises `ValueError` on bad input.
- `Type` is the base class for IR types. A subclass sets the class attribute
  `type_id_static` and is normally a frozen dataclass. Uniquing then uses the
  concrete class and the contents, through `hash_type()` and `eq_type(other)`.
  A type with mutable contents can override both methods so that those
  contents are ignored. `type_id()` returns the class's `TypeId`.
- `TypeStore` owns the interned instances:
  - `register_instance(instance)` returns a `TypePtr`. Equal instances share
    one pointer.
  - `get_instance(instance)` returns the `TypePtr` of an equal registered
    instance, or `None`.
  - `get_self_ptr(instance)` returns the untyped (integer) pointer of the
    registered copy. It raises `LookupError` if the instance is not registered.
  - `deref(ptr)` accepts a `TypePtr` or an integer pointer and returns the
    instance.
  - `typed_ptr(ptr, type_class)` turns an integer pointer into a `TypePtr`. It
    raises `TypePtrError` if the pointee is not of `type_class`.

```python
from dataclasses import dataclass
from irunique.types import Type, TypeId, TypeStore

@dataclass(frozen=True)
class IntType(Type):
    type_id_static = TypeId("builtin", "int")
    width: int

types = TypeStore()
p = types.register_instance(IntType(64))
assert p == types.register_instance(IntType(64))
assert types.deref(p).width == 64
assert types.get_instance(IntType(32)) is None
```

### `irunique.use_def`

- A definition is a value, either `OpResult(op, res_idx)` or
  `BlockArgument(block, arg_idx)`, or any hashable handle that stands for a
  block.
- A `Use(op, opd_idx)` is an operand slot (for values) or a successor slot
  (for blocks) of an operation. The use site stores a `UseNode` whose
  `definition` names what it uses.
- `DefNode` is the set of uses of one definition, kept in insertion order.
  - It provides `has_use()`, `num_uses()`, `has_use_of(use)`, `get_uses()`,
    iteration and `len()`.
  - `add_use(self_descr, use)` records a use and returns its `UseNode`.
  - `remove_use(use)` forgets a use.
  - `replace_some_uses_with(pred, other, other_node, set_use_node)` moves every
    use that satisfies `pred` to `other`'s node and calls `set_use_node(use,
    new_node)` for each. Replacing a definition with itself does nothing.
  - Adding a use twice, or removing one that is not there, raises
    `DefUseError`.

```python
from irunique.use_def import DefNode, OpResult, Use

c0, c1 = OpResult("c0", 0), OpResult("c1", 0)
c0_uses, c1_uses = DefNode(), DefNode()
operand = Use("ret", 0)
slots = {operand: c0_uses.add_use(c0, operand)}

c0_uses.replace_some_uses_with(lambda use: True, c1, c1_uses, slots.__setitem__)
assert not c0_uses.has_use() and c1_uses.has_use_of(operand)
assert slots[operand].definition == c1
```

## What it does not do

The package does not provide operations, blocks, regions or contexts, and it
does not parse or print IR text. Apart from `TypeId.parse`, there is no text
format. The use-def module only does the bookkeeping for definitions and uses.
The caller decides where operations keep their operands, successors and
`UseNode`s.

## Installing and testing

```
pip install ".[test]"
pytest
```