import pytest

from irunique.use_def import (
    BlockArgument,
    DefNode,
    DefUseError,
    OpResult,
    Use,
    UseNode,
)


def test_empty_def_node():
    node = DefNode()
    assert not node.has_use()
    assert node.num_uses() == 0
    assert node.get_uses() == []


def test_add_use_returns_use_node_pointing_to_def():
    value = OpResult("op_a", 0)
    node = DefNode()
    use = Use("op_b", 1)
    use_node = node.add_use(value, use)
    assert use_node == UseNode(value)
    assert use_node.definition == value
    assert node.has_use()
    assert node.num_uses() == 1
    assert node.has_use_of(use)
    assert node.get_uses() == [use]


def test_add_existing_use_raises():
    node = DefNode()
    value = BlockArgument("block", 0)
    node.add_use(value, Use("op", 0))
    with pytest.raises(DefUseError):
        node.add_use(value, Use("op", 0))
    assert node.num_uses() == 1


def test_remove_use():
    node = DefNode()
    value = OpResult("op_a", 0)
    first, second = Use("op_b", 0), Use("op_c", 2)
    node.add_use(value, first)
    node.add_use(value, second)
    node.remove_use(first)
    assert node.get_uses() == [second]
    assert not node.has_use_of(first)


def test_remove_missing_use_raises():
    node = DefNode()
    with pytest.raises(DefUseError):
        node.remove_use(Use("op", 0))


def test_uses_kept_in_insertion_order():
    node = DefNode()
    value = OpResult("op", 0)
    uses = [Use(f"user{i}", i) for i in range(5)]
    for use in uses:
        node.add_use(value, use)
    assert node.get_uses() == uses
    assert list(node) == uses
    assert len(node) == len(uses)


def test_value_variants_are_distinct_and_hashable():
    assert OpResult("x", 0) == OpResult("x", 0)
    assert OpResult("x", 0) != BlockArgument("x", 0)
    assert len({OpResult("x", 0), OpResult("x", 0), BlockArgument("x", 0)}) == 2


def test_replace_all_uses():
    old, new = OpResult("c0", 0), OpResult("c1", 0)
    old_node, new_node = DefNode(), DefNode()
    use_sites = {}
    uses = [Use("ret", 0), Use("add", 1)]
    for use in uses:
        use_sites[use] = old_node.add_use(old, use)

    def set_use_node(use, use_node):
        use_sites[use] = use_node

    old_node.replace_some_uses_with(lambda use: True, new, new_node, set_use_node)

    assert not old_node.has_use()
    assert new_node.get_uses() == uses
    assert all(use_sites[use].definition == new for use in uses)


def test_replace_some_uses_by_predicate():
    old, new = BlockArgument("bb", 0), BlockArgument("bb", 1)
    old_node, new_node = DefNode(), DefNode()
    use_sites = {}
    keep, move = Use("keep_op", 0), Use("move_op", 0)
    for use in (keep, move):
        use_sites[use] = old_node.add_use(old, use)

    old_node.replace_some_uses_with(
        lambda use: use.op == "move_op",
        new,
        new_node,
        use_sites.__setitem__,
    )

    assert old_node.get_uses() == [keep]
    assert new_node.get_uses() == [move]
    assert use_sites[keep].definition == old
    assert use_sites[move].definition == new


def test_replace_with_self_is_noop():
    value = OpResult("op", 0)
    node = DefNode()
    use = Use("user", 0)
    node.add_use(value, use)
    calls = []
    node.replace_some_uses_with(
        lambda u: True, value, node, lambda u, n: calls.append((u, n))
    )
    assert node.get_uses() == [use]
    assert calls == []


def test_replace_conflicting_use_raises():
    old, new = OpResult("a", 0), OpResult("b", 0)
    old_node, new_node = DefNode(), DefNode()
    use = Use("user", 0)
    old_node.add_use(old, use)
    new_node.add_use(new, use)
    with pytest.raises(DefUseError):
        old_node.replace_some_uses_with(lambda u: True, new, new_node, lambda u, n: None)