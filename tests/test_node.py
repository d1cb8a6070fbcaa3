import pytest

from countdown_numbers.games.node import Kind, Node, OPERATIONS


@pytest.fixture
def tree():
    # ((100 - 9) * (5 + 4))
    left = Node.combine(Kind.SUB, Node.leaf(100), Node.leaf(9))
    right = Node.combine(Kind.ADD, Node.leaf(5), Node.leaf(4))
    return Node.combine(Kind.MUL, left, right)


def test_leaf_value_and_rendering():
    leaf = Node.leaf(75)
    assert leaf.is_leaf
    assert leaf.evaluate() == 75
    assert leaf.render() == "75"


def test_operation_rendering_is_fully_parenthesized(tree):
    assert tree.render() == "((100 - 9) * (5 + 4))"
    assert str(tree) == tree.render()


def test_operation_value(tree):
    assert tree.evaluate() == 91 * 9


def test_division_is_integer():
    node = Node.combine(Kind.DIV, Node.leaf(100), Node.leaf(4))
    assert node.evaluate() == 25
    assert isinstance(node.evaluate(), int)
    assert node.render() == "(100 / 4)"


def test_evaluate_and_render_are_idempotent(tree):
    assert tree.evaluate() == tree.evaluate()
    assert tree.render() == tree.render()


def test_shared_children_across_trees():
    shared = Node.combine(Kind.ADD, Node.leaf(2), Node.leaf(3))
    doubled = Node.combine(Kind.MUL, shared, Node.leaf(2))
    minus = Node.combine(Kind.SUB, shared, Node.leaf(1))
    assert doubled.evaluate() == 10
    assert minus.evaluate() == 4
    assert shared.evaluate() == 5


def test_leaves_in_order(tree):
    assert list(tree.leaves()) == [100, 9, 5, 4]


def test_nodes_compare_by_identity():
    assert Node.leaf(3) != Node.leaf(3)
    assert len({Node.leaf(3), Node.leaf(3)}) == 2


def test_operator_table_order():
    assert [kind for kind, _ in OPERATIONS] == [Kind.ADD, Kind.SUB, Kind.MUL, Kind.DIV]
    assert [kind.symbol for kind, _ in OPERATIONS] == ['+', '-', '*', '/']


def test_leaf_kind_has_no_symbol():
    assert Kind.VALUE.symbol is None
