from minilisp.tree.fold import NodeInfo, fold
from minilisp.types.element import Group
from minilisp.types.expression import ExpressionNode, leaf
from minilisp.types.identifier import Identifier
from minilisp.types.values import Number


def _tree():
    # (a (b c) d)
    return ExpressionNode(Group(), [
        leaf(Identifier("a")),
        ExpressionNode(Group(), [leaf(Identifier("b")), leaf(Identifier("c"))]),
        leaf(Identifier("d")),
    ])


def test_fold_visits_children_before_parent():
    order = []

    def combine(info: NodeInfo, children):
        order.append(str(info.node))
        return None

    fold(_tree(), combine)
    assert order == ["a", "b", "c", "(b c)", "d", "(a (b c) d)"]


def test_fold_passes_folded_children_in_order():
    def combine(info, children):
        if isinstance(info.element, Identifier):
            return info.element.name
        return "".join(children)

    assert fold(_tree(), combine) == "abcd"


def test_fold_reports_parent_and_index():
    seen = {}

    def combine(info, children):
        if isinstance(info.element, Identifier):
            parent = str(info.parent.node) if info.parent else None
            seen[info.element.name] = (parent, info.index, info.is_last_sibling)
        return None

    fold(_tree(), combine)
    assert seen["a"] == ("(a (b c) d)", 0, False)
    assert seen["c"] == ("(b c)", 1, True)
    assert seen["d"] == ("(a (b c) d)", 2, True)


def test_root_has_no_parent():
    roots = []

    def combine(info, children):
        if info.parent is None:
            roots.append(info)
        return None

    fold(_tree(), combine)
    assert len(roots) == 1
    assert roots[0].index == 0
    assert not roots[0].is_last_sibling
    assert not roots[0].parent_is(Group)


def test_fold_leaf_sees_no_children():
    def combine(info, children):
        assert children == []
        return info.element

    assert fold(leaf(Number(3)), combine) == Number(3)


def test_fold_does_not_mutate_tree():
    tree = _tree()
    before = str(tree)
    fold(tree, lambda info, children: len(children))
    assert str(tree) == before
