from minilisp.tree.fold import NodeInfo
from minilisp.types.element import Cond, Define, Eval, Group, Lambda, Let
from minilisp.types.expression import ExpressionNode


def in_structural_position(info: NodeInfo) -> bool:
    """
    True when a group is read by its enclosing form rather than evaluated:
    the parameter group of lambda/define, the bindings of let, a single let
    binding, or a cond clause.
    """
    parent = info.parent
    if parent is None:
        return False
    if isinstance(parent.element, (Lambda, Define, Let)):
        return info.index == 0
    if isinstance(parent.element, Cond):
        return True
    # (let ((x 1) (y 2)) ...): each pair sits inside the bindings group
    return isinstance(parent.element, Group) and parent.index == 0 and parent.parent_is(Let)


def group_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """A group in expression position is an application."""
    if in_structural_position(info):
        return info.node.with_children(children)
    return info.node.with_children(children, element=Eval())
