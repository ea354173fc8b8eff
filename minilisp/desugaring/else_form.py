from minilisp.tree.fold import NodeInfo
from minilisp.types.element import Cond, Group
from minilisp.types.errors import ElseClauseEmptyError, ElseMustBeLastError, ElseNotAllowedError
from minilisp.types.expression import ExpressionNode, leaf
from minilisp.types.identifier import ELSE
from minilisp.types.values import TRUE


def identifier_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    if info.element == ELSE:
        return else_form(info)
    return info.node.with_children(children)


def else_form(info: NodeInfo) -> ExpressionNode:
    """
    `else` is only meaningful as the head of the last clause of a cond, where it
    stands for a test that always succeeds.
    """
    clause = info.parent
    in_clause_head = (
        info.index == 0
        and clause is not None
        and isinstance(clause.element, Group)
        and clause.parent_is(Cond)
    )
    if not in_clause_head:
        raise ElseNotAllowedError(node=info.node)

    if len(clause.node) == 1:
        raise ElseClauseEmptyError(node=clause.node)

    if not clause.is_last_sibling:
        raise ElseMustBeLastError(node=clause.node)

    return leaf(TRUE, info.node.line, info.node.column)
