from minilisp.tree.fold import NodeInfo
from minilisp.types.element import IfBranches
from minilisp.types.errors import IfPartExpectedError, IfTooManyPartsError
from minilisp.types.expression import ExpressionNode
from minilisp.types.procedure import Procedure

IF_PARTS = ("test", "then", "else")


def if_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """
    (if test then else)

    Each part is wrapped in a zero-argument procedure so only the selected branch
    is ever evaluated.
    """
    if len(children) < len(IF_PARTS):
        raise IfPartExpectedError(IF_PARTS[len(children)], node=info.node)
    if len(children) > len(IF_PARTS):
        raise IfTooManyPartsError(len(children), node=info.node)

    test, then, otherwise = children
    branches = IfBranches(Procedure.thunk(test), Procedure.thunk(then), Procedure.thunk(otherwise))
    return info.node.with_children((), element=branches)
