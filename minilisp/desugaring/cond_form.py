from minilisp.tree.fold import NodeInfo
from minilisp.types.element import CondClause, CondClauses, Group
from minilisp.types.errors import CondClauseExpectedError
from minilisp.types.expression import ExpressionNode
from minilisp.types.procedure import Procedure


def cond_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """
    (cond (test expr ...) ... (else expr ...))

    Each clause becomes a (test thunk, body thunk) pair. A clause with no
    expressions after its test has no body thunk: its value is the test's value.
    """
    for clause in children:
        if not isinstance(clause.element, Group) or not clause.children:
            raise CondClauseExpectedError(
                "cond: clause expected",
                node=clause,
                expected="(test expr ...)",
                received=str(clause),
            )

    clauses = tuple(
        CondClause(
            Procedure.thunk(clause[0]),
            Procedure.thunk(*clause.children[1:]) if len(clause) > 1 else None,
        )
        for clause in children
    )
    return info.node.with_children((), element=CondClauses(clauses))
