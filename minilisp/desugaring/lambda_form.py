from minilisp.desugaring.signature import procedure_signature
from minilisp.tree.fold import NodeInfo
from minilisp.types.element import Group
from minilisp.types.errors import ProcedureBodyExpectedError, SignatureExpectedError
from minilisp.types.expression import ExpressionNode, leaf
from minilisp.types.procedure import Procedure


def lambda_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """
    (lambda (params ...) body ...)  ->  a Procedure literal

    The procedure has no captured scope yet; it captures one the first time the
    literal is evaluated.
    """
    if not children or not isinstance(children[0].element, Group):
        raise SignatureExpectedError(
            "lambda: parameter list expected",
            node=children[0] if children else info.node,
            expected="(lambda (params ...) body ...)",
        )

    _, signature = procedure_signature(children[0], name_first=False)

    body = children[1:]
    if not body:
        raise ProcedureBodyExpectedError("lambda: body expected", node=info.node)

    return leaf(Procedure(signature, tuple(body)), info.node.line, info.node.column)
