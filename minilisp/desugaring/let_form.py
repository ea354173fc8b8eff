from minilisp.tree.fold import NodeInfo
from minilisp.types.element import Eval, Group
from minilisp.types.errors import (
    DuplicateLetIdentifierError,
    LetBindingExpectedError,
    LetPartExpectedError,
)
from minilisp.types.expression import ExpressionNode, leaf
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import Procedure, ProcedureParameter, ProcedureSignature


def _is_binding_pair(node: ExpressionNode) -> bool:
    return (
        isinstance(node.element, Group)
        and len(node) == 2
        and isinstance(node[0].element, Identifier)
    )


def let_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """
    (let ((x e1) (y e2)) body ...)  ->  ((lambda (x y) body ...) e1 e2)
    """
    if not children or not isinstance(children[0].element, Group):
        raise LetPartExpectedError("binding pairs", node=info.node)
    if len(children) == 1:
        raise LetPartExpectedError("body", node=info.node)

    bindings = children[0]
    malformed = next((pair for pair in bindings if not _is_binding_pair(pair)), None)
    if malformed is not None:
        raise LetBindingExpectedError(
            "let: binding expected",
            node=malformed,
            expected="(identifier expression)",
            received=str(malformed),
        )

    identifiers: list[Identifier] = []
    for pair in bindings:
        if pair[0].element in identifiers:
            raise DuplicateLetIdentifierError(pair[0].element, node=pair[0])
        identifiers.append(pair[0].element)

    signature = ProcedureSignature(tuple(ProcedureParameter(i) for i in identifiers))
    procedure = Procedure(signature, tuple(children[1:]), name="<let>")

    call = [leaf(procedure, info.node.line, info.node.column)]
    call.extend(pair[1] for pair in bindings)
    return info.node.with_children(call, element=Eval())
