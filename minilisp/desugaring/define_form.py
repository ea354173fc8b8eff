from minilisp.desugaring.signature import procedure_signature
from minilisp.tree.fold import NodeInfo
from minilisp.types.element import Group
from minilisp.types.errors import IdentifierExpectedError, ProcedureBodyExpectedError
from minilisp.types.expression import ExpressionNode, leaf
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import Procedure


def define_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """
    (define (name params ...) body ...)  ->  (define name <procedure>)
    (define name expr)                   ->  unchanged
    """
    if children and isinstance(children[0].element, Group):
        name_node, signature = procedure_signature(children[0], name_first=True)

        body = children[1:]
        if not body:
            raise ProcedureBodyExpectedError(
                f"define {name_node}: body expected", node=info.node
            )

        procedure = Procedure(signature, tuple(body), name=name_node.element.name)
        return info.node.with_children(
            [name_node, leaf(procedure, children[0].line, children[0].column)]
        )

    return name_slot_form(info, children)


def name_slot_form(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    """Check that define/set! starts with a plain identifier; value checks happen at evaluation."""
    keyword = str(info.element)
    if not children or not isinstance(children[0].element, Identifier):
        raise IdentifierExpectedError(
            f"{keyword}: identifier expected",
            node=children[0] if children else info.node,
            expected=f"({keyword} name expr)",
            received=str(children[0]) if children else "nothing",
        )
    return info.node.with_children(children)
