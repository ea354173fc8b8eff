from __future__ import annotations

from typing import Optional

from minilisp.types.errors import DuplicateParameterError, IdentifierExpectedError
from minilisp.types.expression import ExpressionNode
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import ProcedureParameter, ProcedureSignature


def procedure_signature(
    group: ExpressionNode, name_first: bool
) -> tuple[Optional[ExpressionNode], ProcedureSignature]:
    """
    Read a parameter group into a ProcedureSignature.

    (lambda (a b) ...)      -> name_first=False, every element is a parameter
    (define (f a b) ...)    -> name_first=True, the first element names the procedure

    Returns the name node (or None) and the signature. Every element must be an
    Identifier and parameter names must be pairwise distinct.
    """
    not_identifier = next((c for c in group if not isinstance(c.element, Identifier)), None)
    if not_identifier is not None:
        raise IdentifierExpectedError(
            "identifier expected in procedure signature",
            node=not_identifier,
            received=str(not_identifier),
        )

    if name_first and not group.children:
        raise IdentifierExpectedError(
            "define: procedure name expected",
            node=group,
            expected="(define (name params ...) body ...)",
        )

    name_node = group[0] if name_first else None
    params = group.children[1:] if name_first else group.children

    seen: set[Identifier] = set()
    for param in params:
        if param.element in seen:
            raise DuplicateParameterError(param.element, node=param)
        seen.add(param.element)

    return name_node, ProcedureSignature(tuple(ProcedureParameter(p.element) for p in params))
