from dataclasses import replace

from minilisp import FoldResult, LispValue
from minilisp.evaluation.apply import EvaluatorFn
from minilisp.tree.fold import NodeInfo
from minilisp.types.errors import (
    IdentifierExpectedError,
    MiniLispError,
    MultipleExpressionsError,
    ValueExpectedError,
)
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import Procedure
from minilisp.types.scope import Scope
from minilisp.types.values import Value
from minilisp.types.void import Void


def name_and_value(info: NodeInfo, values: list[FoldResult]) -> tuple[Identifier, Value]:
    """Shared shape check for (define name value) and (set! name value)."""
    keyword = str(info.element)
    name = values[0] if values else None
    if not isinstance(name, Identifier):
        raise IdentifierExpectedError(
            f"{keyword}: identifier expected",
            node=info.node,
            received=str(name) if name is not None else "nothing",
        )

    if len(values) > 2:
        raise MultipleExpressionsError(
            f"{keyword} {name}: exactly one value expression expected",
            node=info.node,
            received=f"{len(values) - 1} expressions",
        )

    value = values[1] if len(values) == 2 else None
    if not isinstance(value, Value):
        raise ValueExpectedError(
            f"{keyword} {name}: value expected",
            node=info.node,
            received=str(value) if value is not None else "nothing",
        )
    return name, value


def define_form(
    info: NodeInfo,
    values: list[FoldResult],
    scope: Scope,
    _: EvaluatorFn,
) -> LispValue:
    """
    (define name value)
    Binds in the current scope only; an existing binding at this level is an error.
    """
    name, value = name_and_value(info, values)
    if isinstance(value, Procedure) and value.name is None:
        value = replace(value, name=name.name)
    try:
        scope.add(name, value)
    except MiniLispError as ex:
        ex.node = info.node
        raise
    return Void
