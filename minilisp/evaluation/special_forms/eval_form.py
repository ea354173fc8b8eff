from minilisp import FoldResult, LispValue
from minilisp.evaluation.apply import EvaluatorFn, apply
from minilisp.tree.fold import NodeInfo
from minilisp.types.errors import MiniLispError, ProcedureExpectedError
from minilisp.types.procedure import ProcedureBase
from minilisp.types.scope import Scope


def eval_form(
    info: NodeInfo,
    values: list[FoldResult],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (f arg ...)
    All children are already evaluated; the first must be a procedure.
    """
    if not values:
        raise ProcedureExpectedError(
            "procedure expected", node=info.node, expected="procedure", received="()"
        )

    head, *args = values
    if not isinstance(head, ProcedureBase):
        raise ProcedureExpectedError(
            "procedure expected", node=info.node[0], expected="procedure", received=str(head)
        )

    try:
        return apply(head, args, scope, evaluate_fn)
    except MiniLispError as ex:
        # Point errors raised by the call itself (arity, type, built-in failures) at this form
        if ex.node is None:
            ex.node = info.node
        raise
