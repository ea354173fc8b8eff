from minilisp import FoldResult, LispValue
from minilisp.evaluation.apply import EvaluatorFn, call_thunk
from minilisp.tree.fold import NodeInfo
from minilisp.types.element import CondClauses
from minilisp.types.scope import Scope
from minilisp.types.values import is_truthy
from minilisp.types.void import Void


def cond_form(
    info: NodeInfo,
    _: list[FoldResult],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """First clause whose test is truthy wins; later clauses are never evaluated."""
    cond: CondClauses = info.element
    for clause in cond.clauses:
        test = call_thunk(clause.test, scope, evaluate_fn)
        if is_truthy(test):
            if clause.body is None:
                return test
            return call_thunk(clause.body, scope, evaluate_fn)
    return Void
