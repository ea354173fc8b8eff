from minilisp import FoldResult, LispValue
from minilisp.evaluation.apply import EvaluatorFn, call_thunk
from minilisp.tree.fold import NodeInfo
from minilisp.types.element import IfBranches
from minilisp.types.scope import Scope
from minilisp.types.values import is_truthy


def if_form(
    info: NodeInfo,
    _: list[FoldResult],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    branches: IfBranches = info.element
    test = call_thunk(branches.test, scope, evaluate_fn)
    # Only #f is false
    chosen = branches.then if is_truthy(test) else branches.otherwise
    return call_thunk(chosen, scope, evaluate_fn)
