from minilisp import FoldResult, LispValue
from minilisp.evaluation.apply import EvaluatorFn
from minilisp.evaluation.special_forms.define_form import name_and_value
from minilisp.tree.fold import NodeInfo
from minilisp.types.errors import MiniLispError
from minilisp.types.scope import Scope
from minilisp.types.void import Void


def set_form(
    info: NodeInfo,
    values: list[FoldResult],
    scope: Scope,
    _: EvaluatorFn,
) -> LispValue:
    """
    (set! name value)
    Rebinds the nearest existing binding of name, walking outward.
    """
    name, value = name_and_value(info, values)
    try:
        scope.write(name, value)
    except MiniLispError as ex:
        ex.node = info.node
        raise
    return Void
