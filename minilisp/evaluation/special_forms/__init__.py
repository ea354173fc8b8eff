"""Registry of canonical forms for the MiniLisp evaluator.

Maps element classes to handler functions `(node_info, values, scope, evaluate_fn)`.
The evaluator consults this table before treating a node as an identifier or a
self-evaluating value.
"""

from minilisp.evaluation.special_forms.cond_form import cond_form
from minilisp.evaluation.special_forms.define_form import define_form
from minilisp.evaluation.special_forms.eval_form import eval_form
from minilisp.evaluation.special_forms.if_form import if_form
from minilisp.evaluation.special_forms.set_form import set_form
from minilisp.types.element import CondClauses, Define, Eval, IfBranches, Set

SPECIAL_FORMS = {
    Eval: eval_form,
    Define: define_form,
    Set: set_form,
    IfBranches: if_form,
    CondClauses: cond_form,
}
