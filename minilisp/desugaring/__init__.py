"""Desugar pass: lowers raw trees into canonical form.

Maps raw element classes to handlers `(node_info, desugared_children) -> node`. The
pass is a combining function for the generic tree fold, so children arrive already
desugared. Elements without a handler are rebuilt unchanged around their children.

After the pass a tree contains only Define, Set, Eval, IfBranches, CondClauses,
Identifier and Value elements. Running the pass again on its own output is a no-op.
"""

from minilisp.desugaring.cond_form import cond_form
from minilisp.desugaring.define_form import define_form, name_slot_form
from minilisp.desugaring.else_form import identifier_form
from minilisp.desugaring.group_form import group_form
from minilisp.desugaring.if_form import if_form
from minilisp.desugaring.lambda_form import lambda_form
from minilisp.desugaring.let_form import let_form
from minilisp.tree.fold import NodeInfo, fold
from minilisp.types.element import Cond, Define, Group, If, Lambda, Let, Set
from minilisp.types.expression import ExpressionNode
from minilisp.types.identifier import Identifier

DESUGAR_FORMS = {
    Lambda: lambda_form,
    Define: define_form,
    Set: name_slot_form,
    If: if_form,
    Cond: cond_form,
    Let: let_form,
    Group: group_form,
    Identifier: identifier_form,
}


def desugar_node(info: NodeInfo, children: list[ExpressionNode]) -> ExpressionNode:
    handler = DESUGAR_FORMS.get(type(info.element))
    if handler is None:
        return info.node.with_children(children)
    return handler(info, children)


def desugar(tree: ExpressionNode) -> ExpressionNode:
    """Desugar one top-level raw tree. Raises MiniLispFormError on the first malformed form."""
    return fold(tree, desugar_node)
