"""Core evaluator for the MiniLisp interpreter.

Evaluation is a bottom-up fold over a canonical tree: every node's children are
evaluated before the node itself. Forms that must not evaluate everything eagerly
(if, cond) carry their parts as zero-argument procedures, so the fold only ever
sees them as leaves.
"""

from __future__ import annotations

from minilisp import FoldResult, LispValue
from minilisp.desugaring import desugar
from minilisp.evaluation.special_forms import SPECIAL_FORMS
from minilisp.tree.fold import NodeInfo, fold
from minilisp.types.element import RAW_ONLY_ELEMENTS, Define, Set
from minilisp.types.errors import NotDesugaredError, UnboundIdentifierError
from minilisp.types.expression import ExpressionNode
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import Procedure
from minilisp.types.scope import Scope


def evaluate(tree: ExpressionNode, scope: Scope) -> LispValue:
    """Desugar one raw top-level tree and evaluate it in `scope`."""
    return evaluate_canonical(desugar(tree), scope)


def evaluate_canonical(tree: ExpressionNode, scope: Scope) -> FoldResult:
    """Evaluate an already-desugared tree in `scope`."""

    def combine(info: NodeInfo, values: list[FoldResult]) -> FoldResult:
        return evaluate_node(info, values, scope)

    return fold(tree, combine)


def is_name_slot(info: NodeInfo) -> bool:
    """The first child of define/set! is a name, not a reference."""
    return info.index == 0 and info.parent_is(Define, Set)


def evaluate_node(info: NodeInfo, values: list[FoldResult], scope: Scope) -> FoldResult:
    element = info.element

    # --- Canonical forms ---
    handler = SPECIAL_FORMS.get(type(element))
    if handler is not None:
        return handler(info, values, scope, evaluate_canonical)

    if isinstance(element, RAW_ONLY_ELEMENTS):
        raise NotDesugaredError(
            f"{type(element).__name__} form reached the evaluator without being desugared",
            node=info.node,
        )

    # --- Identifiers ---
    if isinstance(element, Identifier):
        if is_name_slot(info):
            return element
        try:
            return scope.read(element)
        except UnboundIdentifierError as ex:
            ex.node = info.node
            raise

    # --- Procedure literals capture the scope they are first evaluated in ---
    if isinstance(element, Procedure) and not element.captured:
        return element.capture(scope)

    # --- Values are self-evaluating ---
    return element
