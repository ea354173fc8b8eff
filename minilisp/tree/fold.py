"""Bottom-up fold over expression trees.

Both the desugar pass and the evaluator are written as combining functions for
`fold`. The combining function sees each node after all of its children have been
folded, together with enough context (parent info, index among siblings) to check
where the node sits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from minilisp.types.element import Element
from minilisp.types.expression import ExpressionNode

R = TypeVar("R")


@dataclass(frozen=True, eq=False)
class NodeInfo:
    node: ExpressionNode
    parent: Optional[NodeInfo] = None
    # Position among the parent's children; 0 at the root
    index: int = 0

    @property
    def element(self) -> Element:
        return self.node.element

    def parent_is(self, *kinds: type) -> bool:
        return self.parent is not None and isinstance(self.parent.element, kinds)

    @property
    def is_last_sibling(self) -> bool:
        return self.parent is not None and self.index == len(self.parent.node.children) - 1


def fold(tree: ExpressionNode, combine: Callable[[NodeInfo, list[R]], R]) -> R:
    """Fold `tree` post-order with `combine(node_info, folded_children)`."""

    def visit(info: NodeInfo) -> R:
        folded = [
            visit(NodeInfo(child, info, i))
            for i, child in enumerate(info.node.children)
        ]
        return combine(info, folded)

    return visit(NodeInfo(tree))
