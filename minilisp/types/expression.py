"""Expression trees.

An ExpressionNode pairs an element with an ordered tuple of child nodes. Nodes are
immutable: passes over a tree always build new nodes. The reader records the
source position of each node; positions are ignored by equality.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional

from minilisp.types.element import Element, Eval, FormMarker, Group


class ExpressionNode:
    __slots__ = ("element", "children", "line", "column")

    def __init__(
        self,
        element: Element,
        children: Iterable[ExpressionNode] = (),
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.element: Element = element
        self.children: tuple[ExpressionNode, ...] = tuple(children)
        self.line = line
        self.column = column

    def with_children(self, children: Iterable[ExpressionNode], element: Element | None = None) -> ExpressionNode:
        """Copy of this node (same position) with new children and optionally a new element."""
        return ExpressionNode(
            self.element if element is None else element,
            children,
            line=self.line,
            column=self.column,
        )

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[ExpressionNode]:
        return iter(self.children)

    def __getitem__(self, index):
        return self.children[index]

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ExpressionNode)
            and self.element == other.element
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash((self.element, self.children))

    def __str__(self) -> str:
        """Render the tree back to Lisp source."""
        if not self.children and not isinstance(self.element, FormMarker):
            return str(self.element)
        with StringIO() as buffer:
            buffer.write("(")
            parts = [] if isinstance(self.element, (Group, Eval)) else [str(self.element)]
            parts.extend(str(c) for c in self.children)
            buffer.write(" ".join(parts))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<ExpressionNode {self}>"


def leaf(element: Element, line: Optional[int] = None, column: Optional[int] = None) -> ExpressionNode:
    return ExpressionNode(element, (), line=line, column=column)
