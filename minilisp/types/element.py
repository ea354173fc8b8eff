"""Elements: the tags carried by expression tree nodes.

A node's element is an Identifier, a Value (see minilisp.types.values), or one of the
form markers below. Raw trees produced by the reader use Group and the keyword markers;
the desugar pass leaves only Define, Set, Eval, IfBranches and CondClauses (plus
identifiers and values) behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from minilisp.types.procedure import Procedure


class Element:
    __slots__ = ()


class FormMarker(Element):
    """A stateless marker; two markers are equal when they are of the same class."""

    __slots__ = ()
    keyword = ""

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __str__(self):
        return self.keyword


class Group(FormMarker):
    """A bare parenthesized list; its meaning comes from where it sits."""

    __slots__ = ()


class Define(FormMarker):
    __slots__ = ()
    keyword = "define"


class Set(FormMarker):
    __slots__ = ()
    keyword = "set!"


class Lambda(FormMarker):
    __slots__ = ()
    keyword = "lambda"


class If(FormMarker):
    __slots__ = ()
    keyword = "if"


class Cond(FormMarker):
    __slots__ = ()
    keyword = "cond"


class Let(FormMarker):
    __slots__ = ()
    keyword = "let"


class Eval(FormMarker):
    """Apply the first child (a procedure) to the remaining children."""

    __slots__ = ()


# --- Canonical conditionals (post-desugar) ---

@dataclass(frozen=True)
class IfBranches(Element):
    """Canonical if: each branch is deferred behind a zero-argument procedure."""

    test: Procedure
    then: Procedure
    otherwise: Procedure

    def __str__(self):
        return f"(if {self.test.body[0]} {self.then.body[0]} {self.otherwise.body[0]})"


@dataclass(frozen=True)
class CondClause:
    test: Procedure
    # None means "the clause's value is its test's value"
    body: Optional[Procedure] = None

    def __str__(self):
        parts = [str(self.test.body[0])]
        if self.body is not None:
            parts.extend(str(e) for e in self.body.body)
        return f"({' '.join(parts)})"


@dataclass(frozen=True)
class CondClauses(Element):
    clauses: tuple[CondClause, ...]

    def __str__(self):
        return "(cond " + " ".join(str(c) for c in self.clauses) + ")"


RAW_ONLY_ELEMENTS = (Group, Lambda, If, Cond, Let)

KEYWORD_MARKERS: dict[str, type[FormMarker]] = {
    cls.keyword: cls for cls in (Define, Set, Lambda, If, Cond, Let)
}
