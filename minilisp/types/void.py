from __future__ import annotations

from minilisp.types.values import Value


class VoidType(Value):
    """Result of definitions and side-effecting forms."""

    __slots__ = ()

    def __repr__(self): return "Void"
    def __str__(self): return "#<void>"

    def __eq__(self, other):
        return isinstance(other, VoidType)

    def __hash__(self):
        return hash(VoidType)


Void = VoidType()
