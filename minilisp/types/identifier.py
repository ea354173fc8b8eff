from __future__ import annotations
import sys

from minilisp.types.element import Element


class Identifier(Element):
    __slots__ = ("name",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.name = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Identifier) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Identifier({self.name!r})"

    def __str__(self):
        return self.name


ELSE = Identifier("else")
