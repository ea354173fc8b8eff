"""Procedure values, signatures and parameters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional

from minilisp import NativeFn
from minilisp.types.identifier import Identifier
from minilisp.types.values import Value

if TYPE_CHECKING:
    from minilisp.types.expression import ExpressionNode
    from minilisp.types.scope import Scope


@dataclass(frozen=True)
class ProcedureParameter:
    identifier: Identifier
    # Declared kind: arguments must be instances of this Value subclass
    kind: type = Value

    def __str__(self):
        return str(self.identifier)


@dataclass(frozen=True)
class ProcedureSignature:
    parameters: tuple[ProcedureParameter, ...] = ()

    @classmethod
    def of(cls, *names: str | Identifier, kind: type = Value) -> ProcedureSignature:
        return cls(tuple(
            ProcedureParameter(n if isinstance(n, Identifier) else Identifier(n), kind)
            for n in names
        ))

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def identifiers(self) -> list[Identifier]:
        return [p.identifier for p in self.parameters]

    def __str__(self):
        return "(" + " ".join(str(p) for p in self.parameters) + ")"


class ProcedureBase(Value):
    __slots__ = ()
    kind_name = "procedure"

    name: Optional[str]
    signature: ProcedureSignature

    @property
    def display_name(self) -> str:
        return self.name or "<lambda>"


@dataclass(frozen=True)
class Procedure(ProcedureBase):
    """A user procedure: signature, body and (once evaluated bare) a captured scope."""

    signature: ProcedureSignature
    body: tuple[ExpressionNode, ...]
    scope: Optional[Scope] = field(default=None, compare=False, repr=False)
    name: Optional[str] = None

    @property
    def captured(self) -> bool:
        return self.scope is not None

    def capture(self, scope: Scope) -> Procedure:
        """Copy of this procedure closed over `scope`."""
        return replace(self, scope=scope)

    @classmethod
    def thunk(cls, *body: ExpressionNode) -> Procedure:
        """Zero-argument procedure deferring evaluation of `body`."""
        return cls(ProcedureSignature(), tuple(body), name="<thunk>")

    def __str__(self):
        return f"#<procedure {self.display_name}>"


@dataclass(frozen=True)
class BuiltinProcedure(ProcedureBase):
    name: str
    signature: ProcedureSignature
    function: NativeFn = field(compare=False, repr=False)
    doc: str = field(default="", compare=False, repr=False)

    def __str__(self):
        return f"#<builtin {self.name}>"
