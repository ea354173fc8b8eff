"""Procedure-call contract: checked at every application before anything is bound."""

from __future__ import annotations

from typing import Any, Sequence

from minilisp.types.errors import ArityMismatchError, TypeMismatchError
from minilisp.types.procedure import ProcedureBase


def kind_name(kind: type) -> str:
    return getattr(kind, "kind_name", kind.__name__)


def verify_contract(procedure: ProcedureBase, args: Sequence[Any], node=None) -> None:
    """
    The argument count must equal the parameter count exactly, and each argument
    must be an instance of its parameter's declared kind.

    Raises ArityMismatchError or TypeMismatchError naming the procedure.
    """
    signature = procedure.signature
    if len(args) != signature.arity:
        raise ArityMismatchError(procedure.display_name, signature.arity, len(args), node=node)

    for position, (parameter, arg) in enumerate(zip(signature.parameters, args), start=1):
        if not isinstance(arg, parameter.kind):
            raise TypeMismatchError(
                f"{procedure.display_name}: argument {position} ({parameter}) has the wrong kind",
                node=node,
                expected=kind_name(parameter.kind),
                received=f"{arg} ({kind_name(type(arg))})",
            )
