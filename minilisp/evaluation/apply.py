"""Application engine for MiniLisp.

Centralizes procedure-call semantics for the evaluator and the conditional forms:
- Built-in procedures: contract check, then the native function on the arguments;
  Python arithmetic failures surface as MiniLisp runtime errors.
- User procedures: a fresh argument scope layered over the captured scope (or the
  caller's scope for a procedure that was never captured), a body scope nested under
  it, contract check, positional binding, then the body evaluated in order.
"""

from __future__ import annotations

from typing import Callable

from minilisp import FoldResult, LispValue
from minilisp.evaluation.contract import verify_contract
from minilisp.types.errors import DivisionByZeroError, NumericOverflowError, ProcedureExpectedError
from minilisp.types.procedure import BuiltinProcedure, Procedure
from minilisp.types.scope import Scope
from minilisp.types.void import Void

EvaluatorFn = Callable[..., FoldResult]


def apply_procedure(
    procedure: Procedure,
    args: list[LispValue],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Call a user procedure.

    Parameters:
    - procedure: the Procedure being applied.
    - args: the already-evaluated argument values.
    - scope: the caller's current scope; used only when the procedure has no
      captured scope of its own.
    - evaluate_fn: evaluates one canonical tree in a scope.

    The captured scope itself is never modified: bindings go into the new argument
    scope and definitions made by the body into the body scope below it.
    """
    arguments_scope = Scope(outer=procedure.scope if procedure.captured else scope)
    body_scope = Scope(outer=arguments_scope)

    verify_contract(procedure, args)
    for parameter, arg in zip(procedure.signature.parameters, args):
        arguments_scope.add(parameter.identifier, arg)

    result: LispValue = Void
    for expression in procedure.body:
        result = evaluate_fn(expression, body_scope)
    return result


def call_thunk(thunk: Procedure, scope: Scope, evaluate_fn: EvaluatorFn) -> LispValue:
    return apply_procedure(thunk, [], scope, evaluate_fn)


def apply(
    head: LispValue,
    args: list[LispValue],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a user Procedure or a BuiltinProcedure; anything else is an error."""
    if isinstance(head, Procedure):
        return apply_procedure(head, args, scope, evaluate_fn)
    elif isinstance(head, BuiltinProcedure):
        verify_contract(head, args)
        try:
            return head.function(list(args))
        except ZeroDivisionError as ex:
            raise DivisionByZeroError(f"{head.name}: division by zero") from ex
        except ArithmeticError as ex:
            raise NumericOverflowError(f"{head.name}: {ex}") from ex
    else:
        raise ProcedureExpectedError(
            "procedure expected", expected="procedure", received=str(head)
        )
