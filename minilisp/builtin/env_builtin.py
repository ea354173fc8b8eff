"""Built-in procedures for the MiniLisp runtime.

This module defines core arithmetic, comparison, predicates, string helpers and
output procedures, and the registration utility that binds them into a scope.
Every built-in has a fixed signature with declared parameter kinds, so arity and
type errors are reported by the contract check before the native function runs.
"""
from __future__ import annotations

from typing import Iterable

from minilisp import LispValue
from minilisp.types.errors import DivisionByZeroError
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import (
    BuiltinProcedure,
    ProcedureBase,
    ProcedureParameter,
    ProcedureSignature,
)
from minilisp.types.scope import Scope
from minilisp.types.values import (
    FALSE,
    TRUE,
    Boolean,
    Number,
    QuotedExpression,
    String,
    Value,
)
from minilisp.types.void import Void, VoidType


def signature(*parameters: tuple[str, type]) -> ProcedureSignature:
    """Signature from (name, kind) pairs."""
    return ProcedureSignature(tuple(
        ProcedureParameter(Identifier(name), kind) for name, kind in parameters
    ))


def boolean(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[LispValue]) -> Number:
    a, b = args
    return Number(a.value + b.value)


def sub(args: list[LispValue]) -> Number:
    a, b = args
    return Number(a.value - b.value)


def mul(args: list[LispValue]) -> Number:
    a, b = args
    return Number(a.value * b.value)


def div(args: list[LispValue]) -> Number:
    """Exact when both operands are integers and the division has no remainder."""
    a, b = args
    if b.value == 0:
        raise DivisionByZeroError("/: division by zero")
    if isinstance(a.value, int) and isinstance(b.value, int) and a.value % b.value == 0:
        return Number(a.value // b.value)
    return Number(a.value / b.value)


def remainder(args: list[LispValue]) -> Number:
    """(remainder n d): the result takes the sign of n."""
    a, b = args
    if b.value == 0:
        raise DivisionByZeroError("remainder: division by zero")
    r = abs(a.value) % abs(b.value)
    return Number(-r if a.value < 0 else r)


# -------------------------------
# Comparison
# -------------------------------
def num_eq(args: list[LispValue]) -> Boolean:
    a, b = args
    return boolean(a.value == b.value)


def lt(args: list[LispValue]) -> Boolean:
    a, b = args
    return boolean(a.value < b.value)


def gt(args: list[LispValue]) -> Boolean:
    a, b = args
    return boolean(a.value > b.value)


def lte(args: list[LispValue]) -> Boolean:
    a, b = args
    return boolean(a.value <= b.value)


def gte(args: list[LispValue]) -> Boolean:
    a, b = args
    return boolean(a.value >= b.value)


# -------------------------------
# Predicates
# -------------------------------
def logical_not(args: list[LispValue]) -> Boolean:
    """Only #f is false, so (not x) is #t exactly when x is #f."""
    return boolean(args[0] == FALSE)


def is_eq(args: list[LispValue]) -> Boolean:
    a, b = args
    if a is b:
        return TRUE
    if type(a) != type(b) or isinstance(a, ProcedureBase):
        return FALSE
    return boolean(a == b)


def kind_predicate(kind: type):
    def predicate(args: list[LispValue]) -> Boolean:
        return boolean(isinstance(args[0], kind))
    return predicate


# -------------------------------
# Strings and output
# -------------------------------
def string_append(args: list[LispValue]) -> String:
    a, b = args
    return String(a.value + b.value)


def string_length(args: list[LispValue]) -> Number:
    return Number(len(args[0].value))


def quoted_to_string(args: list[LispValue]) -> String:
    return String(str(args[0].expression))


def _to_display(x: LispValue) -> str:
    if isinstance(x, String):
        return x.value
    return str(x)


def display(args: list[LispValue]) -> VoidType:
    """Write the argument to stdout; strings are written without quotes."""
    print(_to_display(args[0]), end="")
    return Void


def newline(args: list[LispValue]) -> VoidType:
    print()
    return Void


NUMBER_PAIR = signature(("a", Number), ("b", Number))
ANY_ONE = signature(("x", Value))

BUILTINS: tuple[BuiltinProcedure, ...] = (
    BuiltinProcedure("+", NUMBER_PAIR, add, "Sum of two numbers."),
    BuiltinProcedure("-", NUMBER_PAIR, sub, "Difference of two numbers."),
    BuiltinProcedure("*", NUMBER_PAIR, mul, "Product of two numbers."),
    BuiltinProcedure("/", NUMBER_PAIR, div, "Quotient of two numbers."),
    BuiltinProcedure("remainder", NUMBER_PAIR, remainder, "Remainder with the sign of the dividend."),
    BuiltinProcedure("=", NUMBER_PAIR, num_eq, "Numeric equality."),
    BuiltinProcedure("<", NUMBER_PAIR, lt, "Numeric less-than."),
    BuiltinProcedure(">", NUMBER_PAIR, gt, "Numeric greater-than."),
    BuiltinProcedure("<=", NUMBER_PAIR, lte, "Numeric less-than-or-equal."),
    BuiltinProcedure(">=", NUMBER_PAIR, gte, "Numeric greater-than-or-equal."),
    BuiltinProcedure("not", ANY_ONE, logical_not, "#t if the argument is #f."),
    BuiltinProcedure("eq?", signature(("a", Value), ("b", Value)), is_eq, "Same kind and equal value."),
    BuiltinProcedure("number?", ANY_ONE, kind_predicate(Number), "#t for numbers."),
    BuiltinProcedure("string?", ANY_ONE, kind_predicate(String), "#t for strings."),
    BuiltinProcedure("boolean?", ANY_ONE, kind_predicate(Boolean), "#t for booleans."),
    BuiltinProcedure("procedure?", ANY_ONE, kind_predicate(ProcedureBase), "#t for procedures and built-ins."),
    BuiltinProcedure("void?", ANY_ONE, kind_predicate(VoidType), "#t for the void value."),
    BuiltinProcedure(
        "string-append", signature(("a", String), ("b", String)), string_append, "Concatenate two strings."
    ),
    BuiltinProcedure("string-length", signature(("s", String)), string_length, "Length of a string."),
    BuiltinProcedure("display", ANY_ONE, display, "Write a value to standard output."),
    BuiltinProcedure("newline", ProcedureSignature(), newline, "Write a line break to standard output."),
    BuiltinProcedure(
        "quoted->string",
        signature(("q", QuotedExpression)),
        quoted_to_string,
        "Source text of a quoted expression.",
    ),
)


def register(scope: Scope, extra: Iterable[BuiltinProcedure] = ()) -> None:
    """Register all builtin procedures (plus any `extra` ones) into the given scope."""
    for builtin in (*BUILTINS, *extra):
        scope.add(Identifier(builtin.name), builtin)
