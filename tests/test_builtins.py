import sys

import pytest

from minilisp.builtin.env_builtin import BUILTINS, register
from minilisp.types.errors import (
    ArityMismatchError,
    DivisionByZeroError,
    NumericOverflowError,
    TypeMismatchError,
)
from minilisp.types.identifier import Identifier
from minilisp.types.procedure import BuiltinProcedure
from minilisp.types.scope import Scope
from minilisp.types.values import FALSE, TRUE, Number, String
from minilisp.types.void import Void


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(+ 1 2)", Number(3)),
        ("(- 1 2)", Number(-1)),
        ("(* 4 2.5)", Number(10.0)),
        ("(/ 6 3)", Number(2)),
        ("(/ 7 2)", Number(3.5)),
        ("(remainder 7 3)", Number(1)),
        ("(remainder -7 3)", Number(-1)),
        ("(remainder 7 -3)", Number(1)),
    ],
)
def test_arithmetic(bare, source, expected):
    assert bare.eval(source) == expected


def test_exact_division_stays_integer(bare):
    assert isinstance(bare.eval("(/ 6 3)").value, int)


@pytest.mark.parametrize("source", ["(/ 1 0)", "(remainder 1 0)"])
def test_division_by_zero(bare, source):
    with pytest.raises(DivisionByZeroError):
        bare.eval(source)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(= 1 1)", TRUE),
        ("(= 1 1.0)", TRUE),
        ("(< 1 2)", TRUE),
        ("(> 1 2)", FALSE),
        ("(<= 2 2)", TRUE),
        ("(>= 1 2)", FALSE),
        ("(not #f)", TRUE),
        ("(not 0)", FALSE),
        ('(eq? "a" "a")', TRUE),
        ('(eq? 1 "1")', FALSE),
        ("(eq? + +)", TRUE),
        ("(number? 1)", TRUE),
        ('(string? "x")', TRUE),
        ("(boolean? #f)", TRUE),
        ("(boolean? 0)", FALSE),
        ("(procedure? +)", TRUE),
        ("(procedure? (lambda () 1))", TRUE),
        ("(void? (newline))", TRUE),
        ("(void? 0)", FALSE),
    ],
)
def test_predicates(bare, source, expected, capsys):
    assert bare.eval(source) == expected


def test_strings(bare):
    assert bare.eval('(string-append "ab" "cd")') == String("abcd")
    assert bare.eval('(string-length "hello")') == Number(5)
    assert bare.eval("(quoted->string '(f  x   1))") == String("(f x 1)")


def test_display_and_newline(bare, capsys):
    assert bare.eval('(display "hi")') is Void
    bare.eval("(display 42)")
    bare.eval("(newline)")
    assert capsys.readouterr().out == "hi42\n"


@pytest.mark.parametrize("source", ['(+ 1 "2")', "(string-length 5)", "(quoted->string 1)", "(< #t 1)"])
def test_declared_kinds_are_enforced(bare, source):
    with pytest.raises(TypeMismatchError):
        bare.eval(source)


@pytest.mark.parametrize("source", ["(+ 1)", "(+ 1 2 3)", "(not)", "(newline 1)"])
def test_builtins_have_fixed_arity(bare, source):
    with pytest.raises(ArityMismatchError):
        bare.eval(source)


def test_register_binds_every_builtin():
    s = Scope()
    register(s)
    for builtin in BUILTINS:
        assert s.read(Identifier(builtin.name)) is builtin


def test_register_extra_builtins():
    extra = BuiltinProcedure("answer", BUILTINS[-1].signature, lambda args: Number(42))
    s = Scope()
    register(s, [extra])
    assert s.read(Identifier("answer")) is extra


BIG = "1" + "0" * 400


@pytest.mark.parametrize("source", [f"(/ {BIG} 3)", f"(+ 1.5 {BIG})"])
def test_float_overflow_is_a_runtime_error(bare, source):
    with pytest.raises(NumericOverflowError) as info:
        bare.eval(source)
    assert info.value.position == (1, 1)


def test_overflow_does_not_stop_later_forms(bare):
    outcomes = bare.eval_each(f"(/ {BIG} 3) (+ 1 2)")
    assert isinstance(outcomes[0], NumericOverflowError)
    assert outcomes[1] == Number(3)


def test_huge_integers_still_print():
    assert str(Number(10 ** 20)) == "100000000000000000000"
    limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
    if limit:
        assert str(Number(10 ** (limit + 10))).startswith("#<integer of")
