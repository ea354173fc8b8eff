import pytest
from hypothesis import given, strategies as st

from minilisp.interpreter import Interpreter
from minilisp.types.errors import ArityMismatchError, ElseNotAllowedError, TypeMismatchError
from minilisp.types.values import FALSE, TRUE, Number, String, is_truthy
from minilisp.types.void import Void


@pytest.fixture
def traced(calls):
    """Interpreter without prelude plus the recording `log` built-in."""
    seen, log = calls
    return Interpreter(prelude=None, builtins=[log]), seen


# ------------------ if ------------------

def test_if_evaluates_only_the_chosen_branch(traced):
    itp, seen = traced
    assert itp.eval('(if (log #t) (log "then") (log "else"))') == String("then")
    assert seen == ["#t", '"then"']


def test_if_false_branch(traced):
    itp, seen = traced
    assert itp.eval('(if (log #f) (log "then") (log "else"))') == String("else")
    assert seen == ["#f", '"else"']


@pytest.mark.parametrize("test", ["0", '""', "'()", "(lambda () #f)", "(newline)"])
def test_everything_but_false_is_truthy_in_if(bare, test, capsys):
    assert bare.eval(f"(if {test} 1 2)") == Number(1)


def test_if_branch_is_not_evaluated_when_unbound(bare):
    assert bare.eval("(if #t 1 undefined-name)") == Number(1)


# ------------------ cond ------------------

def test_cond_stops_at_first_truthy_clause(traced):
    itp, seen = traced
    result = itp.eval(
        """
        (cond ((log #f) (log 1))
              ((log #t) (log 2))
              ((log #t) (log 3))
              (else (log 4)))
        """
    )
    assert result == Number(2)
    assert seen == ["#f", "#t", "2"]


def test_cond_else(bare):
    assert bare.eval("(cond (#f 1) (else 2 3))") == Number(3)


def test_cond_clause_without_body_yields_test_value(bare):
    assert bare.eval("(cond (#f 1) (42))") == Number(42)


def test_cond_without_match_is_void(bare):
    assert bare.eval("(cond (#f 1))") is Void
    assert bare.eval("(cond)") is Void


def test_else_outside_cond(bare):
    with pytest.raises(ElseNotAllowedError):
        bare.eval("(if else 1 2)")


# ------------------ let ------------------

def test_let_binds_in_new_scope(bare):
    bare.eval("(define x 1)")
    assert bare.eval("(let ((x 10) (y 2)) (+ x y))") == Number(12)
    assert bare.eval("x") == Number(1)


def test_let_values_see_outer_scope(bare):
    # bindings are evaluated before the body scope exists
    bare.eval("(define x 1)")
    assert bare.eval("(let ((x 2) (y x)) y)") == Number(1)


small_ints = st.integers(min_value=-50, max_value=50)


@given(small_ints, small_ints)
def test_let_equals_lambda_application(a, b):
    itp = Interpreter(prelude=None)
    let_result = itp.eval(f"(let ((x {a}) (y {b})) (- (* x 2) y))")
    lambda_result = itp.eval(f"((lambda (x y) (- (* x 2) y)) {a} {b})")
    assert let_result == lambda_result == Number(a * 2 - b)


# ------------------ Closures and procedures ------------------

def test_make_adder_closure(bare):
    bare.eval("(define (make-adder n) (lambda (x) (+ x n)))")
    bare.eval("(define add2 (make-adder 2))")
    bare.eval("(define add10 (make-adder 10))")
    assert bare.eval("(add2 1)") == Number(3)
    assert bare.eval("(add10 1)") == Number(11)


def test_counter_closure_keeps_private_state(bare):
    bare.eval(
        """
        (define (make-counter)
          (let ((count 0))
            (lambda () (set! count (+ count 1)) count)))
        (define c1 (make-counter))
        (define c2 (make-counter))
        """
    )
    assert bare.eval("(c1) (c1) (c2)") == [Number(1), Number(2), Number(1)]


def test_arity_mismatch_evaluates_no_body(traced):
    itp, seen = traced
    itp.eval("(define (f a b) (log a))")
    with pytest.raises(ArityMismatchError):
        itp.eval("(f 1)")
    assert seen == []


def test_type_mismatch_from_builtin(bare):
    with pytest.raises(TypeMismatchError) as info:
        bare.eval('(+ 1 "two")')
    assert info.value.expected == "number"


def test_higher_order_procedures(interp):
    assert interp.eval("((compose square abs) -3)") == Number(9)


def test_procedure_as_value_prints_name(bare):
    bare.eval("(define (f) 1)")
    assert str(bare.eval("f")) == "#<procedure f>"
    assert str(bare.eval("(lambda () 1)")) == "#<procedure <lambda>>"
    assert str(bare.eval("+")) == "#<builtin +>"


# ------------------ Truthiness ------------------

values = st.one_of(
    st.integers().map(Number),
    st.text(max_size=5).map(String),
    st.just(TRUE),
    st.just(Void),
)


@given(values)
def test_only_false_is_falsy(value):
    assert is_truthy(value)
    assert not is_truthy(FALSE)
