import pytest

from minilisp.interpreter import Interpreter
from minilisp.types.errors import SealedScopeError
from minilisp.types.values import FALSE, TRUE, Number


@pytest.fixture(scope="module")
def itp():
    return Interpreter()


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(abs -4)", Number(4)),
        ("(abs 4)", Number(4)),
        ("(min 3 7)", Number(3)),
        ("(max 3 7)", Number(7)),
        ("(square 5)", Number(25)),
        ("(zero? 0)", TRUE),
        ("(zero? 1)", FALSE),
        ("(even? 10)", TRUE),
        ("(odd? 10)", FALSE),
        ("(odd? -3)", TRUE),
        ("(identity 9)", Number(9)),
        ("((compose (lambda (x) (+ x 1)) square) 3)", Number(10)),
    ],
)
def test_prelude_definitions(itp, source, expected):
    assert itp.eval(source) == expected


def test_prelude_cannot_be_reassigned(itp):
    with pytest.raises(SealedScopeError):
        itp.eval("(set! square 1)")


def test_prelude_can_be_shadowed_per_session():
    fresh = Interpreter()
    fresh.eval("(define (square x) 0)")
    assert fresh.eval("(square 3)") == Number(0)
    fresh.reset()
    assert fresh.eval("(square 3)") == Number(9)


def test_prelude_path_override(tmp_path, monkeypatch):
    prelude = tmp_path / "mine.lsp"
    prelude.write_text("(define answer 42)", encoding="utf-8")
    monkeypatch.setenv("MINILISP_PRELUDE_PATH", str(prelude))
    assert Interpreter().eval("answer") == Number(42)


def test_prelude_directory_override(tmp_path, monkeypatch):
    (tmp_path / "stdlib.lsp").write_text("(define (triple x) (* 3 x))", encoding="utf-8")
    monkeypatch.setenv("MINILISP_PRELUDE_PATH", str(tmp_path))
    assert Interpreter().eval("(triple 2)") == Number(6)


def test_missing_prelude_is_tolerated(tmp_path, monkeypatch):
    monkeypatch.setenv("MINILISP_PRELUDE_PATH", str(tmp_path / "nope.lsp"))
    itp = Interpreter()
    assert itp.eval("(+ 1 1)") == Number(2)


def test_prelude_source_string():
    itp = Interpreter(prelude="(define two 2)")
    assert itp.eval("(+ two two)") == Number(4)
