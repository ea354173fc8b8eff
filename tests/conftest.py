import pytest

from minilisp.builtin.env_builtin import register
from minilisp.interpreter import Interpreter
from minilisp.types.scope import Scope


@pytest.fixture
def scope():
    """
    Provides a fresh scope for each test: a child of a scope holding the
    built-ins and nothing else.
    """
    s = Scope()
    register(s)
    return s.child()


@pytest.fixture
def interp():
    """Interpreter with built-ins and the packaged prelude."""
    return Interpreter()


@pytest.fixture
def bare():
    """Interpreter with built-ins only."""
    return Interpreter(prelude=None)


@pytest.fixture
def calls():
    """
    A `log` built-in that records each argument it is called with and returns
    it unchanged, for observing which subexpressions were evaluated.
    """
    from minilisp.types.procedure import BuiltinProcedure, ProcedureSignature

    seen = []

    def log(args):
        seen.append(str(args[0]))
        return args[0]

    builtin = BuiltinProcedure("log", ProcedureSignature.of("x"), log)
    return seen, builtin
