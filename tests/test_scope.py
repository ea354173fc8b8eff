import pytest

from minilisp.types.errors import (
    DuplicateDefinitionError,
    SealedScopeError,
    UnboundAssignmentError,
    UnboundIdentifierError,
)
from minilisp.types.identifier import Identifier
from minilisp.types.scope import Scope
from minilisp.types.values import Number

X = Identifier("x")
Y = Identifier("y")


def test_add_and_read():
    s = Scope()
    s.add(X, Number(1))
    assert s.read(X) == Number(1)
    assert s.contains(X)
    assert X in s


def test_read_walks_outward():
    outer = Scope()
    outer.add(X, Number(1))
    inner = outer.child()
    assert inner.read(X) == Number(1)
    assert not inner.contains(X)
    assert X in inner
    assert inner.lookup_scope(X) is outer


def test_unbound_read():
    with pytest.raises(UnboundIdentifierError) as info:
        Scope().read(X)
    assert info.value.identifier == X


def test_duplicate_at_same_level():
    s = Scope()
    s.add(X, Number(1))
    with pytest.raises(DuplicateDefinitionError):
        s.add(X, Number(2))
    assert s.read(X) == Number(1)


def test_shadowing_in_child():
    outer = Scope()
    outer.add(X, Number(1))
    inner = outer.child()
    inner.add(X, Number(2))
    assert inner.read(X) == Number(2)
    assert outer.read(X) == Number(1)


def test_write_updates_nearest_binding():
    outer = Scope()
    outer.add(X, Number(1))
    inner = outer.child()
    inner.write(X, Number(5))
    assert outer.read(X) == Number(5)
    assert not inner.contains(X)


def test_write_unbound():
    with pytest.raises(UnboundAssignmentError):
        Scope().write(Y, Number(1))


def test_sealed_scope_rejects_changes():
    base = Scope()
    base.add(X, Number(1))
    base.seal()
    with pytest.raises(SealedScopeError):
        base.add(Y, Number(2))
    with pytest.raises(SealedScopeError):
        base.child().write(X, Number(2))
    assert base.read(X) == Number(1)


def test_child_of_sealed_scope_is_open():
    base = Scope()
    base.seal()
    child = base.child()
    child.add(X, Number(1))
    child.write(X, Number(2))
    assert child.read(X) == Number(2)


def test_chain_and_str():
    outer = Scope()
    outer.add(X, Number(1))
    inner = outer.child()
    inner.add(Y, Number(2))
    assert list(inner.chain()) == [inner, outer]
    assert str(inner) == "{y: 2} -> ..."
    assert repr(inner) == "<Scope chain: {y: 2} -> {x: 1}>"
