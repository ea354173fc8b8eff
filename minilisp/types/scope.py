"""Lexical scopes for MiniLisp.

A Scope stores bindings of Identifiers to Values and links to the enclosing scope via
`outer`. The link is only used for lookups; a scope stays alive as long as a closure or
a nested scope refers to it. A sealed scope level rejects new bindings and assignment.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from minilisp import LispValue
from minilisp.types.errors import (
    DuplicateDefinitionError,
    SealedScopeError,
    UnboundAssignmentError,
    UnboundIdentifierError,
)
from minilisp.types.identifier import Identifier


class Scope:
    """Hierarchical mapping from Identifiers to runtime values."""

    __slots__ = ("vars", "outer", "sealed", "__weakref__")

    def __init__(self, outer: Optional[Scope] = None):
        self.vars: dict[Identifier, LispValue] = {}
        self.outer: Scope | None = outer
        self.sealed: bool = False

    def child(self) -> Scope:
        return Scope(outer=self)

    def seal(self) -> None:
        """Make this level read-only. Child scopes are unaffected."""
        self.sealed = True

    def add(self, name: Identifier, value: LispValue) -> None:
        """Bind `name` to `value` at this level.

        Raises DuplicateDefinitionError if `name` is already bound here (bindings in
        outer scopes may be shadowed), SealedScopeError if this level is sealed.
        """
        if self.sealed:
            raise SealedScopeError(f"cannot define {name} in a sealed scope")
        if name in self.vars:
            raise DuplicateDefinitionError(name)
        self.vars[name] = value

    def lookup_scope(self, name: Identifier) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.outer
        return None

    def read(self, name: Identifier) -> LispValue:
        """Look up the value bound to `name`, walking outward.

        Raises UnboundIdentifierError if no scope in the chain binds it.
        """
        scope = self.lookup_scope(name)
        if scope is None:
            raise UnboundIdentifierError(name)
        return scope.vars[name]

    def write(self, name: Identifier, value: LispValue) -> None:
        """Rebind the nearest existing binding of `name`.

        Raises UnboundAssignmentError if the name is unbound everywhere in the chain,
        SealedScopeError if the binding lives in a sealed scope.
        """
        scope = self.lookup_scope(name)
        if scope is None:
            raise UnboundAssignmentError(name)
        if scope.sealed:
            raise SealedScopeError(f"cannot set! {name}: it is bound in a sealed scope")
        scope.vars[name] = value

    def contains(self, name: Identifier) -> bool:
        """True if `name` is bound at this level (outer scopes are not consulted)."""
        return name in self.vars

    def __contains__(self, name: Identifier) -> bool:
        return self.lookup_scope(name) is not None

    def chain(self) -> Iterator[Scope]:
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Scope chain: ")
            frames = []
            for scope in self.chain():
                frame_buf = StringIO()
                scope._write_vars(frame_buf)
                frames.append(frame_buf.getvalue())
            buffer.write(" -> ".join(frames))
            buffer.write(">")
            return buffer.getvalue()
