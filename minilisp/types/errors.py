"""Error taxonomy for MiniLisp.

Every error raised by the reader, the desugar pass or the evaluator derives from
MiniLispError and carries the offending node (when there is one) plus optional
expected/received descriptions for diagnostics.
"""

from __future__ import annotations

from typing import Any, Optional


class MiniLispError(Exception):
    """ Base class for all MiniLisp errors"""

    def __init__(
        self,
        message: str,
        node: Any = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
    ):
        self.message = message
        self.node = node
        self.expected = expected
        self.received = received
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.expected is not None:
            parts.append(f"expected: {self.expected}")
        if self.received is not None:
            parts.append(f"received: {self.received}")
        return "; ".join(parts)

    @property
    def position(self) -> tuple[int, int] | None:
        """(line, column) of the offending node, 1-based, if the reader recorded one."""
        line = getattr(self.node, "line", None)
        if line is None:
            return None
        return line, self.node.column


# --- Families ---

class MiniLispSyntaxError(MiniLispError):
    """ Raised by the reader on malformed source text"""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        super().__init__(message)

    @property
    def position(self) -> tuple[int, int] | None:
        if self.line is None:
            return None
        return self.line, self.column


class MiniLispFormError(MiniLispError):
    """ Raised by the desugar pass when a form has the wrong shape"""


class MiniLispRuntimeError(MiniLispError):
    """ Raised while evaluating a canonical tree"""


class DuplicateIdentifierError(MiniLispError):
    """ Raised when a name is introduced twice where names must be distinct"""

    def __init__(self, message: str, identifier: Any = None, node: Any = None):
        self.identifier = identifier
        super().__init__(message, node=node)


# --- Structural (desugar) ---

class IfPartExpectedError(MiniLispFormError):
    """ Raised when an if form is missing its test, then or else part"""

    def __init__(self, part: str, node: Any = None):
        self.part = part
        super().__init__(f"if: {part} part expected", node=node, expected="(if test then else)")


class IfTooManyPartsError(MiniLispFormError):
    """ Raised when an if form has more than three parts"""

    def __init__(self, count: int, node: Any = None):
        self.count = count
        super().__init__("if: too many parts", node=node, expected="3 parts", received=f"{count} parts")


class CondClauseExpectedError(MiniLispFormError):
    """ Raised when a cond clause is not a non-empty parenthesized group"""


class ElseNotAllowedError(MiniLispFormError):
    """ Raised when else appears outside the head of a cond clause"""

    def __init__(self, node: Any = None):
        super().__init__('"else" not allowed here', node=node)


class ElseMustBeLastError(MiniLispFormError):
    """ Raised when the else clause is not the last clause of its cond"""

    def __init__(self, node: Any = None):
        super().__init__("else clause must be the last clause of cond", node=node)


class ElseClauseEmptyError(MiniLispFormError):
    """ Raised when an else clause has no expressions after else"""

    def __init__(self, node: Any = None):
        super().__init__("expressions expected in else clause", node=node)


class LetPartExpectedError(MiniLispFormError):
    """ Raised when a let form is missing its bindings or its body"""

    def __init__(self, part: str, node: Any = None):
        self.part = part
        super().__init__(f"let: {part} expected", node=node, expected="(let ((name expr) ...) body ...)")


class LetBindingExpectedError(MiniLispFormError):
    """ Raised when a let binding is not an (identifier expression) pair"""


class DuplicateLetIdentifierError(MiniLispFormError, DuplicateIdentifierError):
    """ Raised when a let binds the same identifier twice"""

    def __init__(self, identifier: Any, node: Any = None):
        DuplicateIdentifierError.__init__(
            self, f"let: duplicate identifier {identifier}", identifier=identifier, node=node
        )


class SignatureExpectedError(MiniLispFormError):
    """ Raised when lambda/define is not followed by a parameter group"""


class ProcedureBodyExpectedError(MiniLispFormError):
    """ Raised when a lambda/define has a signature but no body expressions"""


class DuplicateParameterError(MiniLispFormError, DuplicateIdentifierError):
    """ Raised when a signature names the same parameter twice"""

    def __init__(self, identifier: Any, node: Any = None):
        DuplicateIdentifierError.__init__(
            self, f"duplicate parameter {identifier}", identifier=identifier, node=node
        )


class IdentifierExpectedError(MiniLispFormError):
    """ Raised when a non-identifier appears where a name is required"""


class NotDesugaredError(MiniLispFormError):
    """ Raised when a raw-only form reaches the evaluator"""


# --- Semantic (evaluation) ---

class UnboundIdentifierError(MiniLispRuntimeError):
    """ Raised when an identifier is read before it is bound"""

    def __init__(self, identifier: Any, node: Any = None):
        self.identifier = identifier
        super().__init__(f"unbound identifier {identifier}", node=node)


class UnboundAssignmentError(UnboundIdentifierError):
    """ Raised when set! targets a name bound nowhere in the scope chain"""

    def __init__(self, identifier: Any, node: Any = None):
        self.identifier = identifier
        MiniLispRuntimeError.__init__(self, f"cannot set! unbound identifier {identifier}", node=node)


class ProcedureExpectedError(MiniLispRuntimeError):
    """ Raised when a non-procedure value is applied"""


class ArityMismatchError(MiniLispRuntimeError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""

    def __init__(self, procedure: str, expected: int, received: int, node: Any = None):
        self.procedure = procedure
        self.expected_count = expected
        self.received_count = received
        super().__init__(
            f"{procedure}: wrong number of arguments",
            node=node,
            expected=str(expected),
            received=str(received),
        )


class TypeMismatchError(MiniLispRuntimeError):
    """ Raised when an argument is not of the kind its parameter declares"""


class DuplicateDefinitionError(MiniLispRuntimeError, DuplicateIdentifierError):
    """ Raised when define introduces a name already bound at the same scope level"""

    def __init__(self, identifier: Any, node: Any = None):
        DuplicateIdentifierError.__init__(
            self, f"duplicate definition of {identifier}", identifier=identifier, node=node
        )


class MultipleExpressionsError(MiniLispRuntimeError):
    """ Raised when define/set! is given more than one value expression"""


class ValueExpectedError(MiniLispRuntimeError):
    """ Raised when define/set! has nothing (or a non-value) to bind"""


class SealedScopeError(MiniLispRuntimeError):
    """ Raised when a sealed (read-only) scope level would be modified"""


class DivisionByZeroError(MiniLispRuntimeError):
    """ Raised by arithmetic built-ins on a zero divisor"""


class NumericOverflowError(MiniLispRuntimeError):
    """ Raised when an arithmetic result cannot be represented"""
