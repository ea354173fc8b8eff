"""Runtime values: the only things a scope may bind or a procedure may return."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from minilisp.types.element import Element

if TYPE_CHECKING:
    from minilisp.types.expression import ExpressionNode


class Value(Element):
    __slots__ = ()

    # Human-readable kind name used in type-mismatch diagnostics
    kind_name = "value"


@dataclass(frozen=True)
class Boolean(Value):
    value: bool
    kind_name = "boolean"

    def __str__(self):
        return "#t" if self.value else "#f"


@dataclass(frozen=True)
class Number(Value):
    value: Union[int, float]
    kind_name = "number"

    def __str__(self):
        try:
            return str(self.value)
        except ValueError:
            # Integers past Python's decimal conversion limit
            return f"#<integer of {self.value.bit_length()} bits>"


@dataclass(frozen=True)
class String(Value):
    value: str
    kind_name = "string"

    def __str__(self):
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class QuotedExpression(Value):
    """An expression held as a first-class value, never evaluated."""

    expression: ExpressionNode
    kind_name = "quoted expression"

    def __str__(self):
        return "'" + str(self.expression)


TRUE = Boolean(True)
FALSE = Boolean(False)


def is_truthy(value: Value) -> bool:
    """Everything except the literal #f is true, Void included."""
    return not (isinstance(value, Boolean) and value.value is False)
