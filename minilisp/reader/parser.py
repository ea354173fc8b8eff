"""
  MiniLisp Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits raw ExpressionNode trees for the desugar pass:

    - integers / floats         -> Number value
    - "strings"                 -> String value
    - #t / #f                   -> Boolean value
    - 'expr and (quote expr)    -> QuotedExpression value
    - (define ...), (set! ...), (lambda ...), (if ...), (cond ...), (let ...)
                                -> node with that form marker; the keyword is dropped
    - any other list            -> Group node
    - any other atom            -> Identifier

  Every node records the 1-based line and column where it starts.
"""

from __future__ import annotations

import json
import re
from typing import Iterator, NamedTuple, Optional

from minilisp.types.element import KEYWORD_MARKERS, Group
from minilisp.types.errors import MiniLispSyntaxError
from minilisp.types.expression import ExpressionNode, leaf
from minilisp.types.identifier import Identifier
from minilisp.types.values import FALSE, TRUE, Number, QuotedExpression, String


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<whitespace>\s+)"
    r"|(?P<quote>')"  # 'expr
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<unterminated>")'  # a quote that never closes
    r"|(?P<atom>[^\s()'\";]+)"  # fallback: numbers, booleans, identifiers
)

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?")

QUOTE = Identifier("quote")


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    column: int


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens, skipping whitespace and comments."""
    pos = 0
    line = 1
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        text = m.group(kind)
        column = pos - line_start + 1

        if kind == "unterminated":
            raise MiniLispSyntaxError(f"unterminated string at line {line}, column {column}", line, column)
        if kind not in ("comment", "whitespace"):
            yield Token(kind, text, line, column)

        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rfind("\n") + 1
        pos = m.end()


def parse_atom(token: Token) -> ExpressionNode:
    text = token.text
    if text == "#t":
        return leaf(TRUE, token.line, token.column)
    if text == "#f":
        return leaf(FALSE, token.line, token.column)
    if INT_RE.fullmatch(text):
        try:
            value = int(text)
        except ValueError as ex:
            # Python caps decimal string conversion of very long integers
            raise MiniLispSyntaxError(
                f"integer literal too long at line {token.line}, column {token.column}",
                token.line,
                token.column,
            ) from ex
        return leaf(Number(value), token.line, token.column)
    if FLOAT_RE.fullmatch(text):
        return leaf(Number(float(text)), token.line, token.column)
    return leaf(Identifier(text), token.line, token.column)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Optional[ExpressionNode]:
        """Parse one expression; None at end of input."""
        token = self.advance()
        if token is None:
            return None

        if token.kind == "atom":
            return parse_atom(token)

        if token.kind == "string":
            try:
                text = json.loads(token.text, strict=False)
            except json.JSONDecodeError as ex:
                raise MiniLispSyntaxError(
                    f"invalid string literal at line {token.line}, column {token.column}: {ex.msg}",
                    token.line,
                    token.column,
                ) from ex
            return leaf(String(text), token.line, token.column)

        if token.kind == "quote":
            expr = self.parse_expr()
            if expr is None:
                raise MiniLispSyntaxError(
                    f"expression expected after quote at line {token.line}, column {token.column}",
                    token.line,
                    token.column,
                )
            return leaf(QuotedExpression(expr), token.line, token.column)

        if token.kind == "lparen":
            return self._parse_list(token)

        if token.kind == "rparen":
            raise MiniLispSyntaxError(
                f"unexpected ')' at line {token.line}, column {token.column}", token.line, token.column
            )

        raise MiniLispSyntaxError(
            f"unknown token {token.text!r} at line {token.line}", token.line, token.column
        )

    def _parse_list(self, open_token: Token) -> ExpressionNode:
        items: list[ExpressionNode] = []
        while True:
            nxt = self.peek()
            if nxt is None:
                raise MiniLispSyntaxError(
                    f"unmatched '(' at line {open_token.line}, column {open_token.column}",
                    open_token.line,
                    open_token.column,
                )
            if nxt.kind == "rparen":
                self.advance()
                break
            items.append(self.parse_expr())

        position = (open_token.line, open_token.column)
        head = items[0].element if items else None
        if isinstance(head, Identifier):
            if head == QUOTE:
                if len(items) != 2:
                    raise MiniLispSyntaxError(
                        f"quote takes exactly one expression at line {position[0]}", *position
                    )
                return leaf(QuotedExpression(items[1]), *position)
            marker = KEYWORD_MARKERS.get(head.name)
            if marker is not None:
                return ExpressionNode(marker(), items[1:], *position)
        return ExpressionNode(Group(), items, *position)

    def parse_all(self) -> Iterator[ExpressionNode]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def read_all(source: str) -> list[ExpressionNode]:
    """Read every top-level expression in `source`."""
    return list(TokenStream(lex(source)).parse_all())
