from __future__ import annotations

"""
Indexer for MiniLisp files, built on the reader and the desugar pass.

Each top-level form is read and desugared (never evaluated) to build:
- definitions: (define name ...) and (define (name params ...) ...)
- form errors: one per top-level form that fails to desugar
- the syntax error that stopped reading, if any

Everything read before a syntax error is still indexed, so partial buffers keep
their symbols.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from minilisp.builtin.env_builtin import BUILTINS
from minilisp.desugaring import desugar
from minilisp.reader.parser import TokenStream, lex
from minilisp.types.element import Define, Group, Lambda
from minilisp.types.errors import MiniLispError, MiniLispFormError, MiniLispSyntaxError
from minilisp.types.expression import ExpressionNode
from minilisp.types.identifier import Identifier


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int  # 0-based
    col: int  # 0-based
    params: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        return "(" + " ".join([self.name, *self.params]) + ")"


@dataclass
class FormProblem:
    message: str
    line: int  # 0-based
    col: int  # 0-based


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    forms: List[ExpressionNode] = field(default_factory=list)
    problems: List[FormProblem] = field(default_factory=list)
    syntax_error: Optional[FormProblem] = None


def _problem(ex: MiniLispError, fallback: ExpressionNode | None) -> FormProblem:
    pos = ex.position
    if pos is None and fallback is not None and fallback.line is not None:
        pos = (fallback.line, fallback.column)
    line, col = pos if pos is not None else (1, 1)
    return FormProblem(message=str(ex), line=line - 1, col=col - 1)


def _definition(form: ExpressionNode) -> Optional[SymbolDef]:
    if not isinstance(form.element, Define) or not form.children:
        return None
    target = form.children[0]
    if isinstance(target.element, Group) and target.children:
        name_node, *params = target.children
        if isinstance(name_node.element, Identifier):
            return SymbolDef(
                name=name_node.element.name,
                kind="function",
                line=name_node.line - 1,
                col=name_node.column - 1,
                params=[str(p) for p in params],
            )
        return None
    if isinstance(target.element, Identifier):
        kind = "var"
        params: List[str] = []
        if len(form.children) == 2 and isinstance(form.children[1].element, Lambda):
            kind = "function"
            signature = form.children[1].children[:1]
            if signature and isinstance(signature[0].element, Group):
                params = [str(p) for p in signature[0].children]
        return SymbolDef(
            name=target.element.name,
            kind=kind,
            line=target.line - 1,
            col=target.column - 1,
            params=params,
        )
    return None


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    stream = TokenStream(lex(text))
    while True:
        try:
            form = stream.parse_expr()
        except MiniLispSyntaxError as ex:
            idx.syntax_error = _problem(ex, None)
            break
        if form is None:
            break
        idx.forms.append(form)

        sdef = _definition(form)
        if sdef is not None:
            idx.symbols.setdefault(sdef.name, sdef)

        try:
            desugar(form)
        except MiniLispFormError as ex:
            idx.problems.append(_problem(ex, form))

    return idx


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    b.name: f"({' '.join([b.name, *(str(p) for p in b.signature.parameters)])})"
    for b in BUILTINS
}

BUILTIN_DOCS: Dict[str, str] = {b.name: b.doc for b in BUILTINS}
