from __future__ import annotations

"""
A minimal pygls-based Language Server for MiniLisp.

Features:
- Initialize/Shutdown/Exit
- Text synchronization and document store
- Diagnostics: the reader's syntax error and one desugar error per malformed top-level form
- Hover: builtin signatures and locally defined names
- Completion: locals, builtins, prelude definitions
- Signature Help: for builtins and local procedures
- Document Symbols: from indexer

Note: We never evaluate the buffer. We build a static index per document.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    InitializeParams,
    InitializeResult,
    TextDocumentSyncKind,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    SignatureHelp,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from minilisp.config import configure_logging
from minilisp.types.element import KEYWORD_MARKERS
from minilisp_lsp.indexer import BUILTIN_DOCS, BUILTIN_SIGNATURES, DocumentIndex, FormProblem, build_index

log = logging.getLogger(__name__)

SOURCE = "minilisp-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class MiniLispLanguageServer(LanguageServer):
    CMD_NAME = "minilisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}


ls = MiniLispLanguageServer()


@ls.feature("initialize")
def on_initialize(params: InitializeParams):
    return InitializeResult(
        capabilities={
            "textDocumentSync": TextDocumentSyncKind.Full,
            "hoverProvider": True,
            "completionProvider": {"resolveProvider": False, "triggerCharacters": ["("]},
            "signatureHelpProvider": {"triggerCharacters": ["(", " "]},
            "documentSymbolProvider": True,
        }
    )


@ls.feature("shutdown")
def on_shutdown(*_):
    return None


@ls.feature("exit")
def on_exit(*_):
    return None


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update_document(uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update_document(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update_document(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    log.debug("indexed %s: %d forms, %d problems", uri, len(idx.forms), len(idx.problems))
    ls.publish_diagnostics(uri, collect_diagnostics(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, width: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + width))


def _diagnostic(problem: FormProblem, severity: DiagnosticSeverity) -> Diagnostic:
    return Diagnostic(
        range=_mk_range(problem.line, problem.col),
        message=problem.message,
        severity=severity,
        source=SOURCE,
    )


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    """Form errors in document order, then the syntax error that stopped reading."""
    diags = [_diagnostic(p, DiagnosticSeverity.Error) for p in idx.problems]
    if idx.syntax_error is not None:
        diags.append(_diagnostic(idx.syntax_error, DiagnosticSeverity.Error))
    return diags


# --- Hover ---
def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        doc = BUILTIN_DOCS.get(word)
        return f"{BUILTIN_SIGNATURES[word]}\n\n{doc}" if doc else BUILTIN_SIGNATURES[word]
    if word in idx.symbols:
        sdef = idx.symbols[word]
        shown = sdef.signature if sdef.kind == "function" else word
        return f"{shown}: {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"
    if word in KEYWORD_MARKERS:
        return f"{word}: special form"
    return None


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    if not state:
        return None

    word = _extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = hover_text(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for keyword in KEYWORD_MARKERS:
        items.append(CompletionItem(label=keyword, kind=CompletionItemKind.Keyword))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind, detail=sdef.signature if sdef.params else None))
    return items


@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    return CompletionList(is_incomplete=False, items=completion_items(state.index))


# --- Signature Help ---
@ls.feature("textDocument/signatureHelp")
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    if not state:
        return None

    # crude: find current word after the last '(' on the current line
    line_text = _get_line_prefix(state.text, params.position)
    callee = _extract_callee_name(line_text)
    if not callee:
        return None

    if callee in BUILTIN_SIGNATURES:
        label = BUILTIN_SIGNATURES[callee]
    elif callee in state.index.symbols and state.index.symbols[callee].kind == "function":
        label = state.index.symbols[callee].signature
    else:
        return None

    params_list = label.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]
    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
_WORD_BREAK = " \t()'\n\r"


def _get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = pos.character
    while start > 0 and line[start - 1] not in _WORD_BREAK:
        start -= 1
    while end < len(line) and line[end] not in _WORD_BREAK:
        end += 1
    return line[start:end] or None


def _extract_callee_name(prefix: str) -> Optional[str]:
    # first token after the last '('
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    tokens = re.split(r"[\s()]+", prefix[lp + 1 :].strip())
    return tokens[0] if tokens and tokens[0] else None


def main() -> None:
    configure_logging()
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
