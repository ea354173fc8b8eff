"""MiniLisp Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for MiniLisp.
- An indexer that reads documents into top-level forms without evaluating them.
- A TCP REPL server that evaluates code in one long-lived Interpreter session.

Note: The LSP does not evaluate user buffers; diagnostics come from the reader and
the desugar pass only.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
