"""
MiniLisp command-line entry point: run a script, evaluate an expression, or start
an interactive read-eval-print loop.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from minilisp.config import configure_logging
from minilisp.interpreter import Interpreter
from minilisp.types.errors import MiniLispError
from minilisp.types.void import Void


PROMPT = "minilisp> "
CONTINUATION_PROMPT = "......... "


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog="minilisp",
        description="MiniLisp: a small Lisp with a desugar pass and checked procedure contracts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s script.lsp              # Run a MiniLisp script
  %(prog)s -e "(+ 1 2)"            # Evaluate an expression
  %(prog)s                         # Interactive mode
  %(prog)s --debug script.lsp      # Run with debug logging
        """,
    )
    parser.add_argument("script", nargs="?", help="MiniLisp script file to execute")
    parser.add_argument("-e", "--eval", dest="code", metavar="CODE", help="Evaluate CODE and print each result")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def report(outcomes: list, echo: bool = True) -> bool:
    """Print each outcome; returns False if any form failed."""
    ok = True
    for outcome in outcomes:
        if isinstance(outcome, MiniLispError):
            print(f"error: {outcome}", file=sys.stderr)
            ok = False
        elif echo and outcome is not Void:
            print(outcome)
    return ok


def run_script(interp: Interpreter, script_path: str) -> bool:
    code = Path(script_path).read_text(encoding="utf-8")
    return report(interp.eval_each(code), echo=False)


def is_balanced(text: str) -> bool:
    """True once every '(' typed so far has its ')'. Strings and comments are skipped."""
    depth = 0
    in_string = escaped = in_comment = False
    for ch in text:
        if in_comment:
            in_comment = ch != "\n"
        elif in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ";":
            in_comment = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
    return depth <= 0 and not in_string


def interactive_loop(interp: Interpreter) -> None:
    print("MiniLisp interactive mode. Ctrl-D to exit, ,reset to clear definitions.")
    buffer = ""
    while True:
        try:
            line = input(CONTINUATION_PROMPT if buffer else PROMPT)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            buffer = ""
            continue

        if not buffer and line.strip() == ",reset":
            interp.reset()
            continue

        buffer += line + "\n"
        if not is_balanced(buffer):
            continue
        code, buffer = buffer, ""
        report(interp.eval_each(code))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    interp = Interpreter()
    if args.script:
        ok = run_script(interp, args.script)
        return 0 if ok else 1
    if args.code is not None:
        return 0 if report(interp.eval_each(args.code)) else 1

    try:
        import readline  # noqa: F401  line editing and history when available
    except ImportError:
        pass
    interactive_loop(interp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
