from __future__ import annotations
import logging
from typing import Iterable, Literal

from minilisp import LispValue
from minilisp.builtin.env_builtin import register
from minilisp.evaluation.evaluator import evaluate
from minilisp.reader.parser import TokenStream, lex
from minilisp.types.errors import MiniLispError, MiniLispSyntaxError
from minilisp.types.expression import ExpressionNode
from minilisp.types.procedure import BuiltinProcedure
from minilisp.types.scope import Scope
from minilisp.types.void import Void


class Interpreter:
    """
    Orchestrates reading, desugaring and evaluating MiniLisp code.

    Built-ins and the prelude live in a base scope that is sealed once loaded.
    User definitions go into a session scope nested under it; the session scope
    persists across calls to eval() until reset().
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        builtins: Iterable[BuiltinProcedure] | None = None,
    ):
        self._logger = logging.getLogger(__name__)
        self.base: Scope = Scope()
        register(self.base, builtins or ())

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import to avoid circular imports
                from minilisp.modules.prelude_loader import load_prelude
                load_prelude(self)
            except FileNotFoundError as ex:
                # Be permissive: no prelude found -> proceed
                self._logger.warning("%s; continuing without prelude", ex)
        elif prelude:
            self.eval_prelude(prelude)

        self.base.seal()
        self.session: Scope = self.base.child()

    def eval_prelude(self, code: str) -> None:
        """Evaluate definitions into the base scope; only possible before it is sealed."""
        stream = TokenStream(lex(code))
        while (expr := stream.parse_expr()) is not None:
            evaluate(expr, self.base)

    def evaluate(self, tree: ExpressionNode) -> LispValue:
        """Desugar and evaluate one raw top-level tree in the session scope."""
        return evaluate(tree, self.session)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; the first error propagates.

        Returns Void for no forms, the value for a single form, a list otherwise.
        """
        stream = TokenStream(lex(code))
        results: list[LispValue] = []
        while (expr := stream.parse_expr()) is not None:
            results.append(self.evaluate(expr))
        if not results:
            return Void
        if len(results) == 1:
            return results[0]
        return results

    def eval_each(self, code: str) -> list[LispValue | MiniLispError]:
        """Evaluate every form in `code`, one outcome per form.

        An error in one form does not stop the following forms. A syntax error ends
        reading, so it is always the last outcome.
        """
        stream = TokenStream(lex(code))
        outcomes: list[LispValue | MiniLispError] = []
        while True:
            try:
                expr = stream.parse_expr()
            except MiniLispSyntaxError as ex:
                outcomes.append(ex)
                break
            if expr is None:
                break
            try:
                outcomes.append(self.evaluate(expr))
            except MiniLispError as ex:
                outcomes.append(ex)
        return outcomes

    def reset(self) -> None:
        """Drop every user definition; built-ins and the prelude are kept."""
        self._logger.debug("resetting session scope")
        self.session = self.base.child()
