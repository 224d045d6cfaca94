"""Interpreter sessions for cky.

- create_globals(): a fresh global scope holding every builtin
- run(source): one-shot evaluation of the first form in a fresh global scope
- Interpreter: a session that keeps one global scope across many forms, for
  incremental feeding and for the interactive loop

Evaluation errors abort the form being evaluated (after releasing every
reference it held) and surface as CkyError subclasses. (exit) surfaces as an
Outcome with ``stop`` set rather than as a process-wide flag.
"""

from __future__ import annotations

import logging
import sys
from typing import NamedTuple, Optional, TextIO

from cky.config import get_max_depth
from cky.errors import CkyError, CkyRecursionError, CkySyntaxError, ExitRequested
from cky.reader.lexer import lex, lex_stream, default_lexer
from cky.reader.parser import TokenStream
from cky.reader.tokenizer import PushbackReader, Tokenizer
from cky.types.value import Value
from cky.types.scope import Scope
from cky.evaluation.evaluator import evaluate
from cky.builtin.env_builtin import register


logger = logging.getLogger(__name__)

# Native frames used per level of closure nesting, with room to spare.
FRAMES_PER_LEVEL = 20


class Outcome(NamedTuple):
    """Result of evaluating a form. `value` is a reference owned by the receiver."""

    value: Optional[Value]
    stop: bool = False


def create_globals() -> Scope:
    """Return a scope containing the top-level definitions."""
    scope = Scope()
    register(scope)
    return scope


def ensure_recursion_headroom(max_depth: int | None = None) -> None:
    """Raise the native recursion limit so the depth ceiling is reached first."""
    needed = (max_depth or get_max_depth()) * FRAMES_PER_LEVEL + 1000
    if sys.getrecursionlimit() < needed:
        sys.setrecursionlimit(needed)


def evaluate_form(expr: Value, scope: Scope) -> Outcome:
    """Evaluate one top-level form, turning (exit) into a stop outcome."""
    try:
        return Outcome(evaluate(expr, scope))
    except ExitRequested as exc:
        return Outcome(exc.value, stop=True)
    except RecursionError:
        raise CkyRecursionError("Maximum recursion depth exceeded") from None


def read_form(tokens: TokenStream) -> Optional[Value]:
    """Parse the next form of `tokens`, or None at end of input."""
    try:
        return tokens.parse_expr()
    except RecursionError:
        raise CkyRecursionError("Form nested too deeply") from None


def run(source: str, out: TextIO | None = None) -> Value:
    """Evaluate the first form of `source` in a fresh global scope.

    The result is printed and returned; the caller owns the returned reference.
    """
    ensure_recursion_headroom()
    code = read_form(TokenStream(lex(source)))
    if code is None:
        raise CkySyntaxError("No form to evaluate")
    scope = create_globals()
    try:
        result = evaluate_form(code, scope).value
    finally:
        code.decref()
        scope.destroy()
    print(result, file=out or sys.stdout)
    return result


def _discard_line(reader: PushbackReader) -> None:
    while reader.read() not in ("", "\n"):
        pass


class Interpreter:
    """
    Orchestrates reading and evaluating cky code.
    Maintains one global Scope across calls until closed.
    """

    def __init__(self, tokenizer: Tokenizer | None = None):
        self.tokenizer: Tokenizer = tokenizer or default_lexer()
        self.globals: Scope = create_globals()
        ensure_recursion_headroom()

    def step(self, expr: Value) -> Outcome:
        return evaluate_form(expr, self.globals)

    def feed(self, code: str) -> Outcome:
        """Evaluate every form in `code`; the outcome carries the last result.

        Stops early when a form calls (exit).
        """
        stream = TokenStream(lex(code, self.tokenizer))
        result: Optional[Value] = None
        try:
            while (expr := read_form(stream)) is not None:
                try:
                    outcome = self.step(expr)
                finally:
                    expr.decref()
                if result is not None:
                    result.decref()
                result = outcome.value
                if outcome.stop:
                    return Outcome(result, stop=True)
        except Exception:
            if result is not None:
                result.decref()
            raise
        return Outcome(result)

    def eval(self, code: str) -> Optional[Value]:
        """Evaluate `code` and return a new reference to the last result."""
        return self.feed(code).value

    def interact(self, stream: TextIO | None = None, out: TextIO | None = None, prompt: str = "> ") -> None:
        """Read-eval-print loop over a character stream.

        Tokens are read incrementally, so each form is evaluated as soon as it
        is complete. Errors are reported and the rest of the offending line is
        skipped. The loop ends at end of input or on (exit).
        """
        reader = PushbackReader(stream if stream is not None else sys.stdin)
        out = out if out is not None else sys.stdout
        while True:
            out.write(prompt)
            out.flush()
            tokens = TokenStream(lex_stream(reader, self.tokenizer))
            try:
                expr = read_form(tokens)
            except CkyError as exc:
                self._report(exc, out)
                _discard_line(reader)
                continue
            if expr is None:
                break
            try:
                outcome = self.step(expr)
            except CkyError as exc:
                self._report(exc, out)
                continue
            finally:
                expr.decref()
            out.write(f"{outcome.value}\n")
            outcome.value.decref()
            if outcome.stop:
                break

    def _report(self, exc: CkyError, out: TextIO) -> None:
        logger.debug("evaluation failed", exc_info=exc)
        out.write(f"error: {exc}\n")

    def close(self) -> None:
        self.globals.destroy()

    def __enter__(self) -> Interpreter:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
