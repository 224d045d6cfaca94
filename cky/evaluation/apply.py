"""Application engine for cky.

This module centralizes function application semantics for the evaluator:
- Builtins with eager arguments get a fresh list of evaluated arguments.
- Builtins with lazy arguments (special forms) get the raw argument forms.
- Closures get their arguments evaluated, bound positionally in a new scope
  chained to the caller's scope, and their body evaluated there.

Every path releases what it acquired, including when an error propagates.
"""

from __future__ import annotations

import logging

from cky.config import get_max_depth
from cky.errors import CkyArityError, CkyRecursionError, CkyTypeError
from cky.types.value import Value
from cky.types.cons import List
from cky.types.builtin import Builtin
from cky.types.closure import Closure
from cky.types.scope import Scope
from typing import Callable


logger = logging.getLogger(__name__)

EvaluatorFn = Callable[[Value, Scope], Value]


def evaluate_arguments(arguments: List, scope: Scope, evaluate_fn: EvaluatorFn) -> List:
    """Evaluate each argument left to right into a new list."""
    values: list[Value] = []
    try:
        for arg in arguments:
            values.append(evaluate_fn(arg, scope))
    except Exception:
        for value in values:
            value.decref()
        raise
    return List.from_values(values)


def apply_builtin(fn: Builtin, arguments: List, scope: Scope, evaluate_fn: EvaluatorFn) -> Value:
    if not fn.evaluate_args:
        return fn(scope, arguments)
    args = evaluate_arguments(arguments, scope, evaluate_fn)
    try:
        return fn(scope, args)
    finally:
        args.decref()


def apply_closure(fn: Closure, arguments: List, scope: Scope, evaluate_fn: EvaluatorFn) -> Value:
    """Apply a Closure.

    The body runs in a new scope whose parent is the *calling* scope; closures
    do not capture their defining scope. Parameters and arguments must match
    in number.
    """
    args = evaluate_arguments(arguments, scope, evaluate_fn)
    try:
        expected, provided = len(fn.params), len(args)
        if expected != provided:
            raise CkyArityError(
                f"lambda: wrong number of args (expected {expected}, got {provided})"
            )
        with Scope(outer=scope) as local:
            max_depth = get_max_depth()
            if local.depth > max_depth:
                raise CkyRecursionError(f"Maximum evaluation depth {max_depth} exceeded")
            for param, value in zip(fn.params, args):
                local.bind(param.name, value.incref())
            return evaluate_fn(fn.body, local)
    finally:
        args.decref()


def apply(callee: Value, arguments: List, scope: Scope, evaluate_fn: EvaluatorFn) -> Value:
    """Apply either a Builtin or a Closure to unevaluated `arguments`.

    Returns a new reference. Any other callee is a type error.
    """
    logger.debug("apply %s to %d argument(s)", callee.type_name, len(arguments))
    if isinstance(callee, Builtin):
        return apply_builtin(callee, arguments, scope, evaluate_fn)
    elif isinstance(callee, Closure):
        return apply_closure(callee, arguments, scope, evaluate_fn)
    else:
        raise CkyTypeError(f"Cannot apply non-function {callee} of type {callee.type_name}")
