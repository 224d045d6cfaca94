"""Core evaluator for the cky interpreter.

Integers, atoms, lists, builtins and closures evaluate to themselves (a new
reference to the same value). Identifiers are looked up through the scope
chain. Call forms evaluate their function position and hand the raw argument
list to the application engine, which decides whether to evaluate it.
"""

from __future__ import annotations

from cky.errors import CkyTypeError
from cky.types.value import Value, Integer, Atom, Identifier
from cky.types.cons import List
from cky.types.funccall import FuncCall
from cky.types.builtin import Builtin
from cky.types.closure import Closure
from cky.types.scope import Scope
from cky.evaluation.apply import apply


def evaluate(expr: Value, scope: Scope) -> Value:
    """Evaluate `expr` in `scope`; returns a NEW reference to the result."""
    match expr:
        case Integer() | Atom() | List() | Builtin() | Closure():
            return expr.incref()

        case Identifier(name=name):
            return scope.lookup(name)

        case FuncCall(function=function, arguments=arguments):
            callee = evaluate(function, scope)
            try:
                return apply(callee, arguments, scope, evaluate)
            finally:
                callee.decref()

    raise CkyTypeError(f"Cannot evaluate value of type {expr.type_name}")
