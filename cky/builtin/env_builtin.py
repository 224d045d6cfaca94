"""Built-in functions for the cky global scope.

This module defines integer arithmetic, comparison, list processing, the
emptiness predicate and the exit form, plus `register`, which installs them
(and the special forms) into a scope.

Every builtin has the signature ``(scope, args) -> Value``: `args` is a list
of already evaluated values borrowed from the evaluator, and the result is a
new reference owned by the caller. Booleans are Integers 0 and 1.
"""
from __future__ import annotations

import operator
from typing import Callable

from cky.errors import CkyArityError, CkyTypeError, ExitRequested
from cky.builtin.arguments import get_args, check_integer
from cky.types.value import Value, Integer
from cky.types.cons import List
from cky.types.builtin import Builtin
from cky.types.scope import Scope
from cky.evaluation.special_forms import SPECIAL_FORMS


# -------------------------------
# Arithmetic
# -------------------------------
def add(scope: Scope, args: List) -> Value:
    """(+ n...) => the sum of zero or more integers."""
    total = 0
    for i, arg in enumerate(args):
        total += check_integer("+", i, arg)
    return Integer(total)


def sub(scope: Scope, args: List) -> Value:
    """(- n) negates; (- n m...) subtracts every later argument from the first."""
    values = [check_integer("-", i, arg) for i, arg in enumerate(args)]
    if not values:
        raise CkyArityError("-: wrong number of args (expected at least 1, got 0)")
    if len(values) == 1:
        return Integer(-values[0])
    result = values[0]
    for x in values[1:]:
        result -= x
    return Integer(result)


# -------------------------------
# Lists
# -------------------------------
def length(scope: Scope, args: List) -> Value:
    """(length list) => number of elements."""
    (lst,) = get_args("length", args, "l")
    return Integer(len(lst))


def _non_empty(fname: str, lst: List) -> List:
    if lst.is_empty:
        raise CkyTypeError(f"{fname}: argument 0: expected a non-empty list")
    return lst


def car(scope: Scope, args: List) -> Value:
    """(car list) => first element of a non-empty list."""
    (lst,) = get_args("car", args, "l")
    return _non_empty("car", lst).head.incref()


def cdr(scope: Scope, args: List) -> Value:
    """(cdr list) => the list without its first element."""
    (lst,) = get_args("cdr", args, "l")
    return _non_empty("cdr", lst).tail.incref()


def cons(scope: Scope, args: List) -> Value:
    """(cons value list) => a new list with `value` in front."""
    value, lst = get_args("cons", args, "?l")
    return List(value.incref(), lst.incref())


def null_p(scope: Scope, args: List) -> Value:
    """(null? value) => 1 if value is the empty list, else 0."""
    (value,) = get_args("null?", args, "?")
    return Integer(isinstance(value, List) and value.is_empty)


# -------------------------------
# Comparison
# -------------------------------
def _comparison(name: str, op: Callable[[int, int], bool]):
    def compare(scope: Scope, args: List) -> Value:
        a, b = get_args(name, args, "dd")
        return Integer(op(a.value, b.value))

    compare.__name__ = f"compare_{op.__name__}"
    compare.__doc__ = f"({name} a b) => 1 if the comparison holds, else 0."
    return compare


numeq = _comparison("=", operator.eq)
numlt = _comparison("<", operator.lt)
numgt = _comparison(">", operator.gt)
numle = _comparison("<=", operator.le)
numge = _comparison(">=", operator.ge)


# -------------------------------
# Session control
# -------------------------------
def exit_(scope: Scope, args: List) -> Value:
    """(exit) or (exit value): stop the session; the value defaults to 0."""
    values = list(args)
    if len(values) > 1:
        raise CkyArityError(f"exit: wrong number of args (expected at most 1, got {len(values)})")
    value = values[0].incref() if values else Integer(0)
    raise ExitRequested(value)


BUILTINS: dict[str, Callable[[Scope, List], Value]] = {
    "+": add,
    "-": sub,
    "length": length,
    "car": car,
    "cdr": cdr,
    "cons": cons,
    "exit": exit_,
    "=": numeq,
    "<": numlt,
    ">": numgt,
    "<=": numle,
    ">=": numge,
    "null?": null_p,
}


def register(scope: Scope) -> None:
    """Install every builtin and special form into `scope`."""
    for name, fn in BUILTINS.items():
        scope.bind(name, Builtin(name, fn))
    for name, fn in SPECIAL_FORMS.items():
        scope.bind(name, Builtin(name, fn, evaluate_args=False))
