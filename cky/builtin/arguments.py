"""Argument checking shared by builtins and special forms."""

from __future__ import annotations

from cky.errors import CkyArityError, CkyTypeError
from cky.types.value import Value, Integer, Atom, Identifier
from cky.types.cons import List
from cky.types.funccall import FuncCall
from cky.types.builtin import Builtin
from cky.types.closure import Closure


# One character per argument; '?' accepts any value.
TYPE_CODES: dict[str, type[Value]] = {
    "d": Integer,
    "l": List,
    "a": Atom,
    "i": Identifier,
    "b": Builtin,
    "c": FuncCall,
    "f": Closure,
}


def get_args(fname: str, args: List, fmt: str) -> tuple[Value, ...]:
    """Check `args` against `fmt` and return them as a tuple.

    Character i of `fmt` is the type code of argument i. The values returned
    are borrowed from `args`.
    """
    values = list(args)
    if len(values) != len(fmt):
        raise CkyArityError(
            f"{fname}: wrong number of args (expected {len(fmt)}, got {len(values)})"
        )
    for i, (code, value) in enumerate(zip(fmt, values)):
        expected = TYPE_CODES.get(code)
        if expected is not None and not isinstance(value, expected):
            raise CkyTypeError(
                f"{fname}: argument {i}: expected type {expected.type_name}, got type {value.type_name}"
            )
    return tuple(values)


def check_integer(fname: str, index: int, value: Value) -> int:
    if not isinstance(value, Integer):
        raise CkyTypeError(
            f"{fname}: argument {index}: expected type {Integer.type_name}, got type {value.type_name}"
        )
    return value.value
