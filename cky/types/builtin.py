from __future__ import annotations

from io import StringIO
from typing import Callable

from cky.types.value import Value
from cky.types.cons import List

# (scope, args) -> new reference. ``args`` is borrowed.
BuiltinFn = Callable[["Scope", List], Value]


class Builtin(Value):
    """A native function.

    With ``evaluate_args`` the evaluator hands the function a fresh list of
    evaluated arguments; without it the raw argument forms are passed and the
    function decides what to evaluate (special forms).
    """

    __slots__ = ("name", "function", "evaluate_args")

    type_name = "builtin"

    def __init__(self, name: str, function: BuiltinFn, evaluate_args: bool = True):
        super().__init__()
        self.name = name
        self.function = function
        self.evaluate_args = evaluate_args

    def __call__(self, scope, args: List) -> Value:
        return self.function(scope, args)

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        buffer.write(f"#<builtin {self.name}>")
