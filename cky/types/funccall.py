from __future__ import annotations

from io import StringIO

from cky.types.value import Value
from cky.types.cons import List


class FuncCall(Value):
    """An unevaluated application: function position plus argument list."""

    __slots__ = ("function", "arguments")

    type_name = "funccall"

    def __init__(self, function: Value, arguments: List):
        # Steals both references.
        super().__init__()
        self.function = function
        self.arguments = arguments

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, FuncCall)
            and self.function == other.function
            and self.arguments == other.arguments
        )

    __hash__ = None

    def dealloc(self) -> None:
        function, arguments = self.function, self.arguments
        self.function = self.arguments = None
        function.decref()
        arguments.decref()

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        buffer.write("(")
        self.function.write(buffer)
        for arg in self.arguments:
            buffer.write(" ")
            arg.write(buffer)
        buffer.write(")")
