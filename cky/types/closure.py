"""User-defined function values."""

from __future__ import annotations

from io import StringIO

from cky.types.value import Value
from cky.types.cons import List


class Closure(Value):
    """A lambda: a parameter list of Identifiers and an unevaluated body.

    No environment is captured. The body runs in a fresh scope chained to the
    caller's scope, which keeps the value graph acyclic.
    """

    __slots__ = ("params", "body")

    type_name = "closure"

    def __init__(self, params: List, body: Value):
        # Steals both references.
        super().__init__()
        self.params = params
        self.body = body

    @property
    def formals(self) -> list[str]:
        return [p.name for p in self.params]

    def dealloc(self) -> None:
        params, body = self.params, self.body
        self.params = self.body = None
        params.decref()
        body.decref()

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        buffer.write("(lambda ")
        self.params.write(buffer, nested=True)
        buffer.write(" ")
        self.body.write(buffer)
        buffer.write(")")
