"""Scope chain for cky.

A Scope maps identifier text to values and links to an enclosing scope via
``outer``. The scope owns one reference to every value bound in it and
releases them all when it is destroyed. The ``outer`` link is non-owning: a
child never outlives the frame of its parent.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from cky.errors import CkyUnboundSymbol
from cky.types.value import Value


class Scope:
    """One level of bindings in the scope chain."""

    __slots__ = ("vars", "outer", "depth")

    def __init__(self, outer: Optional[Scope] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Scope | None = outer
        self.depth: int = 0 if outer is None else outer.depth + 1

    def bind(self, name: str, value: Value) -> None:
        """Bind `name` to `value` in this frame, taking over one reference.

        An existing binding in this frame is replaced and its value released.
        """
        old = self.vars.get(name)
        self.vars[name] = value
        if old is not None:
            old.decref()

    def find(self, name: str) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.outer
        return None

    def lookup(self, name: str) -> Value:
        """Return a new reference to the value bound to `name`.

        Raises CkyUnboundSymbol if no scope in the chain binds it.
        """
        scope = self.find(name)
        if scope is None:
            raise CkyUnboundSymbol(f"Cannot lookup unbound identifier {name}")
        return scope.vars[name].incref()

    def destroy(self) -> None:
        """Release every bound value and empty the table."""
        values = list(self.vars.values())
        self.vars.clear()
        for value in values:
            value.decref()

    def __enter__(self) -> Scope:
        return self

    def __exit__(self, *exc) -> None:
        self.destroy()

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Scope chain: ")
            scope = self
            chain = []
            while scope is not None:
                scope_buf = StringIO()
                scope._write_vars(scope_buf)
                chain.append(scope_buf.getvalue())
                scope = scope.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
