"""Reference-counted values for cky.

Every value carries a type tag (``type_name``) and a reference count. A freshly
constructed value holds exactly one reference, owned by whoever constructed it.
Ownership is transferred or shared explicitly:

- ``incref()`` acquires another reference (and returns the value for chaining),
- ``decref()`` releases one; at zero the value releases its own children.

Containers (List, FuncCall, Closure) *steal* the references they are built
from. A module-level tally of live values per type makes leaks and premature
frees observable from tests.
"""

from __future__ import annotations

from collections import Counter
from io import StringIO

from cky.errors import CkyRefcountError


_live: Counter[str] = Counter()


def live_values(type_name: str | None = None) -> int:
    """Number of values currently alive, optionally restricted to one type."""
    if type_name is None:
        return sum(_live.values())
    return _live[type_name]


class Value:
    """Base class of all cky values."""

    __slots__ = ("refcount",)

    type_name = "value"

    def __init__(self):
        self.refcount = 1
        _live[self.type_name] += 1

    def incref(self) -> Value:
        if self.refcount <= 0:
            raise CkyRefcountError(f"incref of released {self.type_name}")
        self.refcount += 1
        return self

    def decref(self) -> None:
        if self._drop():
            self.dealloc()

    def _drop(self) -> bool:
        """Release one reference without deallocating; True when it was the last."""
        if self.refcount <= 0:
            raise CkyRefcountError(f"decref of released {self.type_name}")
        self.refcount -= 1
        if self.refcount:
            return False
        _live[self.type_name] -= 1
        return True

    def dealloc(self) -> None:
        """Release owned children. Leaf values own none."""

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        """Write the printed form. ``nested`` is set inside a list literal."""
        raise NotImplementedError

    def __str__(self) -> str:
        with StringIO() as buffer:
            self.write(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<{self.type_name} {self} refcount={self.refcount}>"


class Integer(Value):
    __slots__ = ("value",)

    type_name = "int"

    def __init__(self, value: int = 0):
        super().__init__()
        self.value = int(value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Integer) and self.value == other.value

    __hash__ = None

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        buffer.write(str(self.value))


class Atom(Value):
    """Quoted textual literal. Compared by content, printed with a quote."""

    __slots__ = ("text",)

    type_name = "atom"

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def __eq__(self, other) -> bool:
        return isinstance(other, Atom) and self.text == other.text

    __hash__ = None

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        buffer.write("'")
        buffer.write(self.text)


class Identifier(Value):
    """Name of a variable; only ever used as a lookup key."""

    __slots__ = ("name",)

    type_name = "identifier"

    def __init__(self, name: str):
        super().__init__()
        self.name = name

    def __eq__(self, other) -> bool:
        return isinstance(other, Identifier) and self.name == other.name

    __hash__ = None

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        buffer.write(self.name)
