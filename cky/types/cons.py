"""Cons cells.

A List is a cell with an optional head value and an optional tail List. The
canonical empty list has neither. Every chain built by the reader or by the
evaluator ends in an empty list, so ``(1 2)`` is three cells.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional

from cky.types.value import Value


class List(Value):
    __slots__ = ("head", "tail")

    type_name = "list"

    def __init__(self, head: Optional[Value] = None, tail: Optional[List] = None):
        # Steals the references to head and tail.
        if head is None and tail is not None:
            raise ValueError("the empty list cannot have a tail")
        super().__init__()
        if head is not None and tail is None:
            tail = List()
        self.head: Optional[Value] = head
        self.tail: Optional[List] = tail

    @classmethod
    def from_values(cls, values: Iterable[Value]) -> List:
        """Build a proper list in order, stealing one reference to each value."""
        result = cls()
        for value in reversed(list(values)):
            result = cls(value, result)
        return result

    @property
    def is_empty(self) -> bool:
        return self.head is None

    def __iter__(self) -> Iterator[Value]:
        node: Optional[List] = self
        while node is not None and node.head is not None:
            yield node.head
            node = node.tail

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, List):
            return False
        mine, theirs = list(self), list(other)
        return len(mine) == len(theirs) and all(a == b for a, b in zip(mine, theirs))

    __hash__ = None

    def dealloc(self) -> None:
        # Walk the spine instead of recursing so long lists do not exhaust the stack.
        node: List = self
        while True:
            head, tail = node.head, node.tail
            node.head = node.tail = None
            if head is not None:
                head.decref()
            if tail is None or not tail._drop():
                return
            node = tail

    def write(self, buffer: StringIO, nested: bool = False) -> None:
        if not nested:
            buffer.write("'")
        buffer.write("(")
        for i, item in enumerate(self):
            if i:
                buffer.write(" ")
            item.write(buffer, nested=True)
        buffer.write(")")
