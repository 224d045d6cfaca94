"""
  cky Reader: recursive-descent parser over the lexer's token stream

- integer          -> Integer
- 'atom            -> Atom (text without the quote)
- identifier       -> Identifier, or Atom inside a list literal
- ( f args... )    -> FuncCall, or a nested List inside a list literal
- ()               -> the empty List
- '( items... )    -> List; its contents are read in list-literal mode
- )                -> end of the enclosing form

List literals and argument lists are proper cons chains in source order,
terminated by the empty list. Every value returned is a new reference owned by
the caller; values built before a syntax error are released.
"""

from __future__ import annotations

from typing import Iterator, Iterable, Optional

from cky.errors import CkySyntaxError
from cky.reader.lexer import (
    Token,
    lex,
    LPAREN,
    RPAREN,
    IDENTIFIER,
    ATOM,
    INTEGER,
    OPEN_LIST,
)
from cky.types.value import Value, Integer, Atom, Identifier
from cky.types.cons import List
from cky.types.funccall import FuncCall


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[Value]:
        """Parse the next top-level form; None at end of input."""
        tok_type, _ = self.peek()
        if tok_type is None:
            return None
        if tok_type == RPAREN:
            self.advance()
            raise CkySyntaxError("Unexpected ')'")
        return self._parse(within_list=False)

    def parse_all(self) -> Iterator[Value]:
        while (expr := self.parse_expr()) is not None:
            yield expr

    def _parse(self, within_list: bool) -> Optional[Value]:
        """Parse one form; None when a ')' closes the enclosing form."""
        tok_type, tok_val = self.advance()

        if tok_type is None:
            raise CkySyntaxError("Unexpected end of input, missing ')'")

        if tok_type == INTEGER:
            return Integer(int(tok_val))

        if tok_type == ATOM:
            return Atom(tok_val[1:])

        if tok_type == IDENTIFIER:
            # Inside a list literal bare names are data.
            if within_list:
                return Atom(tok_val)
            return Identifier(tok_val)

        if tok_type == LPAREN:
            if within_list:
                return self._parse_list(within_list)
            function = self._parse(within_list)
            if function is None:
                return List()
            try:
                arguments = self._parse_list(within_list)
            except Exception:
                function.decref()
                raise
            return FuncCall(function, arguments)

        if tok_type == OPEN_LIST:
            return self._parse_list(True)

        if tok_type == RPAREN:
            return None

        raise CkySyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def _parse_list(self, within_list: bool) -> List:
        items: list[Value] = []
        try:
            while (value := self._parse(within_list)) is not None:
                items.append(value)
        except Exception:
            for item in items:
                item.decref()
            raise
        return List.from_values(items)


def parse(source: str) -> Optional[Value]:
    """Parse the first form of `source`."""
    return TokenStream(lex(source)).parse_expr()
