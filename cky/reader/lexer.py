"""Lexer front-end for the cky language.

Specializes the generic Tokenizer with the language's token grammar, which is
read from a pattern-registration file (``lisp.lex`` next to this module, or the
file named by ``CKY_LEXER_PATTERNS``). Whitespace tokens are dropped.

Tokens are ``(tag, text)`` tuples. Identifier, atom and integer tokens carry
their matched text; parens and the list-literal opener carry ``None``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional, TextIO

from cky.config import get_lexer_patterns_path
from cky.errors import CkyLoadError, CkySyntaxError
from cky.reader.tokenizer import PushbackReader, Tokenizer


logger = logging.getLogger(__name__)

WHITESPACE = "whitespace"
LPAREN = "lparen"
RPAREN = "rparen"
IDENTIFIER = "identifier"
ATOM = "atom"
INTEGER = "integer"
OPEN_LIST = "open_list"

TOKEN_TAGS = (WHITESPACE, LPAREN, RPAREN, IDENTIFIER, ATOM, INTEGER, OPEN_LIST)
TEXT_TOKENS = frozenset((IDENTIFIER, ATOM, INTEGER))

Token = tuple[str, Optional[str]]


def create_lexer(path: Path | str | None = None) -> Tokenizer:
    """Build a Tokenizer from a pattern-registration file."""
    path = Path(path) if path is not None else get_lexer_patterns_path()
    tokenizer = Tokenizer.from_file(path)
    unknown = sorted(set(tokenizer.tokens) - set(TOKEN_TAGS))
    if unknown:
        raise CkyLoadError(f"{path}: unknown token tags {', '.join(unknown)}")
    return tokenizer


@lru_cache(maxsize=None)
def _cached_lexer(path: Path) -> Tokenizer:
    return create_lexer(path)


def default_lexer() -> Tokenizer:
    """The configured lexer, loaded once per pattern file."""
    return _cached_lexer(get_lexer_patterns_path())


def lex(source: str, tokenizer: Tokenizer | None = None) -> Iterator[Token]:
    """Token generator over an in-memory string."""
    tokenizer = tokenizer or default_lexer()
    pos = 0
    n = len(source)
    while pos < n:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("lex(): remaining text: %r", source[pos:])
        tag, length = tokenizer.yylex(source, pos)
        logger.debug("lex(): match length %d", length)
        if tag is None:
            raise CkySyntaxError(f"No token matches input at offset {pos}: {source[pos]!r}")
        if tag != WHITESPACE:
            yield tag, source[pos:pos + length] if tag in TEXT_TOKENS else None
        pos += length


def lex_stream(stream: TextIO | PushbackReader, tokenizer: Tokenizer | None = None) -> Iterator[Token]:
    """Token generator over a character stream, reading only as far as needed."""
    tokenizer = tokenizer or default_lexer()
    reader = stream if isinstance(stream, PushbackReader) else PushbackReader(stream)
    while not reader.at_eof():
        tag, length, text = tokenizer.fyylex(reader)
        logger.debug("lex_stream(): match %s length %d", tag, length)
        if tag is None:
            # Consume the offending character so a caller can resume after it.
            raise CkySyntaxError(f"No token matches input: {reader.read()!r}")
        if tag != WHITESPACE:
            yield tag, text if tag in TEXT_TOKENS else None
