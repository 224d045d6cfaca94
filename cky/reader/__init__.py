from cky.reader.lexer import lex, lex_stream, create_lexer, default_lexer
from cky.reader.parser import TokenStream, parse

__all__ = ["lex", "lex_stream", "create_lexer", "default_lexer", "TokenStream", "parse"]
