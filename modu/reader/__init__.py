from modu.reader.lexer import Token, lex, tokenize, unquote
from modu.reader.parser import TokenStream, Parser, parse_program, parse_all, needs_more_input

__all__ = [
    "Token",
    "lex",
    "tokenize",
    "unquote",
    "TokenStream",
    "Parser",
    "parse_program",
    "parse_all",
    "needs_more_input",
]
