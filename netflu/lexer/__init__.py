"""
Netflu Lexer Package

Implements the lexical analyzer (tokenizer) for the Netflu language.

Key Features:
- Priority-ordered rules, first match wins (not longest match)
- Line, column and byte-offset tracking for every token
- Fails on the first unrecognized character
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, OPERATORS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "OPERATORS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
