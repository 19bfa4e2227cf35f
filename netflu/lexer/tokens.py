"""
Token definitions for the Netflu lexer.

Netflu has a deliberately tiny lexical surface:
- Keywords (let, print, method, fun, back)
- Identifiers
- Literals (unsigned decimal numbers, double-quoted strings)
- Single-character operators and punctuation

The order of TOKEN_SPECS is significant: the lexer commits to the first
pattern that matches at the cursor, not the longest one.
"""

import re
from enum import Enum, auto
from dataclasses import dataclass
from typing import List, Pattern, Tuple


class TokenType(Enum):
    """Enumeration of all token types in Netflu."""

    # ========================================================================
    # Keywords
    # ========================================================================
    LET = auto()                    # let (variable binding)
    PRINT = auto()                  # print
    METHOD = auto()                 # method (callable with a return value)
    FUN = auto()                    # fun (procedure)
    BACK = auto()                   # back (return statement)

    # ========================================================================
    # Identifiers and Literals
    # ========================================================================
    IDENTIFIER = auto()             # counter, _tmp, x1
    NUMBER = auto()                 # 42, 007 (kept as text)
    STRING = auto()                 # "hello" (no escape processing)

    # ========================================================================
    # Operators and Punctuation
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    ASSIGN = auto()                 # =
    SEMICOLON = auto()              # ;
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    # ========================================================================
    # Error Tokens
    # ========================================================================
    MISMATCH = auto()               # Any other character (never emitted)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and for anchoring AST nodes.
    """
    filename: str
    line: int
    column: int
    offset: int  # Byte offset from start of file

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Netflu language.

    Contains the token type, the lexeme (raw text) and the source location.
    Numeric and string literals are kept as their lexeme; interpretation is
    left to code generation.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    location: SourceLocation        # Source location

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def offset(self) -> int:
        return self.location.offset

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {TokenType.NUMBER, TokenType.STRING}

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()


KEYWORDS = {
    "let": TokenType.LET,
    "print": TokenType.PRINT,
    "method": TokenType.METHOD,
    "fun": TokenType.FUN,
    "back": TokenType.BACK,
}

OPERATORS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "=": TokenType.ASSIGN,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
}

# Priority-ordered lexical rules. Keywords are not word-bounded, so "letter"
# becomes LET followed by IDENTIFIER("ter").
TOKEN_SPECS: List[Tuple[TokenType, Pattern[str]]] = (
    [(token_type, re.compile(re.escape(word))) for word, token_type in KEYWORDS.items()]
    + [
        (TokenType.IDENTIFIER, re.compile(r'[a-zA-Z_][a-zA-Z0-9_]*')),
        (TokenType.NUMBER, re.compile(r'[0-9]+')),
        (TokenType.STRING, re.compile(r'"[^"]*"')),
    ]
    + [(token_type, re.compile(re.escape(op))) for op, token_type in OPERATORS.items()]
    + [(TokenType.MISMATCH, re.compile(r'.', re.DOTALL))]
)
