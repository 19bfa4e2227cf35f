"""
Netflu Lexer - turns source text into tokens

Tries each rule in TOKEN_SPECS at the cursor and takes the first one that
matches. This is not longest-match: keywords win over identifiers even in
the middle of a word, so "printer" lexes as PRINT IDENTIFIER("er").
"""

from typing import List

from .tokens import Token, TokenType, SourceLocation, TOKEN_SPECS
from .errors import LexerError, create_invalid_character_error


class Lexer:
    """
    Netflu lexical analyzer.

    Converts source code text into a list of tokens with line, column and
    byte offset information. Stops at the first unrecognized character.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string (UTF-8)
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.byte_offset = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens (no EOF sentinel)

        Raises:
            LexerError: On the first character no rule accepts
        """
        self.pos = 0
        self.byte_offset = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            self.tokens.append(self._next_token())

        return self.tokens

    def _next_token(self) -> Token:
        """Match the next token at the cursor, first rule wins."""
        location = SourceLocation(self.filename, self.line, self.column, self.byte_offset)

        for token_type, pattern in TOKEN_SPECS:
            match = pattern.match(self.source, self.pos)
            if match is None:
                continue

            lexeme = match.group(0)
            if token_type == TokenType.MISMATCH:
                raise create_invalid_character_error(lexeme, location)

            self._advance_by(len(lexeme))
            return Token(token_type, lexeme, location)

        # The catch-all rule matches any character
        raise create_invalid_character_error(self.source[self.pos], location)

    def _advance(self):
        """Advance position by one character, updating line/column/offset."""
        char = self.source[self.pos]
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.byte_offset += len(char.encode('utf-8'))
        self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            if self.pos < len(self.source):
                self._advance()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
