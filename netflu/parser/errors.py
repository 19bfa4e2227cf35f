"""
Error handling for the Netflu parser.

Provides error reporting with source location information and
IDE-friendly diagnostics for syntax errors. Parsing is all-or-nothing:
the first error aborts the pass.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.code = code
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


def suggest_missing_token(expected: TokenType) -> List[str]:
    """Suggest what token might be missing."""
    token_suggestions = {
        TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
        TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
        TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
        TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a body"],
        TokenType.ASSIGN: ["Add an assignment operator '='"],
        TokenType.PLUS: ["Separate call arguments with '+' or ';'"],
    }
    return list(token_suggestions.get(expected, []))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P010": "Unexpected end of input",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    found_str = found.type.name

    suggestions = suggest_missing_token(expected) if isinstance(expected, TokenType) else []

    return ParseError(
        message=f"Expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=suggestions
    )


def create_unexpected_expression_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        message=f"Unexpected token {found.type.name} in expression",
        location=found.location,
        token=found,
        code="P001",
        help_text="An expression must be an identifier, a call, a number or a string."
    )


def create_invalid_expression_error(reason: str, location: SourceLocation,
                                    token: Optional[Token] = None) -> ParseError:
    """Create an error for an invalid expression."""
    return ParseError(
        message=f"Invalid expression in {reason}",
        location=location,
        token=token,
        code="P005",
        help_text=f"Only an identifier or a number literal is allowed in a {reason}.",
        suggestions=["Bind the value with 'let' first and return the name"]
    )


def create_unexpected_eof_error(expected: Union[TokenType, str], location: SourceLocation) -> ParseError:
    """Create an error for unexpected end of input."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    return ParseError(
        message=f"Unexpected end of input, expected {expected_str}",
        location=location,
        code="P010",
        help_text=f"The parser reached the end of the file while expecting {expected_str}.",
        suggestions=[f"Add the missing {expected_str}", "Check for incomplete statements"]
    )
