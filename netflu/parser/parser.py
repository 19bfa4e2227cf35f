"""
Netflu Recursive Descent Parser

Consumes the token list left to right with one token of lookahead and no
backtracking. Expressions are primary-only: there is no operator
precedence because Netflu never evaluates operators.
"""

from typing import List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import (
    Statement, Expression, MethodDef, FunDef, Let, Assign, Print, Back,
    FunctionCall, Identifier, NumberLiteral, StringLiteral,
)
from .errors import (
    create_unexpected_token_error, create_unexpected_eof_error,
    create_unexpected_expression_token_error, create_invalid_expression_error,
)


class Parser:
    """
    Netflu parser.

    Produces the list of top-level statements for one compilation unit.
    The first malformed construct raises ParseError and no partial AST
    is returned.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
        """
        self.tokens = tokens
        self.current = 0

        # Statement dispatch by leading keyword
        self.statement_parsers = {
            TokenType.LET: self._parse_let,
            TokenType.PRINT: self._parse_print,
            TokenType.METHOD: self._parse_method,
            TokenType.FUN: self._parse_fun,
            TokenType.BACK: self._parse_back,
            TokenType.IDENTIFIER: self._parse_identifier_statement,
        }

    def parse(self) -> List[Statement]:
        """
        Parse the token stream into a list of top-level statements.

        Raises:
            ParseError: If parsing fails
        """
        self.current = 0
        statements = []

        while not self._is_at_end():
            statements.append(self._parse_statement())

        return statements

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self) -> Statement:
        token = self._peek()
        if token is None:
            raise create_unexpected_eof_error("statement", self._eof_location())

        parse_fn = self.statement_parsers.get(token.type)
        if parse_fn is None:
            raise create_unexpected_token_error("statement", token)
        return parse_fn()

    def _parse_let(self) -> Let:
        """let IDENT = expr ;"""
        start_token = self._consume(TokenType.LET)
        name_token = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.ASSIGN)
        value = self._parse_expression()
        self._consume(TokenType.SEMICOLON)

        return Let(name_token.lexeme, value, start_token.location)

    def _parse_print(self) -> Print:
        """print ( expr ) ;"""
        start_token = self._consume(TokenType.PRINT)
        self._consume(TokenType.LEFT_PAREN)
        value = self._parse_expression()
        self._consume(TokenType.RIGHT_PAREN)
        self._consume(TokenType.SEMICOLON)

        return Print(value, start_token.location)

    def _parse_method(self) -> MethodDef:
        start_token = self._consume(TokenType.METHOD)
        name, body = self._parse_callable_rest()
        return MethodDef(name, body, start_token.location)

    def _parse_fun(self) -> FunDef:
        start_token = self._consume(TokenType.FUN)
        name, body = self._parse_callable_rest()
        return FunDef(name, body, start_token.location)

    def _parse_callable_rest(self):
        """IDENT ( "(" ")" )? { stmt* } ;?"""
        name_token = self._consume(TokenType.IDENTIFIER)

        # Optional empty parameter list
        if self._match(TokenType.LEFT_PAREN):
            self._consume(TokenType.RIGHT_PAREN)

        self._consume(TokenType.LEFT_BRACE)
        body = []

        while not self._is_at_end() and not self._check(TokenType.RIGHT_BRACE):
            # Stray semicolons between statements
            if self._match(TokenType.SEMICOLON):
                continue
            body.append(self._parse_statement())

        self._consume(TokenType.RIGHT_BRACE)
        self._match(TokenType.SEMICOLON)

        return name_token.lexeme, body

    def _parse_back(self) -> Back:
        """back expr ; where expr is an identifier or a number."""
        start_token = self._consume(TokenType.BACK)
        expr = self._parse_expression()
        self._consume(TokenType.SEMICOLON)

        if isinstance(expr, Identifier):
            return Back(expr.name, start_token.location)
        if isinstance(expr, NumberLiteral):
            return Back(expr.value, start_token.location)

        raise create_invalid_expression_error("return statement", expr.location, start_token)

    def _parse_identifier_statement(self) -> Statement:
        """Assignment when the next token is '=', call statement otherwise."""
        name_token = self._advance()

        if self._match(TokenType.ASSIGN):
            value = self._parse_expression()
            self._consume(TokenType.SEMICOLON)
            return Assign(name_token.lexeme, value, name_token.location)

        call = self._parse_function_call(name_token)
        self._consume(TokenType.SEMICOLON)
        return call

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_expression(self) -> Expression:
        token = self._peek()
        if token is None:
            raise create_unexpected_eof_error("expression", self._eof_location())

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._check(TokenType.LEFT_PAREN):
                return self._parse_function_call(token)
            return Identifier(token.lexeme, token.location)

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteral(token.lexeme, token.location)

        if token.type == TokenType.STRING:
            self._advance()
            return StringLiteral(token.lexeme, token.location)

        raise create_unexpected_expression_token_error(token)

    def _parse_function_call(self, name_token: Token) -> FunctionCall:
        """
        IDENT ( args )

        Arguments may be separated by ';' or '+'. The '+' is only a
        separator here and is never evaluated.
        """
        self._consume(TokenType.LEFT_PAREN)
        args = []

        while not self._is_at_end():
            if self._check(TokenType.RIGHT_PAREN):
                break

            if self._match(TokenType.SEMICOLON):
                continue

            args.append(self._parse_expression())

            if not self._is_at_end():
                if self._match(TokenType.SEMICOLON):
                    continue
                if not self._check(TokenType.RIGHT_PAREN):
                    self._consume(TokenType.PLUS)

        self._consume(TokenType.RIGHT_PAREN)
        return FunctionCall(name_token.lexeme, args, name_token.location)

    # Utility methods

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        token = self._peek()
        return token is not None and token.type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _peek(self) -> Optional[Token]:
        """Return current token without consuming, None at end of input."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return None

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        token = self._peek()
        if token is None:
            raise create_unexpected_eof_error(token_type, self._eof_location())
        if token.type != token_type:
            raise create_unexpected_token_error(token_type, token)
        return self._advance()

    def _eof_location(self) -> SourceLocation:
        if self.tokens:
            return self.tokens[-1].location
        return SourceLocation("<empty>", 1, 1, 0)


def parse_string(source: str, filename: str = "<string>") -> List[Statement]:
    """
    Convenience function to parse a source string.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    return Parser(tokens).parse()


def parse_file(filepath: str) -> List[Statement]:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
        OSError: If file cannot be read
    """
    from ..lexer import tokenize_file

    tokens = tokenize_file(filepath)
    return Parser(tokens).parse()
