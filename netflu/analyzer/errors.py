"""
Semantic analysis error handling for Netflu.

Provides error reporting for name resolution: undefined functions and
variables, calls to things that are not methods, and methods that never
produce a return value.
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import ASTNode


class SemanticError(Exception):
    """
    Exception raised when semantic analysis encounters an error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        node: Optional[ASTNode] = None,
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
        self.node = node

    def __str__(self) -> str:
        return str(self.diagnostic)


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    "S001": "Undefined function",
    "S002": "Not callable",
    "S003": "No return value",
    "S004": "Undefined variable",
    "S005": "Undefined identifier",
    "S006": "Invalid number literal",
}


# Helper functions for creating specific semantic errors

def create_undefined_function_error(
    name: str,
    location: Optional[SourceLocation],
    node: Optional[ASTNode] = None
) -> SemanticError:
    return SemanticError(
        message=f"Undefined function: {name}",
        location=location,
        node=node,
        code="S001",
        help_text=f"No method named '{name}' is declared before this call.",
        suggestions=[
            f"Declare 'method {name} {{ ... }}' before calling it",
            "Check for typos in the method name"
        ]
    )


def create_not_callable_error(
    name: str,
    location: Optional[SourceLocation],
    node: Optional[ASTNode] = None
) -> SemanticError:
    return SemanticError(
        message=f"{name} is not a function",
        location=location,
        node=node,
        code="S002",
        help_text=f"'{name}' is bound to a variable, and only methods can be called.",
        suggestions=["Rename the variable or the method so they do not collide"]
    )


def create_no_return_value_error(
    name: str,
    location: Optional[SourceLocation],
    node: Optional[ASTNode] = None
) -> SemanticError:
    return SemanticError(
        message=f"Function {name} has no return value",
        location=location,
        node=node,
        code="S003",
        help_text=f"The method '{name}' contains no 'back' statement.",
        suggestions=[f"Add 'back <value>;' to the body of '{name}'"]
    )


def create_undefined_variable_error(
    name: str,
    location: Optional[SourceLocation],
    node: Optional[ASTNode] = None
) -> SemanticError:
    return SemanticError(
        message=f"Undefined variable: {name}",
        location=location,
        node=node,
        code="S004",
        help_text=f"The variable '{name}' is assigned from before it is defined.",
        suggestions=[f"Bind '{name}' with 'let' before this assignment"]
    )


def create_undefined_identifier_error(
    name: str,
    location: Optional[SourceLocation],
    node: Optional[ASTNode] = None
) -> SemanticError:
    return SemanticError(
        message=f"Undefined identifier: {name}",
        location=location,
        node=node,
        code="S005",
        help_text=f"The name '{name}' is used before it is defined.",
        suggestions=[
            f"Declare '{name}' before using it",
            "Check for typos in the name"
        ]
    )


def create_invalid_number_error(
    value: str,
    location: Optional[SourceLocation],
    node: Optional[ASTNode] = None
) -> SemanticError:
    return SemanticError(
        message=f"Invalid number: {value}",
        location=location,
        node=node,
        code="S006",
        help_text="Method locals are 32-bit signed integers.",
        suggestions=["Use a value between 0 and 2147483647"]
    )
