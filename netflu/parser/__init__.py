"""
Netflu Parser Package

Implements a recursive descent parser for the Netflu language.
Produces a list of top-level AST statements with source locations.

Key Features:
- One-token lookahead, no backtracking
- Primary-only expressions (identifier, call, number, string)
- All-or-nothing parsing with first-error diagnostics
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Statement, Expression, Program,
    MethodDef, FunDef, Let, Assign, Print, Back,
    FunctionCall, Identifier, NumberLiteral, StringLiteral,
)
from .parser import Parser, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "Statement", "Expression", "Program",
    "MethodDef", "FunDef", "Let", "Assign", "Print", "Back",
    "FunctionCall", "Identifier", "NumberLiteral", "StringLiteral",

    # Error handling
    "ParseError",
]
