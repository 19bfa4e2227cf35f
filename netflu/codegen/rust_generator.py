"""
Rust code generator for Netflu.

Renders a validated AST into Rust source text using fixed textual
templates. Literal payloads are emitted verbatim: numbers keep their
source spelling and strings keep their quotes.
"""

from typing import List, Optional
from dataclasses import dataclass

from ..parser.ast_nodes import (
    ASTNode, Statement, MethodDef, FunDef, Let, Assign, Print, Back,
    FunctionCall, Identifier, NumberLiteral, StringLiteral,
)
from .errors import create_unsupported_node_error


@dataclass
class CodegenOptions:
    """Options for Rust code generation."""
    indent: str = "    "
    entry_point: str = "main"


class RustCodeGenerator:
    """
    Generates Rust source text from Netflu statements.

    Top-level statements are rendered in order, one per line group. When no
    top-level procedure is named after the entry point, an empty one is
    appended so the output links as a binary.
    """

    def __init__(self, options: Optional[CodegenOptions] = None):
        self.options = options or CodegenOptions()

    def generate(self, statements: List[Statement]) -> str:
        """
        Generate Rust source for a compilation unit.

        Raises:
            GenError: If a node has no rendering template
        """
        code = []
        has_entry_point = False

        for stmt in statements:
            if isinstance(stmt, FunDef) and stmt.name == self.options.entry_point:
                has_entry_point = True
            code.append(self._generate_statement(stmt))
            code.append("\n")

        if not has_entry_point:
            code.append(f"\nfn {self.options.entry_point}() {{\n}}\n")

        return "".join(code)

    # ========================================================================
    # Statements
    # ========================================================================

    def _generate_statement(self, node: ASTNode) -> str:
        if isinstance(node, FunctionCall):
            # A call standing alone is an expression statement
            return f"{self._generate_expression(node)};"
        if isinstance(node, Let):
            return f"let {node.name} = {self._generate_expression(node.value)};"
        if isinstance(node, Assign):
            return f"{node.name} = {self._generate_expression(node.value)};"
        if isinstance(node, Print):
            return self._generate_print(node)
        if isinstance(node, MethodDef):
            return self._generate_method(node)
        if isinstance(node, FunDef):
            return self._generate_fun(node)
        if isinstance(node, Back):
            return f"return {node.value};"
        return self._generate_expression(node)

    def _generate_print(self, node: Print) -> str:
        expr = self._generate_expression(node.value)
        if isinstance(node.value, StringLiteral):
            return f"print!({expr});"
        return f'print!("{{}}", {expr});'

    def _generate_method(self, node: MethodDef) -> str:
        lines = [f"fn {node.name}() -> i32 {{"]
        lines.extend(self._generate_body(node.body))

        # Only direct children count, nested bodies do not
        if not any(isinstance(stmt, Back) for stmt in node.body):
            lines.append(f"{self.options.indent}return 0;")

        lines.append("}")
        return "\n".join(lines)

    def _generate_fun(self, node: FunDef) -> str:
        lines = [f"fn {node.name}() {{"]
        lines.extend(self._generate_body(node.body))
        lines.append("}")
        return "\n".join(lines)

    def _generate_body(self, body: List[Statement]) -> List[str]:
        lines = []
        for stmt in body:
            for line in self._generate_statement(stmt).split("\n"):
                lines.append(f"{self.options.indent}{line}")
        return lines

    # ========================================================================
    # Expressions
    # ========================================================================

    def _generate_expression(self, node: ASTNode) -> str:
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, (NumberLiteral, StringLiteral)):
            return node.value
        if isinstance(node, FunctionCall):
            args = ", ".join(self._generate_expression(arg) for arg in node.args)
            return f"{node.name}({args})"
        raise create_unsupported_node_error(node)


def generate_code(statements: List[Statement], options: Optional[CodegenOptions] = None) -> str:
    """
    Convenience function to generate Rust source for a compilation unit.

    Raises:
        GenError: If generation fails
    """
    return RustCodeGenerator(options).generate(statements)
