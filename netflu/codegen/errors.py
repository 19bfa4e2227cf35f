"""
Error handling for the Netflu code generator.

Generation of a semantically valid AST does not fail on its own; GenError
reports node types the generator has no template for.
"""

from typing import Optional

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import ASTNode


class GenError(Exception):
    """Exception raised when a node cannot be rendered."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        node: Optional[ASTNode] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None
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
            help_text=help_text
        )
        self.node = node

    def __str__(self) -> str:
        return str(self.diagnostic)


def create_unsupported_node_error(node: object) -> GenError:
    """Create an error for a node with no rendering template."""
    return GenError(
        message=f"Cannot generate code for {type(node).__name__}",
        location=getattr(node, "location", None),
        node=node if isinstance(node, ASTNode) else None,
        code="G001",
        help_text="Only nodes produced by the Netflu parser can be rendered."
    )
