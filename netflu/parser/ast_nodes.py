"""
Abstract Syntax Tree node definitions for Netflu.

Each node records the location of its first token and supports the visitor
pattern. Nodes hash by identity so later stages can attach information to
them through side tables instead of mutating the tree.
"""

from abc import ABC, abstractmethod
from typing import List, Any, Optional
from enum import Enum
import uuid

from ..lexer.tokens import SourceLocation


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Declarations
    METHOD_DEF = "MethodDef"
    FUN_DEF = "FunDef"

    # Statements
    LET = "Let"
    ASSIGN = "Assign"
    PRINT = "Print"
    BACK = "Back"

    # Expressions
    FUNCTION_CALL = "FunctionCall"
    IDENTIFIER = "Identifier"
    NUMBER_LITERAL = "NumberLiteral"
    STRING_LITERAL = "StringLiteral"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, location: Optional[SourceLocation] = None):
        self.node_type = node_type
        self.location = location
        # Generate unique ID for hashability
        self._id = uuid.uuid4()

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.location}"

    def __hash__(self) -> int:
        """Hash based on unique ID for use in dictionaries."""
        return hash(self._id)

    def __eq__(self, other) -> bool:
        """Equality based on unique ID."""
        if not isinstance(other, ASTNode):
            return False
        return self._id == other._id


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(Statement):
    """Base class for expressions. A call may stand alone as a statement."""
    pass


# ============================================================================
# Declarations
# ============================================================================

class MethodDef(Statement):
    """
    Method declaration: a callable guaranteed to return an integer.

    The return value and numeric locals are computed by the semantic
    analyzer and stored in AnalysisResult.method_info, not on the node.
    """

    def __init__(self, name: str, body: List[Statement], location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.METHOD_DEF, location)
        self.name = name
        self.body = body

    def children(self) -> List[ASTNode]:
        return list(self.body)

    def __repr__(self) -> str:
        return f"MethodDef({self.name!r}, body={self.body!r})"


class FunDef(Statement):
    """Procedure declaration: a callable with no return value."""

    def __init__(self, name: str, body: List[Statement], location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.FUN_DEF, location)
        self.name = name
        self.body = body

    def children(self) -> List[ASTNode]:
        return list(self.body)

    def __repr__(self) -> str:
        return f"FunDef({self.name!r}, body={self.body!r})"


# ============================================================================
# Statements
# ============================================================================

class Let(Statement):
    """New binding: let NAME = EXPR;"""

    def __init__(self, name: str, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.LET, location)
        self.name = name
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.value]

    def __repr__(self) -> str:
        return f"Let({self.name!r}, {self.value!r})"


class Assign(Statement):
    """Rebinding of an existing name: NAME = EXPR;"""

    def __init__(self, name: str, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.ASSIGN, location)
        self.name = name
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.value]

    def __repr__(self) -> str:
        return f"Assign({self.name!r}, {self.value!r})"


class Print(Statement):
    """Print statement: print(EXPR);"""

    def __init__(self, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.PRINT, location)
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.value]

    def __repr__(self) -> str:
        return f"Print({self.value!r})"


class Back(Statement):
    """Return statement. The payload is an identifier name or number text."""

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.BACK, location)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"Back({self.value!r})"


# ============================================================================
# Expressions
# ============================================================================

class FunctionCall(Expression):
    """Function call: NAME(ARGS)"""

    def __init__(self, name: str, args: List[Expression], location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.FUNCTION_CALL, location)
        self.name = name
        self.args = args

    def children(self) -> List[ASTNode]:
        return list(self.args)

    def __repr__(self) -> str:
        return f"FunctionCall({self.name!r}, {self.args!r})"


class Identifier(Expression):
    """Reference to a bound name."""

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.IDENTIFIER, location)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"Identifier({self.name!r})"


class NumberLiteral(Expression):
    """Unsigned decimal literal, kept as its source text."""

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.NUMBER_LITERAL, location)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"NumberLiteral({self.value!r})"


class StringLiteral(Expression):
    """String literal, kept as its source text including the quotes."""

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.STRING_LITERAL, location)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"StringLiteral({self.value!r})"


# A compilation unit is the ordered list of its top-level statements
Program = List[Statement]
