"""
Symbol table for Netflu semantic analysis.

Netflu has a single flat namespace per compilation: every binding, even
one made inside a method body, lands in the same table, and a later
definition replaces an earlier one of the same name.
"""

from typing import Dict, Iterator, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation
from ..parser.ast_nodes import ASTNode


class SymbolKind(Enum):
    """Types of symbols in the symbol table."""
    VARIABLE = "variable"
    METHOD = "method"


@dataclass
class MethodInfo:
    """Analyzer-computed facts about one method declaration."""
    return_value: Optional[str] = None
    locals: Dict[str, int] = field(default_factory=dict)

    @property
    def has_return_value(self) -> bool:
        return bool(self.return_value)


@dataclass
class Symbol:
    """Represents a symbol in the symbol table."""
    name: str
    kind: SymbolKind
    node: ASTNode
    location: Optional[SourceLocation] = None
    method_info: Optional[MethodInfo] = None

    def __str__(self) -> str:
        return f"{self.kind.value} {self.name}"

    @property
    def is_method(self) -> bool:
        return self.kind == SymbolKind.METHOD


class SymbolTable:
    """
    Name to most-recent-definition mapping for one compilation.
    """

    def __init__(self):
        self.symbols: Dict[str, Symbol] = {}

    def define(self, symbol: Symbol) -> Symbol:
        """Define a symbol, replacing any earlier one with the same name."""
        self.symbols[symbol.name] = symbol
        return symbol

    def define_variable(self, name: str, node: ASTNode,
                        location: Optional[SourceLocation] = None) -> Symbol:
        return self.define(Symbol(name, SymbolKind.VARIABLE, node, location))

    def define_method(self, name: str, node: ASTNode, method_info: MethodInfo,
                      location: Optional[SourceLocation] = None) -> Symbol:
        return self.define(Symbol(name, SymbolKind.METHOD, node, location, method_info))

    def lookup(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols.values())

    def __str__(self) -> str:
        return f"SymbolTable({len(self.symbols)} symbols)"
