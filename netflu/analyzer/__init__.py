"""
Netflu Semantic Analyzer Package

Implements name resolution for Netflu:
- Flat, per-compilation symbol table
- Call target validation (methods only, with a return value)
- Identifier definedness checks
- Per-method return value and numeric locals
"""

from .semantic_analyzer import SemanticAnalyzer, AnalysisResult
from .symbol_table import SymbolTable, Symbol, SymbolKind, MethodInfo
from .errors import SemanticError

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult",

    # Symbol management
    "SymbolTable", "Symbol", "SymbolKind", "MethodInfo",

    # Error handling
    "SemanticError",
]
