"""
Semantic analyzer for Netflu.

A single top-down, left-to-right pass that:
- Builds the symbol table (names resolve to their most recent definition)
- Validates call targets and identifier usage
- Computes each method's return value and numeric locals

The AST is not modified. Per-method results go into a side table keyed by
node identity and are returned in AnalysisResult.
"""

from typing import List, Dict, Optional
from dataclasses import dataclass

from ..parser.ast_nodes import (
    ASTNode, Statement, MethodDef, FunDef, Let, Assign, Print, Back,
    FunctionCall, Identifier, NumberLiteral, StringLiteral,
)
from .symbol_table import SymbolTable, MethodInfo
from .errors import (
    SemanticError, create_undefined_function_error, create_not_callable_error,
    create_no_return_value_error, create_undefined_variable_error,
    create_undefined_identifier_error, create_invalid_number_error,
)

# Method locals follow the i32 return type of generated methods
I32_MAX = 2 ** 31 - 1


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    statements: List[Statement]
    symbol_table: SymbolTable
    method_info: Dict[MethodDef, MethodInfo]

    def return_value_of(self, method: MethodDef) -> Optional[str]:
        return self.method_info[method].return_value

    def locals_of(self, method: MethodDef) -> Dict[str, int]:
        return self.method_info[method].locals


class SemanticAnalyzer:
    """
    Main semantic analyzer for Netflu.

    One instance owns the symbol table for one compilation; create a new
    analyzer for every compilation. The first violation raises
    SemanticError and aborts the pass.
    """

    def __init__(self):
        """Initialize the semantic analyzer."""
        self.symbol_table = SymbolTable()
        self.method_info: Dict[MethodDef, MethodInfo] = {}

    def analyze(self, statements: List[Statement]) -> AnalysisResult:
        """
        Perform semantic analysis on the top-level statements.

        Args:
            statements: The parsed compilation unit

        Returns:
            AnalysisResult with the symbol table and per-method info

        Raises:
            SemanticError: On the first semantic violation
        """
        self.symbol_table = SymbolTable()
        self.method_info = {}

        for stmt in statements:
            self._analyze_node(stmt)

        return AnalysisResult(
            statements=statements,
            symbol_table=self.symbol_table,
            method_info=self.method_info
        )

    def _analyze_node(self, node: ASTNode):
        if isinstance(node, MethodDef):
            self._analyze_method(node)
        elif isinstance(node, FunDef):
            for stmt in node.body:
                self._analyze_node(stmt)
        elif isinstance(node, FunctionCall):
            self._analyze_function_call(node)
        elif isinstance(node, Assign):
            self._analyze_assign(node)
        elif isinstance(node, Let):
            self._analyze_node(node.value)
            self.symbol_table.define_variable(node.name, Identifier(node.name, node.location), node.location)
        elif isinstance(node, Print):
            self._analyze_node(node.value)
        elif isinstance(node, Identifier):
            if node.name not in self.symbol_table:
                raise create_undefined_identifier_error(node.name, node.location, node)
        elif isinstance(node, (Back, NumberLiteral, StringLiteral)):
            # Back payloads were validated by the parser
            pass
        else:
            raise SemanticError(
                f"Unsupported node type: {type(node).__name__}",
                getattr(node, "location", None),
                node=node
            )

    def _analyze_method(self, method: MethodDef):
        info = MethodInfo()

        for stmt in method.body:
            self._analyze_node(stmt)

            if isinstance(stmt, Let) and isinstance(stmt.value, NumberLiteral):
                info.locals[stmt.name] = self._parse_int(stmt.value)
            elif isinstance(stmt, Back) and info.return_value is None:
                # First back wins
                info.return_value = stmt.value

        self.method_info[method] = info
        self.symbol_table.define_method(method.name, method, info, method.location)

    def _analyze_function_call(self, call: FunctionCall):
        symbol = self.symbol_table.lookup(call.name)
        if symbol is None:
            raise create_undefined_function_error(call.name, call.location, call)
        if not symbol.is_method:
            raise create_not_callable_error(call.name, call.location, call)
        if not symbol.method_info.has_return_value:
            raise create_no_return_value_error(call.name, call.location, call)

        for arg in call.args:
            self._analyze_node(arg)

    def _analyze_assign(self, assign: Assign):
        self._analyze_node(assign.value)

        if isinstance(assign.value, Identifier) and assign.value.name not in self.symbol_table:
            raise create_undefined_variable_error(assign.value.name, assign.value.location, assign)

        self.symbol_table.define_variable(assign.name, Identifier(assign.name, assign.location), assign.location)

    @staticmethod
    def _parse_int(literal: NumberLiteral) -> int:
        # Bounded before int() so huge literals never reach the digit limit
        if len(literal.value.lstrip("0")) > len(str(I32_MAX)):
            raise create_invalid_number_error(literal.value, literal.location, literal)
        value = int(literal.value)
        if value > I32_MAX:
            raise create_invalid_number_error(literal.value, literal.location, literal)
        return value
