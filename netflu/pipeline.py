"""
The Netflu compilation pipeline.

Runs text -> tokens -> AST -> analysis -> Rust text. Every stage gets a
fresh instance per compilation, and the first stage error is wrapped in a
CompilationError tagged with the stage that produced it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import CompilerOptions
from .lexer import Lexer, Token, LexerError
from .parser import Parser, Statement, ParseError
from .analyzer import SemanticAnalyzer, AnalysisResult, SemanticError
from .codegen import RustCodeGenerator, GenError

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Pipeline stages, in execution order."""
    LEX = "lex"
    PARSE = "parse"
    ANALYZE = "analyze"
    GENERATE = "generate"


class CompilationError(Exception):
    """The first error of a failed compilation, tagged with its stage."""

    def __init__(self, stage: Stage, error: Exception):
        self.stage = stage
        self.error = error
        self.message = getattr(error, "message", str(error))
        self.code = getattr(error, "code", None)
        super().__init__(f"{stage.value}: {self.message}")

    @property
    def location(self):
        return getattr(self.error, "location", None)

    def render(self) -> str:
        """Full diagnostic block for terminal output."""
        return f"error[{self.stage.value}]: {self.error}"


@dataclass
class CompilationResult:
    """Everything produced by a successful compilation."""
    tokens: List[Token]
    statements: List[Statement]
    analysis: AnalysisResult
    code: str


class CompilerPipeline:
    """
    Wires the four stages together for one compilation unit.

    The pipeline holds only options; all per-compilation state lives in the
    stage objects created inside compile().
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile(self, source: str) -> CompilationResult:
        """
        Compile Netflu source text to Rust source text.

        Raises:
            CompilationError: Wrapping the first lex/parse/analyze/generate error
        """
        filename = self.options.filename

        try:
            tokens = Lexer(source, filename).tokenize()
        except LexerError as e:
            raise CompilationError(Stage.LEX, e) from e
        logger.debug("lexed %s: %d tokens", filename, len(tokens))

        try:
            statements = Parser(tokens).parse()
        except ParseError as e:
            raise CompilationError(Stage.PARSE, e) from e
        logger.debug("parsed %s: %d top-level statements", filename, len(statements))

        try:
            analysis = SemanticAnalyzer().analyze(statements)
        except SemanticError as e:
            raise CompilationError(Stage.ANALYZE, e) from e
        logger.debug("analyzed %s: %d symbols", filename, len(analysis.symbol_table))

        try:
            code = RustCodeGenerator(self.options.codegen_options()).generate(statements)
        except GenError as e:
            raise CompilationError(Stage.GENERATE, e) from e
        logger.debug("generated %s: %d characters of Rust", filename, len(code))

        return CompilationResult(tokens=tokens, statements=statements, analysis=analysis, code=code)


def compile_source(source: str, filename: str = "<string>") -> str:
    """
    Convenience function: compile source text and return the Rust code.

    Raises:
        CompilationError: If any stage fails
    """
    return CompilerPipeline(CompilerOptions(filename=filename)).compile(source).code
