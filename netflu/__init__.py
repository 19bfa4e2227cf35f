"""
Netflu Compiler Package

A front end for the Netflu language that emits Rust source for rustc.

Architecture:
    netflu/
    ├── lexer/           # Tokenization
    ├── parser/          # Recursive descent parsing and AST
    ├── analyzer/        # Name resolution and method return values
    ├── codegen/         # Rust source generation
    ├── pipeline.py      # Stage wiring and stage-tagged errors
    ├── build.py         # Project build orchestration (rustc)
    └── cli.py           # netflu command

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser
from .analyzer import SemanticAnalyzer
from .codegen import RustCodeGenerator
from .pipeline import CompilerPipeline, CompilationError, Stage, compile_source

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",
    "RustCodeGenerator",

    # Pipeline
    "CompilerPipeline",
    "CompilationError",
    "Stage",
    "compile_source",

    # Version info
    "__version__",
    "__license__",
]
