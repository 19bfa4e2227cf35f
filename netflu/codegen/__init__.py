"""
Netflu Code Generation Package

Renders the validated AST into Rust source text for rustc.
"""

from .rust_generator import RustCodeGenerator, CodegenOptions, generate_code
from .errors import GenError

__all__ = [
    "RustCodeGenerator",
    "CodegenOptions",
    "generate_code",
    "GenError",
]
