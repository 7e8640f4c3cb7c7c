"""Compiler module - end-to-end UIX to React compilation.

Example usage:
    >>> from uixc.compiler import UIXCompiler
    >>> result = UIXCompiler().compile_sync(ast_json)
    >>> result.file_name
    'CompiledUI.jsx'
"""

from .lib import CompilationError, CompilationResult, UIXCompiler

__all__ = [
    "CompilationError",
    "CompilationResult",
    "UIXCompiler",
]
