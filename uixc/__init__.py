"""uix-compiler: semantic analysis and React code generation for UIX."""

from uixc.binding import BindCandidate, BindingScan, Partition, classify, scan_program
from uixc.compiler import CompilationError, CompilationResult, UIXCompiler
from uixc.config import CompilerConfig
from uixc.ir import (
    AppNode,
    ComponentDefinition,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    load_program,
)
from uixc.registry import ComponentRegistry, create_default_registry
from uixc.schema import Schema, SchemaKind, validate_value

__all__ = [
    # AST
    "AppNode",
    "ComponentDefinition",
    "ElementNode",
    "Expression",
    "ForNode",
    "IfNode",
    "load_program",
    # Schema
    "Schema",
    "SchemaKind",
    "validate_value",
    # Registry
    "ComponentRegistry",
    "create_default_registry",
    # Binding
    "BindCandidate",
    "BindingScan",
    "Partition",
    "scan_program",
    "classify",
    # Compiler
    "CompilerConfig",
    "CompilationError",
    "CompilationResult",
    "UIXCompiler",
]
