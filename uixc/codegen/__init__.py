"""Codegen module - React JSX / TSX emission from UIX IR.

Example usage:
    >>> from uixc.codegen import get_generator
    >>> generator = get_generator("jsx", component_name="CompiledUI")
    >>> print(generator.emit(program, scan, partition))
"""

from .lib import (
    DEFAULT_TAG_MAP,
    HEADER,
    TS_TYPES,
    CodeGenerator,
    ReactGenerator,
    TypeScriptReactGenerator,
    bound_target,
    get_generator,
    list_generators,
    register_generator,
    state_initializer,
    typescript_type,
)

__all__ = [
    # Constants
    "DEFAULT_TAG_MAP",
    "HEADER",
    "TS_TYPES",
    # Generators
    "CodeGenerator",
    "ReactGenerator",
    "TypeScriptReactGenerator",
    # Helpers
    "bound_target",
    "state_initializer",
    "typescript_type",
    # Registry
    "register_generator",
    "get_generator",
    "list_generators",
]
