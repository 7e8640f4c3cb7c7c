"""Centralized configuration management for uixc.

Provides unified access to all configuration via the `get_environment()`
function and the validated `CompilerConfig` model.

Example:
    >>> from uixc.config import CompilerConfig, EnvVar, get_environment
    >>>
    >>> name = get_environment(EnvVar.UIX_COMPONENT_NAME)  # "CompiledUI"
    >>> config = CompilerConfig.from_environment(strict_validation=True)

Environment Variable Categories:
    compiler: Strictness, TypeScript and documentation toggles
    output: Artifact directory and component name
    logging: Log level
"""

from .lib import (
    CompilationMode,
    CompilerConfig,
    EnvConfig,
    EnvVar,
    OutputFormat,
    describe_environment,
    get_environment,
    get_environment_info,
    get_output_dir,
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    "get_output_dir",
    # Introspection
    "describe_environment",
    "list_environment_variables",
    # Compiler settings
    "CompilationMode",
    "CompilerConfig",
    "OutputFormat",
]
