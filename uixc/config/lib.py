"""Centralized configuration management for uixc.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

On top of the raw variables sits `CompilerConfig`, the validated settings
object consumed by the compiler.

Example:
    >>> from uixc.config import CompilerConfig, EnvVar, get_environment
    >>>
    >>> strict = get_environment(EnvVar.UIX_STRICT_VALIDATION)  # Returns bool
    >>> config = CompilerConfig.from_environment(enable_typescript=True)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "UIX_MODE").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by uixc.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - compiler: Compilation behavior
        - output: Artifact naming and location
        - logging: Log verbosity
    """

    # -------------------------------------------------------------------------
    # Compiler Behavior
    # -------------------------------------------------------------------------
    UIX_MODE = EnvConfig(
        name="UIX_MODE",
        default="development",
        var_type=str,
        description="Compilation mode: 'development' or 'production'",
        category="compiler",
    )
    UIX_STRICT_VALIDATION = EnvConfig(
        name="UIX_STRICT_VALIDATION",
        default=False,
        var_type=bool,
        description="Abort compilation on the first property validation failure",
        category="compiler",
    )
    UIX_ENABLE_TYPESCRIPT = EnvConfig(
        name="UIX_ENABLE_TYPESCRIPT",
        default=False,
        var_type=bool,
        description="Emit TSX with generated prop interfaces",
        category="compiler",
    )
    UIX_ENABLE_DOCS = EnvConfig(
        name="UIX_ENABLE_DOCS",
        default=False,
        var_type=bool,
        description="Generate Markdown component documentation",
        category="compiler",
    )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    UIX_OUTPUT_DIR = EnvConfig(
        name="UIX_OUTPUT_DIR",
        default=Path("src"),
        var_type=Path,
        description="Directory compiled artifacts are written to",
        category="output",
    )
    UIX_COMPONENT_NAME = EnvConfig(
        name="UIX_COMPONENT_NAME",
        default="CompiledUI",
        var_type=str,
        description="Name of the generated default export component",
        category="output",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    UIX_LOG_LEVEL = EnvConfig(
        name="UIX_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value)

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, bool, or Path).

    Example:
        >>> get_environment(EnvVar.UIX_COMPONENT_NAME)
        'CompiledUI'
        >>> get_environment(EnvVar.UIX_STRICT_VALIDATION, override=True)
        True
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (compiler, output, logging).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


def describe_environment(category: str | None = None) -> list[str]:
    """Describe environment variables with their current values.

    Args:
        category: Optional category filter (compiler, output, logging).

    Returns:
        One line per variable: name, resolved value, default and description.
    """
    lines = []
    for var in list_environment_variables(category):
        info = get_environment_info(var)
        lines.append(
            f"{info.name}={get_environment(var)} (default: {info.default}) - {info.description}"
        )
    return lines


def get_output_dir(override: Path | str | None = None) -> Path:
    """Get the directory compiled artifacts are written to.

    Resolution: override > UIX_OUTPUT_DIR > ./src
    """
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.UIX_OUTPUT_DIR)


# =============================================================================
# Compiler Configuration
# =============================================================================


class CompilationMode(str, Enum):
    """Compilation profile."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class OutputFormat(str, Enum):
    """Target source dialect."""

    JSX = "jsx"
    TSX = "tsx"


class CompilerConfig(BaseModel):
    """Validated settings for a compilation run.

    Attributes:
        mode: Development or production profile.
        output_format: jsx, or tsx when TypeScript output is enabled.
        enable_typescript: Emit prop interfaces and annotated signatures.
        enable_doc_generation: Produce Markdown component documentation.
        strict_validation: Abort on the first property validation failure.
        component_name: Name of the generated default export.
        tag_map: Tag translation overrides merged over the defaults.
        custom_schemas: Explicit per-component property schemas
            (component -> property -> Schema). These replace built-in and
            inferred schemas for the same component.

    Example:
        >>> config = CompilerConfig(strict_validation=True)
        >>> config.output_format
        <OutputFormat.JSX: 'jsx'>
    """

    mode: CompilationMode = Field(
        default=CompilationMode.DEVELOPMENT,
        description="Compilation profile",
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.JSX,
        description="Target source dialect",
    )
    enable_typescript: bool = Field(
        default=False,
        description="Emit TSX with prop interfaces",
    )
    enable_doc_generation: bool = Field(
        default=False,
        description="Generate Markdown component documentation",
    )
    strict_validation: bool = Field(
        default=False,
        description="Abort compilation on the first validation failure",
    )
    component_name: str = Field(
        default="CompiledUI",
        description="Name of the generated default export",
    )
    tag_map: dict[str, str] = Field(
        default_factory=dict,
        description="Tag translation overrides",
    )
    custom_schemas: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Explicit property schemas per component",
    )

    @field_validator("component_name")
    @classmethod
    def _check_component_name(cls, value: str) -> str:
        if not value.isidentifier() or not value[0].isupper():
            raise ValueError(
                f"component_name must be a capitalized identifier, got '{value}'"
            )
        return value

    def model_post_init(self, __context: Any) -> None:
        # TypeScript output implies the tsx dialect
        if self.enable_typescript:
            self.output_format = OutputFormat.TSX

    @property
    def file_extension(self) -> str:
        """Extension of the compiled artifact (e.g., '.jsx')."""
        return f".{self.output_format.value}"

    @classmethod
    def from_environment(cls, **overrides: Any) -> CompilerConfig:
        """Build a config from UIX_* environment variables.

        Args:
            **overrides: Field values that take priority over the environment.

        Returns:
            CompilerConfig instance.
        """
        values: dict[str, Any] = {
            "mode": get_environment(EnvVar.UIX_MODE),
            "strict_validation": get_environment(EnvVar.UIX_STRICT_VALIDATION),
            "enable_typescript": get_environment(EnvVar.UIX_ENABLE_TYPESCRIPT),
            "enable_doc_generation": get_environment(EnvVar.UIX_ENABLE_DOCS),
            "component_name": get_environment(EnvVar.UIX_COMPONENT_NAME),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


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
