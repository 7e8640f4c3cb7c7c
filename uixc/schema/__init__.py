"""Schema module - composable value-shape descriptors and validation.

This module provides:
- Schema kinds with constraints and required/default semantics
- Validation returning ValidationOutcome values
- Structured ValidationFailure records

Example usage:
    >>> from uixc.schema import Schema, validate_value
    >>> outcome = validate_value(Schema.string(required=True), None, "title")
    >>> outcome.failure.message
    'title is required'
"""

from .lib import (
    MISSING,
    ArrayConstraints,
    EnumConstraints,
    FailureKind,
    NumberConstraints,
    ObjectConstraints,
    RuntimeValue,
    Schema,
    SchemaKind,
    SchemaValidationError,
    StringConstraints,
    UnionConstraints,
    ValidationFailure,
    ValidationOutcome,
    kind_of,
    validate_value,
)

__all__ = [
    # Kinds
    "SchemaKind",
    "FailureKind",
    # Values
    "MISSING",
    "RuntimeValue",
    # Constraints
    "StringConstraints",
    "NumberConstraints",
    "ArrayConstraints",
    "ObjectConstraints",
    "EnumConstraints",
    "UnionConstraints",
    # Schema
    "Schema",
    # Validation
    "ValidationFailure",
    "ValidationOutcome",
    "SchemaValidationError",
    "kind_of",
    "validate_value",
]
