"""Schema engine for UIX component properties.

This module is the single source of truth for property shapes. It provides:
- Nine composable schema kinds (string, number, boolean, function, array,
  object, enum, union, any) with kind-specific constraints
- Required / optional / default semantics
- Validation that returns outcomes as values instead of raising

Validation never mutates its input. A successful outcome carries the
validated value (identical to the input unless defaults were applied or
undeclared object keys were dropped); a failed outcome carries a
`ValidationFailure` describing the offending field.

Example:
    >>> name = Schema.string(min_length=1, required=True)
    >>> name.validate("Ann").value
    'Ann'
    >>> name.validate(None, "name").failure.message
    'name is required'
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class SchemaKind(str, Enum):
    """The value shapes a schema can describe."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FUNCTION = "function"
    ARRAY = "array"
    OBJECT = "object"
    ENUM = "enum"
    UNION = "union"
    ANY = "any"


class FailureKind(str, Enum):
    """Machine-readable classification of validation failures."""

    MISSING_REQUIRED = "missing_required"
    TYPE_MISMATCH = "type_mismatch"
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNKNOWN_COMPONENT = "unknown_component"
    UNION_EXHAUSTED = "union_exhausted"
    MALFORMED_BIND_TARGET = "malformed_bind_target"
    RULE_VIOLATION = "rule_violation"


class _Missing:
    """Sentinel type for a property that was not supplied at all."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class RuntimeValue:
    """A property value that is only known when the generated UI renders.

    Expression-valued properties cannot be checked at compile time, so they
    conform to every schema kind and skip constraint checks.

    Attributes:
        expression: Source text of the expression (e.g., "user.name").
    """

    expression: str


# =============================================================================
# Constraint Records
# =============================================================================


@dataclass(frozen=True)
class StringConstraints:
    """Length and pattern limits for string values."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None


@dataclass(frozen=True)
class NumberConstraints:
    """Range and integrality limits for numeric values."""

    minimum: float | None = None
    maximum: float | None = None
    integer: bool = False


@dataclass(frozen=True)
class ArrayConstraints:
    """Item schema and size limits for arrays."""

    items: Schema | None = None
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True)
class ObjectConstraints:
    """Declared properties of an object, in declaration order."""

    properties: tuple[tuple[str, Schema], ...] | None = None

    @property
    def property_map(self) -> dict[str, Schema]:
        return dict(self.properties or ())


@dataclass(frozen=True)
class EnumConstraints:
    """Allowed values of an enum."""

    values: tuple[Any, ...] = ()


@dataclass(frozen=True)
class UnionConstraints:
    """Alternative schemas, tried in declaration order."""

    alternatives: tuple[Schema, ...] = ()


Constraints = (
    StringConstraints
    | NumberConstraints
    | ArrayConstraints
    | ObjectConstraints
    | EnumConstraints
    | UnionConstraints
    | None
)


# =============================================================================
# Schema
# =============================================================================


@dataclass(frozen=True)
class Schema:
    """Immutable value-shape descriptor.

    Build schemas with the kind constructors rather than directly:

        >>> Schema.array(items=Schema.string(), min_items=1, required=True)
        >>> Schema.union([Schema.string(), Schema.number()])
        >>> Schema.boolean().optional(default=False)

    Attributes:
        kind: One of the nine SchemaKind values.
        required: Whether an absent value is a failure.
        default: Value returned for an absent, optional property.
        constraints: Kind-specific constraint record.
        description: Free text used in generated documentation.
    """

    kind: SchemaKind
    required: bool = False
    default: Any = None
    constraints: Constraints = None
    description: str = ""

    # -------------------------------------------------------------------------
    # Kind constructors
    # -------------------------------------------------------------------------

    @classmethod
    def string(
        cls,
        *,
        min_length: int | None = None,
        max_length: int | None = None,
        pattern: str | None = None,
        required: bool = False,
        default: Any = None,
        description: str = "",
    ) -> Schema:
        """Create a string schema."""
        if pattern is not None:
            re.compile(pattern)
        return cls(
            SchemaKind.STRING,
            required=required,
            default=default,
            constraints=StringConstraints(min_length, max_length, pattern),
            description=description,
        )

    @classmethod
    def number(
        cls,
        *,
        minimum: float | None = None,
        maximum: float | None = None,
        integer: bool = False,
        required: bool = False,
        default: Any = None,
        description: str = "",
    ) -> Schema:
        """Create a number schema."""
        return cls(
            SchemaKind.NUMBER,
            required=required,
            default=default,
            constraints=NumberConstraints(minimum, maximum, integer),
            description=description,
        )

    @classmethod
    def boolean(
        cls, *, required: bool = False, default: Any = None, description: str = ""
    ) -> Schema:
        """Create a boolean schema."""
        return cls(
            SchemaKind.BOOLEAN,
            required=required,
            default=default,
            description=description,
        )

    @classmethod
    def function(
        cls, *, required: bool = False, default: Any = None, description: str = ""
    ) -> Schema:
        """Create a function (callable / event handler) schema."""
        return cls(
            SchemaKind.FUNCTION,
            required=required,
            default=default,
            description=description,
        )

    @classmethod
    def array(
        cls,
        *,
        items: Schema | None = None,
        min_items: int | None = None,
        max_items: int | None = None,
        required: bool = False,
        default: Any = None,
        description: str = "",
    ) -> Schema:
        """Create an array schema, optionally validating every item."""
        return cls(
            SchemaKind.ARRAY,
            required=required,
            default=default,
            constraints=ArrayConstraints(items, min_items, max_items),
            description=description,
        )

    @classmethod
    def object(
        cls,
        *,
        properties: Mapping[str, Schema] | None = None,
        required: bool = False,
        default: Any = None,
        description: str = "",
    ) -> Schema:
        """Create an object schema.

        Without `properties` any mapping is accepted unchanged. With
        `properties`, only declared keys survive validation.
        """
        declared = tuple(properties.items()) if properties is not None else None
        return cls(
            SchemaKind.OBJECT,
            required=required,
            default=default,
            constraints=ObjectConstraints(declared),
            description=description,
        )

    @classmethod
    def enum(
        cls,
        values: Iterable[Any],
        *,
        required: bool = False,
        default: Any = None,
        description: str = "",
    ) -> Schema:
        """Create an enum schema accepting only the listed values."""
        allowed = tuple(values)
        if not allowed:
            raise ValueError("enum schema needs at least one allowed value")
        return cls(
            SchemaKind.ENUM,
            required=required,
            default=default,
            constraints=EnumConstraints(allowed),
            description=description,
        )

    @classmethod
    def union(
        cls,
        alternatives: Iterable[Schema],
        *,
        required: bool = False,
        default: Any = None,
        description: str = "",
    ) -> Schema:
        """Create a union schema.

        Alternatives are tried in the given order and the first success wins,
        so list them from most to least specific.
        """
        options = tuple(alternatives)
        if not options:
            raise ValueError("union schema needs at least one alternative")
        return cls(
            SchemaKind.UNION,
            required=required,
            default=default,
            constraints=UnionConstraints(options),
            description=description,
        )

    @classmethod
    def any(
        cls, *, required: bool = False, default: Any = None, description: str = ""
    ) -> Schema:
        """Create a schema accepting any value."""
        return cls(
            SchemaKind.ANY,
            required=required,
            default=default,
            description=description,
        )

    # -------------------------------------------------------------------------
    # Derived schemas and helpers
    # -------------------------------------------------------------------------

    def optional(self, default: Any = None) -> Schema:
        """Return a copy that is not required and falls back to `default`."""
        return replace(self, required=False, default=default)

    def require(self) -> Schema:
        """Return a required copy of this schema."""
        return replace(self, required=True, default=None)

    def validate(self, value: Any = MISSING, path: str = "value") -> ValidationOutcome:
        """Validate a value against this schema. See `validate_value`."""
        return validate_value(self, value, path)

    @property
    def type_label(self) -> str:
        """Compact human-readable type, e.g. 'array<string>' or 'enum(a|b)'."""
        c = self.constraints
        if isinstance(c, ArrayConstraints) and c.items is not None:
            return f"array<{c.items.type_label}>"
        if isinstance(c, EnumConstraints):
            return "enum(" + "|".join(str(v) for v in c.values) + ")"
        if isinstance(c, UnionConstraints):
            return "union(" + "|".join(a.type_label for a in c.alternatives) + ")"
        return self.kind.value


# =============================================================================
# Validation Results
# =============================================================================


@dataclass(frozen=True)
class ValidationFailure:
    """Structured description of why a value was rejected.

    Attributes:
        kind: Failure classification.
        path: Dotted/indexed path of the failing field (e.g., "user.tags[2]").
        message: Human-readable explanation.
        value: The offending value.
        expected: Expected kind (type mismatches only).
        actual: Actual kind (type mismatches only).
        alternatives: Per-alternative messages, in order (unions only).
        component: Component name, once wrapped by a component validator.
        prop: Property name, once wrapped by a component validator.
    """

    kind: FailureKind
    path: str
    message: str
    value: Any = None
    expected: str | None = None
    actual: str | None = None
    alternatives: tuple[str, ...] = ()
    component: str | None = None
    prop: str | None = None

    def describe(self) -> str:
        """Full message including component context when present."""
        if self.component and self.prop:
            return (
                f"Invalid prop '{self.prop}' for component "
                f"'{self.component}': {self.message}"
            )
        if self.component:
            return f"{self.component}: {self.message}"
        return self.message


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a value: either a value or a failure.

    Attributes:
        value: Validated value (None on failure).
        failure: Failure description, or None on success.
        dropped: Paths of undeclared object keys removed during validation.
        unknown: Component properties not present in the schema set.
    """

    value: Any = None
    failure: ValidationFailure | None = None
    dropped: tuple[str, ...] = ()
    unknown: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """True when validation succeeded."""
        return self.failure is None

    def unwrap(self) -> Any:
        """Return the value or raise SchemaValidationError."""
        if self.failure is not None:
            raise SchemaValidationError(self.failure)
        return self.value


class SchemaValidationError(ValueError):
    """Raised by `ValidationOutcome.unwrap()` for a failed outcome."""

    def __init__(self, failure: ValidationFailure):
        super().__init__(failure.describe())
        self.failure = failure


def _success(value: Any, dropped: Iterable[str] = ()) -> ValidationOutcome:
    return ValidationOutcome(value=value, dropped=tuple(dropped))


def _failure(
    kind: FailureKind, path: str, message: str, value: Any, **extra: Any
) -> ValidationOutcome:
    return ValidationOutcome(
        failure=ValidationFailure(kind=kind, path=path, message=message, value=value, **extra)
    )


# =============================================================================
# Validation
# =============================================================================


def kind_of(value: Any) -> str:
    """Name the UIX kind of a Python value (used in mismatch messages)."""
    if value is None or value is MISSING:
        return "null"
    if isinstance(value, RuntimeValue):
        return "expression"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if callable(value):
        return "function"
    return type(value).__name__


def _article(word: str) -> str:
    return "an" if word[:1] in "aeiou" else "a"


def _mismatch(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    expected = schema.kind.value
    actual = kind_of(value)
    return _failure(
        FailureKind.TYPE_MISMATCH,
        path,
        f"{path} must be {_article(expected)} {expected}, got {actual}",
        value,
        expected=expected,
        actual=actual,
    )


def _violation(path: str, message: str, value: Any) -> ValidationOutcome:
    return _failure(FailureKind.CONSTRAINT_VIOLATION, path, message, value)


def _check_string(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    if not isinstance(value, str):
        return _mismatch(schema, value, path)

    c = schema.constraints or StringConstraints()
    if c.min_length is not None and len(value) < c.min_length:
        return _violation(
            path, f"{path} must be at least {c.min_length} characters long", value
        )
    if c.max_length is not None and len(value) > c.max_length:
        return _violation(
            path, f"{path} must be no more than {c.max_length} characters long", value
        )
    if c.pattern is not None and re.search(c.pattern, value) is None:
        return _violation(path, f"{path} must match pattern: {c.pattern}", value)
    return _success(value)


def _check_number(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    # bool is an int subclass but never a number here
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or (isinstance(value, float) and math.isnan(value))
    ):
        return _mismatch(schema, value, path)

    c = schema.constraints or NumberConstraints()
    if c.minimum is not None and value < c.minimum:
        return _violation(path, f"{path} must be at least {c.minimum}", value)
    if c.maximum is not None and value > c.maximum:
        return _violation(path, f"{path} must be no more than {c.maximum}", value)
    if c.integer and isinstance(value, float) and not value.is_integer():
        return _violation(path, f"{path} must be an integer", value)
    return _success(value)


def _check_boolean(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    if not isinstance(value, bool):
        return _mismatch(schema, value, path)
    return _success(value)


def _check_function(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    if not callable(value):
        return _mismatch(schema, value, path)
    return _success(value)


def _check_array(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    if not isinstance(value, (list, tuple)):
        return _mismatch(schema, value, path)

    c = schema.constraints or ArrayConstraints()
    if c.min_items is not None and len(value) < c.min_items:
        return _violation(path, f"{path} must have at least {c.min_items} items", value)
    if c.max_items is not None and len(value) > c.max_items:
        return _violation(
            path, f"{path} must have no more than {c.max_items} items", value
        )
    if c.items is None:
        return _success(value)

    items: list[Any] = []
    dropped: list[str] = []
    for index, item in enumerate(value):
        outcome = validate_value(c.items, item, f"{path}[{index}]")
        if not outcome.ok:
            return outcome
        items.append(outcome.value)
        dropped.extend(outcome.dropped)
    return _success(type(value)(items), dropped)


def _check_object(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    if not isinstance(value, Mapping):
        return _mismatch(schema, value, path)

    c = schema.constraints or ObjectConstraints()
    if c.properties is None:
        return _success(value)

    declared = c.property_map
    result: dict[str, Any] = {}
    dropped: list[str] = []
    for key, sub_schema in c.properties:
        outcome = validate_value(sub_schema, value.get(key, MISSING), f"{path}.{key}")
        if not outcome.ok:
            return outcome
        if key in value or outcome.value is not None:
            result[key] = outcome.value
        dropped.extend(outcome.dropped)

    dropped.extend(f"{path}.{key}" for key in value if key not in declared)
    return _success(result, dropped)


def _is_member(value: Any, allowed: tuple[Any, ...]) -> bool:
    for candidate in allowed:
        # Keep True distinct from 1 and False from 0
        if isinstance(candidate, bool) or isinstance(value, bool):
            if candidate is value:
                return True
        elif candidate == value:
            return True
    return False


def _check_enum(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    c = schema.constraints or EnumConstraints()
    if not _is_member(value, c.values):
        allowed = ", ".join(str(v) for v in c.values)
        return _violation(path, f"{path} must be one of: {allowed}", value)
    return _success(value)


def _check_union(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    c = schema.constraints or UnionConstraints()
    messages: list[str] = []
    for alternative in c.alternatives:
        outcome = validate_value(alternative, value, path)
        if outcome.ok:
            return outcome
        messages.append(outcome.failure.message)

    return _failure(
        FailureKind.UNION_EXHAUSTED,
        path,
        f"{path} must match one of the union types. Errors: {'; '.join(messages)}",
        value,
        alternatives=tuple(messages),
    )


def _check_any(schema: Schema, value: Any, path: str) -> ValidationOutcome:
    return _success(value)


_CHECKS: dict[SchemaKind, Callable[[Schema, Any, str], ValidationOutcome]] = {
    SchemaKind.STRING: _check_string,
    SchemaKind.NUMBER: _check_number,
    SchemaKind.BOOLEAN: _check_boolean,
    SchemaKind.FUNCTION: _check_function,
    SchemaKind.ARRAY: _check_array,
    SchemaKind.OBJECT: _check_object,
    SchemaKind.ENUM: _check_enum,
    SchemaKind.UNION: _check_union,
    SchemaKind.ANY: _check_any,
}


def validate_value(
    schema: Schema, value: Any = MISSING, path: str = "value"
) -> ValidationOutcome:
    """Validate a value against a schema.

    Order of checks:
        1. Absent value (None or MISSING): failure if required, otherwise
           the schema default with no further checks.
        2. Render-time expressions (RuntimeValue) are accepted as-is.
        3. Type conformance, then kind-specific constraints in a fixed order.

    Args:
        schema: Schema to validate against.
        value: Value to check. Omit to validate a missing value.
        path: Field path used in failure messages.

    Returns:
        ValidationOutcome with the validated value or a failure.

    Example:
        >>> outcome = validate_value(Schema.number(maximum=10), 42, "count")
        >>> outcome.failure.kind
        <FailureKind.CONSTRAINT_VIOLATION: 'constraint_violation'>
    """
    if value is None or value is MISSING:
        if schema.required:
            return _failure(
                FailureKind.MISSING_REQUIRED, path, f"{path} is required", None
            )
        return _success(schema.default)

    if isinstance(value, RuntimeValue):
        return _success(value)

    return _CHECKS[schema.kind](schema, value, path)


__all__ = [
    "SchemaKind",
    "FailureKind",
    "MISSING",
    "RuntimeValue",
    "StringConstraints",
    "NumberConstraints",
    "ArrayConstraints",
    "ObjectConstraints",
    "EnumConstraints",
    "UnionConstraints",
    "Schema",
    "ValidationFailure",
    "ValidationOutcome",
    "SchemaValidationError",
    "kind_of",
    "validate_value",
]
