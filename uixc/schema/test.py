"""Unit tests for the schema engine."""

import math

import pytest

from .lib import (
    MISSING,
    FailureKind,
    RuntimeValue,
    Schema,
    SchemaKind,
    SchemaValidationError,
    kind_of,
    validate_value,
)


class TestAbsentValues:
    """Tests for required / optional / default handling."""

    @pytest.mark.unit
    def test_required_missing_fails(self):
        """A required schema rejects an absent value."""
        outcome = validate_value(Schema.string(required=True), None, "title")
        assert not outcome.ok
        assert outcome.failure.kind == FailureKind.MISSING_REQUIRED
        assert outcome.failure.path == "title"
        assert outcome.failure.message == "title is required"

    @pytest.mark.unit
    def test_missing_sentinel_is_absent(self):
        """Omitting the value counts as absent."""
        outcome = Schema.number(required=True).validate(path="count")
        assert outcome.failure.kind == FailureKind.MISSING_REQUIRED

    @pytest.mark.unit
    def test_optional_returns_default(self):
        """Optional schema yields its default without further checks."""
        schema = Schema.string(min_length=5).optional(default="abc")
        outcome = validate_value(schema, None)
        assert outcome.ok
        assert outcome.value == "abc"

    @pytest.mark.unit
    def test_optional_without_default_returns_none(self):
        """Absent optional value with no default validates to None."""
        assert validate_value(Schema.boolean(), MISSING).value is None

    @pytest.mark.unit
    def test_empty_string_is_present(self):
        """An empty string is a present value and gets checked."""
        outcome = validate_value(Schema.string(min_length=1, required=True), "", "name")
        assert outcome.failure.kind == FailureKind.CONSTRAINT_VIOLATION

    @pytest.mark.unit
    def test_require_copy(self):
        """require() produces a required copy without touching the original."""
        base = Schema.string()
        required = base.require()
        assert required.required is True
        assert base.required is False


class TestIdentity:
    """Validation never alters values that need no defaults or trimming."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "schema,value",
        [
            (Schema.string(), "hello"),
            (Schema.number(), 3.5),
            (Schema.number(integer=True), 4.0),
            (Schema.boolean(), False),
            (Schema.array(items=Schema.number()), [1, 2, 3]),
            (Schema.enum(["a", "b"]), "b"),
            (Schema.any(), {"nested": [1, None]}),
            (Schema.object(), {"free": "form"}),
        ],
    )
    def test_valid_value_is_unchanged(self, schema, value):
        """A conforming value comes back equal to the input."""
        outcome = validate_value(schema, value)
        assert outcome.ok
        assert outcome.value == value
        assert outcome.dropped == ()

    @pytest.mark.unit
    def test_input_not_mutated(self):
        """Object validation builds a new mapping."""
        data = {"name": "Ann", "extra": 1}
        schema = Schema.object(properties={"name": Schema.string()})
        outcome = validate_value(schema, data)
        assert outcome.value == {"name": "Ann"}
        assert data == {"name": "Ann", "extra": 1}


class TestString:
    """Tests for string schemas."""

    @pytest.mark.unit
    def test_type_mismatch(self):
        """Non-string is a type mismatch naming both kinds."""
        outcome = validate_value(Schema.string(), 42, "label")
        failure = outcome.failure
        assert failure.kind == FailureKind.TYPE_MISMATCH
        assert failure.expected == "string"
        assert failure.actual == "number"
        assert failure.message == "label must be a string, got number"

    @pytest.mark.unit
    def test_min_length(self):
        """Strings shorter than min_length are rejected."""
        outcome = validate_value(Schema.string(min_length=3), "ab", "code")
        assert outcome.failure.message == "code must be at least 3 characters long"

    @pytest.mark.unit
    def test_max_length(self):
        """Strings longer than max_length are rejected."""
        outcome = validate_value(Schema.string(max_length=2), "abc", "code")
        assert outcome.failure.kind == FailureKind.CONSTRAINT_VIOLATION

    @pytest.mark.unit
    def test_pattern(self):
        """Pattern is searched, not fully matched."""
        schema = Schema.string(pattern=r"^\d+$")
        assert validate_value(schema, "123").ok
        outcome = validate_value(schema, "12a", "zip")
        assert outcome.failure.message == r"zip must match pattern: ^\d+$"

    @pytest.mark.unit
    def test_invalid_pattern_rejected_early(self):
        """Bad regular expressions fail at construction."""
        with pytest.raises(Exception):
            Schema.string(pattern="(")


class TestNumber:
    """Tests for number schemas."""

    @pytest.mark.unit
    def test_bool_is_not_number(self):
        """Booleans never pass as numbers."""
        outcome = validate_value(Schema.number(), True, "n")
        assert outcome.failure.kind == FailureKind.TYPE_MISMATCH
        assert outcome.failure.actual == "boolean"

    @pytest.mark.unit
    def test_nan_rejected(self):
        """NaN is not a number for UIX purposes."""
        outcome = validate_value(Schema.number(), math.nan)
        assert outcome.failure.kind == FailureKind.TYPE_MISMATCH

    @pytest.mark.unit
    def test_range(self):
        """Minimum and maximum are inclusive."""
        schema = Schema.number(minimum=0, maximum=10)
        assert validate_value(schema, 0).ok
        assert validate_value(schema, 10).ok
        assert validate_value(schema, -1).failure.message == "value must be at least 0"
        assert not validate_value(schema, 11).ok

    @pytest.mark.unit
    def test_integer(self):
        """Integer constraint accepts whole floats, rejects fractions."""
        schema = Schema.number(integer=True)
        assert validate_value(schema, 3).ok
        assert validate_value(schema, 3.0).ok
        outcome = validate_value(schema, 3.5, "level")
        assert outcome.failure.message == "level must be an integer"


class TestArray:
    """Tests for array schemas."""

    @pytest.mark.unit
    def test_item_failure_path(self):
        """Item failures carry the indexed path."""
        schema = Schema.array(items=Schema.string())
        outcome = validate_value(schema, ["a", "b", 3], "tags")
        assert outcome.failure.path == "tags[2]"
        assert outcome.failure.kind == FailureKind.TYPE_MISMATCH

    @pytest.mark.unit
    def test_size_limits(self):
        """min_items and max_items are enforced."""
        schema = Schema.array(min_items=1, max_items=2)
        assert validate_value(schema, []).failure.kind == FailureKind.CONSTRAINT_VIOLATION
        assert validate_value(schema, [1, 2, 3]).failure.kind == FailureKind.CONSTRAINT_VIOLATION
        assert validate_value(schema, [1]).ok

    @pytest.mark.unit
    def test_tuple_stays_tuple(self):
        """Sequence type survives item validation."""
        outcome = validate_value(Schema.array(items=Schema.number()), (1, 2))
        assert outcome.value == (1, 2)
        assert isinstance(outcome.value, tuple)


class TestObject:
    """Tests for object schemas."""

    @pytest.mark.unit
    def test_undeclared_keys_dropped(self):
        """Only declared keys survive and dropped ones are reported."""
        schema = Schema.object(properties={"id": Schema.number(required=True)})
        outcome = validate_value(schema, {"id": 1, "junk": True}, "user")
        assert outcome.value == {"id": 1}
        assert outcome.dropped == ("user.junk",)

    @pytest.mark.unit
    def test_nested_failure_path(self):
        """Nested failures name the full dotted path."""
        schema = Schema.object(
            properties={"address": Schema.object(properties={"zip": Schema.string(required=True)})}
        )
        outcome = validate_value(schema, {"address": {}}, "user")
        assert outcome.failure.path == "user.address.zip"
        assert outcome.failure.kind == FailureKind.MISSING_REQUIRED

    @pytest.mark.unit
    def test_defaults_applied(self):
        """Missing optional keys with defaults are filled in."""
        schema = Schema.object(
            properties={
                "size": Schema.string().optional("md"),
                "note": Schema.string(),
            }
        )
        outcome = validate_value(schema, {})
        assert outcome.value == {"size": "md"}

    @pytest.mark.unit
    def test_non_mapping_mismatch(self):
        """Lists are not objects."""
        outcome = validate_value(Schema.object(), [1], "cfg")
        assert outcome.failure.message == "cfg must be an object, got array"


class TestEnum:
    """Tests for enum schemas."""

    @pytest.mark.unit
    def test_member_accepted(self):
        """Listed values pass."""
        assert validate_value(Schema.enum(["primary", "secondary"]), "primary").ok

    @pytest.mark.unit
    def test_non_member_message(self):
        """Non-members list the allowed values."""
        outcome = validate_value(Schema.enum(["sm", "md"]), "xl", "size")
        assert outcome.failure.message == "size must be one of: sm, md"

    @pytest.mark.unit
    def test_bool_distinct_from_int(self):
        """True does not match 1."""
        assert not validate_value(Schema.enum([1, 2]), True).ok

    @pytest.mark.unit
    def test_empty_enum_rejected(self):
        """Enums need at least one value."""
        with pytest.raises(ValueError):
            Schema.enum([])


class TestUnion:
    """Tests for union schemas."""

    @pytest.mark.unit
    def test_first_success_wins(self):
        """Alternatives are tried in order."""
        trimmed = Schema.object(properties={"a": Schema.number()})
        loose = Schema.object()
        value = {"a": 1, "b": 2}
        assert validate_value(Schema.union([trimmed, loose]), value).value == {"a": 1}
        assert validate_value(Schema.union([loose, trimmed]), value).value == value

    @pytest.mark.unit
    def test_exhausted_collects_messages(self):
        """All alternative messages are kept, in order."""
        schema = Schema.union([Schema.string(), Schema.number()])
        outcome = validate_value(schema, True, "text")
        failure = outcome.failure
        assert failure.kind == FailureKind.UNION_EXHAUSTED
        assert failure.alternatives == (
            "text must be a string, got boolean",
            "text must be a number, got boolean",
        )
        assert failure.message.startswith("text must match one of the union types. Errors: ")


class TestRuntimeValues:
    """Tests for render-time expression values."""

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list(SchemaKind))
    def test_expression_conforms_to_every_kind(self, kind):
        """Expressions are accepted by any schema kind."""
        schema = {
            SchemaKind.ENUM: Schema.enum(["x"]),
            SchemaKind.UNION: Schema.union([Schema.number()]),
        }.get(kind, Schema(kind))
        value = RuntimeValue("user.name")
        assert validate_value(schema, value).value == value

    @pytest.mark.unit
    def test_expression_skips_constraints(self):
        """Constraints are not applied to expressions."""
        schema = Schema.string(min_length=100)
        assert validate_value(schema, RuntimeValue("x")).ok


class TestHelpers:
    """Tests for helper functions and result types."""

    @pytest.mark.unit
    def test_kind_of(self):
        """kind_of names UIX kinds."""
        assert kind_of("a") == "string"
        assert kind_of(1) == "number"
        assert kind_of(False) == "boolean"
        assert kind_of([]) == "array"
        assert kind_of({}) == "object"
        assert kind_of(print) == "function"
        assert kind_of(None) == "null"

    @pytest.mark.unit
    def test_unwrap_raises(self):
        """unwrap() raises for failures and returns values otherwise."""
        assert Schema.number().validate(5).unwrap() == 5
        with pytest.raises(SchemaValidationError, match="is required"):
            Schema.number(required=True).validate(None, "n").unwrap()

    @pytest.mark.unit
    def test_type_label(self):
        """type_label renders compound kinds."""
        assert Schema.array(items=Schema.string()).type_label == "array<string>"
        assert Schema.enum(["a", "b"]).type_label == "enum(a|b)"
        assert Schema.union([Schema.string(), Schema.number()]).type_label == (
            "union(string|number)"
        )
