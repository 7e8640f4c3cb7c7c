"""Unit tests for the component registry."""

import logging

import pytest

from uixc.schema import FailureKind, RuntimeValue, Schema

from .lib import ComponentRegistry, ComponentValidator
from .presets import (
    BUILTIN_COMPONENTS,
    color_schema,
    create_default_registry,
    email_schema,
    form_input_attributes,
    html_attributes,
    url_schema,
)


@pytest.fixture
def registry():
    return create_default_registry()


class TestComponentValidator:
    """Tests for a single component validator."""

    @pytest.mark.unit
    def test_views(self):
        """Required and optional views follow declaration order."""
        validator = ComponentValidator(
            "Badge",
            {
                "label": Schema.string(required=True),
                "tone": Schema.enum(["info", "warn"]),
                "count": Schema.number(required=True),
            },
        )
        assert validator.prop_names == ["label", "tone", "count"]
        assert validator.required_props == ["label", "count"]
        assert validator.optional_props == ["tone"]
        assert validator.get_prop_schema("tone").kind.value == "enum"
        assert validator.get_prop_schema("missing") is None

    @pytest.mark.unit
    def test_fail_fast_in_declaration_order(self):
        """The first failing declared property is reported."""
        validator = ComponentValidator(
            "Badge",
            {"a": Schema.string(required=True), "b": Schema.string(required=True)},
        )
        failure = validator.validate({}).failure
        assert failure.prop == "a"
        assert failure.component == "Badge"
        assert failure.describe() == "Invalid prop 'a' for component 'Badge': a is required"

    @pytest.mark.unit
    def test_unknown_props_warn(self, caplog):
        """Unknown properties are listed and logged, never fatal."""
        validator = ComponentValidator("Badge", {"label": Schema.string()})
        with caplog.at_level(logging.WARNING):
            outcome = validator.validate({"label": "x", "colour": "red"})
        assert outcome.ok
        assert outcome.unknown == ("colour",)
        assert outcome.value == {"label": "x"}
        assert "Unknown prop 'colour' passed to component 'Badge'" in caplog.text

    @pytest.mark.unit
    def test_defaults_filled(self):
        """Missing optional props with defaults appear in the result."""
        validator = ComponentValidator("Toggle", {"on": Schema.boolean().optional(False)})
        assert validator.validate(None).value == {"on": False}


class TestComponentRegistry:
    """Tests for ComponentRegistry."""

    @pytest.mark.unit
    def test_unknown_component(self):
        """Validating an unregistered component fails with unknown_component."""
        outcome = ComponentRegistry().validate("Ghost", {})
        assert outcome.failure.kind == FailureKind.UNKNOWN_COMPONENT
        assert "Ghost" in outcome.failure.message

    @pytest.mark.unit
    def test_register_and_lookup(self):
        """Registered components are discoverable."""
        registry = ComponentRegistry()
        registry.register("Badge", {"label": Schema.string()})
        assert registry.is_registered("Badge")
        assert "Badge" in registry
        assert registry.registered_components == ["Badge"]
        assert registry.get("Badge").name == "Badge"
        assert registry.get("Nope") is None

    @pytest.mark.unit
    def test_register_replaces(self):
        """Re-registering replaces the previous validator."""
        registry = ComponentRegistry()
        registry.register("Badge", {"label": Schema.string()})
        registry.register("Badge", {"count": Schema.number()})
        assert registry.get("Badge").prop_names == ["count"]
        assert len(registry) == 1

    @pytest.mark.unit
    def test_global_rule_violation(self):
        """Global rules run after schema validation."""
        registry = ComponentRegistry()
        registry.register("Link", {"href": Schema.string()})
        registry.add_global_rule(
            "no-javascript-urls",
            lambda name, props: "javascript: URLs are not allowed"
            if str(props.get("href", "")).startswith("javascript:")
            else None,
        )
        assert registry.validate("Link", {"href": "/home"}).ok
        failure = registry.validate("Link", {"href": "javascript:alert(1)"}).failure
        assert failure.kind == FailureKind.RULE_VIOLATION
        assert "no-javascript-urls" in failure.message
        assert registry.global_rules == ["no-javascript-urls"]

    @pytest.mark.unit
    def test_generate_report(self, registry):
        """Report lists every component with prop details."""
        report = registry.generate_report()
        assert report["total_components"] == len(BUILTIN_COMPONENTS)
        button = report["components"]["Button"]
        assert button["required_props"] == ["text", "onClick"]
        assert button["prop_types"]["variant"]["default"] == "primary"
        assert report["global_rules"] == []


class TestBuiltins:
    """Tests for the built-in component set."""

    @pytest.mark.unit
    def test_builtins_registered(self, registry):
        """All built-ins are present."""
        for name in ("Button", "Input", "Card", "Text", "Title", "Row"):
            assert registry.is_registered(name)

    @pytest.mark.unit
    def test_button_requires_on_click(self, registry):
        """Button(text: "Go") without onClick fails on onClick."""
        failure = registry.validate("Button", {"text": "Go"}).failure
        assert failure.kind == FailureKind.MISSING_REQUIRED
        assert failure.message == "onClick is required"

    @pytest.mark.unit
    def test_button_with_handler_expression(self, registry):
        """Render-time expressions satisfy function props."""
        outcome = registry.validate(
            "Button", {"text": "Go", "onClick": RuntimeValue("handleGo")}
        )
        assert outcome.ok
        assert outcome.value["disabled"] is False

    @pytest.mark.unit
    def test_text_accepts_number(self, registry):
        """Text content may be a string or a number."""
        assert registry.validate("Text", {"text": 42}).ok
        failure = registry.validate("Text", {"text": True}).failure
        assert failure.kind == FailureKind.UNION_EXHAUSTED

    @pytest.mark.unit
    def test_card_elevation_range(self, registry):
        """Card elevation is an integer between 0 and 24."""
        assert registry.validate("Card", {"title": "t", "elevation": 4}).ok
        failure = registry.validate("Card", {"title": "t", "elevation": 30}).failure
        assert failure.kind == FailureKind.CONSTRAINT_VIOLATION

    @pytest.mark.unit
    def test_input_type_enum(self, registry):
        """Input type must be one of the known input types."""
        failure = registry.validate("Input", {"type": "colour"}).failure
        assert failure.kind == FailureKind.CONSTRAINT_VIOLATION
        assert failure.prop == "type"


class TestPresets:
    """Tests for reusable schema presets."""

    @pytest.mark.unit
    def test_html_attributes_all_optional(self):
        """HTML attribute preset declares no required props."""
        assert not any(s.required for s in html_attributes().values())

    @pytest.mark.unit
    def test_form_input_extends_html(self):
        """Form preset is a superset of the HTML preset."""
        assert set(html_attributes()) <= set(form_input_attributes())
        assert form_input_attributes()["disabled"].default is False

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "schema,good,bad",
        [
            (email_schema(), "ann@example.com", "ann@"),
            (url_schema(), "https://example.com/path?q=1", "ftp://example.com"),
            (color_schema(), "#fa0", "#ggg"),
        ],
    )
    def test_pattern_presets(self, schema, good, bad):
        """Pattern presets accept good values and reject bad ones."""
        assert schema.validate(good).ok
        assert schema.validate(bad).failure.kind == FailureKind.CONSTRAINT_VIOLATION
