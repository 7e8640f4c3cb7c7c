"""Unit tests for parameter usage analysis."""

import pytest

from uixc.ir import ComponentDefinition, ElementNode, Expression, ForNode, IfNode, Parameter
from uixc.schema import SchemaKind

from .lib import (
    UsageProfile,
    analyze_parameter_usage,
    infer_component_schemas,
    infer_parameter_types,
    synthesize_schema,
)


def el(tag, **props):
    return ElementNode(
        tag=tag,
        props={k: Expression.of(v[1:]) if isinstance(v, str) and v.startswith("=") else v for k, v in props.items()},
    )


@pytest.fixture
def user_card():
    """UserCard(user, onFollow) from the component-processing scenario."""
    return ComponentDefinition(
        name="UserCard",
        params=[Parameter(name="user"), Parameter(name="onFollow")],
        body=[
            el("Avatar", name="=user.name"),
            el("Button", text="Follow", onClick="=onFollow"),
        ],
    )


class TestAnalyzeParameterUsage:
    """Tests for per-property usage rules."""

    @pytest.mark.unit
    def test_bare_text(self):
        """Bare parameter in a text property is text usage."""
        profile = analyze_parameter_usage("label", [el("Text", text="=label")])
        assert profile.used_as_text

    @pytest.mark.unit
    def test_path_in_text_is_not_text(self):
        """A dotted path under the parameter says nothing about its own kind."""
        profile = analyze_parameter_usage("user", [el("Text", text="=user.name")])
        assert profile.inferred_kind == SchemaKind.ANY

    @pytest.mark.unit
    def test_event_key(self):
        profile = analyze_parameter_usage("save", [el("Button", onClick="=save")])
        assert profile.used_as_function

    @pytest.mark.unit
    def test_boolean_key(self):
        profile = analyze_parameter_usage("busy", [el("Button", disabled="=busy")])
        assert profile.used_as_boolean

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "param,text,flag",
        [
            ("items", "items.length", "used_as_array"),
            ("items", "items.map(i => i.id)", "used_as_array"),
            ("name", "name.toUpperCase()", "used_as_text"),
            ("status", "status === 'ok'", "used_as_boolean"),
            ("value", "format(value)", None),
            ("format", "format(value)", "used_as_function"),
            ("price", "price * 2", "used_as_number"),
            ("price", "price.toFixed(2)", "used_as_number"),
        ],
    )
    def test_compound_rules(self, param, text, flag):
        """Compound expressions are classified by their operators and suffixes."""
        profile = analyze_parameter_usage(param, [el("Text", title="=" + text)])
        flags = {f for f, v in vars(profile).items() if v}
        assert flags == ({flag} if flag else set())

    @pytest.mark.unit
    def test_property_access_does_not_reference(self):
        """obj.count does not reference a parameter named count."""
        profile = analyze_parameter_usage("count", [el("Text", title="=obj.count + 1")])
        assert not profile.used_as_number

    @pytest.mark.unit
    def test_literals_ignored(self):
        """Literal strings equal to the name are not references."""
        profile = analyze_parameter_usage("label", [el("Text", text="label")])
        assert profile.inferred_kind == SchemaKind.ANY

    @pytest.mark.unit
    def test_if_condition_marks_conditional(self):
        body = [IfNode(condition=Expression.of("showMore"), children=[el("Text", text="more")])]
        assert analyze_parameter_usage("showMore", body).conditional_usage

    @pytest.mark.unit
    def test_for_source_marks_array(self):
        body = [ForNode(item="u", source=Expression.of("users"), children=[el("Text", text="=u.name")])]
        assert analyze_parameter_usage("users", body).used_as_array

    @pytest.mark.unit
    def test_nested_children_visited(self):
        body = [ElementNode(tag="Row", children=[el("Text", text="=label")])]
        assert analyze_parameter_usage("label", body).used_as_text


class TestSynthesizeSchema:
    """Tests for schema synthesis."""

    @pytest.mark.unit
    def test_unused_is_required_any(self):
        schema = synthesize_schema(UsageProfile())
        assert schema.kind == SchemaKind.ANY
        assert schema.required

    @pytest.mark.unit
    def test_text_wins_over_others(self):
        schema = synthesize_schema(UsageProfile(used_as_text=True, used_as_function=True))
        assert schema.kind == SchemaKind.STRING

    @pytest.mark.unit
    def test_array_items_any(self):
        schema = synthesize_schema(UsageProfile(used_as_array=True))
        assert schema.type_label == "array<any>"

    @pytest.mark.unit
    def test_default_makes_optional(self):
        schema = synthesize_schema(UsageProfile(used_as_text=True, has_default_value=True), "md")
        assert not schema.required
        assert schema.default == "md"

    @pytest.mark.unit
    def test_conditional_makes_optional(self):
        schema = synthesize_schema(UsageProfile(used_as_boolean=True, conditional_usage=True))
        assert not schema.required


class TestInference:
    """Tests for whole-definition inference."""

    @pytest.mark.unit
    def test_infer_parameter_types(self, user_card):
        """onFollow is a function, user stays any."""
        assert infer_parameter_types(user_card) == {"user": "any", "onFollow": "function"}

    @pytest.mark.unit
    def test_infer_component_schemas_order(self, user_card):
        schemas = infer_component_schemas(user_card)
        assert list(schemas) == ["user", "onFollow"]
        assert all(s.required for s in schemas.values())

    @pytest.mark.unit
    def test_declared_default_respected(self):
        definition = ComponentDefinition(
            name="Badge",
            params=[Parameter(name="size", default="md")],
            body=[el("Text", text="=size")],
        )
        schema = infer_component_schemas(definition)["size"]
        assert schema.kind == SchemaKind.STRING
        assert schema.default == "md"
        assert not schema.required
