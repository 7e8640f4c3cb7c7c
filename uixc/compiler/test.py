"""Tests for the compiler orchestrator."""

import logging

import pytest

from uixc.config import CompilerConfig
from uixc.ir import ComponentDefinition, ElementNode, Expression, Parameter, ProgramLoadError
from uixc.plugins import PluginManager
from uixc.schema import FailureKind, Schema, ValidationFailure

from .lib import CompilationError, CompilationResult, UIXCompiler


def expr(text):
    return {"type": "expression", "value": text}


@pytest.fixture
def compiler():
    return UIXCompiler()


@pytest.fixture
def user_card():
    return ComponentDefinition(
        name="UserCard",
        params=[Parameter(name="user"), Parameter(name="onFollow")],
        body=[
            ElementNode(tag="Avatar", props={"name": Expression.of("user.name")}),
            ElementNode(tag="Button", props={"text": "Follow", "onClick": Expression.of("onFollow")}),
        ],
    )


class TestInitialization:
    """Tests for compiler construction."""

    @pytest.mark.unit
    def test_builtins_registered(self, compiler):
        for name in ("Button", "Input", "Card"):
            assert compiler.registry.is_registered(name)

    @pytest.mark.unit
    def test_custom_schemas_registered(self):
        config = CompilerConfig(custom_schemas={"CustomComponent": {"propA": Schema.string(required=True)}})
        compiler = UIXCompiler(config)
        validator = compiler.registry.get("CustomComponent")
        assert validator.get_prop_schema("propA").required

    @pytest.mark.unit
    def test_custom_schemas_must_be_schemas(self):
        config = CompilerConfig(custom_schemas={"Bad": {"propA": "string"}})
        with pytest.raises(TypeError, match="must be a Schema"):
            UIXCompiler(config)


class TestValidateProps:
    """Tests for strict and lenient validation policy."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_valid_props_returned(self, compiler):
        props = {"text": "Submit", "onClick": Expression.of("submit")}
        assert await compiler.validate_props("Button", props) == props

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_schema_defaults_not_added(self, compiler):
        """Validated defaults stay out of the props used for emission."""
        props = await compiler.validate_props("Button", {"text": "Go", "onClick": Expression.of("go")})
        assert "variant" not in props
        assert "disabled" not in props

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_strict_raises(self):
        compiler = UIXCompiler(CompilerConfig(strict_validation=True))
        with pytest.raises(CompilationError) as exc_info:
            await compiler.validate_props("Button", {"text": "Submit"})
        assert str(exc_info.value) == (
            "UIX Compilation failed: Validation error in Button: onClick is required"
        )
        assert exc_info.value.component == "Button"
        assert exc_info.value.failure.kind == FailureKind.MISSING_REQUIRED

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_lenient_logs_and_returns_original(self, compiler, caplog):
        props = {"text": "Submit"}
        with caplog.at_level(logging.WARNING):
            assert await compiler.validate_props("Button", props) == props
        assert "Validation error in Button: onClick is required" in caplog.text
        assert "Continuing compilation despite validation error" in caplog.text

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_hook_payload(self, compiler):
        received = []
        compiler.plugins.register_hook("on_validation_error", received.append)
        await compiler.validate_props("Button", {"text": 123})
        assert len(received) == 1
        payload = received[0]
        assert payload["kind"] == "validation_error"
        assert payload["component_name"] == "Button"
        assert isinstance(payload["error"], ValidationFailure)
        assert payload["error"].kind == FailureKind.TYPE_MISMATCH

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_directives_not_validated(self, compiler):
        """bind / initial never count as unknown or invalid props."""
        props = {"bind": Expression.of("name"), "initial": "Ann"}
        assert await compiler.validate_props("Input", props) == props


class TestComponentProcessing:
    """Tests for custom component handling."""

    @pytest.mark.unit
    def test_process_definition(self, compiler, user_card):
        validator = compiler.process_component_definition(user_card)
        assert "UserCard" in compiler.custom_components
        assert compiler.registry.is_registered("UserCard")
        assert validator.get_prop_schema("user") is not None
        assert validator.get_prop_schema("onFollow") is not None

    @pytest.mark.unit
    def test_infer_parameter_types(self, compiler, user_card):
        assert compiler.infer_parameter_types(user_card) == {"user": "any", "onFollow": "function"}

    @pytest.mark.unit
    def test_configured_schemas_override_inference(self, user_card):
        config = CompilerConfig(custom_schemas={"UserCard": {"user": Schema.object(required=True)}})
        compiler = UIXCompiler(config)
        assert compiler.infer_parameter_types(user_card) == {"user": "object"}
        validator = compiler.process_component_definition(user_card)
        assert validator.prop_names == ["user"]


class TestCompile:
    """End-to-end compilation tests."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_bound_input_scenario(self, compiler):
        result = await compiler.compile([{"type": "Input", "props": {"bind": expr("name"), "initial": "Ann"}}])
        assert isinstance(result, CompilationResult)
        assert 'const [name, setName] = React.useState("Ann");' in result.code
        assert "export default function CompiledUI({}) {" in result.code
        assert result.internal_state == ["name"]
        assert "name" not in result.parameters
        assert result.file_name == "CompiledUI.jsx"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_loop_scenario(self, compiler):
        result = await compiler.compile(
            {
                "components": [],
                "body": [
                    {
                        "type": "For",
                        "item": "user",
                        "list": expr("users"),
                        "children": [{"type": "Text", "props": {"text": expr("user.name")}}],
                    }
                ],
            }
        )
        assert "{users.map((user, index) => (" in result.code
        assert "users" in result.parameters

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_state_bound_in_definition_read_by_app(self, compiler):
        result = await compiler.compile(
            [
                {
                    "type": "Component",
                    "name": "NameField",
                    "params": [],
                    "body": [{"type": "Input", "props": {"bind": expr("name")}}],
                },
                {"type": "NameField", "props": {}},
                {"type": "Text", "props": {"text": expr("name")}},
            ]
        )
        assert result.internal_state == ["name"]
        assert result.parameters == []
        export = result.code.index("export default function CompiledUI({}) {")
        declaration = result.code.index('const [name, setName] = React.useState("");')
        assert export < declaration < result.code.index("function NameField({}) {")
        assert "{name}" in result.code

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize("target", [True, 5])
    async def test_literal_bind_target_is_warned_not_declared(self, compiler, target):
        result = await compiler.compile([{"type": "Input", "props": {"bind": target}}])
        assert result.internal_state == []
        assert "useState" not in result.code
        assert "<input />" in result.code
        assert any(f"found {target!r}" in w for w in result.warnings)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_idempotent(self, compiler, sample_program):
        first = await compiler.compile(sample_program)
        second = await compiler.compile(sample_program)
        assert first.code == second.code
        assert first.parameters == second.parameters

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_lenient_compile_keeps_original_props(self, compiler):
        result = await compiler.compile([{"type": "Button", "props": {"text": "Go"}}])
        assert "<button>" in result.code
        assert "Go" in result.code
        assert [f.message for f in result.validation_failures] == ["onClick is required"]
        assert result.has_warnings

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_strict_compile_aborts(self):
        compiler = UIXCompiler(CompilerConfig(strict_validation=True))
        with pytest.raises(CompilationError, match="Validation error in Button"):
            await compiler.compile([{"type": "Button", "props": {"text": "Go"}}])

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_hooks_called_in_lifecycle_order(self, compiler, sample_program):
        events = []

        class Recorder:
            def before_compile(self, payload):
                events.append("before_compile")

            def on_component(self, payload):
                events.append(f"on_component:{payload['name']}")

            async def after_output(self, payload):
                events.append(f"after_output:{payload['file_name']}")

        compiler.plugins.register_plugin(Recorder())
        await compiler.compile(sample_program)
        assert events == ["before_compile", "on_component:UserCard", "after_output:CompiledUI.jsx"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_failing_hook_does_not_stop_compilation(self, sample_program):
        plugins = PluginManager()
        plugins.register_hook("before_compile", lambda payload: 1 / 0)
        result = await UIXCompiler(plugins=plugins).compile(sample_program)
        assert result.code.startswith("// Auto-generated by UIX compiler")

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_warnings_collected(self, compiler):
        result = await compiler.compile(
            [
                {"type": "Input", "props": {"bind": expr("form.name")}},
                {"type": "Text", "props": {"text": "x", "colour": "red"}},
            ]
        )
        assert any("form.name" in w for w in result.warnings)
        assert "Unknown prop 'colour' passed to component 'Text'" in result.warnings

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_typescript_and_docs(self, sample_program):
        config = CompilerConfig(enable_typescript=True, enable_doc_generation=True, component_name="Profile")
        result = await UIXCompiler(config).compile(sample_program)
        assert result.file_name == "Profile.tsx"
        assert result.output_format == "tsx"
        assert "interface UserCardProps {" in result.code
        assert "}: ProfileProps) {" in result.code
        assert "### UserCard" in result.documentation

    @pytest.mark.integration
    def test_compile_sync(self, sample_program):
        result = UIXCompiler().compile_sync(sample_program)
        assert result.custom_components == ["UserCard"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_malformed_program(self, compiler):
        with pytest.raises(ProgramLoadError):
            await compiler.compile([{"type": "If", "children": []}])
