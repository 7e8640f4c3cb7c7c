"""Unit tests for output formatting."""

import pytest

from uixc.compiler import CompilationResult
from uixc.ir import AppNode, ComponentDefinition, ElementNode, Expression, ForNode, IfNode, Parameter
from uixc.registry import create_default_registry
from uixc.schema import FailureKind, Schema, ValidationFailure

from .lib import (
    DOCS_FILE_NAME,
    format_compilation_report,
    format_program_tree,
    generate_documentation,
    write_output,
)


@pytest.fixture
def program():
    return AppNode(
        components=[
            ComponentDefinition(
                name="UserCard",
                params=[Parameter(name="user"), Parameter(name="onFollow")],
                body=[ElementNode(tag="Button", props={"text": "Follow", "onClick": Expression.of("onFollow")})],
            )
        ],
        body=[
            ElementNode(tag="Input", props={"bind": Expression.of("name"), "initial": "Ann"}),
            IfNode(condition=Expression.of("showMore"), children=[ElementNode(tag="Text", props={"text": "More"})]),
            ForNode(
                item="user",
                source=Expression.of("users"),
                children=[ElementNode(tag="Text", props={"text": Expression.of("user.name")})],
            ),
        ],
    )


@pytest.fixture
def result():
    return CompilationResult(
        code="// code\n",
        file_name="CompiledUI.jsx",
        component_name="CompiledUI",
        output_format="jsx",
        parameters=["showMore", "user", "users"],
        internal_state=["name"],
        warnings=["Unknown prop 'colour' passed to component 'Text'"],
        validation_failures=[
            ValidationFailure(
                kind=FailureKind.MISSING_REQUIRED,
                path="onClick",
                message="onClick is required",
                component="Button",
                prop="onClick",
            )
        ],
    )


class TestGenerateDocumentation:
    """Tests for Markdown documentation."""

    @pytest.mark.unit
    def test_sections(self):
        registry = create_default_registry()
        custom = ComponentDefinition(name="MyComponent", params=[Parameter(name="label")])
        registry.register("MyComponent", {"label": Schema.string(required=True)})

        docs = generate_documentation(registry, {"MyComponent": custom})

        assert docs.startswith("# UIX Component Documentation")
        assert "## Built-in Components" in docs
        assert "### Button" in docs
        assert "## Custom Components" in docs
        assert "### MyComponent" in docs
        assert docs.index("### Button") < docs.index("## Custom Components") < docs.index("### MyComponent")
        assert "| `label` | string | yes |  |" in docs
        assert "Parameters: `label`" in docs

    @pytest.mark.unit
    def test_defaults_rendered(self):
        docs = generate_documentation(create_default_registry())
        assert "| `variant` | enum(primary|secondary|danger|link) | no | `primary` |" in docs
        assert "| `disabled` | boolean | no | false |" in docs
        assert "_None defined._" in docs


class TestFormatProgramTree:
    """Tests for program tree formatting."""

    @pytest.mark.unit
    def test_tree(self, program):
        assert format_program_tree(program) == (
            "UserCard(user, onFollow)\n"
            '└── Button "Follow" [onClick]\n'
            "App\n"
            "├── Input [bind, initial]\n"
            "├── if showMore\n"
            '│   └── Text "More"\n'
            "└── for user in users\n"
            "    └── Text {user.name}"
        )


class TestFormatCompilationReport:
    """Tests for the compilation report."""

    @pytest.mark.unit
    def test_report(self, result):
        report = format_compilation_report(result)
        lines = report.splitlines()
        assert lines[0] == "--- COMPILATION REPORT ---"
        assert lines[-1] == "--- END REPORT ---"
        assert "Component: CompiledUI (CompiledUI.jsx)" in report
        assert "Parameters: showMore, user, users" in report
        assert "Internal state: name" in report
        assert "External bind props: (none)" in report
        assert "Warnings: 1" in report
        assert "  - Invalid prop 'onClick' for component 'Button': onClick is required" in report

    @pytest.mark.unit
    def test_report_with_structure(self, result, program):
        report = format_compilation_report(result, program)
        assert "Structure:" in report
        assert "  App" in report


class TestWriteOutput:
    """Tests for writing results to disk."""

    @pytest.mark.unit
    def test_code_only(self, result, tmp_path):
        written = write_output(result, tmp_path / "out")
        assert written == [tmp_path / "out" / "CompiledUI.jsx"]
        assert written[0].read_text() == "// code\n"

    @pytest.mark.unit
    def test_with_docs(self, result, tmp_path):
        result.documentation = "# UIX Component Documentation\n"
        written = write_output(result, tmp_path)
        assert written[1] == tmp_path / DOCS_FILE_NAME
        assert written[1].read_text().startswith("# UIX Component Documentation")
