"""Unit tests for React code generation."""

import pytest

from uixc.binding import classify, scan_program
from uixc.ir import AppNode, ComponentDefinition, ElementNode, Expression, ForNode, IfNode, Parameter
from uixc.schema import Schema

from .lib import (
    DEFAULT_TAG_MAP,
    ReactGenerator,
    TypeScriptReactGenerator,
    bound_target,
    get_generator,
    list_generators,
    state_initializer,
    typescript_type,
)


def ref(text):
    return Expression.of(text)


def emit(program, generator=None):
    generator = generator or ReactGenerator()
    scan = scan_program(program)
    return generator.emit(program, scan, classify(scan))


class TestScenarios:
    """End-to-end emission scenarios."""

    @pytest.mark.unit
    def test_internal_state_pair(self):
        """Input(bind: name, initial: "Ann") declares a seeded local state pair."""
        program = AppNode(body=[ElementNode(tag="Input", props={"bind": ref("name"), "initial": "Ann"})])
        assert emit(program) == (
            "// Auto-generated by UIX compiler\n"
            'import React from "react";\n'
            "\n"
            "export default function CompiledUI({}) {\n"
            '  const [name, setName] = React.useState("Ann");\n'
            "\n"
            "  return (\n"
            "    <>\n"
            "      <input value={name} onChange={e => setName(e.target.value)} />\n"
            "    </>\n"
            "  );\n"
            "}\n"
        )

    @pytest.mark.unit
    def test_loop_over_users(self):
        """for user in users maps over users and takes users as a parameter."""
        program = AppNode(
            body=[
                ForNode(
                    item="user",
                    source=ref("users"),
                    children=[ElementNode(tag="Text", props={"text": ref("user.name")})],
                )
            ]
        )
        code = emit(program)
        assert "export default function CompiledUI({ user, users }) {" in code
        assert code.count(".map(") == 1
        assert (
            "      {users.map((user, index) => (\n"
            "        <React.Fragment key={typeof user === 'object' && user !== null && 'id' in user ? user.id : index}>\n"
            "          <span>\n"
            "            {user.name}\n"
            "          </span>\n"
            "        </React.Fragment>\n"
            "      ))}\n"
        ) in code

    @pytest.mark.unit
    def test_external_bind_has_no_declaration(self):
        """Externally owned bind targets are wired but not declared."""
        program = AppNode(
            body=[
                ElementNode(tag="Input", props={"bind": ref("name")}),
                ElementNode(tag="Text", props={"text": ref("name")}),
                ElementNode(tag="Button", props={"text": "Reset", "onClick": ref("setName")}),
            ]
        )
        code = emit(program)
        assert "React.useState" not in code
        assert "function CompiledUI({ name, setName })" in code
        assert "<input value={name} onChange={e => setName(e.target.value)} />" in code

    @pytest.mark.unit
    def test_deterministic(self):
        program = AppNode(
            body=[
                IfNode(condition=ref("showMore"), children=[ElementNode(tag="Text", props={"text": "More"})]),
                ElementNode(tag="Input", props={"bind": ref("query")}),
            ]
        )
        assert emit(program) == emit(program)


class TestMarkup:
    """Tests for individual markup constructs."""

    @pytest.mark.unit
    def test_conditional_single_child(self):
        program = AppNode(body=[IfNode(condition=ref("showMore"), children=[ElementNode(tag="Text", props={"text": "More"})])])
        code = emit(program)
        assert "      {showMore ? (\n        <span>\n          More\n        </span>\n      ) : null}\n" in code

    @pytest.mark.unit
    def test_conditional_many_children_wrapped(self):
        program = AppNode(
            body=[IfNode(condition=ref("open"), children=[ElementNode(tag="Text"), ElementNode(tag="Text")])]
        )
        code = emit(program)
        assert "      {open ? (\n        <>\n          <span />\n          <span />\n        </>\n      ) : null}" in code

    @pytest.mark.unit
    def test_loop_item_named_index(self):
        program = AppNode(body=[ForNode(item="index", source=ref("rows"), children=[])])
        assert "{rows.map((index, position) => (" in emit(program)

    @pytest.mark.unit
    def test_compound_loop_source_parenthesized(self):
        program = AppNode(body=[ForNode(item="u", source=ref("a || b"), children=[])])
        assert "{(a || b).map((u, index) => (" in emit(program)

    @pytest.mark.unit
    def test_attributes(self):
        """Literals are quoted, expressions and handlers interpolated."""
        program = AppNode(
            body=[
                ElementNode(
                    tag="Button",
                    props={
                        "text": "Go",
                        "onClick": "greet",
                        "disabled": True,
                        "tabIndex": 2,
                        "className": "primary",
                        "title": ref("user.name"),
                        "data": 'say "hi"',
                    },
                )
            ]
        )
        code = emit(program)
        assert (
            '<button onClick={greet} disabled={true} tabIndex={2} className="primary" '
            'title={user.name} data={"say \\"hi\\""}>'
        ) in code

    @pytest.mark.unit
    def test_text_escaping(self):
        """Text with JSX-special characters is emitted as a string expression."""
        program = AppNode(body=[ElementNode(tag="Text", props={"text": "a < b"})])
        assert '{"a < b"}' in emit(program)

    @pytest.mark.unit
    def test_reserved_props_not_rendered(self):
        program = AppNode(
            body=[ElementNode(tag="Input", props={"bind": ref("q"), "initial": "x", "bindDefault": "y", "value": "z"})]
        )
        code = emit(program)
        assert "initial" not in code
        assert "bindDefault" not in code
        assert 'value="z"' not in code

    @pytest.mark.unit
    def test_malformed_bind_left_unbound(self):
        program = AppNode(body=[ElementNode(tag="Input", props={"bind": ref("form.name")})])
        code = emit(program)
        assert "<input />" in code
        assert "useState" not in code

    @pytest.mark.unit
    def test_tag_map_override_and_identity(self):
        program = AppNode(body=[ElementNode(tag="Title", props={"text": "Hi"}), ElementNode(tag="Avatar")])
        code = emit(program, ReactGenerator(tag_map={"Title": "h2"}))
        assert "<h2>" in code
        assert "<Avatar />" in code

    @pytest.mark.unit
    def test_nested_children_indented(self):
        program = AppNode(body=[ElementNode(tag="Row", children=[ElementNode(tag="Text", props={"text": "x"})])])
        assert "      <div>\n        <span>\n          x\n        </span>\n      </div>\n" in emit(program)


class TestDefinitions:
    """Tests for custom component emission."""

    @pytest.fixture
    def program(self):
        return AppNode(
            components=[
                ComponentDefinition(
                    name="UserCard",
                    params=[Parameter(name="user"), Parameter(name="onFollow")],
                    body=[
                        ElementNode(tag="Text", props={"text": ref("user.name")}),
                        ElementNode(tag="Button", props={"text": "Follow", "onClick": ref("onFollow")}),
                    ],
                )
            ],
            body=[ElementNode(tag="UserCard", props={"user": ref("me"), "onFollow": ref("follow")})],
        )

    @pytest.mark.unit
    def test_definitions_nested_in_default_export(self, program):
        code = emit(program)
        assert code.index("export default function CompiledUI({ follow, me, onFollow, user }) {") < code.index(
            "  function UserCard({ user, onFollow }) {"
        )
        assert "<UserCard user={me} onFollow={follow} />" in code

    @pytest.mark.unit
    def test_definition_layout(self):
        program = AppNode(
            components=[ComponentDefinition(name="Hello", body=[ElementNode(tag="Text", props={"text": "Hi"})])],
            body=[ElementNode(tag="Hello")],
        )
        assert emit(program) == (
            "// Auto-generated by UIX compiler\n"
            'import React from "react";\n'
            "\n"
            "export default function CompiledUI({}) {\n"
            "  function Hello({}) {\n"
            "    return (\n"
            "      <>\n"
            "        <span>\n"
            "          Hi\n"
            "        </span>\n"
            "      </>\n"
            "    );\n"
            "  }\n"
            "\n"
            "  return (\n"
            "    <>\n"
            "      <Hello />\n"
            "    </>\n"
            "  );\n"
            "}\n"
        )

    @pytest.mark.unit
    def test_state_bound_in_definition_visible_to_app_body(self):
        """A pair bound inside a definition is declared once by the default export."""
        program = AppNode(
            components=[
                ComponentDefinition(name="NameField", body=[ElementNode(tag="Input", props={"bind": ref("name")})])
            ],
            body=[ElementNode(tag="NameField"), ElementNode(tag="Text", props={"text": ref("name")})],
        )
        code = emit(program)
        assert code.count("React.useState") == 1
        assert code.index('  const [name, setName] = React.useState("");') < code.index("  function NameField({}) {")
        assert "export default function CompiledUI({}) {" in code
        assert "{name}" in code

    @pytest.mark.unit
    def test_identifiers_used_in_definition_received_by_default_export(self):
        program = AppNode(
            components=[
                ComponentDefinition(
                    name="Greeter",
                    body=[ElementNode(tag="Button", props={"text": "Hi", "onClick": ref("greet")})],
                )
            ],
            body=[ElementNode(tag="Greeter")],
        )
        code = emit(program)
        assert "export default function CompiledUI({ greet }) {" in code
        assert "  function Greeter({}) {" in code
        assert code.index("CompiledUI({ greet })") < code.index("onClick={greet}")

    @pytest.mark.unit
    def test_typescript_interfaces(self, program):
        code = emit(program, TypeScriptReactGenerator())
        assert "interface UserCardProps {\n  user: any;\n  onFollow: (...args: any[]) => any;\n}" in code
        assert "interface CompiledUIProps {" in code
        assert "function UserCard({ user, onFollow }: UserCardProps) {" in code
        assert "}: CompiledUIProps) {" in code

    @pytest.mark.unit
    def test_typescript_explicit_schemas(self, program):
        generator = TypeScriptReactGenerator(
            component_schemas={"UserCard": {"user": Schema.object(), "onFollow": Schema.function()}}
        )
        code = emit(program, generator)
        assert "  user?: any;" in code
        assert "  onFollow?: (...args: any[]) => any;" in code


class TestHelpers:
    """Tests for module helpers and the generator registry."""

    @pytest.mark.unit
    def test_default_tag_map(self):
        assert DEFAULT_TAG_MAP["App"] == "div"
        assert DEFAULT_TAG_MAP["Text"] == "span"

    @pytest.mark.unit
    def test_bound_target(self):
        assert bound_target(ElementNode(tag="Input", props={"bind": ref("name")})) == "name"
        assert bound_target(ElementNode(tag="Input", props={"bind": ref("a.b")})) is None
        assert bound_target(ElementNode(tag="Input")) is None
        assert bound_target(ElementNode(tag="Input", props={"bind": "query"})) == "query"
        assert bound_target(ElementNode(tag="Input", props={"bind": True})) is None
        assert bound_target(ElementNode(tag="Input", props={"bind": 5})) is None

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "initial,expected",
        [("Ann", '"Ann"'), ("", '""'), (0, "0"), (True, "true"), (ref("saved"), "saved")],
    )
    def test_state_initializer(self, initial, expected):
        assert state_initializer(initial) == expected

    @pytest.mark.unit
    def test_typescript_type(self):
        assert typescript_type(Schema.string()) == "string"
        assert typescript_type(Schema.array()) == "any[]"
        assert typescript_type(Schema.enum(["a"])) == "any"

    @pytest.mark.unit
    def test_registry(self):
        assert list_generators() == ["jsx", "tsx"]
        generator = get_generator("tsx", component_name="Dashboard")
        assert generator.file_name() == "Dashboard.tsx"
        with pytest.raises(KeyError):
            get_generator("vue")
