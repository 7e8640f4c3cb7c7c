"""Unit tests for IR models and the program loader."""

import json

import pytest
from pydantic import ValidationError

from .lib import (
    AppNode,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    is_event_key,
    setter_name,
    walk,
)
from .loader import ProgramLoadError, load_program, load_program_file


def expr(text):
    return {"type": "expression", "value": text}


class TestExpression:
    """Tests for Expression classification."""

    @pytest.mark.unit
    def test_identifier_path(self):
        """Dotted paths are identifiers with a root."""
        e = Expression.of("user.name")
        assert e.kind == "identifier"
        assert e.root == "user"
        assert e.is_path

    @pytest.mark.unit
    def test_compound_expression(self):
        """Operators make a compound expression with no root."""
        e = Expression.of("count + 1")
        assert e.kind == "expression"
        assert e.root is None

    @pytest.mark.unit
    def test_frozen(self):
        """Expressions are immutable."""
        e = Expression.of("x")
        with pytest.raises(ValidationError):
            e.text = "y"


class TestHelpers:
    """Tests for naming helpers."""

    @pytest.mark.unit
    def test_setter_name(self):
        assert setter_name("count") == "setCount"
        assert setter_name("userName") == "setUserName"

    @pytest.mark.unit
    def test_is_event_key(self):
        """Only on + uppercase counts as an event key."""
        assert is_event_key("onClick")
        assert not is_event_key("one")
        assert not is_event_key("on")

    @pytest.mark.unit
    def test_walk_pre_order(self):
        """walk yields parents before children, in order."""
        tree = [
            ElementNode(tag="A", children=[ElementNode(tag="B"), ElementNode(tag="C")]),
            ElementNode(tag="D"),
        ]
        assert [n.tag for n in walk(tree)] == ["A", "B", "C", "D"]


class TestModels:
    """Tests for node models."""

    @pytest.mark.unit
    def test_prop_values_keep_type(self):
        """Literal booleans and numbers are not coerced."""
        node = ElementNode(tag="Card", props={"elevation": 2, "open": True, "title": "t"})
        assert node.props["elevation"] == 2 and isinstance(node.props["elevation"], int)
        assert node.props["open"] is True

    @pytest.mark.unit
    def test_discriminated_children(self):
        """Children round-trip through model_dump by kind."""
        app = AppNode(
            body=[
                IfNode(condition=Expression.of("show"), children=[ElementNode(tag="Text")]),
                ForNode(item="u", source=Expression.of("users")),
            ]
        )
        restored = AppNode.model_validate(app.model_dump())
        assert restored == app
        assert isinstance(restored.body[0], IfNode)

    @pytest.mark.unit
    def test_empty_tag_rejected(self):
        with pytest.raises(ValidationError):
            ElementNode(tag="")


class TestLoadProgram:
    """Tests for adapting parser output."""

    @pytest.mark.unit
    def test_parser_shape(self):
        """Raw parser output becomes typed nodes."""
        app = load_program(
            [
                {
                    "type": "App",
                    "props": {},
                    "children": [
                        {"type": "Input", "props": {"bind": expr("name"), "initial": "Ann"}},
                        {"type": "If", "condition": expr("showMore"), "children": []},
                        {
                            "type": "For",
                            "item": "user",
                            "list": expr("users"),
                            "children": [{"type": "Text", "props": {"text": expr("user.name")}}],
                        },
                    ],
                }
            ]
        )
        root = app.body[0]
        assert root.tag == "App"
        bound, cond, loop = root.children
        assert bound.props["bind"] == Expression.of("name")
        assert bound.props["initial"] == "Ann"
        assert cond.condition.text == "showMore"
        assert loop.item == "user"
        assert loop.source.text == "users"
        assert loop.children[0].props["text"].root == "user"

    @pytest.mark.unit
    def test_component_definitions_split(self):
        """Definitions go to components, everything else to body."""
        app = load_program(
            [
                {
                    "name": {"value": "UserCard"},
                    "params": [{"value": "user"}, {"value": "onFollow"}],
                    "body": [{"type": "Button", "props": {"onClick": expr("onFollow")}}],
                },
                {"type": "UserCard", "props": {"user": expr("me")}},
            ]
        )
        assert [d.name for d in app.components] == ["UserCard"]
        assert app.components[0].param_names == ["user", "onFollow"]
        assert app.body[0].tag == "UserCard"
        assert app.get_component("UserCard") is app.components[0]
        assert app.get_component("Missing") is None

    @pytest.mark.unit
    def test_typed_literal_unwrapped(self):
        """{type: string, value: ...} literals become plain values."""
        app = load_program([{"type": "Button", "props": {"text": {"type": "string", "value": "Go"}}}])
        assert app.body[0].props["text"] == "Go"

    @pytest.mark.unit
    def test_parameter_default(self):
        """Parameter defaults are carried over."""
        app = load_program(
            {"components": [{"name": "Badge", "params": [{"name": "size", "default": "md"}], "body": []}]}
        )
        param = app.components[0].params[0]
        assert param.default == "md"
        assert param.has_default

    @pytest.mark.unit
    def test_serialized_ir_accepted(self):
        """model_dump output loads back unchanged."""
        app = AppNode(body=[ElementNode(tag="Text", props={"text": "hi"})])
        assert load_program(app.model_dump()) == app

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data",
        [
            "not a program",
            [42],
            [{"props": {}}],
            [{"type": "If", "children": []}],
            [{"type": "For", "list": expr("xs"), "children": []}],
            [{"type": "Text", "props": {"text": [1, 2]}}],
        ],
    )
    def test_malformed_rejected(self, data):
        """Malformed parser output raises ProgramLoadError."""
        with pytest.raises(ProgramLoadError):
            load_program(data)

    @pytest.mark.unit
    def test_load_program_file(self, tmp_path):
        """Programs load from JSON files."""
        path = tmp_path / "ast.json"
        path.write_text(json.dumps([{"type": "Title", "props": {"text": "Hi"}}]))
        assert load_program_file(path).body[0].tag == "Title"

    @pytest.mark.unit
    def test_load_program_file_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nope")
        with pytest.raises(ProgramLoadError):
            load_program_file(path)
