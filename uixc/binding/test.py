"""Unit tests for bind-target scanning and classification."""

import logging

import pytest

from uixc.ir import AppNode, ComponentDefinition, ElementNode, Expression, ForNode, IfNode
from uixc.schema import FailureKind

from .lib import BindCandidate, BindingScan, Partition, classify, parameter_list, scan_program


def ref(text):
    return Expression.of(text)


def app(*body, components=()):
    return AppNode(components=list(components), body=list(body))


class TestScanProgram:
    """Tests for the whole-program pass."""

    @pytest.mark.unit
    def test_collects_roots_of_paths(self):
        """Only roots of plain dotted paths are collected."""
        scan = scan_program(
            app(
                ElementNode(tag="Text", props={"text": ref("user.name")}),
                ElementNode(tag="Text", props={"text": ref("count + 1")}),
                ElementNode(tag="Text", props={"text": "literal"}),
            )
        )
        assert scan.used_identifiers == frozenset({"user"})

    @pytest.mark.unit
    def test_blocks_contribute(self):
        """If conditions, loop sources and loop items are collected."""
        scan = scan_program(
            app(
                IfNode(condition=ref("showMore"), children=[]),
                ForNode(
                    item="user",
                    source=ref("users"),
                    children=[ElementNode(tag="Text", props={"text": ref("user.name")})],
                ),
            )
        )
        assert scan.used_identifiers == frozenset({"showMore", "users", "user"})

    @pytest.mark.unit
    def test_event_string_literal_is_reference(self):
        """onClick: "greet" references greet."""
        scan = scan_program(app(ElementNode(tag="Button", props={"text": "Hi", "onClick": "greet"})))
        assert "greet" in scan.used_identifiers

    @pytest.mark.unit
    def test_bind_target_not_a_use(self):
        """The bind target itself is not counted as a reference."""
        scan = scan_program(
            app(ElementNode(tag="Input", props={"bind": ref("name"), "initial": "Ann"}))
        )
        assert scan.used_identifiers == frozenset()
        assert scan.candidates == (BindCandidate("name", "Ann"),)

    @pytest.mark.unit
    def test_initial_defaults_to_empty_string(self):
        scan = scan_program(app(ElementNode(tag="Input", props={"bind": ref("query")})))
        assert scan.candidates[0].initial == ""

    @pytest.mark.unit
    def test_initial_expression_kept(self):
        """An identifier initial stays an Expression and is not a use."""
        scan = scan_program(
            app(ElementNode(tag="Input", props={"bind": ref("draft"), "initial": ref("saved")}))
        )
        assert scan.candidates[0].initial == ref("saved")
        assert "saved" not in scan.used_identifiers

    @pytest.mark.unit
    def test_first_occurrence_wins(self):
        scan = scan_program(
            app(
                ElementNode(tag="Input", props={"bind": ref("name"), "initial": "first"}),
                ElementNode(tag="Input", props={"bind": ref("name"), "initial": "second"}),
            )
        )
        assert scan.candidates == (BindCandidate("name", "first"),)

    @pytest.mark.unit
    def test_malformed_bind_target(self, caplog):
        """Dotted bind targets are rejected with a warning."""
        with caplog.at_level(logging.WARNING):
            scan = scan_program(app(ElementNode(tag="Input", props={"bind": ref("form.name")})))
        assert scan.candidates == ()
        assert len(scan.warnings) == 1
        assert scan.warnings[0].kind == FailureKind.MALFORMED_BIND_TARGET
        assert "form.name" in caplog.text

    @pytest.mark.unit
    @pytest.mark.parametrize("target", [True, 5, 1.5])
    def test_non_string_bind_target_rejected(self, target):
        """Literal booleans and numbers are not turned into identifiers."""
        scan = scan_program(app(ElementNode(tag="Input", props={"bind": target})))
        assert scan.candidates == ()
        assert [w.kind for w in scan.warnings] == [FailureKind.MALFORMED_BIND_TARGET]
        assert scan.warnings[0].value == target

    @pytest.mark.unit
    def test_string_literal_bind_target_accepted(self):
        scan = scan_program(app(ElementNode(tag="Input", props={"bind": "query"})))
        assert scan.candidates == (BindCandidate("query"),)
        assert scan.warnings == ()

    @pytest.mark.unit
    def test_definition_bodies_scanned(self):
        definition = ComponentDefinition(
            name="Search",
            body=[ElementNode(tag="Input", props={"bind": ref("term")})],
        )
        scan = scan_program(app(components=[definition]))
        assert scan.get_candidate("term") is not None
        assert scan.get_candidate("other") is None

    @pytest.mark.unit
    def test_scan_does_not_mutate_program(self):
        program = app(ElementNode(tag="Input", props={"bind": ref("name")}))
        before = program.model_dump()
        scan_program(program)
        assert program.model_dump() == before


class TestClassify:
    """Tests for the partition rule."""

    @pytest.mark.unit
    def test_unreferenced_target_is_internal(self):
        """bind: count with no other use of count/setCount is internal."""
        scan = scan_program(app(ElementNode(tag="Input", props={"bind": ref("count")})))
        partition = classify(scan)
        assert partition.internal_names == ["count"]
        assert partition.external_names == []

    @pytest.mark.unit
    def test_both_names_used_is_external(self):
        scan = scan_program(
            app(
                ElementNode(tag="Input", props={"bind": ref("name")}),
                ElementNode(tag="Text", props={"text": ref("name")}),
                ElementNode(tag="Button", props={"text": "Clear", "onClick": ref("setName")}),
            )
        )
        partition = classify(scan)
        assert partition.external_names == ["name"]
        assert not partition.is_internal("name")

    @pytest.mark.unit
    def test_only_name_used_stays_internal(self):
        """Referencing the name without the setter keeps it internal."""
        scan = scan_program(
            app(
                ElementNode(tag="Input", props={"bind": ref("name")}),
                ElementNode(tag="Text", props={"text": ref("name")}),
            )
        )
        assert classify(scan).internal_names == ["name"]

    @pytest.mark.unit
    def test_disjoint_and_complete(self):
        scan = BindingScan(
            used_identifiers=frozenset({"a", "setA", "b"}),
            candidates=(BindCandidate("a"), BindCandidate("b"), BindCandidate("c")),
        )
        partition = classify(scan)
        assert set(partition.internal_names) & set(partition.external_names) == set()
        assert sorted(partition.internal_names + partition.external_names) == ["a", "b", "c"]

    @pytest.mark.unit
    def test_deterministic(self):
        scan = BindingScan(
            used_identifiers=frozenset({"x", "setX"}),
            candidates=(BindCandidate("x"), BindCandidate("y")),
        )
        assert classify(scan) == classify(scan)


class TestParameterList:
    """Tests for the external parameter list."""

    @pytest.mark.unit
    def test_internal_pairs_removed_and_sorted(self):
        scan = BindingScan(
            used_identifiers=frozenset({"users", "name", "setName", "greet"}),
            candidates=(BindCandidate("name"),),
        )
        partition = Partition(internal_state=(BindCandidate("name"),))
        assert parameter_list(scan, partition) == ["greet", "users"]

    @pytest.mark.unit
    def test_external_pairs_kept(self):
        scan = BindingScan(
            used_identifiers=frozenset({"name", "setName"}),
            candidates=(BindCandidate("name"),),
        )
        assert parameter_list(scan, classify(scan)) == ["name", "setName"]
