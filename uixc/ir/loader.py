"""Adapt parser JSON output into IR models.

The parser emits loosely shaped JSON:

    [
      {"type": "Component", "name": {"value": "UserCard"},
       "params": [{"value": "user"}], "body": [...]},
      {"type": "App", "props": {...}, "children": [
        {"type": "Input", "props": {"bind": {"type": "expression", "value": "name"}}},
        {"type": "If", "condition": {"type": "expression", "value": "showMore"},
         "children": [...]},
        {"type": "For", "item": "user", "list": {"type": "expression", "value": "users"},
         "children": [...]}
      ]}
    ]

Serialized IR (`AppNode.model_dump()`) is accepted as well.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .lib import (
    AppNode,
    ComponentDefinition,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    Parameter,
    PropValue,
)

logger = logging.getLogger(__name__)

DEFINITION_TYPES = frozenset({"Component", "ComponentDefinition", "component"})
_IR_NODE_KINDS = {"element": ElementNode, "if": IfNode, "for": ForNode}


class ProgramLoadError(ValueError):
    """Raised when parser output does not describe a valid UIX program."""


def _name(raw: Any, what: str) -> str:
    if isinstance(raw, dict):
        raw = raw.get("value")
    if not isinstance(raw, str) or not raw:
        raise ProgramLoadError(f"{what} must be a non-empty string, got {raw!r}")
    return raw


def _expression(raw: Any, what: str) -> Expression:
    if isinstance(raw, dict):
        raw = raw.get("value", raw.get("text"))
    if not isinstance(raw, str) or not raw.strip():
        raise ProgramLoadError(f"{what} must be an expression, got {raw!r}")
    return Expression.of(raw)


def _prop_value(raw: Any, what: str) -> PropValue:
    if isinstance(raw, dict):
        if raw.get("type") == "expression" or raw.get("kind") in ("identifier", "expression"):
            return _expression(raw, what)
        # Typed literal wrapper: {"type": "string", "value": "Submit"}
        if "value" in raw:
            raw = raw["value"]
    if isinstance(raw, (bool, int, float, str)):
        return raw
    raise ProgramLoadError(f"{what} has unsupported value {raw!r}")


def _node(raw: Any) -> ElementNode | IfNode | ForNode:
    if not isinstance(raw, dict):
        raise ProgramLoadError(f"Expected a node object, got {type(raw).__name__}")

    model = _IR_NODE_KINDS.get(raw.get("kind"))
    if model is not None:
        return model.model_validate(raw)

    node_type = raw.get("type")
    children = [_node(child) for child in raw.get("children") or []]

    if node_type == "If":
        return IfNode(condition=_expression(raw.get("condition"), "If condition"), children=children)

    if node_type == "For":
        source = raw.get("list", raw.get("source"))
        return ForNode(
            item=_name(raw.get("item"), "For item"),
            source=_expression(source, "For list"),
            children=children,
        )

    tag = _name(node_type, "Node type")
    props = {
        key: _prop_value(value, f"Property '{key}' of {tag}")
        for key, value in (raw.get("props") or {}).items()
        if value is not None
    }
    return ElementNode(tag=tag, props=props, children=children)


def _is_definition(raw: Any) -> bool:
    if not isinstance(raw, dict):
        return False
    if raw.get("kind") == "component" or raw.get("type") in DEFINITION_TYPES:
        return True
    return "params" in raw and "body" in raw


def _parameter(raw: Any) -> Parameter:
    if not isinstance(raw, dict):
        return Parameter(name=_name(raw, "Parameter"))
    default = None
    if raw.get("default") is not None:
        default = _prop_value(raw["default"], "Parameter default")
    return Parameter(name=_name(raw.get("name", raw.get("value")), "Parameter"), default=default)


def _definition(raw: dict[str, Any]) -> ComponentDefinition:
    if raw.get("kind") == "component":
        return ComponentDefinition.model_validate(raw)
    return ComponentDefinition(
        name=_name(raw.get("name"), "Component name"),
        params=[_parameter(p) for p in raw.get("params") or []],
        body=[_node(n) for n in raw.get("body") or []],
    )


def load_program(data: Any) -> AppNode:
    """Adapt parser output (or serialized IR) into an AppNode.

    Args:
        data: A list of top-level nodes, a dict with `components` / `body`,
            a serialized AppNode, or a single node dict.

    Returns:
        Validated, immutable AppNode.

    Raises:
        ProgramLoadError: If the data cannot be adapted.

    Example:
        >>> app = load_program([{"type": "Text", "props": {"text": "Hi"}}])
        >>> app.body[0].tag
        'Text'
    """
    try:
        if isinstance(data, dict) and data.get("kind") == "app":
            return AppNode.model_validate(data)

        if isinstance(data, dict) and ("body" in data or "components" in data) and not _is_definition(data):
            definitions = [_definition(d) for d in data.get("components") or []]
            body = [_node(n) for n in data.get("body") or []]
            return AppNode(components=definitions, body=body)

        items = [data] if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ProgramLoadError(f"Expected a list of nodes, got {type(data).__name__}")

        definitions = [_definition(item) for item in items if _is_definition(item)]
        body = [_node(item) for item in items if not _is_definition(item)]
    except ValidationError as e:
        raise ProgramLoadError(f"Invalid program structure: {e}") from e

    logger.debug(f"Loaded program with {len(definitions)} definitions and {len(body)} top-level nodes")
    return AppNode(components=definitions, body=body)


def load_program_file(path: Path | str) -> AppNode:
    """Read a parser JSON file and adapt it with `load_program`.

    Raises:
        ProgramLoadError: If the file is not valid JSON or not a valid program.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProgramLoadError(f"{path} is not valid JSON: {e}") from e
    return load_program(data)


__all__ = [
    "ProgramLoadError",
    "load_program",
    "load_program_file",
]
