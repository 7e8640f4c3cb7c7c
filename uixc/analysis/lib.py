"""Usage analysis for custom component parameters.

Infers how each declared parameter of a component definition is used in its
body, then synthesizes a property Schema from that evidence. The analysis is
a bounded heuristic over a fixed set of syntactic patterns; it is advisory
and may be imprecise. Explicit schemas always win over inference.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from uixc.ir import (
    ComponentDefinition,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    PropValue,
    is_event_key,
    walk,
)
from uixc.schema import Schema, SchemaKind

logger = logging.getLogger(__name__)

BOOLEAN_KEYS = frozenset(
    {
        "disabled",
        "required",
        "checked",
        "hidden",
        "readOnly",
        "selected",
        "open",
        "visible",
        "multiple",
        "autoFocus",
    }
)

ARRAY_SUFFIXES = (
    "map",
    "filter",
    "length",
    "forEach",
    "reduce",
    "some",
    "every",
    "find",
    "slice",
    "join",
    "includes",
)

STRING_SUFFIXES = (
    "toString",
    "toUpperCase",
    "toLowerCase",
    "trim",
    "split",
    "charAt",
    "substring",
    "padStart",
    "padEnd",
)


@dataclass
class UsageProfile:
    """Evidence of how a parameter is used inside a component body."""

    used_as_text: bool = False
    used_as_number: bool = False
    used_as_boolean: bool = False
    used_as_array: bool = False
    used_as_function: bool = False
    has_default_value: bool = False
    conditional_usage: bool = False

    @property
    def inferred_kind(self) -> SchemaKind:
        """Schema kind implied by the profile (first match wins)."""
        if self.used_as_text:
            return SchemaKind.STRING
        if self.used_as_number:
            return SchemaKind.NUMBER
        if self.used_as_boolean:
            return SchemaKind.BOOLEAN
        if self.used_as_array:
            return SchemaKind.ARRAY
        if self.used_as_function:
            return SchemaKind.FUNCTION
        return SchemaKind.ANY


class _ParameterPatterns:
    """Compiled regular expressions for one parameter name."""

    def __init__(self, name: str):
        ref = rf"(?<![\w$.]){re.escape(name)}(?![\w$])"
        self.name = name
        self.reference = re.compile(ref)
        self.array = re.compile(ref + r"\??\.(?:" + "|".join(ARRAY_SUFFIXES) + r")\b")
        self.string = re.compile(ref + r"\??\.(?:" + "|".join(STRING_SUFFIXES) + r")\s*\(")
        self.equality = re.compile(r"[!=]==?")
        self.call = re.compile(ref + r"\s*\(")
        self.number = re.compile(
            ref + r"\s*[-+*/%<>]|[-+*/%<>]\s*" + ref + "|" + ref + r"\??\.toFixed\s*\("
        )


def _apply_prop(key: str, value: PropValue, patterns: _ParameterPatterns, profile: UsageProfile) -> None:
    if not isinstance(value, Expression):
        return
    text = value.text
    if not patterns.reference.search(text):
        return

    if key == "text" and text == patterns.name:
        profile.used_as_text = True
    elif is_event_key(key):
        profile.used_as_function = True
    elif key in BOOLEAN_KEYS:
        profile.used_as_boolean = True
    elif text != patterns.name:
        if patterns.array.search(text):
            profile.used_as_array = True
        elif patterns.string.search(text):
            profile.used_as_text = True
        elif patterns.equality.search(text):
            profile.used_as_boolean = True
        elif patterns.call.search(text):
            profile.used_as_function = True
        elif patterns.number.search(text):
            profile.used_as_number = True


def analyze_parameter_usage(
    name: str,
    body: Iterable[ElementNode | IfNode | ForNode],
    *,
    has_default: bool = False,
) -> UsageProfile:
    """Fold over a component body collecting usage evidence for a parameter.

    Args:
        name: Parameter name.
        body: Component body nodes.
        has_default: Whether the parameter declares a default value.

    Returns:
        UsageProfile for the parameter.

    Example:
        >>> body = [ElementNode(tag="Button", props={"onClick": Expression.of("onFollow")})]
        >>> analyze_parameter_usage("onFollow", body).used_as_function
        True
    """
    patterns = _ParameterPatterns(name)
    profile = UsageProfile(has_default_value=has_default)

    for node in walk(body):
        if isinstance(node, IfNode):
            if patterns.reference.search(node.condition.text):
                profile.conditional_usage = True
        elif isinstance(node, ForNode):
            if node.source.text == name:
                profile.used_as_array = True
        else:
            for key, value in node.props.items():
                _apply_prop(key, value, patterns, profile)

    return profile


def synthesize_schema(profile: UsageProfile, default: PropValue | None = None) -> Schema:
    """Build a property schema from a usage profile.

    Parameters are required unless they declare a default or are only used
    conditionally; optional parameters carry their declared default.
    """
    kind = profile.inferred_kind
    if kind == SchemaKind.ARRAY:
        schema = Schema.array(items=Schema.any())
    else:
        schema = Schema(kind)

    if profile.has_default_value or profile.conditional_usage:
        return schema.optional(default)
    return schema.require()


def infer_component_schemas(definition: ComponentDefinition) -> dict[str, Schema]:
    """Synthesize a schema for every declared parameter, in declaration order."""
    schemas: dict[str, Schema] = {}
    for param in definition.params:
        profile = analyze_parameter_usage(param.name, definition.body, has_default=param.has_default)
        schemas[param.name] = synthesize_schema(profile, param.default)
        logger.debug(
            f"Inferred {definition.name}.{param.name}: {profile.inferred_kind.value}"
            f" (required={schemas[param.name].required})"
        )
    return schemas


def infer_parameter_types(definition: ComponentDefinition) -> dict[str, str]:
    """Map each parameter to its inferred kind name (e.g. {"onFollow": "function"})."""
    return {
        name: schema.kind.value for name, schema in infer_component_schemas(definition).items()
    }


__all__ = [
    "BOOLEAN_KEYS",
    "ARRAY_SUFFIXES",
    "STRING_SUFFIXES",
    "UsageProfile",
    "analyze_parameter_usage",
    "synthesize_schema",
    "infer_component_schemas",
    "infer_parameter_types",
]
