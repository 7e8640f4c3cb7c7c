"""Core IR models for parsed UIX programs.

This module defines the typed AST the compiler operates on. The external
parser produces loosely shaped JSON; `uixc.ir.loader` adapts it into these
models, which are immutable and form a closed set of node kinds:

- ElementNode: a component or element with properties and children
- IfNode: conditional block
- ForNode: iteration block with a loop-item binder
- ComponentDefinition: a user-defined component (name, params, body)
- AppNode: the program root (definitions plus top-level body)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, Field

IDENTIFIER_PATH = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$.]*$")
"""Whole-value pattern for a plain (optionally dotted) identifier reference."""

BIND_TARGET = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_]*$")
"""Pattern a bind target must match: a simple identifier, no dots."""

RESERVED_PROPS = frozenset({"bind", "initial", "bindDefault"})
"""Compiler-directive properties that never become output attributes."""


def is_event_key(key: str) -> bool:
    """True for handler-style property keys such as onClick or onChange."""
    return len(key) > 2 and key.startswith("on") and key[2].isupper()


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def setter_name(name: str) -> str:
    """Setter paired with a bind target (count -> setCount)."""
    return f"set{capitalize(name)}"


class Expression(BaseModel):
    """A property value evaluated at render time.

    Attributes:
        kind: "identifier" for a plain dotted path (user.name), else
            "expression" (count + 1, items.length > 0).
        text: Source text of the expression.

    Example:
        >>> Expression.of("user.name").root
        'user'
        >>> Expression.of("count + 1").root is None
        True
    """

    kind: Literal["identifier", "expression"] = Field(
        default="expression", description="Identifier path or compound expression"
    )
    text: str = Field(..., description="Expression source text")

    model_config = {"frozen": True}

    @classmethod
    def of(cls, text: str) -> Expression:
        """Create an expression, classifying its kind from the text."""
        text = text.strip()
        kind = "identifier" if IDENTIFIER_PATH.match(text) else "expression"
        return cls(kind=kind, text=text)

    @property
    def is_path(self) -> bool:
        return self.kind == "identifier"

    @property
    def root(self) -> str | None:
        """Root identifier of a dotted path, or None for compound expressions."""
        if not IDENTIFIER_PATH.match(self.text):
            return None
        return self.text.split(".", 1)[0]


PropValue = Expression | bool | int | float | str
"""A literal string / number / boolean, or a render-time Expression."""


class ElementNode(BaseModel):
    """A component or element invocation.

    Example:
        >>> ElementNode(tag="Button", props={"text": "Go"})
    """

    kind: Literal["element"] = "element"
    tag: str = Field(..., min_length=1, description="Component or element name")
    props: dict[str, PropValue] = Field(
        default_factory=dict, description="Properties in source order"
    )
    children: list[Node] = Field(default_factory=list, description="Child nodes")

    model_config = {"frozen": True}


class IfNode(BaseModel):
    """Conditional block rendering its children when `condition` holds."""

    kind: Literal["if"] = "if"
    condition: Expression
    children: list[Node] = Field(default_factory=list)

    model_config = {"frozen": True}


class ForNode(BaseModel):
    """Iteration block rendering its children once per element of `source`.

    Attributes:
        item: Loop-item binder name, in scope for the children.
        source: Expression producing the iterated collection.
    """

    kind: Literal["for"] = "for"
    item: str = Field(..., min_length=1)
    source: Expression
    children: list[Node] = Field(default_factory=list)

    model_config = {"frozen": True}


Node = Annotated[ElementNode | IfNode | ForNode, Field(discriminator="kind")]


class Parameter(BaseModel):
    """Declared parameter of a custom component."""

    name: str = Field(..., min_length=1)
    default: PropValue | None = None

    model_config = {"frozen": True}

    @property
    def has_default(self) -> bool:
        return self.default is not None


class ComponentDefinition(BaseModel):
    """A user-defined component: name, parameters and body."""

    kind: Literal["component"] = "component"
    name: str = Field(..., min_length=1)
    params: list[Parameter] = Field(default_factory=list)
    body: list[Node] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def param_names(self) -> list[str]:
        return [p.name for p in self.params]


class AppNode(BaseModel):
    """Program root: custom component definitions plus the top-level body."""

    kind: Literal["app"] = "app"
    components: list[ComponentDefinition] = Field(default_factory=list)
    body: list[Node] = Field(default_factory=list)

    model_config = {"frozen": True}

    def get_component(self, name: str) -> ComponentDefinition | None:
        for definition in self.components:
            if definition.name == name:
                return definition
        return None


ElementNode.model_rebuild()
IfNode.model_rebuild()
ForNode.model_rebuild()
ComponentDefinition.model_rebuild()
AppNode.model_rebuild()


def walk(nodes: Iterable[ElementNode | IfNode | ForNode]) -> Iterator[ElementNode | IfNode | ForNode]:
    """Yield nodes depth-first, pre-order."""
    for node in nodes:
        yield node
        yield from walk(node.children)


__all__ = [
    "IDENTIFIER_PATH",
    "BIND_TARGET",
    "RESERVED_PROPS",
    "is_event_key",
    "capitalize",
    "setter_name",
    "Expression",
    "PropValue",
    "ElementNode",
    "IfNode",
    "ForNode",
    "Node",
    "Parameter",
    "ComponentDefinition",
    "AppNode",
    "walk",
]
