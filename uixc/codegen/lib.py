"""Code generation from UIX IR to React components.

This module defines the abstract base class for output generators and a
registry/factory for accessing them by output format. Generators are pure:
given the same program, binding scan and partition they emit identical text.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from uixc.analysis import infer_component_schemas
from uixc.binding import BindingScan, Partition, parameter_list
from uixc.ir import (
    BIND_TARGET,
    IDENTIFIER_PATH,
    RESERVED_PROPS,
    AppNode,
    ComponentDefinition,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    PropValue,
    is_event_key,
    setter_name,
)
from uixc.schema import Schema, SchemaKind

logger = logging.getLogger(__name__)

DEFAULT_TAG_MAP: dict[str, str] = {
    "App": "div",
    "Title": "h1",
    "Row": "div",
    "Button": "button",
    "Input": "input",
    "Text": "span",
}

HEADER = "// Auto-generated by UIX compiler"
INDENT = "  "

_TEXT_SPECIAL = set("{}<>")

Block = ElementNode | IfNode | ForNode


def _json(value: object) -> str:
    return json.dumps(value, ensure_ascii=False)


def bound_target(node: ElementNode) -> str | None:
    """Return the element's bind target, or None if absent or malformed."""
    target = node.props.get("bind")
    if target is None:
        return None
    text = target.text if isinstance(target, Expression) else target
    if isinstance(text, str) and BIND_TARGET.match(text):
        return text
    return None


def state_initializer(initial: PropValue) -> str:
    """Render a useState seed: expressions pass through, literals are JSON."""
    if isinstance(initial, Expression):
        return initial.text
    return _json(initial)


class CodeGenerator(ABC):
    """Abstract base class for UI code generators.

    Subclasses must implement:
        - name: Output format identifier
        - file_extension: Output file extension
        - emit: IR to source conversion

    Example:
        >>> generator = get_generator("jsx")
        >>> code = generator.emit(program, scan, partition)
    """

    def __init__(
        self,
        tag_map: Mapping[str, str] | None = None,
        component_name: str = "CompiledUI",
        component_schemas: Mapping[str, Mapping[str, Schema]] | None = None,
    ):
        self.tag_map = {**DEFAULT_TAG_MAP, **(tag_map or {})}
        self.component_name = component_name
        self.component_schemas = dict(component_schemas or {})

    @property
    @abstractmethod
    def name(self) -> str:
        """Output format identifier."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.jsx')."""
        ...

    @abstractmethod
    def emit(self, program: AppNode, scan: BindingScan, partition: Partition) -> str:
        """Emit source text for a program.

        Args:
            program: Program to emit.
            scan: Result of scanning the program for identifiers and binds.
            partition: Internal-state / external-prop classification.

        Returns:
            str: Complete module source.
        """
        ...

    def file_name(self) -> str:
        return f"{self.component_name}{self.file_extension}"


class ReactGenerator(CodeGenerator):
    """Emits a React function component (JSX).

    Example output:
        ```jsx
        // Auto-generated by UIX compiler
        import React from "react";

        export default function CompiledUI({ users }) {
          const [name, setName] = React.useState("Ann");

          return (
            <>
              <input value={name} onChange={e => setName(e.target.value)} />
            </>
          );
        }
        ```
    """

    @property
    def name(self) -> str:
        return "jsx"

    @property
    def file_extension(self) -> str:
        return ".jsx"

    def emit(self, program: AppNode, scan: BindingScan, partition: Partition) -> str:
        lines = [HEADER, 'import React from "react";', ""]
        lines.extend(self._preamble(program, scan, partition))

        params = parameter_list(scan, partition)
        lines.append(self._signature(f"export default function {self.component_name}", params, self.component_name))

        # State is owned by the default export; definitions are closures over it
        for candidate in partition.internal_state:
            lines.append(
                f"{INDENT}const [{candidate.name}, {candidate.setter}] = "
                f"React.useState({state_initializer(candidate.initial)});"
            )
        if partition.internal_state:
            lines.append("")

        for definition in program.components:
            lines.append(INDENT + self._signature(f"function {definition.name}", definition.param_names, definition.name))
            lines.extend(self._render(definition.body, 2))
            lines.append(f"{INDENT}}}")
            lines.append("")

        lines.extend(self._render(program.body, 1))
        lines.append("}")
        logger.debug(f"Emitted {self.component_name}{self.file_extension} ({len(lines)} lines)")
        return "\n".join(lines) + "\n"

    # -------------------------------------------------------------------------
    # Extension points
    # -------------------------------------------------------------------------

    def _preamble(self, program: AppNode, scan: BindingScan, partition: Partition) -> list[str]:
        return []

    def _props_type(self, component: str) -> str | None:
        return None

    # -------------------------------------------------------------------------
    # Functions
    # -------------------------------------------------------------------------

    def _signature(self, prefix: str, params: list[str], component: str) -> str:
        destructure = "{ " + ", ".join(params) + " }" if params else "{}"
        props_type = self._props_type(component)
        annotation = f": {props_type}" if props_type else ""
        return f"{prefix}({destructure}{annotation}) {{"

    def _render(self, body: list[Block], depth: int) -> list[str]:
        """Return statement of a function body whose braces sit at depth - 1."""
        pad = INDENT * depth
        lines = [f"{pad}return (", f"{pad}{INDENT}<>"]
        for node in body:
            lines.extend(self._node(node, depth + 2))
        lines.append(f"{pad}{INDENT}</>")
        lines.append(f"{pad});")
        return lines

    # -------------------------------------------------------------------------
    # Markup
    # -------------------------------------------------------------------------

    def _node(self, node: Block, depth: int) -> list[str]:
        if isinstance(node, IfNode):
            return self._conditional(node, depth)
        if isinstance(node, ForNode):
            return self._loop(node, depth)
        return self._element(node, depth)

    def _conditional(self, node: IfNode, depth: int) -> list[str]:
        pad = INDENT * depth
        if len(node.children) == 1:
            inner = self._node(node.children[0], depth + 1)
        else:
            inner = [f"{pad}{INDENT}<>"]
            for child in node.children:
                inner.extend(self._node(child, depth + 2))
            inner.append(f"{pad}{INDENT}</>")
        return [f"{pad}{{{node.condition.text} ? (", *inner, f"{pad}) : null}}"]

    def _loop(self, node: ForNode, depth: int) -> list[str]:
        pad = INDENT * depth
        item = node.item
        index = "position" if item == "index" else "index"
        source = node.source.text if node.source.is_path else f"({node.source.text})"
        key = f"typeof {item} === 'object' && {item} !== null && 'id' in {item} ? {item}.id : {index}"

        lines = [
            f"{pad}{{{source}.map(({item}, {index}) => (",
            f"{pad}{INDENT}<React.Fragment key={{{key}}}>",
        ]
        for child in node.children:
            lines.extend(self._node(child, depth + 2))
        lines.append(f"{pad}{INDENT}</React.Fragment>")
        lines.append(f"{pad}))}}")
        return lines

    def _element(self, node: ElementNode, depth: int) -> list[str]:
        pad = INDENT * depth
        tag = self.tag_map.get(node.tag, node.tag)
        target = bound_target(node)

        attributes = []
        for key, value in node.props.items():
            if key in RESERVED_PROPS or key == "text":
                continue
            if target and key in ("value", "onChange"):
                continue
            attributes.append(self._attribute(key, value))
        if target:
            attributes.append(f"value={{{target}}}")
            attributes.append(f"onChange={{e => {setter_name(target)}(e.target.value)}}")

        inner: list[str] = []
        if "text" in node.props:
            inner.append(f"{pad}{INDENT}{self._text_content(node.props['text'])}")
        for child in node.children:
            inner.extend(self._node(child, depth + 1))

        opening = f"<{tag}" + "".join(f" {a}" for a in attributes)
        if not inner:
            return [f"{pad}{opening} />"]
        return [f"{pad}{opening}>", *inner, f"{pad}</{tag}>"]

    def _attribute(self, key: str, value: PropValue) -> str:
        if isinstance(value, Expression):
            return f"{key}={{{value.text}}}"
        if is_event_key(key) and isinstance(value, str) and IDENTIFIER_PATH.match(value):
            return f"{key}={{{value}}}"
        if isinstance(value, str) and '"' not in value and "\\" not in value:
            return f"{key}={_json(value)}"
        return f"{key}={{{_json(value)}}}"

    def _text_content(self, value: PropValue) -> str:
        if isinstance(value, Expression):
            return f"{{{value.text}}}"
        if isinstance(value, str):
            if value and value == value.strip() and not (_TEXT_SPECIAL & set(value)):
                return value
        return f"{{{_json(value)}}}"


TS_TYPES: dict[SchemaKind, str] = {
    SchemaKind.STRING: "string",
    SchemaKind.NUMBER: "number",
    SchemaKind.BOOLEAN: "boolean",
    SchemaKind.FUNCTION: "(...args: any[]) => any",
    SchemaKind.ARRAY: "any[]",
}


def typescript_type(schema: Schema) -> str:
    """TypeScript type for a property schema (unknown kinds map to any)."""
    return TS_TYPES.get(schema.kind, "any")


class TypeScriptReactGenerator(ReactGenerator):
    """Emits a React function component with TypeScript props interfaces.

    Each custom component gets an `interface <Name>Props` built from its
    property schemas (inferred from usage when none were supplied); the
    default export gets `interface CompiledUIProps`.
    """

    @property
    def name(self) -> str:
        return "tsx"

    @property
    def file_extension(self) -> str:
        return ".tsx"

    def _schemas_for(self, definition: ComponentDefinition) -> Mapping[str, Schema]:
        return self.component_schemas.get(definition.name) or infer_component_schemas(definition)

    def _preamble(self, program: AppNode, scan: BindingScan, partition: Partition) -> list[str]:
        lines: list[str] = []
        for definition in program.components:
            schemas = self._schemas_for(definition)
            lines.append(f"interface {definition.name}Props {{")
            for param in definition.param_names:
                schema = schemas.get(param, Schema.any())
                optional = "" if schema.required else "?"
                lines.append(f"{INDENT}{param}{optional}: {typescript_type(schema)};")
            lines.append("}")
            lines.append("")

        lines.append(f"interface {self.component_name}Props {{")
        for param in parameter_list(scan, partition):
            lines.append(f"{INDENT}{param}: any;")
        lines.append("}")
        lines.append("")
        return lines

    def _props_type(self, component: str) -> str | None:
        return f"{component}Props"


# Generator registry - populated on import
_registry: dict[str, type[CodeGenerator]] = {}


def register_generator(generator_cls: type[CodeGenerator]) -> type[CodeGenerator]:
    """Register a generator class under its output format name."""
    _registry[generator_cls().name] = generator_cls
    return generator_cls


def get_generator(name: str, **options) -> CodeGenerator:
    """Get a generator instance by output format.

    Args:
        name: Output format ("jsx" or "tsx").
        **options: Passed to the generator constructor (tag_map,
            component_name, component_schemas).

    Raises:
        KeyError: If no generator is registered under `name`.
    """
    if name not in _registry:
        available = ", ".join(sorted(_registry))
        raise KeyError(f"Unknown output format '{name}'. Available: {available}")
    return _registry[name](**options)


def list_generators() -> list[str]:
    return sorted(_registry)


register_generator(ReactGenerator)
register_generator(TypeScriptReactGenerator)


__all__ = [
    "DEFAULT_TAG_MAP",
    "HEADER",
    "TS_TYPES",
    "CodeGenerator",
    "ReactGenerator",
    "TypeScriptReactGenerator",
    "bound_target",
    "state_initializer",
    "typescript_type",
    "register_generator",
    "get_generator",
    "list_generators",
]
