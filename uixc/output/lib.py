"""Output formatting for compilation results.

Generates human-readable artifacts alongside the compiled component:
Markdown component documentation, a plain-text compilation report, and a
tree view of the program structure. Also writes results to disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from uixc.ir import AppNode, ComponentDefinition, ElementNode, ForNode, IfNode
from uixc.registry import ComponentRegistry, ComponentValidator

if TYPE_CHECKING:
    from uixc.compiler import CompilationResult

logger = logging.getLogger(__name__)

DOCS_FILE_NAME = "ComponentDocs.md"


# =============================================================================
# Documentation
# =============================================================================


def _format_default(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return f"`{value}`"


def _prop_table(validator: ComponentValidator) -> list[str]:
    if not validator.schemas:
        return ["_No properties._"]
    lines = [
        "| Prop | Type | Required | Default |",
        "|------|------|----------|---------|",
    ]
    for prop, schema in validator.schemas.items():
        lines.append(
            f"| `{prop}` | {schema.type_label} | {'yes' if schema.required else 'no'} "
            f"| {_format_default(schema.default)} |"
        )
    return lines


def generate_documentation(
    registry: ComponentRegistry,
    custom_components: Mapping[str, ComponentDefinition] | None = None,
) -> str:
    """Generate Markdown documentation for every registered component.

    Args:
        registry: Registry holding built-in and custom validators.
        custom_components: Definitions to list under "Custom Components".
            Everything else in the registry is treated as built-in.

    Returns:
        Markdown text.
    """
    custom_components = custom_components or {}
    lines = ["# UIX Component Documentation", "", "## Built-in Components", ""]

    for name in registry.registered_components:
        if name in custom_components:
            continue
        lines.append(f"### {name}")
        lines.append("")
        lines.extend(_prop_table(registry.get(name)))
        lines.append("")

    lines.append("## Custom Components")
    lines.append("")
    if not custom_components:
        lines.append("_None defined._")
        lines.append("")

    for name, definition in custom_components.items():
        lines.append(f"### {name}")
        lines.append("")
        if definition.params:
            params = ", ".join(f"`{p}`" for p in definition.param_names)
            lines.append(f"Parameters: {params}")
            lines.append("")
        validator = registry.get(name)
        if validator is not None:
            lines.extend(_prop_table(validator))
            lines.append("")

    return "\n".join(lines)


# =============================================================================
# Program tree
# =============================================================================


def _describe(node: ElementNode | IfNode | ForNode) -> str:
    if isinstance(node, IfNode):
        return f"if {node.condition.text}"
    if isinstance(node, ForNode):
        return f"for {node.item} in {node.source.text}"
    attrs = [key for key in node.props if key != "text"]
    label = node.tag
    if "text" in node.props:
        text = node.props["text"]
        label += f" \"{text}\"" if isinstance(text, str) else f" {{{getattr(text, 'text', text)}}}"
    if attrs:
        label += f" [{', '.join(attrs)}]"
    return label


def _format_nodes(
    nodes: Iterable[ElementNode | IfNode | ForNode], lines: list[str], prefix: str
) -> None:
    nodes = list(nodes)
    for i, node in enumerate(nodes):
        is_last = i == len(nodes) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_describe(node)}")
        _format_nodes(node.children, lines, prefix + ("    " if is_last else "│   "))


def format_program_tree(program: AppNode) -> str:
    """Format a program as a human-readable tree.

    Example output:
        UserCard(user, onFollow)
        └── Button "Follow" [onClick]
        App
        ├── Input [bind, initial]
        └── for user in users
            └── Text {user.name}

    Args:
        program: Program to format.

    Returns:
        Formatted tree string.
    """
    lines: list[str] = []
    for definition in program.components:
        lines.append(f"{definition.name}({', '.join(definition.param_names)})")
        _format_nodes(definition.body, lines, "")
    lines.append("App")
    _format_nodes(program.body, lines, "")
    return "\n".join(lines)


# =============================================================================
# Report
# =============================================================================


def _list_or_none(values: Iterable[str]) -> str:
    values = list(values)
    return ", ".join(values) if values else "(none)"


def format_compilation_report(result: CompilationResult, program: AppNode | None = None) -> str:
    """Format a plain-text summary of a compilation result.

    Args:
        result: Compilation result.
        program: Optional program; when given its structure tree is included.

    Returns:
        Report text starting with "--- COMPILATION REPORT ---".
    """
    lines = [
        "--- COMPILATION REPORT ---",
        f"Component: {result.component_name} ({result.file_name})",
        f"Format: {result.output_format}",
        f"Parameters: {_list_or_none(result.parameters)}",
        f"Internal state: {_list_or_none(result.internal_state)}",
        f"External bind props: {_list_or_none(result.external_props)}",
        f"Custom components: {_list_or_none(result.custom_components)}",
        f"Warnings: {len(result.warnings)}",
    ]
    lines.extend(f"  - {w}" for w in result.warnings)
    lines.append(f"Validation failures: {len(result.validation_failures)}")
    lines.extend(f"  - {f.describe()}" for f in result.validation_failures)
    if program is not None:
        lines.append("Structure:")
        lines.extend(f"  {line}" for line in format_program_tree(program).splitlines())
    lines.append("--- END REPORT ---")
    return "\n".join(lines)


# =============================================================================
# Files
# =============================================================================


def write_output(result: CompilationResult, out_dir: Path | str) -> list[Path]:
    """Write the compiled component (and docs, if any) to a directory.

    Args:
        result: Compilation result.
        out_dir: Target directory; created if missing.

    Returns:
        Paths written, component file first.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = [out_dir / result.file_name]
    written[0].write_text(result.code, encoding="utf-8")
    if result.documentation:
        docs_path = out_dir / DOCS_FILE_NAME
        docs_path.write_text(result.documentation, encoding="utf-8")
        written.append(docs_path)

    for path in written:
        logger.info(f"Wrote {path}")
    return written


__all__ = [
    "DOCS_FILE_NAME",
    "generate_documentation",
    "format_program_tree",
    "format_compilation_report",
    "write_output",
]
