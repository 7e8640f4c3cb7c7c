"""UIX compiler orchestration.

Runs the full pipeline for one program:

    load -> infer + register custom components -> validate element props
         -> scan binds -> classify -> emit -> (docs) -> hooks

Validation is advisory. In strict mode the first failure aborts with
CompilationError; in lenient mode failures are reported through the
on_validation_error hook and the log, and the element's original properties
are emitted unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from uixc.analysis import infer_component_schemas
from uixc.binding import classify, parameter_list, scan_program
from uixc.codegen import get_generator
from uixc.config import CompilerConfig
from uixc.ir import (
    RESERVED_PROPS,
    AppNode,
    ComponentDefinition,
    ElementNode,
    Expression,
    PropValue,
    load_program,
    walk,
)
from uixc.output import generate_documentation
from uixc.plugins import HookPoint, PluginManager
from uixc.registry import ComponentRegistry, ComponentValidator, create_default_registry
from uixc.schema import RuntimeValue, Schema, ValidationFailure, ValidationOutcome

logger = logging.getLogger(__name__)


class CompilationError(Exception):
    """Raised when compilation cannot produce output.

    Attributes:
        component: Component whose validation failed, if any.
        failure: The underlying validation failure, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        component: str | None = None,
        failure: ValidationFailure | None = None,
    ):
        super().__init__(message)
        self.component = component
        self.failure = failure


@dataclass
class CompilationResult:
    """Everything produced by one compilation run.

    Attributes:
        code: Generated module source.
        file_name: Suggested file name (e.g., "CompiledUI.jsx").
        component_name: Name of the default export.
        output_format: "jsx" or "tsx".
        documentation: Markdown docs when doc generation is enabled.
        parameters: External parameter list of the default export.
        internal_state: Bind targets managed as local state.
        external_props: Bind targets expected from the caller.
        warnings: Non-fatal diagnostics (malformed binds, unknown props).
        validation_failures: Failures tolerated in lenient mode.
    """

    code: str
    file_name: str
    component_name: str
    output_format: str
    documentation: str | None = None
    parameters: list[str] = field(default_factory=list)
    internal_state: list[str] = field(default_factory=list)
    external_props: list[str] = field(default_factory=list)
    custom_components: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    validation_failures: list[ValidationFailure] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings or self.validation_failures)


def _validation_input(props: Mapping[str, PropValue]) -> dict[str, Any]:
    """Strip compiler directives and wrap render-time expressions."""
    return {
        key: RuntimeValue(value.text) if isinstance(value, Expression) else value
        for key, value in props.items()
        if key not in RESERVED_PROPS
    }


class UIXCompiler:
    """Compiles UIX programs to React components.

    Example:
        >>> compiler = UIXCompiler(CompilerConfig(strict_validation=True))
        >>> result = await compiler.compile(load_program(ast_json))
        >>> print(result.code)
    """

    def __init__(
        self,
        config: CompilerConfig | None = None,
        registry: ComponentRegistry | None = None,
        plugins: PluginManager | None = None,
    ):
        self.config = config or CompilerConfig()
        self.registry = registry or create_default_registry()
        self.plugins = plugins or PluginManager()
        self.custom_components: dict[str, ComponentDefinition] = {}

        for name, schemas in self.config.custom_schemas.items():
            self._check_schemas(name, schemas)
            self.registry.register(name, schemas)

    @staticmethod
    def _check_schemas(name: str, schemas: Mapping[str, Any]) -> None:
        for prop, schema in schemas.items():
            if not isinstance(schema, Schema):
                raise TypeError(
                    f"custom_schemas['{name}']['{prop}'] must be a Schema, got {type(schema).__name__}"
                )

    # =========================================================================
    # Custom components
    # =========================================================================

    def _schemas_for(self, definition: ComponentDefinition) -> dict[str, Schema]:
        explicit = self.config.custom_schemas.get(definition.name)
        if explicit:
            return dict(explicit)
        return infer_component_schemas(definition)

    def process_component_definition(self, definition: ComponentDefinition) -> ComponentValidator:
        """Infer (or take configured) schemas for a definition and register it.

        Args:
            definition: Custom component definition.

        Returns:
            The registered ComponentValidator.
        """
        validator = self.registry.register(definition.name, self._schemas_for(definition))
        self.custom_components[definition.name] = definition
        logger.debug(
            f"Registered custom component {definition.name} "
            f"(required: {validator.required_props}, optional: {validator.optional_props})"
        )
        return validator

    def infer_parameter_types(self, definition: ComponentDefinition) -> dict[str, str]:
        """Parameter -> kind name, honoring configured schemas."""
        return {name: schema.kind.value for name, schema in self._schemas_for(definition).items()}

    # =========================================================================
    # Validation
    # =========================================================================

    async def _check_props(self, component: str, props: Mapping[str, PropValue]) -> ValidationOutcome:
        outcome = self.registry.validate(component, _validation_input(props))
        if outcome.ok:
            return outcome

        failure = outcome.failure
        message = f"Validation error in {component}: {failure.message}"
        await self.plugins.execute_hook(
            HookPoint.ON_VALIDATION_ERROR,
            {"kind": "validation_error", "component_name": component, "error": failure},
        )

        if self.config.strict_validation:
            raise CompilationError(
                f"UIX Compilation failed: {message}", component=component, failure=failure
            )

        logger.error(message)
        logger.warning("Continuing compilation despite validation error")
        return outcome

    async def validate_props(self, component: str, props: Mapping[str, PropValue]) -> dict[str, PropValue]:
        """Validate a component's properties under the configured policy.

        Args:
            component: Component name.
            props: Properties as written in the program.

        Validation is advisory. The validated mapping, including any schema
        defaults it fills in, is discarded: emitted markup mirrors the props
        written in the program, so a default such as `variant="primary"` is
        left to the rendered component rather than spelled out in JSX.

        Returns:
            The original properties, unchanged.

        Raises:
            CompilationError: In strict mode, on the first validation failure.
        """
        await self._check_props(component, props)
        return dict(props)

    # =========================================================================
    # Compilation
    # =========================================================================

    @staticmethod
    def _elements(program: AppNode) -> Iterator[ElementNode]:
        for definition in program.components:
            for node in walk(definition.body):
                if isinstance(node, ElementNode):
                    yield node
        for node in walk(program.body):
            if isinstance(node, ElementNode):
                yield node

    async def compile(self, program: AppNode | list | dict) -> CompilationResult:
        """Compile a program.

        Args:
            program: AppNode, or raw parser output accepted by load_program.

        Returns:
            CompilationResult.

        Raises:
            ProgramLoadError: If raw parser output cannot be adapted.
            CompilationError: In strict mode, on the first validation failure.
        """
        if not isinstance(program, AppNode):
            program = load_program(program)

        logger.info(
            f"Compiling {self.config.component_name} "
            f"({self.config.mode.value}, {self.config.output_format.value}, "
            f"strict={self.config.strict_validation})"
        )
        await self.plugins.execute_hook(
            HookPoint.BEFORE_COMPILE, {"program": program, "config": self.config}
        )

        for definition in program.components:
            validator = self.process_component_definition(definition)
            await self.plugins.execute_hook(
                HookPoint.ON_COMPONENT,
                {"name": definition.name, "definition": definition, "schemas": dict(validator.schemas)},
            )

        warnings: list[str] = []
        failures: list[ValidationFailure] = []
        for node in self._elements(program):
            if not self.registry.is_registered(node.tag):
                continue
            outcome = await self._check_props(node.tag, node.props)
            if not outcome.ok:
                failures.append(outcome.failure)
            for prop in outcome.unknown:
                warnings.append(f"Unknown prop '{prop}' passed to component '{node.tag}'")

        scan = scan_program(program)
        partition = classify(scan)
        warnings.extend(w.describe() for w in scan.warnings)

        definitions = {d.name: d for d in program.components}
        generator = get_generator(
            self.config.output_format.value,
            tag_map=self.config.tag_map,
            component_name=self.config.component_name,
            component_schemas={name: self.registry.get(name).schemas for name in definitions},
        )
        code = generator.emit(program, scan, partition)

        documentation = None
        if self.config.enable_doc_generation:
            documentation = generate_documentation(self.registry, definitions)

        result = CompilationResult(
            code=code,
            file_name=generator.file_name(),
            component_name=self.config.component_name,
            output_format=generator.name,
            documentation=documentation,
            parameters=parameter_list(scan, partition),
            internal_state=partition.internal_names,
            external_props=partition.external_names,
            custom_components=list(definitions),
            warnings=warnings,
            validation_failures=failures,
        )
        await self.plugins.execute_hook(
            HookPoint.AFTER_OUTPUT,
            {"result": result, "code": code, "file_name": result.file_name},
        )
        logger.info(f"Compiled {result.file_name} with {len(result.parameters)} parameters")
        return result

    def compile_sync(self, program: AppNode | list | dict) -> CompilationResult:
        """Blocking wrapper around `compile` for non-async callers."""
        return asyncio.run(self.compile(program))


__all__ = [
    "CompilationError",
    "CompilationResult",
    "UIXCompiler",
]
