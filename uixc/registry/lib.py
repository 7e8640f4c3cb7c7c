"""Component validator registry.

Maps component names to ordered property schemas and validates concrete
property sets against them. Validation is fail-fast per component: the first
failing property is reported, wrapped with component and property context.
Unknown properties never fail; they are logged and listed on the outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import replace
from typing import Any

from uixc.schema import (
    MISSING,
    FailureKind,
    Schema,
    ValidationFailure,
    ValidationOutcome,
    validate_value,
)

logger = logging.getLogger(__name__)

GlobalRule = Callable[[str, Mapping[str, Any]], "str | None"]
"""Registry-wide rule: returns an error message, or None when satisfied."""


class ComponentValidator:
    """Validates property sets for one component.

    Attributes:
        name: Component name (e.g., "Button").
        schemas: Property name -> Schema, in declaration order.
    """

    def __init__(self, name: str, schemas: Mapping[str, Schema]):
        self.name = name
        self.schemas: dict[str, Schema] = dict(schemas)

    def __repr__(self) -> str:
        return f"ComponentValidator({self.name!r}, props={self.prop_names})"

    def __contains__(self, prop: str) -> bool:
        return prop in self.schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self.schemas)

    @property
    def prop_names(self) -> list[str]:
        """All declared property names, in declaration order."""
        return list(self.schemas)

    @property
    def required_props(self) -> list[str]:
        """Names of required properties."""
        return [name for name, schema in self.schemas.items() if schema.required]

    @property
    def optional_props(self) -> list[str]:
        """Names of optional properties."""
        return [name for name, schema in self.schemas.items() if not schema.required]

    def get_prop_schema(self, prop: str) -> Schema | None:
        """Return the schema for a property, or None if undeclared."""
        return self.schemas.get(prop)

    def validate(self, props: Mapping[str, Any] | None) -> ValidationOutcome:
        """Validate a property set.

        Args:
            props: Concrete property values. None is treated as empty.

        Returns:
            ValidationOutcome whose value is the validated property mapping,
            or whose failure names the first failing property.
        """
        props = props or {}
        validated: dict[str, Any] = {}
        dropped: list[str] = []

        for prop, schema in self.schemas.items():
            outcome = validate_value(schema, props.get(prop, MISSING), prop)
            if not outcome.ok:
                failure = replace(outcome.failure, component=self.name, prop=prop)
                return ValidationOutcome(failure=failure)
            if prop in props or outcome.value is not None:
                validated[prop] = outcome.value
            dropped.extend(outcome.dropped)

        unknown = tuple(prop for prop in props if prop not in self.schemas)
        for prop in unknown:
            logger.warning(f"Unknown prop '{prop}' passed to component '{self.name}'")

        return ValidationOutcome(value=validated, dropped=tuple(dropped), unknown=unknown)


class ComponentRegistry:
    """Registry of component validators plus registry-wide rules.

    Example:
        >>> registry = ComponentRegistry()
        >>> registry.register("Badge", {"label": Schema.string(required=True)})
        >>> registry.validate("Badge", {}).failure.describe()
        "Invalid prop 'label' for component 'Badge': label is required"
    """

    def __init__(self) -> None:
        self._validators: dict[str, ComponentValidator] = {}
        self._rules: dict[str, GlobalRule] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._validators

    def __len__(self) -> int:
        return len(self._validators)

    def register(self, name: str, schemas: Mapping[str, Schema]) -> ComponentValidator:
        """Register (or replace) the validator for a component."""
        if name in self._validators:
            logger.debug(f"Replacing validator for component '{name}'")
        validator = ComponentValidator(name, schemas)
        self._validators[name] = validator
        return validator

    def get(self, name: str) -> ComponentValidator | None:
        """Return the validator for a component, if registered."""
        return self._validators.get(name)

    def is_registered(self, name: str) -> bool:
        """Check whether a component has a validator."""
        return name in self._validators

    @property
    def registered_components(self) -> list[str]:
        """Registered component names, in registration order."""
        return list(self._validators)

    @property
    def global_rules(self) -> list[str]:
        """Names of registry-wide rules, in registration order."""
        return list(self._rules)

    def add_global_rule(self, name: str, rule: GlobalRule) -> None:
        """Add a rule applied to every component after schema validation.

        Args:
            name: Rule name, used in failure messages.
            rule: Callable receiving (component, props) and returning an
                error message or None.
        """
        self._rules[name] = rule

    def validate(self, name: str, props: Mapping[str, Any] | None) -> ValidationOutcome:
        """Validate a property set for a registered component.

        Args:
            name: Component name.
            props: Property values.

        Returns:
            ValidationOutcome. Fails with UNKNOWN_COMPONENT when nothing is
            registered under `name`, or RULE_VIOLATION when a global rule
            rejects the properties.
        """
        validator = self._validators.get(name)
        if validator is None:
            return ValidationOutcome(
                failure=ValidationFailure(
                    kind=FailureKind.UNKNOWN_COMPONENT,
                    path=name,
                    message=f"No validator found for component: {name}",
                    value=name,
                    component=name,
                )
            )

        outcome = validator.validate(props)
        if not outcome.ok:
            return outcome

        for rule_name, rule in self._rules.items():
            message = rule(name, outcome.value)
            if message:
                return ValidationOutcome(
                    failure=ValidationFailure(
                        kind=FailureKind.RULE_VIOLATION,
                        path=name,
                        message=f"Global rule '{rule_name}' failed: {message}",
                        value=props,
                        component=name,
                    )
                )
        return outcome

    def generate_report(self) -> dict[str, Any]:
        """Summarize registered components and rules.

        Returns:
            Dict with total_components, components (per-component required,
            optional and typed props) and global_rules.
        """
        components: dict[str, Any] = {}
        for name, validator in self._validators.items():
            components[name] = {
                "total_props": len(validator.schemas),
                "required_props": validator.required_props,
                "optional_props": validator.optional_props,
                "prop_types": {
                    prop: {
                        "type": schema.type_label,
                        "required": schema.required,
                        "default": schema.default,
                    }
                    for prop, schema in validator.schemas.items()
                },
            }
        return {
            "total_components": len(self._validators),
            "components": components,
            "global_rules": self.global_rules,
        }


__all__ = [
    "GlobalRule",
    "ComponentValidator",
    "ComponentRegistry",
]
