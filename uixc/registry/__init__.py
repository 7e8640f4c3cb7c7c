"""Registry module - component validators and built-in components.

Example usage:
    >>> from uixc.registry import create_default_registry
    >>> registry = create_default_registry()
    >>> registry.validate("Button", {"text": "Go"}).failure.message
    'onClick is required'
"""

from .lib import ComponentRegistry, ComponentValidator, GlobalRule
from .presets import (
    BUILTIN_COMPONENTS,
    COLOR_PATTERN,
    EMAIL_PATTERN,
    URL_PATTERN,
    color_schema,
    create_default_registry,
    email_schema,
    form_input_attributes,
    html_attributes,
    url_schema,
)

__all__ = [
    # Registry
    "ComponentRegistry",
    "ComponentValidator",
    "GlobalRule",
    # Built-ins
    "BUILTIN_COMPONENTS",
    "create_default_registry",
    # Presets
    "EMAIL_PATTERN",
    "URL_PATTERN",
    "COLOR_PATTERN",
    "email_schema",
    "url_schema",
    "color_schema",
    "html_attributes",
    "form_input_attributes",
]
