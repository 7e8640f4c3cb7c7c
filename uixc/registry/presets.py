"""Reusable property schemas and the built-in component set."""

from __future__ import annotations

from uixc.schema import Schema

from .lib import ComponentRegistry

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
URL_PATTERN = (
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"


def email_schema() -> Schema:
    return Schema.string(pattern=EMAIL_PATTERN)


def url_schema() -> Schema:
    return Schema.string(pattern=URL_PATTERN)


def color_schema() -> Schema:
    """Hex color, short (#fff) or long (#ffffff) form."""
    return Schema.string(pattern=COLOR_PATTERN)


def html_attributes() -> dict[str, Schema]:
    """Common optional attributes shared by most elements."""
    return {
        "id": Schema.string(),
        "className": Schema.string(),
        "style": Schema.string(),
        "onClick": Schema.function(),
        "onSubmit": Schema.function(),
        "onFocus": Schema.function(),
        "onBlur": Schema.function(),
    }


def form_input_attributes() -> dict[str, Schema]:
    """html_attributes plus the usual form-control attributes."""
    return {
        **html_attributes(),
        "name": Schema.string(),
        "disabled": Schema.boolean().optional(False),
        "required": Schema.boolean().optional(False),
        "placeholder": Schema.string(),
        "value": Schema.string(),
        "onChange": Schema.function(),
    }


def _button() -> dict[str, Schema]:
    return {
        "text": Schema.string(required=True),
        "onClick": Schema.function(required=True),
        **{k: v for k, v in html_attributes().items() if k != "onClick"},
        "disabled": Schema.boolean().optional(False),
        "variant": Schema.enum(["primary", "secondary", "danger", "link"]).optional("primary"),
    }


def _input() -> dict[str, Schema]:
    return {
        **form_input_attributes(),
        "type": Schema.enum(
            ["text", "email", "password", "number", "search", "tel", "url"]
        ).optional("text"),
    }


def _card() -> dict[str, Schema]:
    return {
        "title": Schema.string(required=True),
        "subtitle": Schema.string(),
        "elevation": Schema.number(minimum=0, maximum=24, integer=True).optional(1),
        "onClick": Schema.function(),
        "className": Schema.string(),
    }


def _text() -> dict[str, Schema]:
    return {
        "text": Schema.union([Schema.string(), Schema.number()], required=True),
        "className": Schema.string(),
    }


def _title() -> dict[str, Schema]:
    return {
        "text": Schema.string(required=True),
        "level": Schema.number(minimum=1, maximum=6, integer=True).optional(1),
        "className": Schema.string(),
    }


def _row() -> dict[str, Schema]:
    return {
        "gap": Schema.number(minimum=0),
        "align": Schema.enum(["start", "center", "end", "stretch"]),
        "className": Schema.string(),
    }


BUILTIN_COMPONENTS = {
    "Button": _button,
    "Input": _input,
    "Card": _card,
    "Text": _text,
    "Title": _title,
    "Row": _row,
}


def create_default_registry() -> ComponentRegistry:
    """Create a registry with every built-in component registered."""
    registry = ComponentRegistry()
    for name, factory in BUILTIN_COMPONENTS.items():
        registry.register(name, factory())
    return registry


__all__ = [
    "EMAIL_PATTERN",
    "URL_PATTERN",
    "COLOR_PATTERN",
    "email_schema",
    "url_schema",
    "color_schema",
    "html_attributes",
    "form_input_attributes",
    "BUILTIN_COMPONENTS",
    "create_default_registry",
]
