"""IR module - typed AST for parsed UIX programs.

Example usage:
    >>> from uixc.ir import load_program
    >>> app = load_program([{"type": "Title", "props": {"text": "Hello"}}])
    >>> app.body[0].props["text"]
    'Hello'
"""

from .lib import (
    BIND_TARGET,
    IDENTIFIER_PATH,
    RESERVED_PROPS,
    AppNode,
    ComponentDefinition,
    ElementNode,
    Expression,
    ForNode,
    IfNode,
    Node,
    Parameter,
    PropValue,
    capitalize,
    is_event_key,
    setter_name,
    walk,
)
from .loader import ProgramLoadError, load_program, load_program_file

__all__ = [
    # Patterns and helpers
    "IDENTIFIER_PATH",
    "BIND_TARGET",
    "RESERVED_PROPS",
    "is_event_key",
    "capitalize",
    "setter_name",
    "walk",
    # Models
    "Expression",
    "PropValue",
    "ElementNode",
    "IfNode",
    "ForNode",
    "Node",
    "Parameter",
    "ComponentDefinition",
    "AppNode",
    # Loading
    "ProgramLoadError",
    "load_program",
    "load_program_file",
]
