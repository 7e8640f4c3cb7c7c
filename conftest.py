"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Shared UIX program fixtures in raw parser shape
"""

from __future__ import annotations

from typing import Any

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _expr(text: str) -> dict[str, str]:
    return {"type": "expression", "value": text}


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_program() -> list[dict[str, Any]]:
    """A representative program as emitted by the UIX parser.

    Returns:
        A UserCard definition plus an App with a bound input, a conditional
        block and a loop.
    """
    return [
        {
            "type": "Component",
            "name": {"value": "UserCard"},
            "params": [{"value": "user"}, {"value": "onFollow"}],
            "body": [
                {"type": "Text", "props": {"text": _expr("user.name")}},
                {
                    "type": "Button",
                    "props": {"text": "Follow", "onClick": _expr("onFollow")},
                },
            ],
        },
        {
            "type": "App",
            "props": {},
            "children": [
                {"type": "Title", "props": {"text": "Hello UIX"}},
                {"type": "Input", "props": {"bind": _expr("name"), "initial": "Ann"}},
                {"type": "Button", "props": {"text": "Greet", "onClick": _expr("greet")}},
                {
                    "type": "If",
                    "condition": _expr("showMore"),
                    "children": [{"type": "Text", "props": {"text": "More details"}}],
                },
                {
                    "type": "For",
                    "item": "user",
                    "list": _expr("users"),
                    "children": [
                        {
                            "type": "UserCard",
                            "props": {"user": _expr("user"), "onFollow": _expr("follow")},
                        }
                    ],
                },
            ],
        },
    ]
