"""Compiler lifecycle hooks.

Plugins observe compilation at four points:

- before_compile: the program is about to be compiled
- on_component: a component definition was processed
- on_validation_error: a component's properties failed validation
- after_output: source text was generated

Hooks for one point run strictly in registration order, each awaited before
the next starts. A hook that raises is logged and skipped; the remaining
hooks and the compilation continue.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class HookPoint(str, Enum):
    """Lifecycle points plugins can attach to."""

    BEFORE_COMPILE = "before_compile"
    ON_COMPONENT = "on_component"
    ON_VALIDATION_ERROR = "on_validation_error"
    AFTER_OUTPUT = "after_output"


Hook = Callable[[dict[str, Any]], Awaitable[Any] | Any]


class PluginError(ValueError):
    """Raised when a hook is registered for an unknown lifecycle point."""


def _hook_point(point: HookPoint | str) -> HookPoint:
    try:
        return HookPoint(point)
    except ValueError as e:
        available = ", ".join(p.value for p in HookPoint)
        raise PluginError(f"Unknown hook point '{point}'. Available: {available}") from e


class PluginManager:
    """Ordered hook registry for one compiler instance.

    Example:
        >>> plugins = PluginManager()
        >>> plugins.register_hook("after_output", lambda payload: print(payload["file_name"]))
        >>> await plugins.execute_hook("after_output", {"file_name": "CompiledUI.jsx"})
    """

    def __init__(self) -> None:
        self._hooks: dict[HookPoint, list[Hook]] = {point: [] for point in HookPoint}

    def register_hook(self, point: HookPoint | str, hook: Hook) -> None:
        """Append a hook (sync or async callable) for a lifecycle point.

        Raises:
            PluginError: If `point` is not a known lifecycle point.
            TypeError: If `hook` is not callable.
        """
        if not callable(hook):
            raise TypeError(f"Hook for '{point}' must be callable, got {type(hook).__name__}")
        self._hooks[_hook_point(point)].append(hook)

    def register_plugin(self, plugin: object) -> int:
        """Register every method of `plugin` named after a lifecycle point.

        Returns:
            Number of hooks registered.
        """
        registered = 0
        for point in HookPoint:
            method = getattr(plugin, point.value, None)
            if callable(method):
                self._hooks[point].append(method)
                registered += 1
        if not registered:
            logger.warning(f"Plugin {type(plugin).__name__} exposes no known hook methods")
        return registered

    def hooks(self, point: HookPoint | str) -> list[Hook]:
        """Hooks registered for a point, in execution order."""
        return list(self._hooks[_hook_point(point)])

    def clear(self) -> None:
        for hooks in self._hooks.values():
            hooks.clear()

    async def execute_hook(self, point: HookPoint | str, payload: dict[str, Any] | None = None) -> list[Any]:
        """Run every hook for a point sequentially.

        Args:
            point: Lifecycle point.
            payload: Mapping passed to each hook.

        Returns:
            Results of the hooks that completed, in registration order.
        """
        point = _hook_point(point)
        payload = payload if payload is not None else {}
        results: list[Any] = []

        for hook in list(self._hooks[point]):
            try:
                result = hook(payload)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                logger.error(f"Plugin hook '{point.value}' failed: {e}", exc_info=True)
                continue
            results.append(result)
        return results


__all__ = [
    "HookPoint",
    "Hook",
    "PluginError",
    "PluginManager",
]
