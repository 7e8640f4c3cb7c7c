"""Plugins module - ordered, failure-isolated compiler lifecycle hooks."""

from .lib import Hook, HookPoint, PluginError, PluginManager

__all__ = [
    "HookPoint",
    "Hook",
    "PluginError",
    "PluginManager",
]
