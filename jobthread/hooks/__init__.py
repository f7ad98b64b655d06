"""Hook system for jobthread plugins."""

from .manager import JobThreadPluginManager, get_plugin_manager, reset_plugin_manager
from .specs import JobThreadHookSpecs, hookimpl, hookspec

__all__ = [
    "hookspec",
    "hookimpl",
    "JobThreadHookSpecs",
    "get_plugin_manager",
    "JobThreadPluginManager",
    "reset_plugin_manager",
]
