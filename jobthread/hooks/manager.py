"""Plugin manager for jobthread hooks."""

from __future__ import annotations

import pluggy

from .specs import JobThreadHookSpecs

_plugin_manager: JobThreadPluginManager | None = None


class JobThreadPluginManager(pluggy.PluginManager):
    """pluggy plugin manager preloaded with the jobthread hook specs."""

    def __init__(self) -> None:
        super().__init__("jobthread")
        self.add_hookspecs(JobThreadHookSpecs)


def get_plugin_manager() -> JobThreadPluginManager:
    """Return the shared plugin manager, creating it on first use.

    Plugins advertised under the ``jobthread`` entry point group are loaded
    when the manager is created.
    """
    global _plugin_manager
    if _plugin_manager is None:
        _plugin_manager = JobThreadPluginManager()
        _plugin_manager.load_setuptools_entrypoints("jobthread")
    return _plugin_manager


def reset_plugin_manager() -> None:
    """Drop the shared plugin manager and every plugin registered on it."""
    global _plugin_manager
    _plugin_manager = None
