"""Hook specifications for the jobthread plugin system."""

from __future__ import annotations

from typing import Any

from pluggy import HookimplMarker, HookspecMarker

hookspec = HookspecMarker("jobthread")
hookimpl = HookimplMarker("jobthread")


class JobThreadHookSpecs:
    """Hook specifications for observing thread context scopes."""

    @hookspec
    def jobthread_scope_enter(self, values: dict[str, Any]) -> None:
        """Called when a ``within`` scope starts, before its body runs.

        Args:
            values: Slot values of the calling thread on entry
        """

    @hookspec
    def jobthread_scope_exit(
        self, values: dict[str, Any], error: BaseException | None
    ) -> None:
        """Called when a ``within`` scope ends, after the slots were restored.

        Exceptions raised by implementations are logged and otherwise ignored.

        Args:
            values: Slot values as the body left them
            error: Exception raised by the body, or None if it returned
        """
