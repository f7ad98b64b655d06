"""Decorators running functions inside a thread context scope."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from .._impl.context import get_current_thread
from .models import check_slot_names

F = TypeVar("F", bound=Callable[..., Any])


def scoped(func: F | None = None, /, **slots: Any) -> Any:
    """Run every call of the decorated function inside ``within()``.

    Slots changed by the function do not outlive the call. Keyword arguments
    are assigned to the scope before the function runs::

        @scoped
        def perform(job): ...

        @scoped(cron_key="nightly-report")
        def run_report(): ...

    Args:
        func: Function to decorate (when used without parentheses)
        **slots: Slot values to set at the start of each call

    Raises:
        UnknownSlotError: If ``slots`` names an unknown slot
    """
    check_slot_names(slots)

    def decorator(f: F) -> F:
        @wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_current_thread().within() as ctx:
                for name, value in slots.items():
                    ctx.set(name, value)
                return f(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorator(func)
    return decorator


__all__ = ["scoped"]
