"""Per-thread registry of job context slots."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Mapping
from contextlib import AbstractContextManager, contextmanager
from datetime import datetime
from functools import wraps
from typing import Any, Generic, TypeVar, overload

from ...core import system_info
from ...core.models import SLOT_NAMES, JobReference, check_slot_name, check_slot_names
from ...hooks.manager import get_plugin_manager
from .backend import ContextBackend, ThreadLocalBackend

logger = logging.getLogger("JobThread")

T = TypeVar("T")
R = TypeVar("R")


class _Slot(Generic[T]):
    """Attribute access to one slot of the calling thread's record."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: CurrentThread | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return getattr(instance.backend.slots(), self.name)

    def __set__(self, instance: CurrentThread, value: T | None) -> None:
        setattr(instance.backend.slots(), self.name, value)


class CurrentThread:
    """Context for the job executing on the calling thread.

    Slots can be read and written as attributes (``current_thread.job = job``)
    or by name through :meth:`get` and :meth:`set`. Every thread has its own
    values; a thread that never wrote a slot sees it unset (``None``).
    """

    cron_at: _Slot[datetime] = _Slot()
    cron_key: _Slot[str] = _Slot()
    error_on_discard: _Slot[BaseException] = _Slot()
    error_on_retry: _Slot[BaseException] = _Slot()
    error_on_retry_stopped: _Slot[BaseException] = _Slot()
    job: _Slot[JobReference] = _Slot()
    execution_interrupted: _Slot[bool] = _Slot()
    retried_job: _Slot[JobReference] = _Slot()
    retry_now: _Slot[bool] = _Slot()

    def __init__(self, backend: ContextBackend | None = None) -> None:
        self.backend = backend or ThreadLocalBackend()

    # Single slots
    def get(self, name: str) -> Any:
        check_slot_name(name)
        return getattr(self.backend.slots(), name)

    def set(self, name: str, value: Any) -> None:
        check_slot_name(name)
        setattr(self.backend.slots(), name, value)

    # Bulk access
    def reset(self, values: Mapping[str, Any] | None = None) -> None:
        """Assign every slot from ``values``, clearing the ones it omits.

        Args:
            values: Slot values to assign (all slots cleared if None)

        Raises:
            UnknownSlotError: If ``values`` names an unknown slot. Nothing is
                changed in that case.
        """
        values = values or {}
        check_slot_names(values)
        record = self.backend.slots()
        for name in SLOT_NAMES:
            setattr(record, name, values.get(name))

    def clear(self) -> None:
        """Forget the calling thread's record entirely."""
        self.backend.clear()

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the calling thread's slots, keyed by slot name."""
        return self.backend.slots().to_dict()

    # Derived values
    def active_job_id(self) -> str | None:
        """Return the ``active_job_id`` of the current job, if any."""
        job = self.job
        if job is None:
            return None
        return getattr(job, "active_job_id", None)

    @staticmethod
    def process_id() -> int:
        return system_info.process_id()

    @staticmethod
    def thread_name() -> str:
        return system_info.thread_name()

    # Scoping
    @overload
    def within(self, body: None = None) -> AbstractContextManager[CurrentThread]: ...

    @overload
    def within(self, body: Callable[[CurrentThread], R]) -> R: ...

    def within(self, body: Callable[[CurrentThread], R] | None = None) -> Any:
        """Run ``body`` and restore the slots it changed.

        The slots are captured on entry and put back on exit, whether ``body``
        returns or raises. Exceptions from ``body`` propagate once the slots
        are restored.

        Called without ``body``, returns a context manager instead::

            with current_thread.within() as ctx:
                ctx.job = job

        Args:
            body: Callable receiving this registry

        Returns:
            Whatever ``body`` returns
        """
        if body is None:
            return self._scope()
        with self._scope() as ctx:
            return body(ctx)

    @contextmanager
    def _scope(self) -> Generator[CurrentThread, None, None]:
        saved = self.to_dict()
        get_plugin_manager().hook.jobthread_scope_enter(values=saved)
        error: BaseException | None = None
        try:
            yield self
        except BaseException as exc:
            error = exc
            raise
        finally:
            final = self.to_dict()
            self.reset(saved)
            self._notify_scope_exit(final, error)

    def _notify_scope_exit(self, values: dict[str, Any], error: BaseException | None) -> None:
        # Must not mask the body's outcome
        try:
            get_plugin_manager().hook.jobthread_scope_exit(values=values, error=error)
        except Exception:
            logger.exception("jobthread_scope_exit hook failed")

    def bind(self, fn: Callable[..., R]) -> Callable[..., R]:
        """Carry the calling thread's slots over to wherever ``fn`` runs.

        The slots are captured now. Each call of the returned wrapper runs
        ``fn`` inside :meth:`within` with those values, so the executing
        thread is left as it was found.
        """
        values = self.to_dict()

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> R:
            with self.within():
                self.reset(values)
                return fn(*args, **kwargs)

        return wrapper


__all__ = ["CurrentThread"]
