"""jobthread - per-thread context for background job execution."""

from __future__ import annotations

from jobthread._impl.context import CurrentThread, get_current_thread

# Public API facade
from jobthread.core.api import (
    bind,
    get_active_job_id,
    get_process_id,
    get_slot,
    get_thread_name,
    reset,
    set_slot,
    to_dict,
    within,
)
from jobthread.core.decorators import scoped
from jobthread.core.errors import JobThreadError, ThreadContextLeakWarning, UnknownSlotError
from jobthread.core.models import SLOT_NAMES, JobReference, SlotName, SlotValues
from jobthread.hooks import hookimpl

current_thread = get_current_thread()

# Version info
__version__ = "0.1.0"

# Public API
__all__ = [
    # Version
    "__version__",
    # Registry
    "CurrentThread",
    "current_thread",
    "get_current_thread",
    # Models
    "SLOT_NAMES",
    "JobReference",
    "SlotName",
    "SlotValues",
    # Errors
    "JobThreadError",
    "ThreadContextLeakWarning",
    "UnknownSlotError",
    # Function API
    "bind",
    "get_active_job_id",
    "get_process_id",
    "get_slot",
    "get_thread_name",
    "reset",
    "set_slot",
    "to_dict",
    "within",
    # Decorators
    "scoped",
    # Hooks
    "hookimpl",
]
