"""Process and thread identification for log correlation."""

from __future__ import annotations

import os
import threading
from typing import Any


def process_id() -> int:
    """Return the OS process ID."""
    return os.getpid()


def thread_name() -> str:
    """Return a printable identifier for the calling thread.

    The thread's name is used when it has one; otherwise the thread identifier,
    which is unique among live threads.
    """
    thread = threading.current_thread()
    return thread.name or str(threading.get_ident())


def collect_correlation_attributes() -> dict[str, Any]:
    """Collect the process/thread pair attached to every log record.

    Returns:
        Dictionary with ``process_id`` and ``thread_name``
    """
    return {
        "process_id": process_id(),
        "thread_name": thread_name(),
    }


__all__ = [
    "collect_correlation_attributes",
    "process_id",
    "thread_name",
]
