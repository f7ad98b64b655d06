"""Private implementation of the per-thread context registry.

This package contains internal, unstable APIs. External users should import
from ``jobthread`` directly.
"""

from __future__ import annotations

from .backend import ContextBackend, ThreadLocalBackend
from .service import CurrentThread

_global_backend = ThreadLocalBackend()
_global_current_thread: CurrentThread | None = None


def get_current_thread() -> CurrentThread:
    """Return the shared CurrentThread instance (thread-local storage)."""
    global _global_current_thread
    if _global_current_thread is None:
        _global_current_thread = CurrentThread(backend=_global_backend)
    return _global_current_thread


__all__ = ["ContextBackend", "CurrentThread", "ThreadLocalBackend", "get_current_thread"]
