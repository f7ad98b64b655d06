"""Storage backends holding one slot record per thread."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from ...core.models import SlotValues


class ContextBackend(ABC):
    """Where the calling thread's slot record lives."""

    @abstractmethod
    def slots(self) -> SlotValues:
        """Return the live record for the calling thread, creating it if missing."""

    @abstractmethod
    def clear(self) -> None:
        """Drop the calling thread's record."""


class ThreadLocalBackend(ContextBackend):
    """Backend keeping records in ``threading.local`` storage.

    Each thread sees only its own record, so no locking is needed.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def slots(self) -> SlotValues:
        record = getattr(self._local, "slots", None)
        if record is None:
            record = SlotValues()
            self._local.slots = record
        return record

    def clear(self) -> None:
        if hasattr(self._local, "slots"):
            delattr(self._local, "slots")


__all__ = ["ContextBackend", "ThreadLocalBackend"]
