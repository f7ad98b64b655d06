"""Core models and errors for jobthread."""

from .errors import JobThreadError, ThreadContextLeakWarning, UnknownSlotError
from .models import SLOT_NAMES, JobReference, SlotName, SlotValues

__all__ = [
    "SLOT_NAMES",
    "JobReference",
    "JobThreadError",
    "SlotName",
    "SlotValues",
    "ThreadContextLeakWarning",
    "UnknownSlotError",
]
