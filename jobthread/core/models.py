"""Data models for per-thread job context."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Literal, Protocol, runtime_checkable

from .errors import UnknownSlotError

SlotName = Literal[
    "cron_at",
    "cron_key",
    "error_on_discard",
    "error_on_retry",
    "error_on_retry_stopped",
    "job",
    "execution_interrupted",
    "retried_job",
    "retry_now",
]


@runtime_checkable
class JobReference(Protocol):
    """Handle to a job record owned by the job-execution engine."""

    active_job_id: str | None


@dataclass
class SlotValues:
    """Context record for one thread.

    Every field is optional and unset (``None``) until written. Values are
    stored as given and never validated or copied.
    """

    cron_at: datetime | None = None
    cron_key: str | None = None
    error_on_discard: BaseException | None = None
    error_on_retry: BaseException | None = None
    error_on_retry_stopped: BaseException | None = None
    job: JobReference | None = None
    execution_interrupted: bool | None = None
    retried_job: JobReference | None = None
    retry_now: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a new dict with one entry per slot name."""
        return {name: getattr(self, name) for name in SLOT_NAMES}

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> SlotValues:
        """Build a record from a name-to-value mapping.

        Names missing from ``values`` are left unset.

        Raises:
            UnknownSlotError: If ``values`` contains a name that is not a slot
        """
        check_slot_names(values)
        return cls(**values)


SLOT_NAMES: tuple[str, ...] = tuple(f.name for f in fields(SlotValues))


def check_slot_name(name: str) -> None:
    if name not in SLOT_NAMES:
        raise UnknownSlotError(name)


def check_slot_names(names: Iterable[str]) -> None:
    for name in names:
        check_slot_name(name)


__all__ = [
    "SLOT_NAMES",
    "JobReference",
    "SlotName",
    "SlotValues",
    "check_slot_name",
    "check_slot_names",
]
