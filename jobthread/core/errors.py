"""Exceptions raised by jobthread."""

from __future__ import annotations


class JobThreadError(Exception):
    """Base class for jobthread errors."""


class UnknownSlotError(JobThreadError, KeyError):
    """A slot name outside the fixed set of thread context slots was used."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.message = f"Unknown thread context slot: {name}"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message


class ThreadContextLeakWarning(UserWarning):
    """Thread context values outlived the test that set them."""


__all__ = ["JobThreadError", "ThreadContextLeakWarning", "UnknownSlotError"]
