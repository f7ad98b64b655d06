"""Stable function API delegating to the shared thread context registry."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from .._impl.context import get_current_thread

R = TypeVar("R")

_current_thread = get_current_thread()


def get_slot(name: str) -> Any:
    return _current_thread.get(name)


def set_slot(name: str, value: Any) -> None:
    _current_thread.set(name, value)


def reset(values: Mapping[str, Any] | None = None) -> None:
    _current_thread.reset(values)


def to_dict() -> dict[str, Any]:
    return _current_thread.to_dict()


def get_active_job_id() -> str | None:
    return _current_thread.active_job_id()


def get_process_id() -> int:
    return _current_thread.process_id()


def get_thread_name() -> str:
    return _current_thread.thread_name()


def within(body: Callable[..., R]) -> R:
    return _current_thread.within(body)


def bind(fn: Callable[..., R]) -> Callable[..., R]:
    return _current_thread.bind(fn)


__all__ = [
    "bind",
    "get_active_job_id",
    "get_process_id",
    "get_slot",
    "get_thread_name",
    "reset",
    "set_slot",
    "to_dict",
    "within",
]
