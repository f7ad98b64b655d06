"""Shared fixtures for the jobthread test suite."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass

import pytest

from jobthread import get_current_thread
from jobthread.hooks.manager import reset_plugin_manager


@dataclass
class FakeJob:
    """Minimal stand-in for a job record."""

    active_job_id: str | None = None
    queue_name: str = "default"


@pytest.fixture(autouse=True)
def _reset_thread_context() -> Generator[None, None, None]:
    get_current_thread().reset()
    reset_plugin_manager()
    yield
    get_current_thread().reset()
    reset_plugin_manager()


@pytest.fixture
def current_thread():
    return get_current_thread()


@pytest.fixture
def make_job():
    def factory(active_job_id: str = "job-1") -> FakeJob:
        return FakeJob(active_job_id=active_job_id)

    return factory
