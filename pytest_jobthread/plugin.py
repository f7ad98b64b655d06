"""pytest plugin isolating tests from each other's thread context."""

from __future__ import annotations

import warnings
from collections.abc import Generator

import pytest

from jobthread import CurrentThread, ThreadContextLeakWarning, get_current_thread

from .config import (
    JobThreadPytestConfig,
    register_options,
    resolve_options,
    setup_pytest_ini_options,
)


class JobThreadPytestPlugin:
    """Resets the thread context around tests and reports leaked slots."""

    def __init__(
        self,
        config: JobThreadPytestConfig,
        current_thread: CurrentThread | None = None,
    ) -> None:
        self.config = config
        self.current_thread = current_thread or get_current_thread()

        # nodeid -> names of slots the test left set
        self.leaked: dict[str, list[str]] = {}

    def _leaked_slots(self) -> list[str]:
        return [name for name, value in self.current_thread.to_dict().items() if value is not None]

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_setup(self, item: pytest.Item) -> None:
        """Start every test from an all-unset thread context."""
        if self.config.reset_between_tests:
            self.current_thread.reset()

    @pytest.hookimpl(trylast=True)
    def pytest_runtest_teardown(self, item: pytest.Item, nextitem: pytest.Item | None) -> None:
        """Check for slots left behind once fixtures are torn down."""
        leaked = self._leaked_slots()
        if self.config.reset_between_tests:
            self.current_thread.reset()

        if not leaked or self.config.leak_check == "ignore":
            return

        self.leaked[item.nodeid] = leaked
        message = f"{item.nodeid} left thread context slots set: {', '.join(leaked)}"
        if self.config.leak_check == "error":
            pytest.fail(message, pytrace=False)
        warnings.warn(ThreadContextLeakWarning(message), stacklevel=2)

    @pytest.hookimpl(trylast=True)
    def pytest_terminal_summary(self, terminalreporter) -> None:
        if not self.leaked:
            return
        terminalreporter.write_sep("-", "jobthread leaked thread context")
        for nodeid, slots in self.leaked.items():
            terminalreporter.write_line(f"{nodeid}: {', '.join(slots)}")


@pytest.fixture
def jobthread_context() -> Generator[CurrentThread, None, None]:
    """Thread context registry, reset before and after the test."""
    current_thread = get_current_thread()
    current_thread.reset()
    yield current_thread
    current_thread.reset()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add command line options."""
    register_options(parser)
    setup_pytest_ini_options(parser)


def pytest_configure(config: pytest.Config) -> None:
    jobthread_config = resolve_options(config)

    _plugin_instance = JobThreadPytestPlugin(jobthread_config)
    config._jobthread = _plugin_instance
    config.pluginmanager.register(_plugin_instance, "jobthread_plugin")


def pytest_unconfigure(config: pytest.Config) -> None:
    plugin = getattr(config, "_jobthread", None)
    if plugin is not None:
        del config._jobthread
        config.pluginmanager.unregister(plugin, "jobthread_plugin")
