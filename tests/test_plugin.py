"""Tests for the pytest-jobthread plugin."""

from __future__ import annotations

import warnings
from unittest.mock import Mock

import pytest

from jobthread import CurrentThread, ThreadContextLeakWarning
from jobthread._impl.context import ThreadLocalBackend
from pytest_jobthread.config import JobThreadPytestConfig
from pytest_jobthread.plugin import JobThreadPytestPlugin

from .conftest import FakeJob

PLUGIN_ARGS = ("-p", "no:jobthread", "-p", "pytest_jobthread.plugin")


class TestJobThreadPytestPlugin:
    """Tests for JobThreadPytestPlugin hook methods."""

    def setup_method(self):
        self.current_thread = CurrentThread(backend=ThreadLocalBackend())
        self.item = Mock()
        self.item.nodeid = "tests/test_jobs.py::test_perform"

    def make_plugin(self, **kwargs) -> JobThreadPytestPlugin:
        return JobThreadPytestPlugin(JobThreadPytestConfig(**kwargs), current_thread=self.current_thread)

    def test_plugin_initialization(self):
        config = JobThreadPytestConfig()
        plugin = JobThreadPytestPlugin(config)

        assert plugin.config is config
        assert plugin.current_thread is not None
        assert plugin.leaked == {}

    def test_setup_resets(self):
        plugin = self.make_plugin()
        self.current_thread.cron_key = "stale"

        plugin.pytest_runtest_setup(self.item)

        assert self.current_thread.cron_key is None

    def test_setup_without_reset(self):
        plugin = self.make_plugin(reset_between_tests=False)
        self.current_thread.cron_key = "kept"

        plugin.pytest_runtest_setup(self.item)

        assert self.current_thread.cron_key == "kept"

    def test_teardown_resets_and_ignores_leaks(self):
        plugin = self.make_plugin()
        self.current_thread.job = FakeJob(active_job_id="abc")

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            plugin.pytest_runtest_teardown(self.item, None)

        assert self.current_thread.job is None
        assert plugin.leaked == {}

    def test_teardown_warns_on_leak(self):
        plugin = self.make_plugin(leak_check="warn")
        self.current_thread.job = FakeJob(active_job_id="abc")
        self.current_thread.retry_now = True

        with pytest.warns(ThreadContextLeakWarning, match="job, retry_now"):
            plugin.pytest_runtest_teardown(self.item, None)

        assert plugin.leaked == {"tests/test_jobs.py::test_perform": ["job", "retry_now"]}
        assert self.current_thread.job is None

    def test_teardown_fails_on_leak(self):
        plugin = self.make_plugin(leak_check="error")
        self.current_thread.cron_key = "nightly"

        with pytest.raises(pytest.fail.Exception, match="left thread context slots set: cron_key"):
            plugin.pytest_runtest_teardown(self.item, None)

        assert self.current_thread.cron_key is None

    def test_teardown_clean_test(self):
        plugin = self.make_plugin(leak_check="error")

        plugin.pytest_runtest_teardown(self.item, None)

        assert plugin.leaked == {}

    def test_leaks_kept_without_reset(self):
        plugin = self.make_plugin(reset_between_tests=False, leak_check="warn")
        self.current_thread.cron_key = "nightly"

        with pytest.warns(ThreadContextLeakWarning):
            plugin.pytest_runtest_teardown(self.item, None)

        assert self.current_thread.cron_key == "nightly"

    def test_terminal_summary(self):
        plugin = self.make_plugin()
        plugin.leaked = {"tests/test_jobs.py::test_perform": ["job"]}
        reporter = Mock()

        plugin.pytest_terminal_summary(reporter)

        reporter.write_sep.assert_called_once_with("-", "jobthread leaked thread context")
        reporter.write_line.assert_called_once_with("tests/test_jobs.py::test_perform: job")

    def test_terminal_summary_silent_without_leaks(self):
        plugin = self.make_plugin()
        reporter = Mock()

        plugin.pytest_terminal_summary(reporter)

        reporter.write_sep.assert_not_called()


class TestPluginInPytest:
    """Runs the plugin inside a nested pytest session."""

    def test_tests_start_clean(self, pytester: pytest.Pytester):
        pytester.makepyfile(
            """
            from jobthread import current_thread

            def test_first():
                current_thread.cron_key = "leaked"

            def test_second():
                assert current_thread.cron_key is None
            """
        )

        result = pytester.runpytest(*PLUGIN_ARGS)

        result.assert_outcomes(passed=2)

    def test_fixture(self, pytester: pytest.Pytester):
        pytester.makepyfile(
            """
            def test_fixture(jobthread_context):
                assert jobthread_context.to_dict()["job"] is None
                jobthread_context.cron_key = "set"
                assert jobthread_context.get("cron_key") == "set"
            """
        )

        result = pytester.runpytest(*PLUGIN_ARGS)

        result.assert_outcomes(passed=1)

    def test_leak_check_error(self, pytester: pytest.Pytester):
        pytester.makepyfile(
            """
            from jobthread import current_thread

            def test_leaky():
                current_thread.retry_now = True
            """
        )

        result = pytester.runpytest(*PLUGIN_ARGS, "--jobthread-leak-check=error")

        result.assert_outcomes(passed=1, errors=1)
        result.stdout.fnmatch_lines(["*left thread context slots set: retry_now*"])

    def test_leak_check_warn_summary(self, pytester: pytest.Pytester):
        pytester.makepyfile(
            """
            from jobthread import current_thread

            def test_leaky():
                current_thread.cron_key = "nightly"
            """
        )

        result = pytester.runpytest(*PLUGIN_ARGS, "--jobthread-leak-check=warn")

        result.assert_outcomes(passed=1)
        result.stdout.fnmatch_lines(
            ["*ThreadContextLeakWarning*", "*jobthread leaked thread context*", "*test_leaky*: cron_key"]
        )
