"""Configuration system for the pytest-jobthread plugin."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Literal

import pytest

from jobthread.config import parse_bool

LeakCheck = Literal["ignore", "warn", "error"]
LEAK_CHECK_CHOICES: tuple[str, ...] = ("ignore", "warn", "error")


@dataclass
class JobThreadPytestConfig:
    """Configuration for the pytest-jobthread plugin."""

    # Reset the thread context before and after every test
    reset_between_tests: bool = True

    # What to do when a test leaves slots set on the main thread
    leak_check: LeakCheck = "ignore"


def register_options(parser: pytest.Parser) -> None:
    """Register pytest command line options for jobthread."""
    group = parser.getgroup("jobthread", "jobthread thread context isolation")

    group.addoption(
        "--jobthread-no-reset",
        action="store_true",
        default=None,
        help="Do not reset the thread context between tests",
    )
    group.addoption(
        "--jobthread-leak-check",
        action="store",
        default=None,
        choices=list(LEAK_CHECK_CHOICES),
        help="Report tests leaving thread context slots set: ignore, warn or error",
    )


def resolve_options(config: pytest.Config) -> JobThreadPytestConfig:
    """Resolve jobthread configuration from CLI, environment, and pytest.ini.

    Priority: CLI > ENV > pytest.ini > defaults
    """

    def get_option(
        name: str,
        env_name: str,
        ini_name: str,
        default: Any = None,
        type_func: Any = None,
    ) -> Any:
        """Get option value with priority: CLI > ENV > INI > default."""
        # CLI option (highest priority)
        cli_value = config.getoption(name, default=None)
        if cli_value is not None:
            return cli_value

        # Environment variable
        env_value = os.getenv(env_name)
        if env_value is not None:
            if type_func is bool:
                return parse_bool(env_value)
            return env_value

        # pytest.ini value
        ini_value = config.getini(ini_name)
        if ini_value:
            if type_func is bool:
                return parse_bool(ini_value)
            return ini_value

        return default

    leak_check = get_option(
        "jobthread_leak_check", "JOBTHREAD_LEAK_CHECK", "jobthread_leak_check", "ignore"
    )
    if leak_check not in LEAK_CHECK_CHOICES:
        leak_check = "ignore"

    return JobThreadPytestConfig(
        reset_between_tests=not get_option(
            "jobthread_no_reset",
            "JOBTHREAD_NO_RESET",
            "jobthread_no_reset",
            False,
            bool,
        ),
        leak_check=leak_check,
    )


def setup_pytest_ini_options(parser: pytest.Parser) -> None:
    """Setup pytest.ini configuration options."""
    parser.addini("jobthread_no_reset", "Do not reset thread context between tests", default="false")
    parser.addini("jobthread_leak_check", "Leaked thread context handling", default="ignore")
