"""Configuration for jobthread logging."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass
class JobThreadConfig:
    """Logging settings for processes using jobthread."""

    log_level: str = "INFO"
    log_json: bool = True
    log_file: str | None = None

    # Log one record per ``within`` scope
    log_scopes: bool = False


def parse_bool(value: str | bool) -> bool:
    """Parse boolean from string."""
    if isinstance(value, bool):
        return value
    return value.strip().lower() in ("true", "1", "yes", "on")


def _is_log_level(value: str) -> bool:
    return isinstance(getattr(logging, value.upper(), None), int)


def resolve_config(environ: Mapping[str, str] | None = None) -> JobThreadConfig:
    """Resolve configuration from environment variables.

    Priority: ENV > defaults. Malformed values fall back to the default.

    Args:
        environ: Mapping to read instead of ``os.environ``
    """
    env = os.environ if environ is None else environ
    defaults = JobThreadConfig()

    def get_option(env_name: str, default: Any = None, type_func: Any = None) -> Any:
        value = env.get(env_name)
        if value is None or value == "":
            return default
        if type_func is bool:
            return parse_bool(value)
        if type_func:
            try:
                return type_func(value)
            except (ValueError, TypeError):
                return default
        return value

    log_level = get_option("JOBTHREAD_LOG_LEVEL", defaults.log_level)
    if not _is_log_level(log_level):
        log_level = defaults.log_level

    return JobThreadConfig(
        log_level=log_level.upper(),
        log_json=get_option("JOBTHREAD_LOG_JSON", defaults.log_json, bool),
        log_file=get_option("JOBTHREAD_LOG_FILE", defaults.log_file),
        log_scopes=get_option("JOBTHREAD_LOG_SCOPES", defaults.log_scopes, bool),
    )


__all__ = ["JobThreadConfig", "parse_bool", "resolve_config"]
