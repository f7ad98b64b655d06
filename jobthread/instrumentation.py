"""Structured logging enriched with the calling thread's job context.

Every record formatted by :class:`ContextJsonFormatter` carries the process
ID, thread name and whichever job slots are set on the emitting thread, so
log lines from concurrent workers can be told apart.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from ._impl.context import get_current_thread
from .config import resolve_config
from .core.system_info import collect_correlation_attributes
from .hooks import get_plugin_manager, hookimpl
from .utils import describe_error, format_datetime_rfc3339

logger = logging.getLogger("JobThread")

SCOPE_LOGGING_PLUGIN_NAME = "jobthread_scope_logging"


def render_slots(values: Mapping[str, Any]) -> dict[str, Any]:
    """Turn slot values into JSON-friendly log fields.

    Unset slots are left out. Job references are reduced to their
    ``active_job_id`` and errors to ``"ClassName: message"``.
    """
    fields: dict[str, Any] = {}
    for name, value in values.items():
        if value is None:
            continue
        if name in ("job", "retried_job"):
            job_id = getattr(value, "active_job_id", None)
            if job_id is not None:
                key = "active_job_id" if name == "job" else "retried_job_id"
                fields[key] = job_id
        elif isinstance(value, BaseException):
            fields[name] = describe_error(value)
        elif isinstance(value, datetime):
            fields[name] = format_datetime_rfc3339(value)
        else:
            fields[name] = value
    return fields


def log_fields() -> dict[str, Any]:
    """Correlation fields for the calling thread.

    Returns:
        ``process_id`` and ``thread_name``, plus the rendered slots that are set
    """
    fields = collect_correlation_attributes()
    fields.update(render_slots(get_current_thread().to_dict()))
    return fields


class ContextJsonFormatter(JsonFormatter):
    """JSON log formatter adding thread context fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        # Explicit ``extra`` values win over the thread's context
        for key, value in log_fields().items():
            log_record.setdefault(key, value)

        if "message" not in log_record and record.getMessage():
            log_record["message"] = record.getMessage()


class ScopeLoggingPlugin:
    """Logs the final slot values of every finished ``within`` scope."""

    @hookimpl
    def jobthread_scope_exit(
        self, values: dict[str, Any], error: BaseException | None
    ) -> None:
        scope = render_slots(values)
        if error is None:
            logger.info("job scope finished", extra={"scope": scope})
        else:
            logger.warning(
                "job scope finished with %s",
                describe_error(error),
                extra={"scope": scope},
            )


def install_scope_logging() -> ScopeLoggingPlugin:
    """Register :class:`ScopeLoggingPlugin` unless it already is."""
    pm = get_plugin_manager()
    plugin = pm.get_plugin(SCOPE_LOGGING_PLUGIN_NAME)
    if plugin is None:
        plugin = ScopeLoggingPlugin()
        pm.register(plugin, SCOPE_LOGGING_PLUGIN_NAME)
    return plugin


def setup_logging(
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
    log_scopes: bool | None = None,
) -> None:
    """Configure root logging.

    Arguments left as None are taken from :func:`jobthread.config.resolve_config`.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON output with context fields (plain text otherwise)
        log_file: Also write to this file (stdout only if None)
        log_scopes: Log a record for every finished ``within`` scope
    """
    config = resolve_config()
    level = level or config.log_level
    json_format = config.log_json if json_format is None else json_format
    log_file = log_file or config.log_file
    log_scopes = config.log_scopes if log_scopes is None else log_scopes

    formatter: logging.Formatter
    if json_format:
        formatter = ContextJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s"
        )

    handlers: list[logging.Handler] = []
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )

    if log_scopes:
        install_scope_logging()


__all__ = [
    "ContextJsonFormatter",
    "ScopeLoggingPlugin",
    "install_scope_logging",
    "log_fields",
    "render_slots",
    "setup_logging",
]
