from __future__ import annotations

from datetime import datetime


def format_datetime_rfc3339(dt: datetime | str) -> str:
    """Format datetime to RFC 3339 format."""
    if isinstance(dt, str):
        return dt  # Already formatted, assume it's correct

    if dt.tzinfo is None:
        # Naive values are taken as UTC
        return dt.isoformat() + "Z"
    return dt.isoformat().replace("+00:00", "Z")


def describe_error(error: BaseException) -> str:
    """Render an exception as ``"ClassName: message"``."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name
