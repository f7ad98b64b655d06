"""pytest plugin keeping jobthread context isolated between tests."""

from .config import JobThreadPytestConfig
from .plugin import JobThreadPytestPlugin

__version__ = "0.1.0"

__all__ = [
    "JobThreadPytestConfig",
    "JobThreadPytestPlugin",
]
