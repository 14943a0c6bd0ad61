"""
Utilities module for git-line-changes.
"""

from .logger import setup_logging, get_logger, ChangeLogger
from .exceptions import (
    LineChangesError,
    ConfigurationError,
    GitCommandError,
    DiffParsingError
)

__all__ = [
    "setup_logging",
    "get_logger",
    "ChangeLogger",
    "LineChangesError",
    "ConfigurationError",
    "GitCommandError",
    "DiffParsingError"
]
