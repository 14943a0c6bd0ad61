"""
Custom exception classes for git-line-changes.

Provides specific exception types for the fatal error scenarios
with error codes and structured details.
"""

from typing import Optional, Dict, Any, Sequence


class LineChangesError(Exception):
    """
    Base exception for git-line-changes.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(LineChangesError):
    """
    Raised when there's a configuration error.

    This includes invalid environment variables
    and invalid command-line values.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[str] = None
    ):
        """Initialize configuration error."""
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value:
            details["config_value"] = config_value

        super().__init__(
            message=message,
            error_code="CONFIG_ERROR",
            details=details
        )


class GitCommandError(LineChangesError):
    """
    Raised when a git invocation fails.

    This covers a non-zero exit status, a missing git executable
    and a command that exceeded its timeout.
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None
    ):
        """Initialize git command error."""
        details: Dict[str, Any] = {}
        if command:
            details["command"] = list(command)
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr.strip()

        super().__init__(
            message=message,
            error_code="GIT_COMMAND_ERROR",
            details=details
        )
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class DiffParsingError(LineChangesError):
    """
    Raised when a diff parse is treated as fatal by the caller.

    The parser itself reports problems as diagnostics; this error
    is raised only through ParseResult.raise_for_errors().
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        diff_line: Optional[str] = None,
        diagnostic_count: Optional[int] = None
    ):
        """Initialize diff parsing error."""
        details: Dict[str, Any] = {}
        if file_path:
            details["file_path"] = file_path
        if diff_line:
            details["diff_line"] = diff_line
        if diagnostic_count:
            details["diagnostic_count"] = diagnostic_count

        super().__init__(
            message=message,
            error_code="DIFF_PARSING_ERROR",
            details=details
        )
