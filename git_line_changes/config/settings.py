"""
Configuration for git-line-changes.

Settings are a plain dataclass populated from environment variables
(and a .env file) by Settings.from_env(). Nothing here runs at import
time: callers build a Settings instance and pass it on explicitly.
"""

import os
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from dotenv import load_dotenv, find_dotenv

from ..git_client import default_git_executable
from ..utils.exceptions import ConfigurationError


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["text", "json"]


@dataclass
class Settings:
    """
    Application settings.

    All settings have defaults and are validated on instantiation.
    """

    # Git Configuration
    git_executable: str = field(default_factory=default_git_executable)
    repo_path: str = field(default=".")
    git_timeout_seconds: Optional[float] = field(default=None)

    # Diff Configuration
    context_lines: int = field(default=0)

    # Logging Configuration
    log_level: str = field(default="INFO")
    log_format: str = field(default="text")
    log_file: Optional[str] = field(default=None)

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.git_executable:
            raise ConfigurationError("git_executable cannot be empty", config_key="GIT_EXECUTABLE")

        if not self.repo_path:
            raise ConfigurationError("repo_path cannot be empty", config_key="REPO_PATH")

        if self.context_lines < 0:
            raise ConfigurationError(
                "context_lines must be a non-negative integer",
                config_key="CONTEXT_LINES",
                config_value=str(self.context_lines)
            )

        if self.git_timeout_seconds is not None and self.git_timeout_seconds <= 0:
            raise ConfigurationError(
                "git_timeout_seconds must be positive",
                config_key="GIT_TIMEOUT_SECONDS",
                config_value=str(self.git_timeout_seconds)
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}",
                config_key="LOG_LEVEL",
                config_value=self.log_level
            )

        self.log_format = self.log_format.lower()
        if self.log_format not in VALID_LOG_FORMATS:
            raise ConfigurationError(
                f"log_format must be one of: {', '.join(VALID_LOG_FORMATS)}",
                config_key="LOG_FORMAT",
                config_value=self.log_format
            )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **kwargs) -> "Settings":
        """Create Settings instance from environment variables with optional overrides."""
        load_dotenv(env_file or find_dotenv(usecwd=True))

        env_vars: Dict[str, Any] = {}

        env_mapping = {
            "GIT_EXECUTABLE": "git_executable",
            "REPO_PATH": "repo_path",
            "GIT_TIMEOUT_SECONDS": "git_timeout_seconds",
            "CONTEXT_LINES": "context_lines",
            "LOG_LEVEL": "log_level",
            "LOG_FORMAT": "log_format",
            "LOG_FILE": "log_file"
        }

        for env_var, field_name in env_mapping.items():
            if os.environ.get(env_var):
                env_vars[field_name] = os.environ[env_var]

        # Convert numeric strings
        try:
            if "context_lines" in env_vars:
                env_vars["context_lines"] = int(env_vars["context_lines"])
            if "git_timeout_seconds" in env_vars:
                env_vars["git_timeout_seconds"] = float(env_vars["git_timeout_seconds"])
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        env_vars.update(kwargs)

        return cls(**env_vars)
