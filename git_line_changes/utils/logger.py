"""
Logging for git-line-changes.

Library modules only call get_logger(). The command-line entry point
calls setup_logging() once, which sends log records to stderr (text or
JSON) and optionally to a JSON-lines file. Stdout stays reserved for the
change records themselves.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET_COLOR = "\033[0m"

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRIBUTES = set(vars(logging.makeLogRecord({}))) | {"message", "repo_path"}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Example output:
        {"file_count": 2, "level": "INFO", "line": 87, "logger": "git_line_changes.changes",
         "message": "Diff processing completed", "repo_path": "/work/repo", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": timestamp.strftime('%Y-%m-%dT%H:%M:%S.%fZ'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        repo_path = getattr(record, "repo_path", None)
        if repo_path:
            entry["repo_path"] = repo_path

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False, sort_keys=True)


class TextFormatter(logging.Formatter):
    """
    Single-line human-readable records, colored by level on a terminal.

    Example output:
        [2026-10-18 10:30:45] INFO     git_line_changes.diff_parser:212 - File a.txt added (repo=/work/repo)
    """

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        message = (
            f"[{timestamp}] {record.levelname:8} "
            f"{record.name}:{record.lineno} - {record.getMessage()}"
        )

        repo_path = getattr(record, "repo_path", None)
        if repo_path:
            message += f" (repo={repo_path})"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        if self.use_colors:
            message = f"{LEVEL_COLORS.get(record.levelname, '')}{message}{RESET_COLOR}"
        return message


class ContextFilter(logging.Filter):
    """Stamp the repository under inspection on every record."""

    def __init__(self, repo_path: Optional[str] = None):
        super().__init__()
        self.repo_path = repo_path

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "repo_path", None):
            record.repo_path = self.repo_path
        return True


def validate_log_level(level: str) -> str:
    """Return the upper-cased level name, or raise ValueError."""
    if not level or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level!r}. Valid levels: {', '.join(LOG_LEVELS)}")
    return level.upper()


def validate_log_format(format_type: str) -> str:
    """Return the lower-cased format name, or raise ValueError."""
    if not format_type or format_type.lower() not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {format_type!r}. Valid formats: {', '.join(LOG_FORMATS)}")
    return format_type.lower()


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    log_file: Optional[str] = None,
    repo_path: Optional[str] = None
) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        level: Logging level name
        format_type: Console format, 'text' or 'json'
        log_file: Optional path that also receives JSON-lines records
        repo_path: Repository path stamped on every record

    Returns:
        The configured root logger

    Raises:
        ValueError: If level or format_type is not supported
        OSError: If the log file cannot be opened
    """
    numeric_level = getattr(logging, validate_log_level(level))
    console_formatter: logging.Formatter = (
        JSONFormatter() if validate_log_format(format_type) == "json" else TextFormatter()
    )

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()

    context_filter = ContextFilter(repo_path)
    root.addHandler(_make_handler(logging.StreamHandler(sys.stderr), console_formatter, context_filter))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        root.addHandler(_make_handler(file_handler, JSONFormatter(), context_filter))

    return root


def _make_handler(
    handler: logging.Handler,
    formatter: logging.Formatter,
    context_filter: logging.Filter
) -> logging.Handler:
    handler.setFormatter(formatter)
    handler.addFilter(context_filter)
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class ChangeLogger:
    """Logs per-run diff processing statistics as structured extra fields."""

    def __init__(self, logger_name: str = "git_line_changes.changes"):
        self.logger = get_logger(logger_name)

    def log_diff_processing(
        self,
        file_count: int,
        hunk_count: int,
        record_count: int,
        diagnostic_count: int,
        processing_time_ms: float
    ) -> None:
        self.logger.info(
            "Diff processing completed",
            extra={
                "file_count": file_count,
                "hunk_count": hunk_count,
                "record_count": record_count,
                "diagnostic_count": diagnostic_count,
                "processing_time_ms": round(processing_time_ms, 2)
            }
        )


__all__ = [
    "JSONFormatter",
    "TextFormatter",
    "ContextFilter",
    "validate_log_level",
    "validate_log_format",
    "setup_logging",
    "get_logger",
    "ChangeLogger",
]
