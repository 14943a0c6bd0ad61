"""
CLI Handler for git-line-changes.

This module handles command-line argument parsing, validation and
output formatting for the git-line-changes command.
"""

import argparse
import json
import sys
from typing import Iterable, List, Optional

from .models import ChangeRecord, FileFragment, NULL_DEVICE
from .utils.logger import get_logger, setup_logging
from .utils.exceptions import ConfigurationError


OUTPUT_FORMATS = ["json", "text"]


class CLIHandler:
    """
    Handles the command-line interface of git-line-changes.

    This class is responsible for:
    - Parsing and validating command-line arguments
    - Setting up logging configuration
    - Rendering change records for stdout
    """

    def __init__(self, settings):
        """
        Initialize the CLI handler with settings.

        Args:
            settings: Application settings instance
        """
        self.settings = settings
        self.logger = None

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create and configure the argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="git-line-changes",
            description="Report line-level changes of a git working tree",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # All changes in the current repository as JSON
  git-line-changes

  # Two files, three lines of context, text summary
  git-line-changes -U 3 --format text src/app.py src/util.py

  # Another repository
  git-line-changes --repo ../other-repo
            """
        )

        parser.add_argument(
            "paths",
            nargs="*",
            help="Restrict the diff to these paths (default: whole repository)"
        )

        parser.add_argument(
            "-U", "--context-lines",
            type=int,
            help="Unchanged lines of context around each hunk (default: 0)"
        )

        parser.add_argument(
            "--repo",
            type=str,
            help="Repository to inspect (default: current directory)"
        )

        parser.add_argument(
            "--git",
            type=str,
            help="Git executable to run"
        )

        parser.add_argument(
            "--format",
            choices=OUTPUT_FORMATS,
            default="json",
            help="Output format (default: json)"
        )

        # Logging options
        parser.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Override logging level"
        )

        parser.add_argument(
            "--log-format",
            choices=["text", "json"],
            help="Override log format"
        )

        parser.add_argument(
            "--log-file",
            type=str,
            help="Also log to this file (JSON lines)"
        )

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            argv: List of command-line arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parser = self.create_parser()
        return parser.parse_args(argv)

    def validate_args(self, args: argparse.Namespace) -> None:
        """
        Validate parsed command-line arguments.

        Args:
            args: Parsed arguments

        Raises:
            ConfigurationError: If arguments are invalid
        """
        if args.context_lines is not None and args.context_lines < 0:
            raise ConfigurationError(
                "context-lines must be a non-negative integer",
                config_key="context_lines",
                config_value=str(args.context_lines)
            )

        if args.git is not None and not args.git.strip():
            raise ConfigurationError("git cannot be empty", config_key="git")

        if any(not path.strip() for path in args.paths):
            raise ConfigurationError("paths cannot be empty strings", config_key="paths")

    def setup_logging(self, args: argparse.Namespace) -> bool:
        """
        Setup logging with command-line overrides.

        Args:
            args: Parsed command-line arguments

        Returns:
            True if logging setup succeeded, False otherwise
        """
        try:
            setup_logging(
                level=args.log_level or getattr(self.settings, 'log_level', 'INFO'),
                format_type=args.log_format or getattr(self.settings, 'log_format', 'text'),
                log_file=args.log_file or getattr(self.settings, 'log_file', None),
                repo_path=args.repo or getattr(self.settings, 'repo_path', None)
            )
            self.logger = get_logger("cli")
            return True
        except (ValueError, OSError) as e:
            print(f"Failed to setup logging: {e}", file=sys.stderr)
            return False

    def format_changes(self, changes: Iterable[ChangeRecord], output_format: str = "json") -> str:
        """
        Render change records for stdout, ordered by file and line.

        Args:
            changes: Change records to render
            output_format: "json" or "text"

        Returns:
            Rendered output

        Raises:
            ValueError: If output_format is unknown
        """
        ordered = sorted(changes, key=lambda record: record.sort_key)

        if output_format == "json":
            return json.dumps([record.to_dict() for record in ordered], indent=2)
        if output_format == "text":
            return "\n".join(self._format_record_text(record) for record in ordered)
        raise ValueError(f"Invalid output format: {output_format}")

    @staticmethod
    def _format_record_text(record: ChangeRecord) -> str:
        def side(fragment: Optional[FileFragment]) -> str:
            if fragment is None:
                return NULL_DEVICE
            return f"{fragment.name}:{fragment.start_line},{fragment.line_count}"

        return f"{side(record.from_file)} -> {side(record.to_file)}"

    def print_success_summary(self, change_count: int, diagnostic_count: int) -> None:
        """
        Print a one-line summary to stderr.

        Args:
            change_count: Number of change records reported
            diagnostic_count: Number of skipped diff entries
        """
        summary = f"Found {change_count} changes"
        if diagnostic_count:
            summary += f" ({diagnostic_count} diff entries skipped)"
        print(summary, file=sys.stderr)
