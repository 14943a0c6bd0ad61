"""
git-line-changes - main entry point.

Wires settings, the CLI handler and the change collector together.
"""

import sys
from typing import List, Optional

from .changes import ChangeCollector
from .cli_handler import CLIHandler
from .config.settings import Settings
from .git_client import GitClient
from .utils.exceptions import LineChangesError, ConfigurationError


class LineChangesApp:
    """
    Main application class.

    Ties together:
    - Settings loaded from the environment
    - CLI Handler for argument parsing and output
    - Change collector for staging, diffing and parsing
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the application.

        Args:
            settings: Application settings (loaded from the environment if None)
        """
        self.settings = settings
        self.cli_handler: Optional[CLIHandler] = None

    def build_collector(self, args) -> ChangeCollector:
        """Create the change collector from settings and CLI overrides."""
        git_client = GitClient(
            executable=args.git or self.settings.git_executable,
            repo_path=args.repo or self.settings.repo_path,
            timeout_seconds=self.settings.git_timeout_seconds
        )
        return ChangeCollector(git_client=git_client)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the application.

        Args:
            argv: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if self.settings is None:
                self.settings = Settings.from_env()
        except ConfigurationError as e:
            print(f"Configuration error: {e.message}", file=sys.stderr)
            return 1

        self.cli_handler = CLIHandler(self.settings)
        try:
            args = self.cli_handler.parse_args(argv)
        except SystemExit as e:
            # argparse exits with 2 on usage errors and 0 after --help
            return 0 if e.code in (0, None) else 1

        if not self.cli_handler.setup_logging(args):
            return 1
        logger = self.cli_handler.logger

        try:
            self.cli_handler.validate_args(args)

            context_lines = (
                args.context_lines if args.context_lines is not None
                else self.settings.context_lines
            )
            collector = self.build_collector(args)
            result = collector.collect(paths=args.paths, context_lines=context_lines)

            print(self.cli_handler.format_changes(result.changes, args.format))
            self.cli_handler.print_success_summary(len(result.changes), len(result.diagnostics))
            return 0

        except LineChangesError as e:
            logger.error(f"{e.error_code}: {e.message}", extra={"details": e.details})
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    return LineChangesApp().run(argv)


if __name__ == "__main__":
    sys.exit(main())
