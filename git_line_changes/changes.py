"""
Local change collection for git-line-changes.

get_changes() stages the working tree, asks git for a unified diff
and parses it into ChangeRecord objects. Git failures are fatal and
propagate as GitCommandError; parser problems are logged and kept on
the ParseResult returned by ChangeCollector.collect().
"""

import time
from typing import Iterable, Optional, Set

from .diff_parser import DiffParser
from .git_client import GitClient
from .models import ChangeRecord, ParseResult
from .utils.logger import ChangeLogger, get_logger

logger = get_logger(__name__)


class ChangeCollector:
    """
    Collects line-level changes of a git working tree.

    Example:
        collector = ChangeCollector(GitClient(repo_path="/work/repo"))
        changes = collector.get_changes(paths={"src/app.py"}, context_lines=3)
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        parser: Optional[DiffParser] = None
    ):
        """
        Initialize the collector.

        Args:
            git_client: Client used to stage and diff (default: git in cwd)
            parser: Diff parser (default: DiffParser())
        """
        self.git_client = git_client or GitClient()
        self.parser = parser or DiffParser()
        self.change_logger = ChangeLogger()

    def collect(
        self,
        paths: Optional[Iterable[str]] = None,
        context_lines: int = 0
    ) -> ParseResult:
        """
        Stage, diff and parse, returning records together with diagnostics.

        Args:
            paths: Restrict the diff to these paths (whole repository if empty)
            context_lines: Unchanged lines of context around each hunk

        Returns:
            ParseResult for the current changes

        Raises:
            TypeError: If context_lines is not an integer
            ValueError: If context_lines is negative
            GitCommandError: If staging or diff generation fails
        """
        if isinstance(context_lines, bool) or not isinstance(context_lines, int):
            raise TypeError("context_lines must be an integer")
        if context_lines < 0:
            raise ValueError("context_lines must be non-negative")

        if isinstance(paths, str):
            paths = [paths]
        path_list = sorted(set(paths)) if paths else []

        logger.info("Identifying local changes")
        start_time = time.time()

        # A diff of unstaged files does not match renames
        self.git_client.stage_all()
        diff_text = self.git_client.diff(paths=path_list, context_lines=context_lines)

        if not diff_text:
            logger.info("No changes found")
            return ParseResult()

        result = self.parser.parse(diff_text)

        self.change_logger.log_diff_processing(
            file_count=result.file_count,
            hunk_count=len(result.records),
            record_count=len(result.changes),
            diagnostic_count=len(result.diagnostics),
            processing_time_ms=(time.time() - start_time) * 1000
        )
        if result.diagnostics:
            logger.warning(f"Skipped {len(result.diagnostics)} malformed diff entries")

        return result

    def get_changes(
        self,
        paths: Optional[Iterable[str]] = None,
        context_lines: int = 0
    ) -> Set[ChangeRecord]:
        """
        Get the local filesystem changes using git diff.

        Args:
            paths: Restrict the diff to these paths (whole repository if empty)
            context_lines: Unchanged lines of context around each hunk

        Returns:
            Deduplicated, unordered set of change records

        Raises:
            GitCommandError: If staging or diff generation fails
        """
        return self.collect(paths=paths, context_lines=context_lines).changes


def get_changes(
    paths: Optional[Iterable[str]] = None,
    context_lines: int = 0,
    git_client: Optional[GitClient] = None,
    parser: Optional[DiffParser] = None
) -> Set[ChangeRecord]:
    """
    Get the local filesystem changes using git diff.

    Args:
        paths: Optional set of paths to get changes for
        context_lines: Number of lines of context to include in the diff
        git_client: Client to run git with (default: git in cwd)
        parser: Diff parser (default: DiffParser())

    Returns:
        A set of changes
    """
    collector = ChangeCollector(git_client=git_client, parser=parser)
    return collector.get_changes(paths=paths, context_lines=context_lines)
