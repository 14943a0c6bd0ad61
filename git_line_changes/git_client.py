"""
Git client for git-line-changes.

Thin wrapper around the git executable: stages pending changes and
produces the unified diff that the parser consumes. Every failure is
raised as GitCommandError; nothing is retried here.
"""

import subprocess
import sys
from typing import Iterable, List, Optional, Sequence

from .utils.exceptions import GitCommandError
from .utils.logger import get_logger

logger = get_logger(__name__)


def default_git_executable(platform: Optional[str] = None) -> str:
    """
    Return the git executable name for a platform.

    Args:
        platform: Platform string (defaults to sys.platform)

    Returns:
        "git.exe" on Windows, "git" elsewhere
    """
    platform = platform if platform is not None else sys.platform
    return "git.exe" if platform.startswith("win") else "git"


class GitClient:
    """
    Runs git commands in a repository.

    Example:
        client = GitClient(executable="git", repo_path="/work/repo")
        client.stage_all()
        diff_text = client.diff(paths=["src/app.py"], context_lines=0)
    """

    def __init__(
        self,
        executable: str = "git",
        repo_path: Optional[str] = None,
        timeout_seconds: Optional[float] = None
    ):
        """
        Initialize the git client.

        Args:
            executable: Name or path of the git executable
            repo_path: Working directory for git (current directory if None)
            timeout_seconds: Per-command timeout (no timeout if None)
        """
        self.executable = executable
        self.repo_path = repo_path
        self.timeout_seconds = timeout_seconds

    def stage_all(self) -> None:
        """
        Stage every pending change so renames are detected by the diff.

        Raises:
            GitCommandError: If `git add` fails
        """
        logger.info("Staging all changes")
        try:
            self._run(["add", "--all"])
        except GitCommandError as e:
            logger.error(f"Error staging changes: {e}")
            raise

    def diff(self, paths: Iterable[str] = (), context_lines: int = 0) -> str:
        """
        Produce a unified diff of all staged and unstaged changes against HEAD.

        Args:
            paths: Restrict the diff to these paths (whole repository if empty)
            context_lines: Unchanged lines of context around each hunk

        Returns:
            Raw diff text (empty string when there are no changes)

        Raises:
            GitCommandError: If `git diff` fails
        """
        logger.info("Creating a unified diff")
        args = self.build_diff_args(paths, context_lines)
        logger.debug(f"args: {args}")
        try:
            output = self._run(args)
        except GitCommandError as e:
            logger.error(f"Error running git diff: {e}")
            raise
        logger.debug(f"diff output:\n{output}")
        return output

    @staticmethod
    def build_diff_args(paths: Iterable[str] = (), context_lines: int = 0) -> List[str]:
        """
        Build the argument list for `git diff`.

        Args:
            paths: Paths to restrict the diff to
            context_lines: Value for --unified

        Returns:
            Arguments following the executable name
        """
        args = [
            "diff",
            "--minimal",
            "--no-color",
            f"--unified={context_lines}",
            "HEAD",
        ]
        path_list = list(paths)
        if path_list:
            args.extend(["--", *path_list])
        return args

    def _run(self, args: Sequence[str]) -> str:
        """
        Run git with the given arguments and return its stdout.

        Raises:
            GitCommandError: On a missing executable, non-zero exit or timeout
        """
        command = [self.executable, *args]
        try:
            completed = subprocess.run(
                command,
                cwd=self.repo_path,
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise GitCommandError(
                f"Git executable not found: {self.executable}",
                command=command,
            ) from e
        except subprocess.CalledProcessError as e:
            raise GitCommandError(
                f"Command {' '.join(command)} failed with exit code {e.returncode}",
                command=command,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(
                f"Command {' '.join(command)} timed out after {self.timeout_seconds}s",
                command=command,
            ) from e
        return completed.stdout
