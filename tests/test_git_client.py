"""
Tests for the git client
"""
import subprocess
from unittest.mock import Mock, patch

import pytest

from git_line_changes.git_client import GitClient, default_git_executable
from git_line_changes.utils.exceptions import GitCommandError


class TestDefaultExecutable:
    """Test cases for platform executable selection"""

    @pytest.mark.parametrize("platform,expected", [
        ("win32", "git.exe"),
        ("linux", "git"),
        ("darwin", "git"),
    ])
    def test_default_git_executable(self, platform, expected):
        """Test executable name per platform"""
        assert default_git_executable(platform) == expected


class TestGitClient:
    """Test cases for GitClient"""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = GitClient(executable="git", repo_path="/work/repo", timeout_seconds=30)

    def test_build_diff_args(self):
        """Test diff arguments without paths"""
        assert GitClient.build_diff_args(context_lines=0) == [
            "diff", "--minimal", "--no-color", "--unified=0", "HEAD"
        ]

    def test_build_diff_args_with_paths(self):
        """Test that paths follow the -- separator"""
        args = GitClient.build_diff_args(["a.py", "b.py"], context_lines=3)
        assert args == [
            "diff", "--minimal", "--no-color", "--unified=3", "HEAD", "--", "a.py", "b.py"
        ]

    @patch("git_line_changes.git_client.subprocess.run")
    def test_stage_all(self, mock_run):
        """Test that staging runs git add --all in the repository"""
        mock_run.return_value = Mock(stdout="")

        self.client.stage_all()

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "add", "--all"]
        assert kwargs["cwd"] == "/work/repo"
        assert kwargs["check"] is True
        assert kwargs["timeout"] == 30

    @patch("git_line_changes.git_client.subprocess.run")
    def test_diff_returns_stdout(self, mock_run):
        """Test that diff output is returned unchanged"""
        mock_run.return_value = Mock(stdout="diff --git a/x b/x\n")

        output = self.client.diff(paths=["x"], context_lines=1)

        assert output == "diff --git a/x b/x\n"
        assert mock_run.call_args[0][0] == [
            "git", "diff", "--minimal", "--no-color", "--unified=1", "HEAD", "--", "x"
        ]

    @patch("git_line_changes.git_client.subprocess.run")
    def test_custom_executable(self, mock_run):
        """Test that the configured executable is used"""
        mock_run.return_value = Mock(stdout="")
        GitClient(executable="git.exe").stage_all()
        assert mock_run.call_args[0][0][0] == "git.exe"

    @patch("git_line_changes.git_client.subprocess.run")
    def test_stage_failure_is_raised(self, mock_run):
        """Test that a failing git add raises GitCommandError"""
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ["git", "add", "--all"], stderr="fatal: not a git repository\n"
        )

        with pytest.raises(GitCommandError) as exc_info:
            self.client.stage_all()

        error = exc_info.value
        assert error.returncode == 128
        assert error.command == ["git", "add", "--all"]
        assert error.details["stderr"] == "fatal: not a git repository"
        assert isinstance(error.__cause__, subprocess.CalledProcessError)

    @patch("git_line_changes.git_client.subprocess.run")
    def test_diff_failure_is_raised(self, mock_run):
        """Test that a failing git diff raises GitCommandError"""
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ["git", "diff"], stderr="fatal: bad revision 'HEAD'"
        )

        with pytest.raises(GitCommandError) as exc_info:
            self.client.diff()

        assert exc_info.value.error_code == "GIT_COMMAND_ERROR"

    @patch("git_line_changes.git_client.subprocess.run")
    def test_missing_executable(self, mock_run):
        """Test that a missing git binary raises GitCommandError"""
        mock_run.side_effect = FileNotFoundError("git")

        with pytest.raises(GitCommandError) as exc_info:
            self.client.diff()

        assert "not found" in exc_info.value.message

    @patch("git_line_changes.git_client.subprocess.run")
    def test_timeout(self, mock_run):
        """Test that a timed out command raises GitCommandError"""
        mock_run.side_effect = subprocess.TimeoutExpired(["git", "diff"], 30)

        with pytest.raises(GitCommandError) as exc_info:
            self.client.diff()

        assert "timed out" in exc_info.value.message
