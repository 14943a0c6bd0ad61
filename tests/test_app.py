"""
Tests for the application entry point
"""
import json
from unittest.mock import patch

import pytest

from git_line_changes.app import LineChangesApp, main
from git_line_changes.config.settings import Settings
from git_line_changes.utils.exceptions import ConfigurationError, GitCommandError


@pytest.fixture
def settings():
    """Settings independent of the environment"""
    return Settings(git_executable="git", repo_path="/work/repo", context_lines=1)


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the test run's logging configuration untouched"""
    with patch("git_line_changes.cli_handler.setup_logging"):
        yield


class TestLineChangesApp:
    """Test cases for LineChangesApp"""

    @patch("git_line_changes.app.ChangeCollector")
    @patch("git_line_changes.app.GitClient")
    def test_run_prints_changes(self, mock_git_client, mock_collector, settings, capsys, renamed_file_diff):
        """Test a successful run"""
        from git_line_changes.diff_parser import parse_diff
        mock_collector.return_value.collect.return_value = parse_diff(renamed_file_diff)

        exit_code = LineChangesApp(settings).run(["src/app.py"])

        assert exit_code == 0
        mock_git_client.assert_called_once_with(
            executable="git", repo_path="/work/repo", timeout_seconds=None
        )
        mock_collector.return_value.collect.assert_called_once_with(
            paths=["src/app.py"], context_lines=1
        )
        output = json.loads(capsys.readouterr().out)
        assert output[0]["fromFile"]["name"] == "old.txt"
        assert output[0]["toFile"]["name"] == "new.txt"

    @patch("git_line_changes.app.ChangeCollector")
    @patch("git_line_changes.app.GitClient")
    def test_cli_overrides(self, mock_git_client, mock_collector, settings):
        """Test that CLI options override settings"""
        from git_line_changes.models import ParseResult
        mock_collector.return_value.collect.return_value = ParseResult()

        exit_code = LineChangesApp(settings).run(["-U", "5", "--repo", "/other", "--git", "git2"])

        assert exit_code == 0
        mock_git_client.assert_called_once_with(
            executable="git2", repo_path="/other", timeout_seconds=None
        )
        mock_collector.return_value.collect.assert_called_once_with(paths=[], context_lines=5)

    @patch("git_line_changes.app.ChangeCollector")
    @patch("git_line_changes.app.GitClient")
    def test_git_failure(self, mock_git_client, mock_collector, settings, capsys):
        """Test that git failures produce exit code 1"""
        mock_collector.return_value.collect.side_effect = GitCommandError("git add failed")

        assert LineChangesApp(settings).run([]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_arguments(self, settings):
        """Test that invalid arguments produce exit code 1"""
        assert LineChangesApp(settings).run(["-U", "-2"]) == 1

    @pytest.mark.parametrize("argv", [
        ["--format", "xml"],
        ["-U", "three"],
        ["--no-such-option"],
    ])
    def test_usage_errors_exit_with_one(self, settings, argv, capsys):
        """Test that argparse usage errors produce exit code 1"""
        assert LineChangesApp(settings).run(argv) == 1
        assert "usage:" in capsys.readouterr().err

    def test_help_exits_with_zero(self, settings, capsys):
        """Test that --help prints usage and exits cleanly"""
        assert LineChangesApp(settings).run(["--help"]) == 0
        assert "git-line-changes" in capsys.readouterr().out

    @patch("git_line_changes.app.Settings.from_env")
    def test_configuration_error(self, mock_from_env, capsys):
        """Test that invalid settings produce exit code 1"""
        mock_from_env.side_effect = ConfigurationError("log_level must be one of: DEBUG")

        assert main([]) == 1
        assert "Configuration error" in capsys.readouterr().err
