"""
git-line-changes: line-level change records from git unified diffs.
"""

from .models import (
    ChangeRecord,
    FileFragment,
    FileChangeKind,
    HunkDescriptor,
    ParseDiagnostic,
    ParseResult,
)
from .diff_parser import DiffParser, parse_diff
from .hunk_reconstructor import HunkReconstructor
from .git_client import GitClient
from .changes import ChangeCollector, get_changes

__version__ = "0.1.0"

__all__ = [
    "ChangeRecord",
    "FileFragment",
    "FileChangeKind",
    "HunkDescriptor",
    "ParseDiagnostic",
    "ParseResult",
    "DiffParser",
    "parse_diff",
    "HunkReconstructor",
    "GitClient",
    "ChangeCollector",
    "get_changes",
]
