"""
Data models for git-line-changes.

The parser produces ChangeRecord objects, one per hunk, each pairing
the old-side and new-side FileFragment of that hunk. Both are frozen
dataclasses so records are hashable and compare by value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from .utils.exceptions import DiffParsingError


NULL_DEVICE = "/dev/null"


class FileChangeKind(str, Enum):
    """How a file section changed between the two versions."""
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    MODIFIED = "modified"


class DiagnosticKind(str, Enum):
    """Recoverable problems reported by the parser."""
    MISSING_FILE_HEADER = "missing_file_header"
    MALFORMED_HUNK_HEADER = "malformed_hunk_header"
    MISSING_FRAGMENT = "missing_fragment"


@dataclass(frozen=True)
class FileFragment:
    """
    One side (old or new) of a hunk.

    Attributes:
        name: Path relative to the repository root
        start_line: Starting line number as written in the hunk header
        line_count: Number of lines spanned; 1 when the header omits it
        content: Reconstructed text, newline-terminated per line
    """
    name: str
    start_line: int
    line_count: int = 1
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "line_count": self.line_count,
            "content": self.content,
        }


@dataclass(frozen=True)
class ChangeRecord:
    """
    One reconstructed hunk.

    from_file is None for an added file and to_file is None for a
    deleted file; at least one of them is always present.
    """
    from_file: Optional[FileFragment] = None
    to_file: Optional[FileFragment] = None

    def __post_init__(self):
        if self.from_file is None and self.to_file is None:
            raise ValueError("A change record needs at least one of from_file or to_file")

    @property
    def name(self) -> str:
        """Primary path for this record: the new name, or the old one for deletions."""
        fragment = self.to_file or self.from_file
        return fragment.name  # type: ignore[union-attr]

    @property
    def sort_key(self) -> Tuple[str, int, int]:
        from_start = self.from_file.start_line if self.from_file else 0
        to_start = self.to_file.start_line if self.to_file else 0
        return (self.name, to_start or from_start, from_start)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fromFile": self.from_file.to_dict() if self.from_file else None,
            "toFile": self.to_file.to_dict() if self.to_file else None,
        }


@dataclass
class HunkDescriptor:
    """
    A single hunk as cut out of the raw diff by the splitter.

    Attributes:
        kind: Classification of the owning file section
        old_name: Old path, or /dev/null for an added file
        new_name: New path, or /dev/null for a deleted file
        old_start: Old-side start line from the location header
        old_count: Old-side line count (defaults to 1)
        new_start: New-side start line from the location header
        new_count: New-side line count (defaults to 1)
        lines: Raw body lines, markers included
        section_heading: Text git writes after the closing @@, if any
    """
    kind: FileChangeKind
    old_name: str
    new_name: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: List[str] = field(default_factory=list)
    section_heading: str = ""

    @property
    def location(self) -> str:
        return f"-{self.old_start},{self.old_count} +{self.new_start},{self.new_count}"


@dataclass(frozen=True)
class ParseDiagnostic:
    """A recoverable problem found while parsing; processing continued past it."""
    kind: DiagnosticKind
    message: str
    file_path: Optional[str] = None
    line: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "file_path": self.file_path,
            "line": self.line,
        }


@dataclass
class ParseResult:
    """
    Outcome of parsing one raw diff.

    records keeps diff order (and duplicates); changes is the
    deduplicated, unordered view handed to callers.
    """
    records: List[ChangeRecord] = field(default_factory=list)
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)
    file_count: int = 0

    @property
    def changes(self) -> Set[ChangeRecord]:
        return set(self.records)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def raise_for_errors(self) -> None:
        """
        Raise DiffParsingError if any diagnostic was recorded.

        Raises:
            DiffParsingError: Carrying the first diagnostic's location
        """
        if not self.diagnostics:
            return
        first = self.diagnostics[0]
        raise DiffParsingError(
            f"Diff parsed with {len(self.diagnostics)} error(s): {first.message}",
            file_path=first.file_path,
            diff_line=first.line,
            diagnostic_count=len(self.diagnostics)
        )
