"""
Unified diff parser for git-line-changes.

This module cuts raw `git diff` output into per-file sections, each
section into hunks, and hands every hunk to the HunkReconstructor.

The module provides:
- DiffParser class splitting and parsing unified diff text
- parse_diff() convenience function

Problems in one file section or hunk never abort the run: they are
recorded as ParseDiagnostic entries on the result and logged, and
parsing continues with the next hunk or file.

Example:
    parser = DiffParser()
    result = parser.parse(diff_text)
    for record in result.changes:
        print(record.to_dict())
"""

import re
from typing import List, Optional, Tuple

from .hunk_reconstructor import HunkReconstructor
from .models import (
    NULL_DEVICE,
    DiagnosticKind,
    FileChangeKind,
    HunkDescriptor,
    ParseDiagnostic,
    ParseResult,
)
from .utils.logger import get_logger

logger = get_logger(__name__)

FILE_MARKER = "diff --git"
OLD_FILE_MARKER = "---"
NEW_FILE_MARKER = "+++"
OLD_FILE_PREFIX = "a/"
NEW_FILE_PREFIX = "b/"


class DiffParser:
    """
    Parser for unified diffs as produced by `git diff`.

    Handles added, deleted, renamed and modified files, any number of
    hunks per file, and hunk headers with or without line counts.
    """

    FILE_MARKER_PATTERN = re.compile(r'^diff --git(?= |$)', re.MULTILINE)
    HUNK_HEADER_PATTERN = re.compile(r'^@@ (.*?) @@(.*)$', re.MULTILINE)
    LOCATION_PATTERN = re.compile(r'^-(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))?$')

    def __init__(self, reconstructor: Optional[HunkReconstructor] = None):
        """
        Initialize the parser.

        Args:
            reconstructor: Hunk reconstructor to use (a new one by default)
        """
        self.reconstructor = reconstructor or HunkReconstructor()

    def parse(self, diff_text: str) -> ParseResult:
        """
        Parse raw unified diff text into change records.

        Args:
            diff_text: Complete output of `git diff`

        Returns:
            ParseResult with one record per well-formed hunk and
            diagnostics for everything that was skipped

        Raises:
            TypeError: If diff_text is not a string
        """
        sections = self.split_files(diff_text)
        result = ParseResult(file_count=len(sections))

        for section in sections:
            for hunk in self._split_file_section(section, result.diagnostics):
                record = self.reconstructor.reconstruct(hunk, result.diagnostics)
                result.records.append(record)

        logger.debug(
            f"Parsed {len(result.records)} hunks from {result.file_count} files "
            f"with {len(result.diagnostics)} diagnostics"
        )
        return result

    def split(self, diff_text: str) -> Tuple[List[HunkDescriptor], List[ParseDiagnostic]]:
        """
        Split raw diff text into hunk descriptors without reconstructing them.

        Args:
            diff_text: Complete output of `git diff`

        Returns:
            Tuple of (hunk descriptors in diff order, diagnostics)
        """
        diagnostics: List[ParseDiagnostic] = []
        hunks: List[HunkDescriptor] = []
        for section in self.split_files(diff_text):
            hunks.extend(self._split_file_section(section, diagnostics))
        return hunks, diagnostics

    def split_files(self, diff_text: str) -> List[str]:
        """
        Split raw diff text on the per-file marker, dropping empty segments.

        Raises:
            TypeError: If diff_text is not a string
        """
        if not isinstance(diff_text, str):
            raise TypeError(f"diff_text must be a string, got {type(diff_text).__name__}")

        if not diff_text.strip():
            return []

        sections = [
            section for section in self.FILE_MARKER_PATTERN.split(diff_text)
            if section.strip()
        ]
        logger.info(f"Found {len(sections)} files with changes")
        return sections

    def _split_file_section(
        self,
        section: str,
        diagnostics: List[ParseDiagnostic]
    ) -> List[HunkDescriptor]:
        """
        Turn one file section into hunk descriptors.

        Args:
            section: Text of one file's diff, without the file marker
            diagnostics: List that receives recoverable problems

        Returns:
            Hunk descriptors for every hunk with a valid location header
        """
        lines = [line for line in section.split('\n') if line.rstrip('\r')]

        header = self._read_file_header(lines, diagnostics)
        if header is None:
            return []
        old_name, new_name, body_start = header

        kind = self._classify(old_name, new_name)
        self._log_classification(kind, old_name, new_name)

        body_text = '\n'.join(lines[body_start:])
        return self._split_hunks(body_text, kind, old_name, new_name, diagnostics)

    def _read_file_header(
        self,
        lines: List[str],
        diagnostics: List[ParseDiagnostic]
    ) -> Optional[Tuple[str, str, int]]:
        """
        Locate and consume the ---/+++ header pair.

        Returns:
            Tuple of (old name, new name, index of the first body line),
            or None when the pair is missing
        """
        label = lines[0].strip() if lines else ""

        index = 0
        while index < len(lines) and not lines[index].startswith(OLD_FILE_MARKER):
            index += 1

        if index + 1 >= len(lines) or not lines[index + 1].startswith(NEW_FILE_MARKER):
            self._report(
                diagnostics,
                DiagnosticKind.MISSING_FILE_HEADER,
                "Error parsing file names",
                file_path=label or None,
            )
            return None

        old_name = self._strip_file_name(lines[index], OLD_FILE_MARKER, OLD_FILE_PREFIX)
        new_name = self._strip_file_name(lines[index + 1], NEW_FILE_MARKER, NEW_FILE_PREFIX)
        return old_name, new_name, index + 2

    @staticmethod
    def _strip_file_name(line: str, marker: str, prefix: str) -> str:
        """Strip the ---/+++ marker, the a/ or b/ prefix, a trailing CR and git's trailing tab."""
        name = line[len(marker):]
        if name.startswith(' '):
            name = name[1:]
        name = name.rstrip('\r').rstrip('\t')
        if name != NULL_DEVICE and name.startswith(prefix):
            name = name[len(prefix):]
        return name

    @staticmethod
    def _classify(old_name: str, new_name: str) -> FileChangeKind:
        if old_name == NULL_DEVICE:
            return FileChangeKind.ADDED
        if new_name == NULL_DEVICE:
            return FileChangeKind.DELETED
        if old_name != new_name:
            return FileChangeKind.RENAMED
        return FileChangeKind.MODIFIED

    @staticmethod
    def _log_classification(kind: FileChangeKind, old_name: str, new_name: str) -> None:
        if kind == FileChangeKind.ADDED:
            logger.info(f"File {new_name} added")
        elif kind == FileChangeKind.DELETED:
            logger.info(f"File {old_name} deleted")
        elif kind == FileChangeKind.RENAMED:
            logger.info(f"File renamed from {old_name} to {new_name}")
        else:
            logger.info(f"Finding changes in {old_name}")

    def _split_hunks(
        self,
        body_text: str,
        kind: FileChangeKind,
        old_name: str,
        new_name: str,
        diagnostics: List[ParseDiagnostic]
    ) -> List[HunkDescriptor]:
        """
        Split a file section's body on hunk headers.

        re.split with two groups yields
        [preamble, location, heading, body, location, heading, body, ...].
        """
        parts = self.HUNK_HEADER_PATTERN.split(body_text)
        preamble = parts[0].strip()
        if preamble:
            logger.debug(f"Ignoring text before first hunk of {new_name}: {preamble!r}")

        hunks: List[HunkDescriptor] = []
        for i in range(1, len(parts) - 2, 3):
            location, heading, body = parts[i], parts[i + 1], parts[i + 2]
            parsed = self.parse_location(location)
            if parsed is None:
                self._report(
                    diagnostics,
                    DiagnosticKind.MALFORMED_HUNK_HEADER,
                    "Error parsing location information",
                    file_path=new_name if kind != FileChangeKind.DELETED else old_name,
                    line=f"@@ {location} @@",
                )
                continue

            old_start, old_count, new_start, new_count = parsed
            hunks.append(HunkDescriptor(
                kind=kind,
                old_name=old_name,
                new_name=new_name,
                old_start=old_start,
                old_count=old_count,
                new_start=new_start,
                new_count=new_count,
                lines=[line for line in body.split('\n') if line.rstrip('\r')],
                section_heading=heading.strip(),
            ))
        return hunks

    def parse_location(self, location: str) -> Optional[Tuple[int, int, int, int]]:
        """
        Parse the text between the @@ markers of a hunk header.

        Args:
            location: Text such as "-10,3 +10,4" or "-5 +5"

        Returns:
            Tuple of (old start, old count, new start, new count) with
            missing or zero counts set to 1, or None if the text does not match
        """
        match = self.LOCATION_PATTERN.match(location.strip())
        if match is None:
            return None
        old_start, old_count, new_start, new_count = match.groups()
        return (
            int(old_start, 10),
            int(old_count or "1", 10) or 1,
            int(new_start, 10),
            int(new_count or "1", 10) or 1,
        )

    @staticmethod
    def _report(
        diagnostics: List[ParseDiagnostic],
        kind: DiagnosticKind,
        message: str,
        file_path: Optional[str] = None,
        line: Optional[str] = None
    ) -> None:
        logger.error(f"{message} ({file_path})" if file_path else message)
        diagnostics.append(ParseDiagnostic(
            kind=kind,
            message=message,
            file_path=file_path,
            line=line,
        ))


def parse_diff(diff_text: str) -> ParseResult:
    """
    Parse raw unified diff text with a default DiffParser.

    Args:
        diff_text: Complete output of `git diff`

    Returns:
        ParseResult with records and diagnostics
    """
    return DiffParser().parse(diff_text)
