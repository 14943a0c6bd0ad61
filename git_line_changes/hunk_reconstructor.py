"""
Hunk reconstruction for git-line-changes.

Replays the body of one hunk against two content buffers, rebuilding
the old-side and new-side text of the hunk:

- removed lines ('-') go to the old side only
- added lines ('+') go to the new side only
- context lines go to both sides
- git's "\\ No newline at end of file" marker is not content

Marker stripping removes exactly one marker character plus at most one
following space, so indentation inside the content is preserved.
"""

import re
from typing import List, Optional

from .models import (
    ChangeRecord,
    DiagnosticKind,
    FileChangeKind,
    FileFragment,
    HunkDescriptor,
    ParseDiagnostic,
)
from .utils.logger import get_logger

logger = get_logger(__name__)

REMOVED_LINE_PATTERN = re.compile(r'^- ?')
ADDED_LINE_PATTERN = re.compile(r'^\+ ?')
CONTEXT_LINE_PATTERN = re.compile(r'^ ? ?')
NO_NEWLINE_MARKER = '\\'


class _FragmentBuffer:
    """Mutable accumulator for one side of a hunk."""

    def __init__(self, name: str, start_line: int, line_count: int):
        self.name = name
        self.start_line = start_line
        self.line_count = line_count
        self.parts: List[str] = []

    def append(self, text: str) -> None:
        self.parts.append(f"{text}\n")

    def freeze(self) -> FileFragment:
        return FileFragment(
            name=self.name,
            start_line=self.start_line,
            line_count=self.line_count,
            content="".join(self.parts),
        )


class HunkReconstructor:
    """
    Build a ChangeRecord from a HunkDescriptor.

    Lines that reference a side the hunk does not have (for example a
    '-' line inside an added file) are skipped and reported as
    diagnostics; the rest of the hunk is still reconstructed.

    Example:
        reconstructor = HunkReconstructor()
        record = reconstructor.reconstruct(hunk, diagnostics)
    """

    def reconstruct(
        self,
        hunk: HunkDescriptor,
        diagnostics: Optional[List[ParseDiagnostic]] = None
    ) -> ChangeRecord:
        """
        Reconstruct both sides of a hunk.

        Args:
            hunk: Hunk descriptor produced by the diff splitter
            diagnostics: List that receives recoverable problems

        Returns:
            ChangeRecord with a from-fragment unless the file was added
            and a to-fragment unless the file was deleted
        """
        if diagnostics is None:
            diagnostics = []

        from_buffer: Optional[_FragmentBuffer] = None
        to_buffer: Optional[_FragmentBuffer] = None
        if hunk.kind != FileChangeKind.ADDED:
            from_buffer = _FragmentBuffer(hunk.old_name, hunk.old_start, hunk.old_count)
        if hunk.kind != FileChangeKind.DELETED:
            to_buffer = _FragmentBuffer(hunk.new_name, hunk.new_start, hunk.new_count)

        for line in hunk.lines:
            if line.startswith('-'):
                if from_buffer is None:
                    self._report_missing(diagnostics, hunk, line, "fromFile")
                    continue
                from_buffer.append(REMOVED_LINE_PATTERN.sub('', line, count=1))
            elif line.startswith('+'):
                if to_buffer is None:
                    self._report_missing(diagnostics, hunk, line, "toFile")
                    continue
                to_buffer.append(ADDED_LINE_PATTERN.sub('', line, count=1))
            elif line.startswith(NO_NEWLINE_MARKER):
                logger.debug(f"Ignoring end-of-file marker in {hunk.new_name}: {line}")
            else:
                if from_buffer is None:
                    self._report_missing(diagnostics, hunk, line, "fromFile")
                    continue
                if to_buffer is None:
                    self._report_missing(diagnostics, hunk, line, "toFile")
                    continue
                text = CONTEXT_LINE_PATTERN.sub('', line, count=1)
                from_buffer.append(text)
                to_buffer.append(text)

        return ChangeRecord(
            from_file=from_buffer.freeze() if from_buffer else None,
            to_file=to_buffer.freeze() if to_buffer else None,
        )

    def _report_missing(
        self,
        diagnostics: List[ParseDiagnostic],
        hunk: HunkDescriptor,
        line: str,
        side: str
    ) -> None:
        file_path = hunk.old_name if side == "toFile" else hunk.new_name
        message = f"Error: {side} is undefined for {hunk.kind.value} file {file_path}"
        logger.error(message)
        diagnostics.append(ParseDiagnostic(
            kind=DiagnosticKind.MISSING_FRAGMENT,
            message=message,
            file_path=file_path,
            line=line,
        ))
