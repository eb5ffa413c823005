"""Failure types reported by the diff engine.

The engine returns these inside :class:`hunkwise.diff.models.EditResult`
rather than raising them; callers that prefer exceptions use
``EditResult.raise_for_failure``.
"""

from __future__ import annotations


class DiffError(Exception):
    """Base class for diff engine failures."""


class NoHunksFound(DiffError):
    """Raised when diff text contains no recognizable hunk header."""

    def __init__(self, message: str = "No valid hunks found in diff") -> None:
        super().__init__(message)


class ContextMismatch(DiffError):
    """Raised when a hunk's original lines do not match the target text."""

    def __init__(self, old_start: int, line: int, expected: str, found: str | None) -> None:
        self.old_start = old_start
        self.line = line
        self.expected = expected
        self.found = found
        if found is None:
            message = f"Hunk at line {old_start} extends beyond file end"
        else:
            message = f"Context mismatch at line {old_start}. The file may have been modified."
        super().__init__(message)


class InvalidLineRange(DiffError):
    """Raised when a line-range edit targets lines outside the text."""

    def __init__(self, start: int, end: int, line_count: int) -> None:
        self.start = start
        self.end = end
        self.line_count = line_count
        if start == end:
            message = f"Invalid line number: {start} (text has {line_count} lines)"
        else:
            message = f"Invalid line range: {start}-{end} (text has {line_count} lines)"
        super().__init__(message)


__all__ = ["DiffError", "NoHunksFound", "ContextMismatch", "InvalidLineRange"]
