"""Line-range edits addressed by 1-based line numbers.

Companion to hunk application for callers that already know which lines to
touch. Ranges are inclusive; ``new_content`` is split on newlines and
inserted as whole lines.
"""

from __future__ import annotations

from hunkwise.diff.errors import InvalidLineRange
from hunkwise.diff.models import EditResult


def replace_lines(content: str, start: int, end: int, new_content: str) -> EditResult:
    lines = content.split("\n")
    if start < 1 or end > len(lines) or start > end:
        return _invalid(content, start, end, len(lines))
    lines[start - 1 : end] = new_content.split("\n")
    return EditResult(success=True, content="\n".join(lines))


def insert_after(content: str, line: int, new_content: str) -> EditResult:
    """Insert after ``line``; ``0`` inserts at the top."""

    lines = content.split("\n")
    if line < 0 or line > len(lines):
        return _invalid(content, line, line, len(lines))
    lines[line:line] = new_content.split("\n")
    return EditResult(success=True, content="\n".join(lines))


def insert_before(content: str, line: int, new_content: str) -> EditResult:
    """Insert before ``line``; ``len + 1`` appends at the end."""

    lines = content.split("\n")
    if line < 1 or line > len(lines) + 1:
        return _invalid(content, line, line, len(lines))
    lines[line - 1 : line - 1] = new_content.split("\n")
    return EditResult(success=True, content="\n".join(lines))


def delete_lines(content: str, start: int, end: int) -> EditResult:
    lines = content.split("\n")
    if start < 1 or end > len(lines) or start > end:
        return _invalid(content, start, end, len(lines))
    del lines[start - 1 : end]
    return EditResult(success=True, content="\n".join(lines))


def _invalid(content: str, start: int, end: int, line_count: int) -> EditResult:
    return EditResult(success=False, content=content, failure=InvalidLineRange(start, end, line_count))


__all__ = ["replace_lines", "insert_after", "insert_before", "delete_lines"]
