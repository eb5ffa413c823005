"""Unified diff parsing into hunks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from hunkwise.diff.models import Change, ChangeKind, Hunk

_HUNK_HEADER = re.compile(r"^(@@)?\s*-(\d+)(?:,(\d+))?\s+\+(\d+)(?:,(\d+))?\s*@@(.*)$")

_BODY_KINDS = {
    "+": ChangeKind.ADD,
    "-": ChangeKind.REMOVE,
    " ": ChangeKind.CONTEXT,
}


@dataclass(slots=True)
class _PendingHunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    section: str
    changes: list[Change] = field(default_factory=list)
    old_seen: int = 0
    new_seen: int = 0
    blank_lines: int = 0

    @property
    def complete(self) -> bool:
        return self.old_seen >= self.old_lines and self.new_seen >= self.new_lines

    def feed(self, line: str) -> None:
        if line == "":
            self.blank_lines += 1
            return

        kind = _BODY_KINDS.get(line[0])
        if kind is None:
            return

        if line.startswith(("---", "+++")):
            # Only a body line while the declared counts still expect that side.
            self._settle_blank_lines()
            if kind is ChangeKind.REMOVE and self.old_seen >= self.old_lines:
                return
            if kind is ChangeKind.ADD and self.new_seen >= self.new_lines:
                return

        self._flush_blank_lines(self.blank_lines)
        self._append(Change(kind, line[1:]))

    def finish(self) -> Hunk:
        self._settle_blank_lines()
        return Hunk(
            old_start=self.old_start,
            old_lines=self.old_lines,
            new_start=self.new_start,
            new_lines=self.new_lines,
            changes=self.changes,
            section=self.section,
        )

    def _settle_blank_lines(self) -> None:
        """Keep pending blank lines only while the counts still expect context."""

        wanted = max(min(self.old_lines - self.old_seen, self.new_lines - self.new_seen), 0)
        self._flush_blank_lines(min(wanted, self.blank_lines))
        self.blank_lines = 0

    def _flush_blank_lines(self, count: int) -> None:
        for _ in range(count):
            self._append(Change(ChangeKind.CONTEXT, ""))
        self.blank_lines -= count

    def _append(self, change: Change) -> None:
        self.changes.append(change)
        if change.kind is not ChangeKind.ADD:
            self.old_seen += 1
        if change.kind is not ChangeKind.REMOVE:
            self.new_seen += 1


def parse_hunk_header(line: str) -> tuple[int, int, int, int, str] | None:
    """Return ``(old_start, old_lines, new_start, new_lines, section)`` or None."""

    match = _HUNK_HEADER.match(line)
    if not match:
        return None
    return _header_fields(match)


def parse_unified_diff(diff_text: str) -> list[Hunk]:
    """Parse unified diff text into hunks, ordered as they appear.

    Parsing is lenient: text before the first hunk header (file headers,
    commentary) is skipped and unrecognised lines inside a hunk are dropped.
    An input without any hunk header yields an empty list.
    """

    hunks: list[Hunk] = []
    current: _PendingHunk | None = None

    for line in diff_text.split("\n"):
        match = _HUNK_HEADER.match(line)
        if match and (match.group(1) or current is None or current.complete):
            if current is not None:
                hunks.append(current.finish())
            old_start, old_lines, new_start, new_lines, section = _header_fields(match)
            current = _PendingHunk(old_start, old_lines, new_start, new_lines, section)
            continue

        if current is not None:
            current.feed(line)

    if current is not None:
        hunks.append(current.finish())
    return hunks


def _header_fields(match: re.Match[str]) -> tuple[int, int, int, int, str]:
    old_start = int(match.group(2))
    old_lines = int(match.group(3) or "1")
    new_start = int(match.group(4))
    new_lines = int(match.group(5) or "1")
    section = match.group(6).strip()
    return old_start, old_lines, new_start, new_lines, section


__all__ = ["parse_unified_diff", "parse_hunk_header"]
