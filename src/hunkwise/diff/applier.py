"""Apply parsed hunks to text with context verification."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from hunkwise.diff.errors import ContextMismatch
from hunkwise.diff.matching import LineMatcher, line_matcher
from hunkwise.diff.models import EditResult, Hunk

logger = logging.getLogger(__name__)


def apply_hunks(original_text: str, hunks: Sequence[Hunk], *, fuzzy_whitespace: bool = True) -> EditResult:
    """Apply ``hunks`` to ``original_text`` with all-or-nothing semantics.

    Hunks are applied bottom-up (descending start line) so earlier splices
    never shift the position of hunks that are still pending. Every hunk is
    verified against the working copy it is about to modify; the first
    mismatch aborts and the untouched original is returned.
    """

    if not hunks:
        return EditResult(success=True, content=original_text)

    matches = line_matcher(fuzzy_whitespace=fuzzy_whitespace)
    working = original_text.split("\n")

    for start_idx, _, hunk in _bottom_up(hunks):
        mismatch = _verify_hunk(working, hunk, start_idx, matches)
        if mismatch is not None:
            logger.debug(
                "hunk @%d rejected at line %d: expected=%r found=%r",
                hunk.old_start,
                mismatch.line,
                mismatch.expected,
                mismatch.found,
            )
            return EditResult(success=False, content=original_text, failure=mismatch)
        working[start_idx : start_idx + len(hunk.old_side)] = hunk.new_side

    return EditResult(success=True, content="\n".join(working), hunks_applied=len(hunks))


def hunk_start_index(hunk: Hunk) -> int:
    """Zero-based buffer index where ``hunk`` begins.

    A hunk declaring zero original lines inserts after line ``old_start``.
    """

    if hunk.old_lines == 0:
        return max(hunk.old_start, 0)
    return max(hunk.old_start - 1, 0)


def _bottom_up(hunks: Sequence[Hunk]) -> list[tuple[int, int, Hunk]]:
    """Order hunks by descending start index; on ties the later-declared hunk goes first."""

    indexed = [(hunk_start_index(hunk), position, hunk) for position, hunk in enumerate(hunks)]
    return sorted(indexed, key=lambda item: (item[0], item[1]), reverse=True)


def _verify_hunk(lines: list[str], hunk: Hunk, start_idx: int, matches: LineMatcher) -> ContextMismatch | None:
    if start_idx > len(lines):
        return ContextMismatch(hunk.old_start, start_idx + 1, "", None)

    cursor = start_idx
    for expected in hunk.old_side:
        if cursor >= len(lines):
            return ContextMismatch(hunk.old_start, cursor + 1, expected, None)
        if not matches(expected, lines[cursor]):
            return ContextMismatch(hunk.old_start, cursor + 1, expected, lines[cursor])
        cursor += 1
    return None


__all__ = ["apply_hunks", "hunk_start_index"]
