"""Unified diff generation between two text buffers.

Two alignment strategies produce the same hunk model:

- ``greedy``: walks both texts with two cursors and, on divergence, looks a
  bounded number of lines ahead on each side for a resync point. Cheap and
  predictable, not minimal.
- ``sequence-matcher``: delegates alignment to :class:`difflib.SequenceMatcher`
  and groups its opcodes into hunks.

Either output applies cleanly to the old text with
:func:`hunkwise.diff.applier.apply_hunks`.
"""

from __future__ import annotations

from collections.abc import Sequence
from difflib import SequenceMatcher
from enum import Enum

from hunkwise.diff.models import Change, ChangeKind, Hunk

DEFAULT_CONTEXT_LINES = 3
DEFAULT_LOOKAHEAD = 5


class DiffStrategy(str, Enum):
    GREEDY = "greedy"
    SEQUENCE_MATCHER = "sequence-matcher"


def generate_diff(
    old_text: str,
    new_text: str,
    label: str = "file",
    *,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    lookahead: int = DEFAULT_LOOKAHEAD,
    strategy: DiffStrategy = DiffStrategy.GREEDY,
) -> str:
    """Return unified diff text turning ``old_text`` into ``new_text``.

    Identical inputs produce only the two file header lines.
    """

    hunks = compute_hunks(
        old_text,
        new_text,
        context_lines=context_lines,
        lookahead=lookahead,
        strategy=strategy,
    )
    return format_unified_diff(hunks, label)


def compute_hunks(
    old_text: str,
    new_text: str,
    *,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    lookahead: int = DEFAULT_LOOKAHEAD,
    strategy: DiffStrategy = DiffStrategy.GREEDY,
) -> list[Hunk]:
    if context_lines < 0:
        raise ValueError("context_lines must be >= 0")
    if lookahead < 1:
        raise ValueError("lookahead must be >= 1")

    old_lines = old_text.split("\n")
    new_lines = new_text.split("\n")
    if DiffStrategy(strategy) is DiffStrategy.SEQUENCE_MATCHER:
        return _sequence_matcher_hunks(old_lines, new_lines, context_lines)
    return _greedy_hunks(old_lines, new_lines, context_lines, lookahead)


def format_unified_diff(hunks: Sequence[Hunk], label: str = "file") -> str:
    lines = [f"--- a/{label}", f"+++ b/{label}"]
    for hunk in hunks:
        lines.append(hunk.header())
        lines.extend(change.render() for change in hunk.changes)
    return "\n".join(lines)


def _greedy_hunks(old: list[str], new: list[str], context_lines: int, lookahead: int) -> list[Hunk]:
    hunks: list[Hunk] = []
    changes: list[Change] = []
    in_hunk = False
    old_start = new_start = 0
    old_idx = new_idx = 0

    while old_idx < len(old) or new_idx < len(new):
        if old_idx < len(old) and new_idx < len(new) and old[old_idx] == new[new_idx]:
            if in_hunk:
                changes.append(Change(ChangeKind.CONTEXT, old[old_idx]))
            old_idx += 1
            new_idx += 1
        else:
            if not in_hunk:
                in_hunk = True
                # Lines since the last flush were all equal on both sides.
                lead = min(context_lines, old_idx)
                old_start = old_idx - lead
                new_start = new_idx - lead
                changes.extend(Change(ChangeKind.CONTEXT, line) for line in old[old_start:old_idx])
            old_idx, new_idx = _resync(old, new, old_idx, new_idx, lookahead, changes)

        if not in_hunk:
            continue
        # Equal runs of up to 2 * context_lines stay inside the hunk.
        exhausted = old_idx >= len(old) and new_idx >= len(new)
        if exhausted or _trailing_context(changes) > 2 * context_lines:
            hunks.append(_build_hunk(old_start, new_start, _trim_trailing_context(changes, context_lines)))
            changes = []
            in_hunk = False

    return hunks


def _resync(
    old: list[str],
    new: list[str],
    old_idx: int,
    new_idx: int,
    lookahead: int,
    changes: list[Change],
) -> tuple[int, int]:
    """Consume one divergent stretch, appending its changes; return new cursors."""

    for distance in range(1, lookahead + 1):
        if old_idx + distance < len(old) and new_idx < len(new) and old[old_idx + distance] == new[new_idx]:
            changes.extend(Change(ChangeKind.REMOVE, line) for line in old[old_idx : old_idx + distance])
            return old_idx + distance, new_idx
        if new_idx + distance < len(new) and old_idx < len(old) and new[new_idx + distance] == old[old_idx]:
            changes.extend(Change(ChangeKind.ADD, line) for line in new[new_idx : new_idx + distance])
            return old_idx, new_idx + distance

    # No resync point in range: treat it as a changed line.
    if old_idx < len(old):
        changes.append(Change(ChangeKind.REMOVE, old[old_idx]))
        old_idx += 1
    if new_idx < len(new):
        changes.append(Change(ChangeKind.ADD, new[new_idx]))
        new_idx += 1
    return old_idx, new_idx


def _trailing_context(changes: list[Change]) -> int:
    count = 0
    for change in reversed(changes):
        if change.kind is not ChangeKind.CONTEXT:
            break
        count += 1
    return count


def _trim_trailing_context(changes: list[Change], keep: int) -> list[Change]:
    excess = _trailing_context(changes) - keep
    return changes[: len(changes) - excess] if excess > 0 else changes


def _sequence_matcher_hunks(old: list[str], new: list[str], context_lines: int) -> list[Hunk]:
    matcher = SequenceMatcher(None, old, new, autojunk=False)
    hunks: list[Hunk] = []

    for group in matcher.get_grouped_opcodes(context_lines):
        changes: list[Change] = []
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                changes.extend(Change(ChangeKind.CONTEXT, line) for line in old[i1:i2])
                continue
            if tag in ("replace", "delete"):
                changes.extend(Change(ChangeKind.REMOVE, line) for line in old[i1:i2])
            if tag in ("replace", "insert"):
                changes.extend(Change(ChangeKind.ADD, line) for line in new[j1:j2])
        _, first_old, _, first_new, _ = group[0]
        hunks.append(_build_hunk(first_old, first_new, changes))

    return hunks


def _build_hunk(old_offset: int, new_offset: int, changes: list[Change]) -> Hunk:
    """Build a hunk from zero-based start offsets and its change list."""

    old_count = sum(1 for c in changes if c.kind is not ChangeKind.ADD)
    new_count = sum(1 for c in changes if c.kind is not ChangeKind.REMOVE)
    return Hunk(
        old_start=old_offset + 1 if old_count else old_offset,
        old_lines=old_count,
        new_start=new_offset + 1 if new_count else new_offset,
        new_lines=new_count,
        changes=changes,
    )


__all__ = [
    "DiffStrategy",
    "DEFAULT_CONTEXT_LINES",
    "DEFAULT_LOOKAHEAD",
    "generate_diff",
    "compute_hunks",
    "format_unified_diff",
]
