"""Pure unified-diff engine: parse, apply and generate."""

from __future__ import annotations

from hunkwise.diff.applier import apply_hunks
from hunkwise.diff.errors import ContextMismatch, DiffError, InvalidLineRange, NoHunksFound
from hunkwise.diff.generator import DiffStrategy, compute_hunks, format_unified_diff, generate_diff
from hunkwise.diff.models import Change, ChangeKind, EditResult, Hunk
from hunkwise.diff.parser import parse_unified_diff

__all__ = [
    "Change",
    "ChangeKind",
    "ContextMismatch",
    "DiffError",
    "DiffStrategy",
    "EditResult",
    "Hunk",
    "InvalidLineRange",
    "NoHunksFound",
    "apply_hunks",
    "compute_hunks",
    "format_unified_diff",
    "generate_diff",
    "parse_unified_diff",
]
