"""Entry points composing the diff engine with resolved settings.

``apply_patch`` and ``compute_diff`` are what an outer layer (HTTP handler,
CLI, agent tool) calls. Both are pure: text in, text and status out.
"""

from __future__ import annotations

import logging

from hunkwise.config import Settings
from hunkwise.diff.applier import apply_hunks
from hunkwise.diff.errors import NoHunksFound
from hunkwise.diff.generator import generate_diff
from hunkwise.diff.models import EditResult
from hunkwise.diff.parser import parse_unified_diff

logger = logging.getLogger(__name__)


def apply_patch(original_text: str, diff_text: str, *, settings: Settings | None = None) -> EditResult:
    """Parse ``diff_text`` and apply its hunks to ``original_text``.

    A diff without any hunk header fails with :class:`NoHunksFound`, which
    callers should treat as bad input rather than as a conflict.
    """

    effective = settings or Settings()
    hunks = parse_unified_diff(diff_text)
    if not hunks:
        logger.info("patch rejected: no hunks found")
        return EditResult(success=False, content=original_text, failure=NoHunksFound())

    result = apply_hunks(original_text, hunks, fuzzy_whitespace=effective.fuzzy_whitespace)
    if result.success:
        logger.info("patch applied: hunks=%d", result.hunks_applied)
    else:
        logger.warning("patch rejected: %s", result.error)
    return result


def compute_diff(old_text: str, new_text: str, label: str = "file", *, settings: Settings | None = None) -> str:
    effective = settings or Settings()
    diff_text = generate_diff(
        old_text,
        new_text,
        label,
        context_lines=effective.context_lines,
        lookahead=effective.lookahead,
        strategy=effective.strategy,
    )
    logger.debug("diff computed: label=%s strategy=%s bytes=%d", label, effective.strategy.value, len(diff_text))
    return diff_text


__all__ = ["apply_patch", "compute_diff"]
