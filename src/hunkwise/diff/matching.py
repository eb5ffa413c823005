"""Line comparison predicates used for context verification."""

from __future__ import annotations

from collections.abc import Callable

LineMatcher = Callable[[str, str], bool]


def exact_match(expected: str, actual: str) -> bool:
    return expected == actual


def whitespace_insensitive_match(expected: str, actual: str) -> bool:
    """True when both lines are equal once surrounding whitespace is stripped."""

    return expected.strip() == actual.strip()


def fuzzy_match(expected: str, actual: str) -> bool:
    """Exact comparison first, whitespace-insensitive comparison as fallback."""

    return exact_match(expected, actual) or whitespace_insensitive_match(expected, actual)


def line_matcher(*, fuzzy_whitespace: bool = True) -> LineMatcher:
    return fuzzy_match if fuzzy_whitespace else exact_match


__all__ = [
    "LineMatcher",
    "exact_match",
    "whitespace_insensitive_match",
    "fuzzy_match",
    "line_matcher",
]
