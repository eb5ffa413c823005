"""Hunk data model shared by the parser, applier and generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hunkwise.diff.errors import DiffError


class ChangeKind(str, Enum):
    CONTEXT = "context"
    ADD = "add"
    REMOVE = "remove"


MARKERS: dict[ChangeKind, str] = {
    ChangeKind.CONTEXT: " ",
    ChangeKind.ADD: "+",
    ChangeKind.REMOVE: "-",
}


@dataclass(frozen=True, slots=True)
class Change:
    kind: ChangeKind
    content: str

    def render(self) -> str:
        return f"{MARKERS[self.kind]}{self.content}"


@dataclass(frozen=True, slots=True)
class Hunk:
    """One contiguous edit region of a unified diff.

    ``old_start``/``new_start`` are 1-based. When a side holds no lines the
    start names the line after which the region sits (``-0,0`` is the top).
    """

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: list[Change] = field(default_factory=list)
    section: str = ""

    @property
    def old_side(self) -> list[str]:
        """Lines the hunk expects in the original text, in order."""

        return [c.content for c in self.changes if c.kind is not ChangeKind.ADD]

    @property
    def new_side(self) -> list[str]:
        """Lines the hunk produces in the result text, in order."""

        return [c.content for c in self.changes if c.kind is not ChangeKind.REMOVE]

    def header(self) -> str:
        text = f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"
        if self.section:
            text += f" {self.section}"
        return text


@dataclass(frozen=True, slots=True)
class EditResult:
    success: bool
    content: str
    failure: DiffError | None = None
    hunks_applied: int = 0

    @property
    def error(self) -> str | None:
        return str(self.failure) if self.failure is not None else None

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure


__all__ = ["ChangeKind", "Change", "Hunk", "EditResult", "MARKERS"]
