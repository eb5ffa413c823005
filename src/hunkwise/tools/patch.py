"""Patch operations: apply a diff, compute a diff, inspect a diff."""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field

from hunkwise.config import Settings
from hunkwise.diff.errors import ContextMismatch, DiffError, InvalidLineRange, NoHunksFound
from hunkwise.diff.models import ChangeKind, EditResult
from hunkwise.diff.parser import parse_unified_diff
from hunkwise.engine import apply_patch, compute_diff
from hunkwise.tools.base import Tool, ToolRegistration, ToolRequest, ToolResponse


class ApplyPatchInput(ToolRequest):
    original: str = Field(description="Current text of the target file.")
    diff: str = Field(description="Unified diff to apply.")


class EditOutput(ToolResponse):
    success: bool = Field(description="True if the edit was applied.")
    content: str = Field(description="Edited text, or the unmodified original on failure.")
    error: str | None = Field(default=None, description="Failure message.")
    error_type: str | None = Field(default=None, description="no_hunks, context_mismatch or invalid_range.")
    line: int | None = Field(default=None, description="Line the failure refers to, if any.")
    hunks_applied: int = Field(default=0, description="Number of hunks applied.")


class ComputeDiffInput(ToolRequest):
    old: str = Field(description="Original text.")
    new: str = Field(description="Updated text.")
    label: str = Field(default="file", description="Path shown in the ---/+++ headers.")


class ComputeDiffOutput(ToolResponse):
    diff: str = Field(description="Unified diff text.")
    hunks: int = Field(description="Number of hunks in the diff.")


class ParseDiffInput(ToolRequest):
    diff: str = Field(description="Unified diff text.")


class ChangeModel(ToolResponse):
    kind: ChangeKind
    content: str


class HunkModel(ToolResponse):
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    section: str = ""
    changes: list[ChangeModel]


class ParseDiffOutput(ToolResponse):
    hunks: list[HunkModel] = Field(description="Hunks in order of appearance.")


def edit_output(result: EditResult) -> EditOutput:
    return EditOutput(
        success=result.success,
        content=result.content,
        error=result.error,
        error_type=_error_type(result.failure),
        line=_error_line(result.failure),
        hunks_applied=result.hunks_applied,
    )


class ApplyPatchTool(Tool[ApplyPatchInput, EditOutput]):
    name = "apply_patch"
    description = "Apply a unified diff to text, verifying context lines"
    InputModel = ApplyPatchInput
    OutputModel = EditOutput

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def execute(self, request: ApplyPatchInput) -> EditOutput:
        return edit_output(apply_patch(request.original, request.diff, settings=self.settings))


class ComputeDiffTool(Tool[ComputeDiffInput, ComputeDiffOutput]):
    name = "compute_diff"
    description = "Compute a unified diff between two texts"
    InputModel = ComputeDiffInput
    OutputModel = ComputeDiffOutput

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def execute(self, request: ComputeDiffInput) -> ComputeDiffOutput:
        diff_text = compute_diff(request.old, request.new, request.label, settings=self.settings)
        hunk_count = sum(1 for line in diff_text.split("\n") if line.startswith("@@ "))
        return ComputeDiffOutput(diff=diff_text, hunks=hunk_count)


class ParseDiffTool(Tool[ParseDiffInput, ParseDiffOutput]):
    name = "parse_diff"
    description = "Parse a unified diff into hunks"
    InputModel = ParseDiffInput
    OutputModel = ParseDiffOutput

    def execute(self, request: ParseDiffInput) -> ParseDiffOutput:
        hunks = parse_unified_diff(request.diff)
        return ParseDiffOutput(
            hunks=[
                HunkModel(
                    old_start=h.old_start,
                    old_lines=h.old_lines,
                    new_start=h.new_start,
                    new_lines=h.new_lines,
                    section=h.section,
                    changes=[ChangeModel(kind=c.kind, content=c.content) for c in h.changes],
                )
                for h in hunks
            ]
        )


def tool_registrations(settings: Settings) -> list[ToolRegistration]:
    def _apply_end_event(validated: ApplyPatchInput, output: EditOutput) -> dict[str, object]:
        return {"success": output.success, "hunks": output.hunks_applied}

    return [
        ToolRegistration.from_tool(
            ApplyPatchTool(settings),
            end_event_builder=lambda v, o: _apply_end_event(cast(ApplyPatchInput, v), cast(EditOutput, o)),
        ),
        ToolRegistration.from_tool(
            ComputeDiffTool(settings),
            end_event_builder=lambda v, o: {"hunks": cast(ComputeDiffOutput, o).hunks},
        ),
        ToolRegistration.from_tool(
            ParseDiffTool(),
            result_adapter=lambda out: [h.model_dump(mode="json") for h in cast(ParseDiffOutput, out).hunks],
        ),
    ]


def _error_type(failure: DiffError | None) -> str | None:
    if isinstance(failure, NoHunksFound):
        return "no_hunks"
    if isinstance(failure, ContextMismatch):
        return "context_mismatch"
    if isinstance(failure, InvalidLineRange):
        return "invalid_range"
    return None


def _error_line(failure: Any) -> int | None:
    if isinstance(failure, ContextMismatch):
        return failure.old_start
    if isinstance(failure, InvalidLineRange):
        return failure.start
    return None


__all__ = [
    "ApplyPatchInput",
    "ComputeDiffInput",
    "ComputeDiffOutput",
    "EditOutput",
    "ParseDiffInput",
    "ParseDiffOutput",
    "ApplyPatchTool",
    "ComputeDiffTool",
    "ParseDiffTool",
    "edit_output",
    "tool_registrations",
]
