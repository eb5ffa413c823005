"""Line-range edit operation."""

from __future__ import annotations

from enum import Enum
from typing import cast

from pydantic import Field

from hunkwise.diff import line_edits
from hunkwise.tools.base import Tool, ToolRegistration, ToolRequest
from hunkwise.tools.patch import EditOutput, edit_output


class LineOperation(str, Enum):
    REPLACE = "replace"
    INSERT_AFTER = "insert_after"
    INSERT_BEFORE = "insert_before"
    DELETE = "delete"


class EditLinesInput(ToolRequest):
    content: str = Field(description="Text to edit.")
    operation: LineOperation = Field(description="Edit to perform.")
    start: int = Field(description="1-based first line (or anchor line for inserts).")
    end: int | None = Field(default=None, description="1-based last line, inclusive; defaults to start.")
    text: str = Field(default="", description="Lines to insert or replace with.")


class EditLinesTool(Tool[EditLinesInput, EditOutput]):
    name = "edit_lines"
    description = "Replace, insert or delete lines by 1-based line number"
    InputModel = EditLinesInput
    OutputModel = EditOutput

    def execute(self, request: EditLinesInput) -> EditOutput:
        end = request.end if request.end is not None else request.start
        if request.operation is LineOperation.REPLACE:
            result = line_edits.replace_lines(request.content, request.start, end, request.text)
        elif request.operation is LineOperation.INSERT_AFTER:
            result = line_edits.insert_after(request.content, request.start, request.text)
        elif request.operation is LineOperation.INSERT_BEFORE:
            result = line_edits.insert_before(request.content, request.start, request.text)
        else:
            result = line_edits.delete_lines(request.content, request.start, end)
        return edit_output(result)


def tool_registrations() -> list[ToolRegistration]:
    return [
        ToolRegistration.from_tool(
            EditLinesTool(),
            end_event_builder=lambda v, o: {
                "operation": cast(EditLinesInput, v).operation.value,
                "success": cast(EditOutput, o).success,
            },
        )
    ]


__all__ = ["LineOperation", "EditLinesInput", "EditLinesTool", "tool_registrations"]
