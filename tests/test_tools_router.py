import logging

import pytest
from pydantic import ValidationError

from hunkwise.config import Settings
from hunkwise.tools.router import ToolRouter, tool_specs

DIFF = "--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n a\n-b\n+B"


def test_tool_specs_contains_tools() -> None:
    names = {spec["function"]["name"] for spec in tool_specs()}
    assert names == {"apply_patch", "compute_diff", "parse_diff", "edit_lines"}


def test_tool_specs_forbid_extra_properties() -> None:
    spec = next(s for s in tool_specs() if s["function"]["name"] == "apply_patch")
    params = spec["function"]["parameters"]

    assert params["additionalProperties"] is False
    assert set(params["required"]) == {"original", "diff"}


def test_dispatch_apply_patch() -> None:
    router = ToolRouter()

    result = router.dispatch("apply_patch", original="a\nb", diff=DIFF)

    assert result["success"] is True
    assert result["content"] == "a\nB"
    assert result["hunks_applied"] == 1
    assert result["error_type"] is None


def test_dispatch_apply_patch_reports_mismatch() -> None:
    result = ToolRouter().dispatch("apply_patch", original="x\nb", diff=DIFF)

    assert result["success"] is False
    assert result["content"] == "x\nb"
    assert result["error_type"] == "context_mismatch"
    assert result["line"] == 1


def test_dispatch_apply_patch_without_hunks() -> None:
    result = ToolRouter().dispatch("apply_patch", original="a", diff="nothing here")

    assert result["error_type"] == "no_hunks"
    assert result["line"] is None


def test_dispatch_compute_diff_uses_router_settings() -> None:
    router = ToolRouter(Settings(context_lines=0))

    result = router.dispatch("compute_diff", old="a\nb\nc", new="a\nB\nc", label="x.txt")

    assert result == {"diff": "--- a/x.txt\n+++ b/x.txt\n@@ -2,1 +2,1 @@\n-b\n+B", "hunks": 1}


def test_dispatch_parse_diff_returns_hunk_list() -> None:
    hunks = ToolRouter().dispatch("parse_diff", diff=DIFF)

    assert hunks == [
        {
            "old_start": 1,
            "old_lines": 2,
            "new_start": 1,
            "new_lines": 2,
            "section": "",
            "changes": [
                {"kind": "context", "content": "a"},
                {"kind": "remove", "content": "b"},
                {"kind": "add", "content": "B"},
            ],
        }
    ]


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"operation": "replace", "start": 2, "end": 3, "text": "X"}, "one\nX\nfour"),
        ({"operation": "insert_after", "start": 0, "text": "zero"}, "zero\none\ntwo\nthree\nfour"),
        ({"operation": "insert_before", "start": 5, "text": "five"}, "one\ntwo\nthree\nfour\nfive"),
        ({"operation": "delete", "start": 4}, "one\ntwo\nthree"),
    ],
)
def test_dispatch_edit_lines(kwargs: dict, expected: str) -> None:
    result = ToolRouter().dispatch("edit_lines", content="one\ntwo\nthree\nfour", **kwargs)

    assert result["success"] is True
    assert result["content"] == expected


def test_dispatch_edit_lines_invalid_range() -> None:
    result = ToolRouter().dispatch("edit_lines", content="one", operation="delete", start=3)

    assert result["success"] is False
    assert result["error_type"] == "invalid_range"
    assert result["line"] == 3


def test_unknown_tool_raises() -> None:
    with pytest.raises(ValueError, match="unknown tool"):
        ToolRouter().dispatch("rm_rf")


def test_invalid_arguments_raise_validation_error() -> None:
    with pytest.raises(ValidationError):
        ToolRouter().dispatch("apply_patch", original="x")


def test_router_emits_start_and_end_events() -> None:
    router = ToolRouter()

    router.dispatch("apply_patch", original="a\nb", diff=DIFF)
    router.dispatch("compute_diff", old="a", new="b")

    assert router.events[0] == {"phase": "start", "tool": "apply_patch"}
    assert router.events[1] == {"phase": "end", "tool": "apply_patch", "success": True, "hunks": 1}
    assert router.events[-1] == {"phase": "end", "tool": "compute_diff", "hunks": 1}


def test_router_logs_requests_and_responses(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("hunkwise.tools.test")
    router = ToolRouter(logger=logger)

    with caplog.at_level(logging.DEBUG, logger="hunkwise.tools.test"):
        router.dispatch("parse_diff", diff=DIFF)

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("tool request: parse_diff") for m in messages)
    assert any(m.startswith("tool response: parse_diff") for m in messages)


def test_stringify_truncates_long_payloads() -> None:
    text = ToolRouter._stringify({"blob": "x" * 5000})

    assert text.endswith("... [truncated]")
    assert len(text) < 2100


def test_router_names() -> None:
    assert ToolRouter().names == ["apply_patch", "compute_diff", "parse_diff", "edit_lines"]
