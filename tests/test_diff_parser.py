from hunkwise.diff.models import Change, ChangeKind
from hunkwise.diff.parser import parse_hunk_header, parse_unified_diff


def test_header_with_counts() -> None:
    hunks = parse_unified_diff("@@ -5,2 +5,3 @@\n a\n-b\n+c\n+d")

    assert len(hunks) == 1
    h = hunks[0]
    assert (h.old_start, h.old_lines, h.new_start, h.new_lines) == (5, 2, 5, 3)


def test_header_counts_default_to_one() -> None:
    h = parse_unified_diff("@@ -1 +1 @@\n-a\n+b")[0]

    assert (h.old_start, h.old_lines, h.new_start, h.new_lines) == (1, 1, 1, 1)


def test_parse_hunk_header_returns_fields_and_section() -> None:
    assert parse_hunk_header("@@ -10,3 +10,4 @@ def main():") == (10, 3, 10, 4, "def main():")
    assert parse_hunk_header("@@ -7 +8,0 @@") == (7, 1, 8, 0, "")
    assert parse_hunk_header("not a header") is None


def test_file_headers_before_first_hunk_are_ignored() -> None:
    diff = """--- a/file.txt
+++ b/file.txt
@@ -1,3 +1,3 @@
 line1
-line2
+lineX
 line3"""
    hunks = parse_unified_diff(diff)

    assert len(hunks) == 1
    assert hunks[0].changes == [
        Change(ChangeKind.CONTEXT, "line1"),
        Change(ChangeKind.REMOVE, "line2"),
        Change(ChangeKind.ADD, "lineX"),
        Change(ChangeKind.CONTEXT, "line3"),
    ]


def test_empty_line_inside_hunk_is_context() -> None:
    diff = "@@ -1,3 +1,3 @@\n a\n\n-b\n+c"
    changes = parse_unified_diff(diff)[0].changes

    assert changes[1] == Change(ChangeKind.CONTEXT, "")
    assert [c.kind for c in changes] == [
        ChangeKind.CONTEXT,
        ChangeKind.CONTEXT,
        ChangeKind.REMOVE,
        ChangeKind.ADD,
    ]


def test_trailing_newline_does_not_add_context() -> None:
    diff = """--- a/file.txt
+++ b/file.txt
@@ -1,1 +1,1 @@
-old
+new
"""
    changes = parse_unified_diff(diff)[0].changes

    assert changes == [Change(ChangeKind.REMOVE, "old"), Change(ChangeKind.ADD, "new")]


def test_unrecognised_lines_are_dropped() -> None:
    diff = "@@ -1,1 +1,1 @@\n-old\n\\ No newline at end of file\n+new\n\\ No newline at end of file"
    changes = parse_unified_diff(diff)[0].changes

    assert changes == [Change(ChangeKind.REMOVE, "old"), Change(ChangeKind.ADD, "new")]


def test_no_header_returns_empty_list() -> None:
    assert parse_unified_diff("just some text\n-with a dash\n+and a plus") == []
    assert parse_unified_diff("") == []


def test_multiple_hunks_keep_input_order() -> None:
    diff = """@@ -5,1 +5,1 @@
-e
+E
@@ -2,1 +2,1 @@
-b
+B"""
    hunks = parse_unified_diff(diff)

    assert [h.old_start for h in hunks] == [5, 2]


def test_removed_line_that_looks_like_file_header() -> None:
    diff = "@@ -1,2 +1,1 @@\n keep\n---\n"
    changes = parse_unified_diff(diff)[0].changes

    assert changes == [Change(ChangeKind.CONTEXT, "keep"), Change(ChangeKind.REMOVE, "--")]


def test_added_line_that_looks_like_file_header() -> None:
    changes = parse_unified_diff("@@ -1,1 +1,2 @@\n keep\n+++")[0].changes

    assert changes[-1] == Change(ChangeKind.ADD, "++")


def test_file_headers_after_complete_hunk_are_skipped() -> None:
    diff = """--- a/x
+++ b/x
@@ -1 +1 @@
-a
+b
--- a/x
+++ b/x
@@ -3 +3 @@
-c
+d"""
    hunks = parse_unified_diff(diff)

    assert len(hunks) == 2
    assert all(len(h.changes) == 2 for h in hunks)


def test_header_without_leading_marker() -> None:
    hunks = parse_unified_diff("-2,1 +2,1 @@\n-b\n+B")

    assert len(hunks) == 1
    assert hunks[0].old_start == 2
    assert hunks[0].changes == [Change(ChangeKind.REMOVE, "b"), Change(ChangeKind.ADD, "B")]


def test_bare_header_lookalike_inside_open_hunk_is_a_body_line() -> None:
    hunks = parse_unified_diff("@@ -1,2 +1,1 @@\n-2 +2 @@\n keep")

    assert len(hunks) == 1
    assert hunks[0].changes == [Change(ChangeKind.REMOVE, "2 +2 @@"), Change(ChangeKind.CONTEXT, "keep")]


def test_section_text_is_preserved() -> None:
    hunk = parse_unified_diff("@@ -1,1 +1,1 @@ class Foo:\n-a\n+b")[0]

    assert hunk.section == "class Foo:"
    assert hunk.header() == "@@ -1,1 +1,1 @@ class Foo:"


def test_new_file_hunk() -> None:
    hunk = parse_unified_diff("--- /dev/null\n+++ b/new.txt\n@@ -0,0 +1,2 @@\n+a\n+b\n")[0]

    assert (hunk.old_start, hunk.old_lines) == (0, 0)
    assert hunk.old_side == []
    assert hunk.new_side == ["a", "b"]
