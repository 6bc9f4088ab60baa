from __future__ import annotations

import pytest

from pyiniedit.mutator import (
    appendSection,
    extractValue,
    insertKey,
    removeInvalidLines,
    removeKey,
    removeSection,
    replaceValue,
    splitComment,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1 #keep", ("1", " #keep")),
        ("1#keep", ("1", "#keep")),
        ("plain value", ("plain value", "")),
        ("#only comment", ("", "#only comment")),
        (" spaced ", (" spaced ", "")),
    ],
)
def test_split_comment(text, expected) -> None:
    assert splitComment(text, "#") == expected


def test_extract_value_cuts_comment() -> None:
    assert extractValue("  Port = 8080   # default", "port", "#") == " 8080"
    assert extractValue("Port=8080", "Port", "#") == "8080"
    assert extractValue("Path=C:\\a;b ; note", "Path", ";") == "C:\\a"


def test_replace_value_keeps_comment_verbatim() -> None:
    lines = ["[S]", "x=1 #keep"]

    replaceValue(lines, 1, "x", "2", "#")

    assert lines == ["[S]", "x=2 #keep"]


def test_replace_value_keeps_key_spelling_and_indent() -> None:
    lines = ["[S]", "  X = 1"]

    replaceValue(lines, 1, "x", "2", "#")

    assert lines == ["[S]", "  X =2"]


def test_insert_and_append() -> None:
    lines = ["[A]", "a=1"]

    insertKey(lines, 0, "b", "2")
    appendSection(lines, "B", "c", "3")

    assert lines == ["[A]", "b=2", "a=1", "[B]", "c=3"]


@pytest.mark.parametrize(
    ("lines", "at", "expected"),
    [
        (["[S]", "x=1", "[T]", "y=2"], (0, 1), ["[T]", "y=2"]),
        (["[S]", "x=1"], (0, 1), []),
        (["[S]", "x=1", "y=2"], (0, 1), ["[S]", "y=2"]),
        (["[S]", "x=1", "y=2"], (0, 2), ["[S]", "x=1"]),
        # a blank line under the header keeps the header alive
        (["[S]", "", "x=1", "[T]"], (0, 2), ["[S]", "", "[T]"]),
    ],
)
def test_remove_key(lines, at, expected) -> None:
    removeKey(lines, *at)

    assert lines == expected


def test_remove_section_up_to_next_header() -> None:
    lines = ["[A]", "a=1", "", "[B]", "b=2"]

    removeSection(lines, 0)

    assert lines == ["[B]", "b=2"]


def test_remove_last_section_keeps_trailing_comments() -> None:
    lines = ["[A]", "a=1", "[B]", "b=2", "", "# tail"]

    removeSection(lines, 2)

    assert lines == ["[A]", "a=1", "", "# tail"]


def test_remove_last_section_without_keys() -> None:
    lines = ["[A]", "a=1", "[B]"]

    removeSection(lines, 2)

    assert lines == ["[A]", "a=1"]


def test_remove_invalid_lines() -> None:
    lines = ["[A]", "", "garbage", "a=1", "# note", "x ]", "   "]

    dropped = removeInvalidLines(lines, "#")

    assert dropped == 3
    assert lines == ["[A]", "a=1", "# note", "x ]"]
