# -*- encoding: utf-8 -*-
# @File   : locator.py
# @Time   : 2026/10/13 00:31:52
# @Author : Kariko Lin

"""Line predicates and the section/key scan.

Section and key names both compare case-insensitively.
Only the FIRST header of a name is ever looked at,
and only the lines between it and the next header belong to it.
"""

from typing import NamedTuple, Sequence

__all__ = [
    'Location', 'isHeader', 'headerName', 'keyEquals',
    'findSectionAndKey', 'findSectionEnd', 'countHeaders'
]


class Location(NamedTuple):
    section: int = -1
    key: int = -1


def isHeader(line: str) -> bool:
    """`[name]` with optional leading blanks, anything after `]` ignored."""
    line = line.lstrip()
    return line.startswith('[') and ']' in line


def headerName(line: str) -> str:
    """Trimmed text between `[` and the first `]`. Assumes `isHeader`."""
    line = line.lstrip()
    return line[1:line.index(']')].strip()


def _same(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def keyEquals(line: str, key: str) -> int:
    """Index (in `line`) of the `=` ending `key`, or -1 if not a `key` line.

    Only blanks may stand between the key text and its `=`,
    so `key` never matches a `key2=` line.
    """
    stripped = line.lstrip()
    if not _same(stripped[:len(key)], key):
        return -1
    equals = stripped.find('=', len(key))
    if equals == -1 or stripped[len(key):equals].strip():
        return -1
    return equals + len(line) - len(stripped)


def findSectionAndKey(
    section: str, key: str | None, lines: Sequence[str]
) -> Location:
    """Locate `[section]` and, if `key` is given, `key=` under it.

    Returns:
        - `(-1, -1)` if no such section;
        - `(section, -1)` if the key is absent or not asked for;
        - `(section, key)` line indexes otherwise.
    """
    found = -1
    for i, line in enumerate(lines):
        if isHeader(line):
            if found != -1:
                break
            if _same(headerName(line), section):
                found = i
                if key is None:
                    break
        elif found != -1 and keyEquals(line, key) != -1:
            return Location(found, i)
    return Location(found)


def findSectionEnd(section_index: int, lines: Sequence[str]) -> int:
    """End (exclusive) of the section headed at `section_index`.

    That is the next header; or, for the last section,
    one past its last `=` line, leaving trailing comments alone.
    A last section without any `=` line ends right after its header.
    """
    end = section_index + 1
    for i in range(section_index + 1, len(lines)):
        if isHeader(lines[i]):
            return i
        if '=' in lines[i]:
            end = i + 1
    return end


def countHeaders(section: str, lines: Sequence[str]) -> int:
    return sum(
        1 for i in lines if isHeader(i) and _same(headerName(i), section))
