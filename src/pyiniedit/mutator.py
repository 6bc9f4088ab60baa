# -*- encoding: utf-8 -*-
# @File   : mutator.py
# @Time   : 2026/10/13 01:12:08
# @Author : Kariko Lin

"""In-place edits on a list of INI lines.

Nothing here touches the disk; `IniFile` reads, calls one of these,
and writes back. Every line not edited is kept as is.
"""

from .locator import findSectionEnd, isHeader, keyEquals

__all__ = [
    'splitComment', 'extractValue',
    'appendSection', 'insertKey', 'replaceValue',
    'removeKey', 'removeSection', 'removeInvalidLines'
]


def splitComment(text: str, comment: str) -> tuple[str, str]:
    """Split the text after `=` into value and comment tail.

    The blanks in front of the comment marker go with the tail,
    so `1 #keep` splits into `('1', ' #keep')`.
    """
    pos = text.find(comment)
    if pos == -1:
        return text, ''
    value = text[:pos].rstrip()
    return value, text[len(value):]


def extractValue(line: str, key: str, comment: str) -> str:
    equals = keyEquals(line, key)
    return splitComment(line[equals + 1:], comment)[0]


def appendSection(lines: list[str], section: str, key: str, value: str):
    lines.append(f'[{section}]')
    lines.append(f'{key}={value}')


def insertKey(lines: list[str], section_index: int, key: str, value: str):
    """New key goes right below the header."""
    lines.insert(section_index + 1, f'{key}={value}')


def replaceValue(
    lines: list[str], key_index: int, key: str, value: str, comment: str
):
    """Rewrite the value, keeping the key text (as spelled in the file)
    and any trailing comment."""
    line = lines[key_index]
    equals = keyEquals(line, key)
    tail = splitComment(line[equals + 1:], comment)[1]
    lines[key_index] = f'{line[:equals + 1]}{value}{tail}'


def removeKey(lines: list[str], section_index: int, key_index: int):
    """Drop a key line; drop its header too if nothing is left under it.

    "Nothing left" means the header is now followed by another header,
    or by the end of file. A blank or comment line in between
    keeps the header alive.
    """
    del lines[key_index]
    after = section_index + 1
    if after >= len(lines) or isHeader(lines[after]):
        del lines[section_index]


def removeSection(lines: list[str], section_index: int):
    del lines[section_index:findSectionEnd(section_index, lines)]


def removeInvalidLines(lines: list[str], comment: str) -> int:
    """Drop lines with none of `[`, `]`, `=` or the comment marker.

    Returns how many lines went away.
    """
    kept = [
        i for i in lines
        if '[' in i or ']' in i or '=' in i or comment in i
    ]
    dropped = len(lines) - len(kept)
    lines[:] = kept
    return dropped
