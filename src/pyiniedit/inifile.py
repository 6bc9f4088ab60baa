# -*- encoding: utf-8 -*-
# @File   : inifile.py
# @Time   : 2026/10/13 02:26:44
# @Author : Kariko Lin

"""Edit INI files in place, one section/key at a time.

Unlike a full parser, nothing is loaded into a tree here:
the file stays the only state, read again on every call,
and a write only touches the lines it has to.

```ini
[Net]
Port=8080   # comments survive rewrites
```

```python
ini = IniFile('server.ini')
ini.setValue('Net', 'Port', '9090')   # -> "Port=9090   # comments ..."
ini.getValue('net', 'port')           # -> '9090'
```
"""

import logging
from os import PathLike
from warnings import warn

from . import mutator
from .codec import Detection, detect_encoding, given_encoding
from .consts import DEFAULT_COMMENT
from .lines import IniLineStore
from .locator import (
    countHeaders,
    findSectionAndKey,
    headerName,
    isHeader
)

__all__ = ['IniFile', 'InvalidIniArgument']

logger = logging.getLogger(__name__)


class InvalidIniArgument(ValueError):
    """A section, key or value which cannot be written as one INI line."""
    pass


def _check_name(name: str | None, what: str) -> str:
    """Returns `name` without surrounding blanks, as lookups see it."""
    if name is None or not name.strip():
        raise InvalidIniArgument(f'{what} cannot be None or whitespace.')
    _check_line(name, what)
    return name.strip()


def _check_line(text: str, what: str) -> None:
    if '\n' in text or '\r' in text:
        raise InvalidIniArgument(f'{what} cannot contain line breaks.')


class IniFile:
    def __init__(
        self, filename: str | PathLike[str],
        comment: str = DEFAULT_COMMENT,
        encoding: str | None = None, *,
        guess: bool = True,
        interprocess: bool = False
    ) -> None:
        """Open (or create, if missing) an INI file.

        Args:
            comment: the ONE char starting an inline comment.
            encoding: skip detection and use this codec.
            guess: let `chardet` guess before falling back to
                the system encoding. See `codec.detect_encoding()`.
            interprocess: also lock against other processes (POSIX only).
        """
        if not isinstance(comment, str) or len(comment) != 1:
            raise InvalidIniArgument(
                f'comment should be a single char, got {comment!r}.')
        self._comment = comment
        self._store = IniLineStore(
            filename, Detection('utf-8'), interprocess=interprocess)
        self._store.touch()
        self._store.detection = (
            detect_encoding(self._store.filename, guess)
            if encoding is None
            else given_encoding(self._store.filename, encoding))

    @property
    def path(self) -> str:
        return self._store.filename

    @property
    def comment(self) -> str:
        return self._comment

    @property
    def encoding(self) -> str:
        return self._store.detection.codec

    @property
    def detection(self) -> Detection:
        return self._store.detection

    def _save(self, lines: list[str], section: str | None = None) -> None:
        if section is not None and countHeaders(section, lines) > 1:
            warn(f'"{self.path}" has more than one [{section}], '
                 'only the first one is edited.')
        try:
            self._store.write(lines)
        except UnicodeEncodeError as e:
            bad = e.object[e.start:e.end]
            raise InvalidIniArgument(
                f'{bad!r} cannot be written in {self.encoding}.') from e

    def getValue(
        self, section: str, key: str, default: str | None = None
    ) -> str | None:
        """Value of `key` under `[section]`, comment cut off.

        Names are looked up without their surrounding blanks.
        If a comment follows, the blanks before it are cut off too.

        CAUTION:
            When not found and `default` is not `None`,
            `key=default` is WRITTEN to the file, not just returned:
            below the header if the section exists,
            or in a new section at the end of file.
        """
        section = _check_name(section, 'Section')
        key = _check_name(key, 'Key')
        if default is not None:
            _check_line(default, 'Default value')

        with self._store.locked():
            lines = self._store.read()
            at = findSectionAndKey(section, key, lines)
            if at.key != -1:
                return mutator.extractValue(
                    lines[at.key], key, self._comment)
            if default is None:
                return None

            if at.section != -1:
                mutator.insertKey(lines, at.section, key, default)
            else:
                mutator.appendSection(lines, section, key, default)
            logger.debug('persisting default [%s] %s=%s',
                         section, key, default)
            self._save(lines, section)
        return default

    def _write(
        self, section: str, key: str | None, value: str | None
    ) -> bool:
        """Shared by set and delete.

        `key is None` deletes the section, `value is None` the key.
        """
        section = _check_name(section, 'Section')
        with self._store.locked():
            lines = self._store.read()
            at = findSectionAndKey(section, key, lines)
            if at.section == -1:
                if key is None or value is None:
                    return False
                mutator.appendSection(lines, section, key, value)
            elif at.key == -1:
                if key is None:
                    mutator.removeSection(lines, at.section)
                elif value is None:
                    return False
                else:
                    mutator.insertKey(lines, at.section, key, value)
            elif value is None:
                mutator.removeKey(lines, at.section, at.key)
            else:
                mutator.replaceValue(
                    lines, at.key, key, value, self._comment)
            self._save(lines, section)
        return True

    def setValue(self, section: str, key: str, value: str) -> bool:
        """Replace (or add) `key=value` under `[section]`.

        The section is appended to the end of file if missing.
        An inline comment already on the key line is kept, and so are
        the blanks in front of it: `x=1 #c` becomes `x=2 #c`. Hence
        trailing blanks of `value` do not read back on such a line.

        Raises `InvalidIniArgument` if the file's codec cannot
        encode `value`; the file is then left untouched.
        """
        key = _check_name(key, 'Key')
        if value is None:
            raise InvalidIniArgument('Value cannot be None.')
        value = str(value)
        _check_line(value, 'Value')
        return self._write(section, key, value)

    def deleteKey(self, section: str, key: str) -> bool:
        """Returns `False` if there is no such key.

        Removing the last key of a section removes the header as well,
        unless a blank or comment line still follows the header.
        """
        key = _check_name(key, 'Key')
        return self._write(section, key, None)

    def deleteSection(self, section: str) -> bool:
        """Remove the first `[section]` with everything under it.

        For the LAST section of the file, trailing lines after its
        last key (blank lines, comments) are left alone.
        """
        return self._write(section, None, None)

    def deleteAllSections(self) -> bool:
        """Delete sections one by one, in file order.

        NOT atomic: each deletion is a rewrite of its own.
        """
        for i in self.listSections():
            self.deleteSection(i)
        return True

    def deleteInvalidLines(self) -> None:
        """Drop every line holding none of `[`, `]`, `=`
        or the comment char, blank lines included."""
        with self._store.locked():
            lines = self._store.read()
            dropped = mutator.removeInvalidLines(lines, self._comment)
            logger.debug('dropping %d invalid lines', dropped)
            self._store.write(lines)

    def listSections(self) -> list[str]:
        """Every non-empty section name, in file order, duplicates kept."""
        with self._store.locked():
            lines = self._store.read()
        return [
            name for name in (headerName(i) for i in lines if isHeader(i))
            if name
        ]

    def listKeys(self, section: str) -> list[str]:
        """Key names under the first `[section]`.

        Any line with an `=` not at its very start counts,
        even if commented out.
        """
        section = _check_name(section, 'Section')
        with self._store.locked():
            lines = self._store.read()
        at = findSectionAndKey(section, None, lines)
        if at.section == -1:
            return []

        ret = []
        for i in lines[at.section + 1:]:
            if isHeader(i):
                break
            i = i.lstrip()
            if (equals := i.find('=')) > 0:
                ret.append(i[:equals].strip())
        return ret

    def hasKey(self, section: str, key: str) -> bool:
        section = _check_name(section, 'Section')
        key = _check_name(key, 'Key')
        with self._store.locked():
            lines = self._store.read()
        return findSectionAndKey(section, key, lines).key != -1

    def __contains__(self, section: str) -> bool:
        with self._store.locked():
            lines = self._store.read()
        return findSectionAndKey(section, None, lines).section != -1

    def __str__(self) -> str:
        return f'INI file: {self._store}'

    def __repr__(self) -> str:
        return (f'{type(self).__name__}({self.path!r}, '
                f'comment={self._comment!r}, encoding={self.encoding!r})')

