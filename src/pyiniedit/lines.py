# -*- encoding: utf-8 -*-
# @File   : lines.py
# @Time   : 2026/10/12 23:18:36
# @Author : Kariko Lin

"""The whole file as a list of lines, in and out.

Nothing is cached. Each `read()` goes to disk again,
and each `write()` replaces the file as a whole.
"""

import logging
import os
from contextlib import contextmanager
from io import StringIO
from os import PathLike
from os.path import dirname, split
from tempfile import NamedTemporaryFile
from threading import Lock, RLock
from typing import Iterator

from .abstract import FileHandler
from .codec import Detection

__all__ = ['IniLineStore', 'path_lock']

logger = logging.getLogger(__name__)

# one lock per resolved path, created on demand.
_PATH_LOCKS: dict[str, RLock] = {}
_REGISTRY_LOCK = Lock()


def path_lock(filename: str) -> RLock:
    with _REGISTRY_LOCK:
        return _PATH_LOCKS.setdefault(filename, RLock())


class IniLineStore(FileHandler[list[str]]):
    def __init__(
        self, filename: str | PathLike[str], detection: Detection, *,
        interprocess: bool = False
    ) -> None:
        super().__init__(filename)
        self.detection = detection
        self._interprocess = interprocess
        self._flocked = False
        self._lock = path_lock(self._fn)
        # follows the last file read.
        self.newline = '\n'

    def touch(self) -> None:
        """Create the file, empty, if it is not there yet."""
        if not os.path.exists(self._fn):
            with open(self._fn, 'ab'):
                pass
            logger.debug('created empty file %s', self._fn)

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the file for a whole read-modify-write cycle.

        Re-entrant within a thread. With `interprocess` set,
        other processes are kept out by a `flock` on `<file>.lock`.
        """
        with self._lock:
            # flock is per open file, so never take it twice.
            if not self._interprocess or self._flocked:
                yield
                return

            import fcntl
            with open(self._fn + '.lock', 'a') as lock_fp:
                fcntl.flock(lock_fp, fcntl.LOCK_EX)
                self._flocked = True
                try:
                    yield
                finally:
                    self._flocked = False
                    fcntl.flock(lock_fp, fcntl.LOCK_UN)

    def decode(self, raw: bytes) -> list[str]:
        bom = self.detection.bom
        if bom and raw.startswith(bom):
            raw = raw[len(bom):]
        text = raw.decode(self.detection.codec, 'surrogateescape')

        first = text.find('\n')
        self.newline = '\r\n' if first > 0 and text[first - 1] == '\r' \
            else '\n'
        # universal newlines: \r\n, \r and \n all end a line.
        lines = StringIO(text, newline=None).read().split('\n')
        if lines[-1] == '':
            lines.pop()
        return lines

    def encode(self, lines: list[str]) -> bytes:
        text = ''.join(i + self.newline for i in lines)
        raw = text.encode(self.detection.codec, 'surrogateescape')
        bom = self.detection.bom
        # `utf-8-sig` writes its own mark.
        if bom and not raw.startswith(bom):
            raw = bom + raw
        return raw

    def read(self) -> list[str]:
        """May raise `OSError`."""
        with open(self._fn, 'rb') as fp:
            return self.decode(fp.read())

    def write(self, instance: list[str]) -> None:
        """Replace the file with `instance`, one line per item.

        The data goes to a temporary sibling first, so a failed write
        leaves the old file untouched. May raise `OSError`, or
        `UnicodeEncodeError` before anything is written if the codec
        cannot hold some of the text.
        """
        raw = self.encode(instance)
        with self.locked():
            with NamedTemporaryFile(
                'wb', dir=dirname(self._fn),
                prefix=f'.{split(self._fn)[1]}.', suffix='.tmp',
                delete=False
            ) as fp:
                try:
                    fp.write(raw)
                    fp.flush()
                    os.fsync(fp.fileno())
                except BaseException:
                    fp.close()
                    os.unlink(fp.name)
                    raise
            try:
                _copy_mode(self._fn, fp.name)
                os.replace(fp.name, self._fn)
            except BaseException:
                os.unlink(fp.name)
                raise
        logger.debug('wrote %d lines to %s', len(instance), self._fn)

    def __str__(self) -> str:
        return f'{self._fn} ({self.detection.codec})'


def _copy_mode(src: str, dst: str) -> None:
    # temp files are created 0600.
    try:
        os.chmod(dst, os.stat(src).st_mode & 0o7777)
    except FileNotFoundError:
        pass
