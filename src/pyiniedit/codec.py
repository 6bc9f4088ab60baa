# -*- encoding: utf-8 -*-
# @File   : codec.py
# @Time   : 2026/10/12 22:07:45
# @Author : Kariko Lin

"""Figure out how an INI file's bytes map to text.

The order of checks:
1. byte-order-marks, UTF-32 ones before UTF-16 ones;
2. a structural UTF-8 scan over the first 4 KiB;
3. `chardet`, if asked to and if it is sure enough;
4. whatever the system calls its default encoding.

Anything past step 2 is a fallback, and `Detection.fallback` says so.
"""

import logging
from codecs import lookup
from locale import getpreferredencoding
from os import PathLike
from typing import NamedTuple

from chardet import detect as guess_codec

from .consts import GUESS_CONFIDENCE, SAMPLE_SIZE, ByteOrderMark

__all__ = [
    'Detection', 'detect_encoding', 'detect_bytes', 'is_utf8_bytes',
    'given_encoding'
]

logger = logging.getLogger(__name__)


class Detection(NamedTuple):
    codec: str
    # stripped on read, restored on write.
    bom: bytes = b''
    fallback: bool = False


def is_utf8_bytes(buf: bytes) -> bool:
    """Check that every multi-byte sequence in `buf` is well formed.

    A sequence cut off by the end of `buf` counts as malformed.
    """
    i, length = 0, len(buf)
    while i < length:
        lead = buf[i]
        i += 1
        if lead < 0x80:
            continue
        if lead & 0xE0 == 0xC0:
            follow = 1
        elif lead & 0xF0 == 0xE0:
            follow = 2
        elif lead & 0xF8 == 0xF0:
            follow = 3
        elif lead & 0xFC == 0xF8:
            follow = 4
        else:
            return False
        for _ in range(follow):
            if i >= length or buf[i] & 0xC0 != 0x80:
                return False
            i += 1
    return True


def _system_default() -> str:
    return getpreferredencoding(False)


def detect_bytes(sample: bytes, guess: bool = True) -> Detection:
    """Detect from an already read head of a file."""
    for mark in ByteOrderMark:
        if sample.startswith(mark.value):
            return Detection(mark.codec, mark.value)
    if is_utf8_bytes(sample):
        return Detection('utf-8')

    if guess:
        codec = guess_codec(sample)
        if (codec['encoding'] is not None
                and codec['confidence'] >= GUESS_CONFIDENCE):
            logger.debug(
                'chardet guessed %s (%.2f)',
                codec['encoding'], codec['confidence'])
            return Detection(codec['encoding'].lower(), fallback=True)
    return Detection(_system_default(), fallback=True)


def detect_encoding(
    filename: str | PathLike[str], guess: bool = True
) -> Detection:
    """Detect the encoding of `filename` from its first 4096 bytes.

    Never raises. An unreadable file gets the system default encoding,
    with `fallback=True`.
    """
    try:
        with open(filename, 'rb') as fp:
            sample = fp.read(SAMPLE_SIZE)
    except OSError as e:
        logger.warning(
            "Error detecting encoding for file '%s': %s", filename, e)
        return Detection(_system_default(), fallback=True)

    ret = detect_bytes(sample, guess)
    if ret.fallback:
        logger.warning(
            "'%s' is neither marked nor valid UTF-8, falling back to %s.",
            filename, ret.codec)
    return ret


def _family(codec: str) -> str:
    # `utf-8` and `utf-8-sig` share one mark.
    return lookup(codec).name.removesuffix('-sig')


def given_encoding(filename: str | PathLike[str], codec: str) -> Detection:
    """Take `codec` as told, but still honour a byte-order-mark
    written for it, so the mark is not read as text.

    Raises `LookupError` for an unknown codec name.
    """
    family = _family(codec)
    try:
        with open(filename, 'rb') as fp:
            head = fp.read(4)
    except OSError as e:
        logger.warning(
            "Error reading byte-order-mark of '%s': %s", filename, e)
        return Detection(codec)

    for mark in ByteOrderMark:
        if head.startswith(mark.value):
            if _family(mark.codec) == family:
                return Detection(codec, mark.value)
            break
    return Detection(codec)
