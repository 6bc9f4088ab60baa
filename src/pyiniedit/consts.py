# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/12 21:40:17
# @Author : Kariko Lin

from enum import Enum


DEFAULT_COMMENT = '#'

# detection only looks at the head of a file.
SAMPLE_SIZE = 4096

# `chardet` guesses below this are ignored.
GUESS_CONFIDENCE = 0.8


# order matters: UTF-32 LE starts with the UTF-16 LE mark.
class ByteOrderMark(bytes, Enum):
    UTF32_BE = b'\x00\x00\xfe\xff'
    UTF32_LE = b'\xff\xfe\x00\x00'
    UTF16_LE = b'\xff\xfe'
    UTF16_BE = b'\xfe\xff'
    UTF8 = b'\xef\xbb\xbf'

    @property
    def codec(self) -> str:
        return _BOM_CODECS[self]


_BOM_CODECS = {
    ByteOrderMark.UTF32_BE: 'utf-32-be',
    ByteOrderMark.UTF32_LE: 'utf-32-le',
    ByteOrderMark.UTF16_LE: 'utf-16-le',
    ByteOrderMark.UTF16_BE: 'utf-16-be',
    ByteOrderMark.UTF8: 'utf-8-sig',
}
