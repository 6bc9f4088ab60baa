# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 21:33:50
# @Author : Kariko Lin

import logging

from .codec import Detection, detect_encoding
from .inifile import IniFile, InvalidIniArgument

__all__ = [
    'IniFile', 'InvalidIniArgument',
    'Detection', 'detect_encoding'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
