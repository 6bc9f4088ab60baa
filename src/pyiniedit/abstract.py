# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/12 21:52:03
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike
from os.path import abspath
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Reads a whole file into `T`, and writes `T` back as a whole."""
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = abspath(filename)

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
