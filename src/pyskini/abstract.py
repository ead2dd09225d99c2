# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from collections.abc import Callable
from os import PathLike, fspath
from os.path import abspath, isdir, split
from typing import Any, NamedTuple

from .exceptions import DirectoryNotFoundError


class ValidationRecord(NamedTuple):
    """One field checked by `Validatable.validate()`."""
    field: str
    is_valid: bool
    message: str
    value: Any = None


class Validatable(metaclass=ABCMeta):
    @abstractmethod
    def validate(self) -> list[ValidationRecord]:
        """Check every field and return all results, in field order.

        Never stop at the first failure: callers expect the full list.
        """
        raise NotImplementedError

    def is_valid(self) -> bool:
        return all(i.is_valid for i in self.validate())

    def report(self, sink: Callable[[ValidationRecord], object]) -> bool:
        """Feed each record to `sink`, then tell whether all passed."""
        result = True
        for i in self.validate():
            sink(i)
            result = result and i.is_valid
        return result


class FileHandler[T](metaclass=ABCMeta):
    def __init__(self, filename: str | PathLike[str]) -> None:
        if filename is None:
            raise TypeError('filename must not be None.')
        # resolve now, so a later chdir() won't move the target.
        self._fn = abspath(fspath(filename))
        folder = split(self._fn)[0]
        if not isdir(folder):
            raise DirectoryNotFoundError(folder)

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
