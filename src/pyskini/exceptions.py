# -*- encoding: utf-8 -*-
# @File   : exceptions.py
# @Time   : 2024/10/12 21:52:03
# @Author : Kariko Lin

from errno import ENOENT


class DirectoryNotFoundError(FileNotFoundError):
    """The folder supposed to hold an INI file doesn't exist."""
    def __init__(self, folder: str) -> None:
        super().__init__(ENOENT, 'Directory not found', folder)


class SectionNotFoundError(KeyError):
    """Raised by strict lookups when `[section]` is absent."""
    pass


class KeyNotFoundError(KeyError):
    """Raised by strict lookups when `key=` is absent in a section."""
    pass
