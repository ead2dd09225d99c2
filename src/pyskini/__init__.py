# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/14 01:30:15
# @Author : Kariko Lin

import logging

from .abstract import ValidationRecord
from .config import (
    DynamicIniReader,
    GenericSection,
    IniReader,
    IniSectionReader
)
from .exceptions import (
    DirectoryNotFoundError,
    KeyNotFoundError,
    SectionNotFoundError
)
from .export import dump_json, dump_report_yaml, dump_yaml
from .ini import IniDocument, IniParser, SectionRange

__all__ = [
    'IniDocument', 'IniParser', 'SectionRange',
    'IniSectionReader', 'GenericSection', 'IniReader', 'DynamicIniReader',
    'ValidationRecord',
    'DirectoryNotFoundError', 'SectionNotFoundError', 'KeyNotFoundError',
    'dump_yaml', 'dump_json', 'dump_report_yaml'
]

# leave handlers and levels to the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())
