# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 16:48:30
# @Author : Kariko Lin

from .reader import DynamicIniReader, IniReader
from .section import GenericSection, IniSectionReader
