# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/10/14 01:12:37
# @Author : Kariko Lin

"""Dump documents (and validation results) for humans or other tools.

Sections are kept as a *list*, so duplicated headers stay apart:

    ```yaml
    - section: Server
      pairs:
        host: localhost
    - section: Server
      pairs:
        port: '9090'
    ```
"""

import json
from collections.abc import Iterable
from typing import Any, TypedDict

import yaml

from .abstract import ValidationRecord
from .ini.model import IniDocument, section_name


class SectionDump(TypedDict):
    section: str | None  # None for pairs before any header.
    pairs: dict[str, str]


def to_sections(document: IniDocument) -> list[SectionDump]:
    ret: list[SectionDump] = []
    current: SectionDump | None = None
    unreachable = False
    for i in document:
        if i[0] == '[':
            # pairs under a malformed header can't be looked up, skip them.
            if (name := section_name(i)) is None:
                current, unreachable = None, True
                continue
            current, unreachable = SectionDump(section=name, pairs={}), False
            ret.append(current)
        elif '=' in i and not unreachable:
            if current is None:
                current = SectionDump(section=None, pairs={})
                ret.append(current)
            key, val = i.split('=', 1)
            # same as lookups, the first one wins.
            current['pairs'].setdefault(key, val)
    return ret


def dump_yaml(document: IniDocument) -> str:
    return yaml.safe_dump(
        to_sections(document), allow_unicode=True, sort_keys=False)


def dump_json(document: IniDocument, indent: int | None = 2) -> str:
    return json.dumps(
        to_sections(document), ensure_ascii=False, indent=indent)


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_plain(i) for i in value]
    return str(value)


def dump_report_yaml(records: Iterable[ValidationRecord]) -> str:
    """Values that YAML can't tell (regex, timedelta...) become strings."""
    return yaml.safe_dump(
        [{'field': i.field, 'valid': i.is_valid,
          'message': i.message, 'value': _plain(i.value)}
         for i in records],
        allow_unicode=True, sort_keys=False)
