# -*- encoding: utf-8 -*-
# @File   : section.py
# @Time   : 2024/10/13 14:27:09
# @Author : Kariko Lin

"""Typed, validating views of one INI section.

Getters look the value up *each time* they are called,
and give `None` (or `[]` for lists) whenever a key is missing
or its value doesn't convert. Telling whether that's acceptable
is the job of `validate()`.

Subclass example:

    ```python
    class ServerSection(IniSectionReader):
        @property
        def port(self) -> int | None:
            return self.get_integer('port')

        def validate(self) -> list[ValidationRecord]:
            return [
                self._check('port', self.port,
                            lambda x: x is not None and 0 < x < 65536,
                            'port should be within 1-65535'),
            ]
    ```
"""

from collections.abc import Callable
from datetime import timedelta
from re import Pattern
from re import compile as regex
from re import error as RegexError
from typing import Any

from ..abstract import Validatable, ValidationRecord
from ..ini.model import IniDocument

DEFAULT_CSV_SEPARATOR = ';'

_INT32_MIN, _INT32_MAX = -2 ** 31, 2 ** 31 - 1
_INTEGER = regex(r'\s*[+-]?[0-9]+\s*')
# `d`, or `[d.]hh:mm[:ss[.fffffff]]`, optionally negative.
_TIMESPAN = regex(
    r'\s*(?P<neg>-)?(?:(?P<days_only>[0-9]+)|'
    r'(?:(?P<days>[0-9]+)\.)?(?P<h>[0-9]{1,2}):(?P<m>[0-9]{1,2})'
    r'(?::(?P<s>[0-9]{1,2})(?:\.(?P<f>[0-9]{1,7}))?)?)\s*'
)


def parse_boolean(val: str) -> bool | None:
    match val.strip().lower():
        case 'true':
            return True
        case 'false':
            return False
    return None


def parse_integer(val: str) -> int | None:
    if not _INTEGER.fullmatch(val):
        return None
    ret = int(val)
    return ret if _INT32_MIN <= ret <= _INT32_MAX else None


def parse_timespan(val: str) -> timedelta | None:
    if (m := _TIMESPAN.fullmatch(val)) is None:
        return None
    if m['days_only'] is not None:
        days = int(m['days_only'])
        hours = minutes = seconds = ticks = 0
    else:
        days, hours, minutes = int(m['days'] or 0), int(m['h']), int(m['m'])
        seconds = int(m['s'] or 0)
        # 7 digits are 100ns ticks, timedelta keeps microseconds only.
        ticks = int((m['f'] or '').ljust(7, '0'))
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    try:
        ret = timedelta(days=days, hours=hours, minutes=minutes,
                        seconds=seconds, microseconds=ticks // 10)
    except OverflowError:
        return None
    return -ret if m['neg'] else ret


class IniSectionReader(Validatable):
    """Accessors bound to one `[section]` of a shared `IniDocument`.

    Duplicated section names resolve to their *first* header,
    whichever instance asks.
    """
    def __init__(self, document: IniDocument, section: str) -> None:
        if document is None or section is None:
            raise TypeError('document and section must not be None.')
        self._doc = document
        self._section = section

    @property
    def section_name(self) -> str:
        return self._section

    def __repr__(self) -> str:
        return f'<{type(self).__name__} [{self._section}]>'

    def _raw(self, key: str) -> str | None:
        return self._doc.try_read_value(self._section, key)

    def get_boolean(self, key: str) -> bool | None:
        if (val := self._raw(key)) is None:
            return None
        return parse_boolean(val)

    def get_integer(self, key: str) -> int | None:
        if (val := self._raw(key)) is None:
            return None
        return parse_integer(val)

    def get_string(self, key: str) -> str | None:
        return self._raw(key)

    def get_csv_string(
        self, key: str, separator: str = DEFAULT_CSV_SEPARATOR
    ) -> list[str]:
        """Split on `separator`, empty items dropped.
        Always a list, even if `key` is missing.

        An empty `separator` is a caller mistake and raises `ValueError`,
        whatever the data.
        """
        if not separator:
            raise ValueError('separator must not be empty.')
        val = self._raw(key)
        if not val or not val.strip():
            return []
        return [i for i in val.split(separator) if i]

    def get_regex(self, key: str) -> Pattern[str] | None:
        val = self._raw(key)
        if not val or not val.strip():
            return None
        try:
            return regex(val)
        except RegexError:
            return None

    def get_timespan(self, key: str) -> timedelta | None:
        if (val := self._raw(key)) is None:
            return None
        return parse_timespan(val)

    @staticmethod
    def _check(
        field: str, value: Any,
        rule: Callable[[Any], bool], message: str
    ) -> ValidationRecord:
        return ValidationRecord(field, bool(rule(value)), message, value)


class GenericSection(IniSectionReader):
    """For sections nobody registered a reader for. No fields, always valid.
    """
    def validate(self) -> list[ValidationRecord]:
        return []
