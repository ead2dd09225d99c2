# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:10:41
# @Author : Kariko Lin

"""
Line buffer of an INI file, with a parallel index of section headers.

Nothing gets parsed into dicts here. Lookups walk the buffer each time,
so a section or key is found where the file actually puts it:

    ```ini
    [Server]
    host=localhost
    port=8080
    [Server]
    port=9090
    ```

The second `[Server]` is NOT merged. Lookups only ever see the first one,
but the second header still ends the range above it.
"""

from collections.abc import Iterable, Iterator, Sequence
from re import compile as regex
from typing import NamedTuple, overload

from ..exceptions import KeyNotFoundError, SectionNotFoundError

# for both section names and keys.
ID_RULE = regex(r'[A-Za-z0-9]+')
CONTROL_CHARS = regex(r'[\x00-\x1f\x7f]')


class SectionRange(NamedTuple):
    """`start` points at the header line itself."""
    start: int
    count: int


def section_name(line: str) -> str | None:
    """`[name]` -> `name`. `None` unless the line is exactly `[...]`.

    Lookups build `[name]` back and compare whole lines,
    so anything else (`[A]x`, `[A] `, `[A`) could never be found by name.
    """
    if len(line) < 2 or line[0] != '[' or line[-1] != ']':
        return None
    return line[1:-1]


class IniDocument(Sequence[str]):
    """Non-blank lines of an INI file, in file order.

    `self.sections` holds the buffer positions of every line starting
    with `[`, duplicates included.
    """
    def __init__(
        self,
        lines: Iterable[str] = (),
        sections: Iterable[int] | None = None
    ) -> None:
        self.__lines: list[str] = list(lines)
        self.__sections: list[int] = (
            [n for n, i in enumerate(self.__lines) if i[:1] == '[']
            if sections is None
            else list(sections)
        )

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index):
        return self.__lines[index]

    def __len__(self) -> int:
        return len(self.__lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__lines)

    def __repr__(self) -> str:
        return 'IniDocument { .lines = %d, .sections = %d }' % (
            len(self.__lines), len(self.__sections))

    @property
    def sections(self) -> Sequence[int]:
        return tuple(self.__sections)

    def find_key(self, key: str, start: int, count: int) -> int:
        """Position of the first `key=...` line in `[start, start+count)`,
        or -1.

        `key` must be followed *right away* by `=`,
        so `ab` would never hit `abc=1`.
        """
        end = len(key)
        for i in range(start, start + count):
            line = self.__lines[i]
            if line.startswith(key) and line[end:end + 1] == '=':
                return i
        return -1

    def find_range(self, section: str) -> SectionRange | None:
        """Locate the *first* `[section]` header, case-sensitive.

        The range runs until the next recorded header
        (whatever its name), or to the end of buffer.
        """
        header = f'[{section}]'
        for n, i in enumerate(self.__sections):
            if self.__lines[i] != header:
                continue
            if n + 1 == len(self.__sections):
                return SectionRange(i, len(self.__lines) - i)
            return SectionRange(i, self.__sections[n + 1] - i)
        return None

    def try_read_value(self, section: str, key: str) -> str | None:
        if section is None or key is None:
            return None
        if (rng := self.find_range(section)) is None:
            return None
        if (idx := self.find_key(key, *rng)) == -1:
            return None
        return self.__lines[idx][len(key) + 1:]

    def read_value(self, section: str, key: str) -> str:
        """Like `try_read_value()`, but raises on anything missing."""
        if section is None or key is None:
            raise TypeError('section and key must not be None.')
        if (rng := self.find_range(section)) is None:
            raise SectionNotFoundError(section)
        if (idx := self.find_key(key, *rng)) == -1:
            raise KeyNotFoundError(key)
        return self.__lines[idx][len(key) + 1:]

    def read_section_names(self) -> list[str]:
        """Every well-formed header name, in file order. NOT deduplicated.

        Malformed `[` lines still bound their neighbours' ranges,
        they just have no name to be looked up with.
        """
        return [
            name for i in self.__sections
            if (name := section_name(self.__lines[i])) is not None]

    def read_keys_values(self, section: str) -> list[tuple[str, str]]:
        if section is None:
            raise TypeError('section must not be None.')
        if (rng := self.find_range(section)) is None:
            raise SectionNotFoundError(section)
        ret = []
        for i in self.__lines[rng.start + 1:rng.start + rng.count]:
            if '=' in i:
                key, val = i.split('=', 1)
                ret.append((key, val))
        return ret

    # the writing part. IniReader never calls these.
    def __shift(self, since: int, offset: int) -> None:
        self.__sections = [
            i + offset if i >= since else i for i in self.__sections]

    def write_key(self, section: str, key: str, value: str) -> None:
        """Set `key=value` in the first `[section]`.

        Missing section gets appended to the end of buffer,
        and missing key to the end of section.
        """
        if section is None or key is None or value is None:
            raise TypeError('section, key and value must not be None.')
        if not ID_RULE.fullmatch(section):
            raise ValueError(f'Invalid section name: "{section}".')
        if not ID_RULE.fullmatch(key):
            raise ValueError(f'Invalid key: "{key}".')
        if CONTROL_CHARS.search(value):
            raise ValueError(f'Control characters in value of "{key}".')

        pair = f'{key}={value}'
        if (rng := self.find_range(section)) is None:
            self.__sections.append(len(self.__lines))
            self.__lines.extend([f'[{section}]', pair])
            return
        if (idx := self.find_key(key, *rng)) != -1:
            self.__lines[idx] = pair
            return
        end = rng.start + rng.count
        self.__lines.insert(end, pair)
        self.__shift(end, 1)

    def delete_key(self, section: str, key: str) -> None:
        if (rng := self.find_range(section)) is None:
            raise SectionNotFoundError(section)
        if (idx := self.find_key(key, *rng)) == -1:
            raise KeyNotFoundError(key)
        del self.__lines[idx]
        self.__shift(idx, -1)

    def clear_section(self, section: str) -> None:
        """Drop the first `[section]`, header and pairs alike."""
        if (rng := self.find_range(section)) is None:
            raise SectionNotFoundError(section)
        del self.__lines[rng.start:rng.start + rng.count]
        self.__sections.remove(rng.start)
        self.__shift(rng.start, -rng.count)
