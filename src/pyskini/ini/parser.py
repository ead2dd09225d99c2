# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 23:02:56
# @Author : Kariko Lin

"""Reading, checking and saving of plain INI files.

The accepted format is deliberately tiny:

    - `[Name]` headers, `Key=Value` pairs, both names `[A-Za-z0-9]+`;
    - blank lines anywhere (never stored);
    - no comments, no escaping, no multi-line values.
"""

import logging
from codecs import (
    BOM_UTF8,
    BOM_UTF16_BE,
    BOM_UTF16_LE,
    BOM_UTF32_BE,
    BOM_UTF32_LE
)
from collections.abc import Callable
from errno import ENOENT
from io import StringIO, TextIOBase
from os import PathLike
from os.path import exists
from warnings import warn

import chardet

from ..abstract import FileHandler
from .model import ID_RULE, IniDocument, section_name

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = 'utf-8'

# UTF-32 LE first, as it begins with the UTF-16 LE mark.
_BOMS = (
    (BOM_UTF32_LE, 'utf-32'),
    (BOM_UTF32_BE, 'utf-32'),
    (BOM_UTF8, 'utf-8-sig'),
    (BOM_UTF16_LE, 'utf-16'),
    (BOM_UTF16_BE, 'utf-16'),
)


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None,
        *,
        trim: bool = False
    ) -> None:
        """Bind to `filename`. The file may not exist yet,
        its directory MUST.

        Args:
            encoding: `None` to sniff the BOM (UTF-8 if there isn't),
                and fall back to `chardet` on decoding errors.
                Any other codec is used as is, unless the file starts
                with a BOM, which then decides.
            trim: strip surrounding whitespaces of every line.
        """
        super().__init__(filename)
        self._codec = encoding
        self._trim = trim
        self.__doc = IniDocument()

    @property
    def document(self) -> IniDocument:
        """What the last successful `read()` got. Empty before that."""
        return self.__doc

    @staticmethod
    def readstream(buf: TextIOBase, trim: bool = False) -> IniDocument:
        """Buffer a decoded stream. Blank lines take no slot at all."""
        lines: list[str] = []
        sections: list[int] = []
        seen: set[str] = set()
        while i := buf.readline():
            i = i.strip() if trim else i.rstrip('\r\n')
            if not i.strip():
                continue
            if i[0] == '[':
                if (name := section_name(i)) is None:
                    warn(f'Malformed section header "{i}", '
                         'no reader would be built for it.')
                elif name in seen:
                    warn(f'Duplicated section [{name}], '
                         'only the first one could be looked up.')
                else:
                    seen.add(name)
                sections.append(len(lines))
            lines.append(i)
        return IniDocument(lines, sections)

    @staticmethod
    def checkstream(buf: TextIOBase, trim: bool = False) -> bool:
        """Tell whether every non-blank line is a legal header or pair."""
        lineno = 0
        while i := buf.readline():
            lineno += 1
            i = i.strip() if trim else i.rstrip('\r\n')
            if not i.strip():
                continue
            if i[0] == '[' and i[-1] == ']':
                legal = ID_RULE.fullmatch(i[1:-1]) is not None
            elif '=' in i:
                legal = ID_RULE.fullmatch(i.split('=', 1)[0]) is not None
            else:
                legal = False
            if not legal:
                logger.debug('Line %d is neither header nor pair: %r',
                             lineno, i)
                return False
        return True

    @staticmethod
    def _sniff_codec(filename: str, default: str = 'utf-8-sig') -> str:
        """Codec named by the BOM, or `default` when there is none."""
        with open(filename, 'rb') as fp:
            head = fp.read(4)
        for bom, codec in _BOMS:
            if head.startswith(bom):
                return codec
        return default

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': DEFAULT_ENCODING}
        logger.warning('Failed to decode %s, retry with %s.',
                       filename, codec['encoding'])

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode(DEFAULT_ENCODING, errors='replace')
        return StringIO(buf, newline=None)

    def __consume[T](self, consumer: Callable[[TextIOBase], T]) -> T:
        if not exists(self._fn):
            raise FileNotFoundError(ENOENT, 'No such file', self._fn)
        if self._codec is not None:
            # caller's choice, though a BOM still wins.
            # let decoding errors go.
            codec = self._sniff_codec(self._fn, self._codec)
            with open(self._fn, 'r', encoding=codec) as fp:
                return consumer(fp)
        try:
            with open(self._fn, 'r',
                      encoding=self._sniff_codec(self._fn)) as fp:
                return consumer(fp)
        except UnicodeDecodeError:
            return consumer(self._decode_file(self._fn))

    def read(self) -> IniDocument:
        """(Re)load the file. The previous document is dropped,
        never merged, and kept intact if anything goes wrong.
        """
        doc = self.__consume(lambda fp: self.readstream(fp, self._trim))
        logger.debug('Loaded %s: %d lines, %d sections.',
                     self._fn, len(doc), len(doc.sections))
        self.__doc = doc
        return doc

    def is_valid_file(self) -> bool:
        """Stream through the file without keeping anything.

        Stops at the first illegal line. An empty file is valid.
        """
        return self.__consume(lambda fp: self.checkstream(fp, self._trim))

    @classmethod
    def check_file(
        cls, filename: str | PathLike[str], encoding: str | None = None
    ) -> bool:
        return cls(filename, encoding).is_valid_file()

    def write(self, instance: IniDocument, *, blank_lines: int = 1) -> None:
        """Save `instance` to the bound file,
        with `blank_lines` between sections.
        """
        with open(self._fn, 'w',
                  encoding=self._codec or DEFAULT_ENCODING) as fp:
            for n, i in enumerate(instance):
                if n and i[0] == '[':
                    fp.write('\n' * blank_lines)
                fp.write(f'{i}\n')

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f" ({self._codec})"
