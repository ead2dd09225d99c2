# -*- encoding: utf-8 -*-
# @File   : reader.py
# @Time   : 2024/10/13 16:05:44
# @Author : Kariko Lin

"""Whole-file readers: one section reader per `[header]`, in file order.

Which reader class serves which section is a plain table,
looked up once per header when the file gets loaded:

    ```python
    class JobsConfig(DynamicIniReader):
        SECTION_FACTORIES = {
            'General': GeneralSection,
            regex(r'Job[0-9]+'): JobSection,
        }
        MANDATORY_SECTIONS = ('General',)
        STATIC_SECTIONS = ('General',)
    ```

Any callable taking `(document, section_name)` would do as a factory,
reader classes themselves included.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from os import PathLike
from re import Pattern
from warnings import warn

from ..abstract import Validatable, ValidationRecord
from ..ini.model import IniDocument
from ..ini.parser import IniParser
from .section import GenericSection, IniSectionReader

logger = logging.getLogger(__name__)

type SectionFactory = Callable[[IniDocument, str], IniSectionReader]

MESSAGE_SECTION_MANDATORY_MISSING = 'The mandatory section {} was not found'


class IniReader(Validatable):
    SECTION_FACTORIES: Mapping[str | Pattern[str], SectionFactory] = {}
    DEFAULT_FACTORY: SectionFactory | None = GenericSection
    MANDATORY_SECTIONS: Sequence[str] = ()

    def __init__(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None,
        *,
        factories: Mapping[str | Pattern[str], SectionFactory] | None = None,
        default_factory: SectionFactory | None = None,
        mandatory_sections: Iterable[str] | None = None,
        trim: bool = False
    ) -> None:
        """Bind to `filename`, whose directory must already exist.
        Nothing is read until `load_file()`.

        Keyword arguments left as `None` fall back to the class attributes.
        """
        self._parser = IniParser(filename, encoding, trim=trim)
        self.__factories = dict(
            self.SECTION_FACTORIES if factories is None else factories)
        self.__default = (
            self.DEFAULT_FACTORY if default_factory is None
            else default_factory)
        self.__mandatory = tuple(
            self.MANDATORY_SECTIONS if mandatory_sections is None
            else mandatory_sections)
        self._sections: tuple[IniSectionReader, ...] = ()

    @property
    def filename(self) -> str:
        return self._parser.filename

    @property
    def document(self) -> IniDocument:
        return self._parser.document

    @property
    def mandatory_sections(self) -> tuple[str, ...]:
        return self.__mandatory

    @property
    def sections(self) -> tuple[IniSectionReader, ...]:
        return self._sections

    def resolve_factory(self, section: str) -> SectionFactory:
        """Exact name first, then patterns in table order,
        then the default one.
        """
        if section in self.__factories:
            return self.__factories[section]
        for key, factory in self.__factories.items():
            if isinstance(key, Pattern) and key.fullmatch(section):
                return factory
        if self.__default is None:
            warn(f'No reader registered for [{section}], '
                 'treat it as a generic one.')
            return GenericSection
        return self.__default

    def load_file(self) -> None:
        """(Re)read the file and rebuild every section reader.

        Readers handed out before keep reading the old document.
        """
        doc = self._parser.read()
        self._sections = tuple(
            self.resolve_factory(i)(doc, i)
            for i in doc.read_section_names())
        logger.debug('%s: %d section readers built.',
                     self.filename, len(self._sections))

    def get_section_by_name(self, section: str) -> IniSectionReader | None:
        for i in self._sections:
            if i.section_name == section:
                return i
        return None

    def has_section(self, section: str) -> bool:
        return self.get_section_by_name(section) is not None

    def validate(self) -> list[ValidationRecord]:
        ret = [
            ValidationRecord(
                'MandatorySections', False,
                MESSAGE_SECTION_MANDATORY_MISSING.format(i), i)
            for i in self.__mandatory if not self.has_section(i)
        ]
        for i in self._sections:
            ret.extend(i.validate())
        return ret

    def is_valid(self) -> bool:
        return (
            all(self.has_section(i) for i in self.__mandatory)
            and all(i.is_valid() for i in self._sections))

    def __str__(self) -> str:
        return f'{type(self).__name__}: {self.filename}'


class DynamicIniReader(IniReader):
    """Also allows sections whose names are up to the user,
    e.g. one `[JobN]` per job. Those are reachable by position only.
    """
    STATIC_SECTIONS: Sequence[str] = ()

    def __init__(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None,
        *,
        static_sections: Iterable[str] | None = None,
        **kwargs
    ) -> None:
        super().__init__(filename, encoding, **kwargs)
        self.__static_names = frozenset(
            self.STATIC_SECTIONS if static_sections is None
            else static_sections)
        self._static: tuple[IniSectionReader, ...] = ()
        self._dynamic: tuple[IniSectionReader, ...] = ()

    @property
    def static_sections(self) -> tuple[IniSectionReader, ...]:
        return self._static

    @property
    def dynamic_sections(self) -> tuple[IniSectionReader, ...]:
        return self._dynamic

    @property
    def dynamic_count(self) -> int:
        return len(self._dynamic)

    def load_file(self) -> None:
        super().load_file()
        static, dynamic = [], []
        for i in self._sections:
            if i.section_name in self.__static_names:
                static.append(i)
            else:
                dynamic.append(i)
        self._static, self._dynamic = tuple(static), tuple(dynamic)

    def get_dynamic_section(self, index: int) -> IniSectionReader:
        """The `index`-th non-static section, in file order.

        Negative indexes are NOT wrapped around.
        """
        if index < 0:
            raise IndexError('index cannot be less than zero.')
        if index >= len(self._dynamic):
            raise IndexError('index is out of bounds.')
        return self._dynamic[index]
