"""Unit tests for IniParser (loading, streaming validation, codecs, saving)."""

from __future__ import annotations

import os
from codecs import BOM_UTF8
from pathlib import Path

import pytest

from pyskini.exceptions import DirectoryNotFoundError
from pyskini.ini.model import IniDocument
from pyskini.ini.parser import IniParser


def test_none_filename_rejected() -> None:
    with pytest.raises(TypeError):
        IniParser(None)


def test_missing_directory_fails_at_construction(tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFoundError) as exc:
        IniParser(tmp_path / "nope" / "config.ini")
    assert isinstance(exc.value, FileNotFoundError)


def test_missing_file_fails_at_load_only(tmp_path: Path) -> None:
    parser = IniParser(tmp_path / "later.ini")
    with pytest.raises(FileNotFoundError):
        parser.read()
    with pytest.raises(FileNotFoundError):
        parser.is_valid_file()


def test_filename_is_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    parser = IniParser("relative.ini")
    assert os.path.isabs(parser.filename)
    assert os.path.basename(parser.filename) == "relative.ini"


def test_blank_lines_take_no_slot(write_ini) -> None:
    path = write_ini("\n[A]\na=1\n\n   \nb=2\n[B]\n\nc=3\n")
    doc = IniParser(path).read()
    assert list(doc) == ["[A]", "a=1", "b=2", "[B]", "c=3"]
    assert doc.sections == (0, 3)


def test_index_counts_every_bracket_line(write_ini) -> None:
    path = write_ini("[A]\n[B]\nx=1\n[C]\n")
    doc = IniParser(path).read()
    assert len(doc) == 4
    assert len(doc.sections) == 3


def test_document_empty_before_read(tmp_path: Path) -> None:
    parser = IniParser(tmp_path / "config.ini")
    assert len(parser.document) == 0


def test_reload_replaces_document(write_ini) -> None:
    path = write_ini("[A]\na=1\n")
    parser = IniParser(path)
    first = parser.read()
    write_ini("[B]\nb=2\n")
    second = parser.read()
    assert parser.document is second
    assert second.read_section_names() == ["B"]
    assert first.read_section_names() == ["A"]


def test_failed_reload_keeps_previous_document(write_ini) -> None:
    path = write_ini("[A]\na=1\n")
    parser = IniParser(path)
    doc = parser.read()
    path.unlink()
    with pytest.raises(FileNotFoundError):
        parser.read()
    assert parser.document is doc


def test_duplicate_section_warns(write_ini) -> None:
    path = write_ini("[Server]\nport=8080\n[Server]\nport=9090\n")
    with pytest.warns(UserWarning, match="Duplicated"):
        doc = IniParser(path).read()
    assert doc.sections == (0, 2)


def test_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "crlf.ini"
    path.write_bytes(b"[A]\r\na=1\r\n")
    doc = IniParser(path).read()
    assert doc.try_read_value("A", "a") == "1"


def test_trim_strips_lines(write_ini) -> None:
    path = write_ini("  [A]  \n  a=1 \n")
    doc = IniParser(path, trim=True).read()
    assert list(doc) == ["[A]", "a=1"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n\n",
        "[General]\nname=x\n",
        "\n[A1]\n\nkey=\n\nother=a=b\n\n[B2]\n",
        "orphan=1\n[A]\n",
    ],
)
def test_valid_files(write_ini, text: str) -> None:
    assert IniParser(write_ini(text)).is_valid_file() is True


@pytest.mark.parametrize(
    "bad",
    ["just text", "[]", "[a b]", "[Café]", "a b=1", "=1", "[A", "key_1=2"],
)
@pytest.mark.parametrize("where", ["start", "middle", "end"])
def test_one_bad_line_invalidates_file(write_ini, bad: str, where: str) -> None:
    good = ["[A]", "a=1", "[B]", "b=2"]
    lines = {
        "start": [bad] + good,
        "middle": good[:2] + [bad] + good[2:],
        "end": good + [bad],
    }[where]
    assert IniParser(write_ini("\n".join(lines) + "\n")).is_valid_file() is False


def test_check_file(write_ini) -> None:
    assert IniParser.check_file(write_ini("[A]\n")) is True
    assert IniParser.check_file(write_ini("oops\n", name="bad.ini")) is False


def test_utf8_bom_is_skipped(tmp_path: Path) -> None:
    path = tmp_path / "bom.ini"
    path.write_bytes(BOM_UTF8 + b"[A]\na=1\n")
    parser = IniParser(path)
    assert parser.is_valid_file() is True
    assert parser.read().read_section_names() == ["A"]


def test_utf16_with_bom(tmp_path: Path) -> None:
    path = tmp_path / "wide.ini"
    path.write_bytes("[A]\nname=ünï\n".encode("utf-16"))
    doc = IniParser(path).read()
    assert doc.try_read_value("A", "name") == "ünï"


def test_explicit_encoding(write_ini) -> None:
    path = write_ini("[A]\nname=café\n", encoding="latin-1")
    doc = IniParser(path, "latin-1").read()
    assert doc.try_read_value("A", "name") == "café"


def test_explicit_encoding_errors_propagate(tmp_path: Path) -> None:
    path = tmp_path / "latin.ini"
    path.write_bytes(b"[A]\nname=caf\xe9\n")
    with pytest.raises(UnicodeDecodeError):
        IniParser(path, "utf-8").read()


def test_undecodable_file_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "latin.ini"
    path.write_bytes(b"[A]\nname=caf\xe9\n")
    doc = IniParser(path).read()
    assert doc.read_section_names() == ["A"]
    assert doc.try_read_value("A", "name").startswith("caf")


def test_write_separates_sections(tmp_path: Path) -> None:
    parser = IniParser(tmp_path / "out.ini")
    parser.write(IniDocument(["top=0", "[A]", "a=1", "[B]", "b=2"]))
    assert (tmp_path / "out.ini").read_text(encoding="utf-8") == (
        "top=0\n\n[A]\na=1\n\n[B]\nb=2\n"
    )


def test_write_then_read_back(write_ini) -> None:
    path = write_ini("[A]\na=1\n")
    parser = IniParser(path)
    doc = parser.read()
    doc.write_key("A", "b", "2")
    doc.write_key("C", "c", "3")
    parser.write(doc, blank_lines=2)
    again = parser.read()
    assert list(again) == ["[A]", "a=1", "b=2", "[C]", "c=3"]


@pytest.mark.parametrize("encoding", ["utf-8", "latin-1"])
def test_bom_wins_over_given_encoding(tmp_path: Path, encoding: str) -> None:
    path = tmp_path / "bom.ini"
    path.write_bytes(BOM_UTF8 + "[A]\nname=ünï\n".encode("utf-8"))
    parser = IniParser(path, encoding)
    assert parser.is_valid_file() is True
    doc = parser.read()
    assert doc.read_section_names() == ["A"]
    assert doc.try_read_value("A", "name") == "ünï"


def test_malformed_header_warns_but_keeps_its_slot(write_ini) -> None:
    path = write_ini("[A]x\na=1\n[B]\nb=2\n")
    with pytest.warns(UserWarning, match="Malformed"):
        doc = IniParser(path).read()
    assert doc.sections == (0, 2)
    assert doc.read_section_names() == ["B"]
