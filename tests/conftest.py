"""Shared fixtures for pyskini tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_ini(tmp_path: Path) -> Callable[..., Path]:
    """Write `text` to `tmp_path / name` and return the path."""

    def _write(text: str, name: str = "config.ini", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return path

    return _write
