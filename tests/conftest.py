"""Shared fixtures for version-sync tests."""

from pathlib import Path
from typing import Callable, Union

import pytest


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write text or bytes to a file under tmp_path and return its path."""

    def _write(content: Union[str, bytes], name: str = "README.md") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
