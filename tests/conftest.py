from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def write_book(tmp_path: Path) -> Callable[..., Path]:
    """Create ``tmp_path/<name>`` holding the given page files."""

    def _write(name: str, *pages: str, content: bytes = b"img") -> Path:
        directory = tmp_path / "scans" / name
        directory.mkdir(parents=True, exist_ok=True)
        for page in pages:
            (directory / page).write_bytes(content)
        return directory

    return _write
