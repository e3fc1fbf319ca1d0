"""Filesystem scanner producing book candidates from image directories."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from bookvert.domain.model import Candidate

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

log = getLogger(__name__)

IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"jpg", "png", "gif", "bmp", "tif", "webp", "avif"}
)
_EXTENSION_ALIASES: Final[dict[str, str]] = {"jpeg": "jpg", "tiff": "tif"}


def page_extension(path: Path) -> str | None:
    """Normalised image extension of ``path``, or ``None`` for non-images."""

    suffix = path.suffix[1:].lower()
    if not suffix:
        return None
    suffix = _EXTENSION_ALIASES.get(suffix, suffix)
    return suffix if suffix in IMAGE_EXTENSIONS else None


def list_pages(directory: Path) -> list[Path]:
    """Image files directly inside ``directory`` in sorted order."""

    return sorted(
        entry for entry in directory.iterdir() if entry.is_file() and page_extension(entry)
    )


def compile_skip_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ValueError(f"Invalid --skip expression {pattern!r}: {exc}") from exc
    return tuple(compiled)


@dataclass(slots=True)
class FilesystemScanner:
    """Walk roots recursively; every directory holding images is a candidate."""

    skip: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    def __call__(self, roots: Sequence[Path]) -> list[Candidate]:
        pages_by_dir: dict[Path, list[Path]] = {}
        for page in sorted(self._iter_pages(roots)):
            pages_by_dir.setdefault(page.parent, []).append(page)

        candidates: list[Candidate] = []
        for directory, pages in pages_by_dir.items():
            if any(pattern.search(directory.name) for pattern in self.skip):
                log.debug("Skipping %s", directory)
                continue
            candidates.append(
                Candidate.from_path(
                    directory,
                    page_count=len(pages),
                    byte_size=sum(page.stat().st_size for page in pages),
                )
            )

        log.info("Scanned %d candidate director(ies)", len(candidates))
        return candidates

    def _iter_pages(self, roots: Sequence[Path]) -> Iterator[Path]:
        for root in roots:
            if not root.is_dir():
                raise NotADirectoryError(f"Not a directory: {root}")
            for dirpath, _dirnames, filenames in os.walk(root):
                base = Path(dirpath)
                for filename in filenames:
                    path = base / filename
                    if page_extension(path):
                        yield path


__all__ = [
    "IMAGE_EXTENSIONS",
    "FilesystemScanner",
    "compile_skip_patterns",
    "list_pages",
    "page_extension",
]
