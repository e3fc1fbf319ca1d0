"""Public interface for the CBZ archive adapter."""

from __future__ import annotations

from .schema import ComicInfo, Manga, SeriesMetadata
from .writer import COMIC_INFO_NAME, ArchiveBuildError, CbzArchiveBuilder

__all__ = [
    "COMIC_INFO_NAME",
    "ArchiveBuildError",
    "CbzArchiveBuilder",
    "ComicInfo",
    "Manga",
    "SeriesMetadata",
]
