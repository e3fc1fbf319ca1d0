"""Write selected books as stored (uncompressed) CBZ archives."""

from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from bookvert.adapters.filesystem import list_pages, page_extension
from bookvert.config import ConversionConfig
from bookvert.domain.errors import BookvertError
from bookvert.domain.ports.archiving import BuildOutcome, BuildReport

from .schema import ComicInfo, SeriesMetadata

if TYPE_CHECKING:
    from pathlib import Path

    from bookvert.domain.resolution import ArchiveJob

log = getLogger(__name__)

COMIC_INFO_NAME = "ComicInfo.xml"
_PERMISSIONS = 0o755


class ArchiveBuildError(BookvertError):
    """Raised when an archive cannot be assembled or written."""

    def __init__(self, target: Path, message: str) -> None:
        self.target = target
        super().__init__(f"{target}: {message}")


@dataclass(slots=True)
class CbzArchiveBuilder:
    """Archive builder port implementation writing ``<name>.cbz`` files."""

    title: str
    config: ConversionConfig = field(default_factory=ConversionConfig)
    metadata: SeriesMetadata = field(default_factory=SeriesMetadata)
    force: bool = False
    dry_run: bool = False

    def __call__(self, job: ArchiveJob) -> BuildReport:
        target = self.config.target_path(job.output_name)
        if target.exists() and not self.force:
            log.warning("%s already exists (--force to overwrite)", target)
            return BuildReport(job=job, target=target, outcome=BuildOutcome.EXISTS)

        payload = self.render(job)
        if self.dry_run:
            return BuildReport(
                job=job, target=target, outcome=BuildOutcome.DRY_RUN, size=len(payload)
            )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
        except OSError as exc:
            raise ArchiveBuildError(target, f"Failed to write archive: {exc}") from exc
        return BuildReport(job=job, target=target, outcome=BuildOutcome.WRITTEN, size=len(payload))

    def render(self, job: ArchiveJob) -> bytes:
        """Assemble the archive in memory: ComicInfo.xml first, then ``pNNN`` pages."""

        try:
            pages = list_pages(job.source_path)
        except OSError as exc:
            raise ArchiveBuildError(job.source_path, f"Failed to list pages: {exc}") from exc

        info = ComicInfo.for_book(
            title=self.title,
            number=job.catalogue.number,
            page_count=len(pages),
            metadata=self.metadata,
        )

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
            _write_entry(archive, COMIC_INFO_NAME, info.to_xml().encode())
            for index, page in enumerate(pages):
                try:
                    content = page.read_bytes()
                except OSError as exc:
                    raise ArchiveBuildError(page, f"Failed to read page: {exc}") from exc
                _write_entry(archive, f"p{index:03}.{page_extension(page)}", content)
        return buffer.getvalue()


def _write_entry(archive: zipfile.ZipFile, name: str, content: bytes) -> None:
    entry = zipfile.ZipInfo(name)
    entry.compress_type = zipfile.ZIP_STORED
    entry.external_attr = (0o100000 | _PERMISSIONS) << 16
    archive.writestr(entry, content)


__all__ = ["COMIC_INFO_NAME", "ArchiveBuildError", "CbzArchiveBuilder"]
