"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias

from bookvert.adapters.cbz import CbzArchiveBuilder, SeriesMetadata
from bookvert.adapters.filesystem import FilesystemScanner
from bookvert.config import ConversionConfig, get_conversion_config
from bookvert.domain.pipeline import resolve_books

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from bookvert.domain.context import RunContext
    from bookvert.domain.pipeline import ResolutionResult
    from bookvert.domain.ports import ArchiveBuilder, BuildReport, CandidateScanner, Operator

ArchiveBuilderFactory: TypeAlias = "Callable[[str], ArchiveBuilder]"

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ConversionRequest:
    """Everything one ``bookvert`` invocation asks for."""

    roots: tuple[Path, ...]
    context: RunContext
    metadata: SeriesMetadata = field(default_factory=SeriesMetadata)
    force: bool = False
    dry_run: bool = False


@dataclass(slots=True)
class ConversionResult:
    resolution: ResolutionResult
    reports: list[BuildReport]


def convert_books(
    request: ConversionRequest,
    *,
    scanner: CandidateScanner | None = None,
    operator: Operator | None = None,
    builder_factory: ArchiveBuilderFactory | None = None,
    config: ConversionConfig | None = None,
) -> ConversionResult:
    """Scan, resolve and archive books using the configured adapters."""

    effective_config = config or get_conversion_config()
    effective_scanner = scanner or FilesystemScanner()
    log.info(
        "Starting conversion: roots=%s, rules=%d, interactive=%s, dry_run=%s",
        ", ".join(str(root) for root in request.roots),
        len(request.context.rules),
        request.context.interactive,
        request.dry_run,
    )

    candidates = effective_scanner(request.roots)
    resolution = resolve_books(candidates, context=request.context, operator=operator)

    if builder_factory is not None:
        builder = builder_factory(resolution.title)
    else:
        builder = CbzArchiveBuilder(
            title=resolution.title,
            config=effective_config,
            metadata=request.metadata,
            force=request.force,
            dry_run=request.dry_run,
        )

    reports: list[BuildReport] = []
    for job in resolution.jobs:
        log.info("[from] %s: %s", job.catalogue.label, job.source_path)
        report = builder(job)
        log.info("  [%s] %s (%d bytes)", report.outcome, report.target, report.size)
        reports.append(report)

    log.info("Finished conversion: %d archive(s) processed", len(reports))
    return ConversionResult(resolution=resolution, reports=reports)


__all__ = ["ArchiveBuilderFactory", "ConversionRequest", "ConversionResult", "convert_books"]
