"""Port for turning archive jobs into container files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from bookvert.domain.resolution import ArchiveJob


class BuildOutcome(StrEnum):
    WRITTEN = "written"
    DRY_RUN = "dry_run"
    EXISTS = "exists"


@dataclass(frozen=True, slots=True)
class BuildReport:
    """What the builder did for one job."""

    job: ArchiveJob
    target: Path
    outcome: BuildOutcome
    size: int = 0


@runtime_checkable
class ArchiveBuilder(Protocol):
    def __call__(self, job: ArchiveJob) -> BuildReport: ...


__all__ = ["ArchiveBuilder", "BuildOutcome", "BuildReport"]
