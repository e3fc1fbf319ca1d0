"""Per-catalogue resolution outcomes.

Every catalogue ends in exactly one of these variants. They are created once
and never mutated; the interactive protocol replaces an unresolved entry with
a new selected one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

    from .model import Candidate, Catalogue
    from .picking.rules import PickRule


class ResolutionStatus(StrEnum):
    SELECTED = "selected"
    UNRESOLVED = "unresolved"
    FAILED = "failed"


class FailureReason(StrEnum):
    """Why a matching rule could not pick a candidate."""

    INDEX_OUT_OF_RANGE = "index_out_of_range"
    NO_PATTERN_MATCH = "no_pattern_match"


@dataclass(frozen=True, slots=True, kw_only=True)
class SelectedResolution:
    """Catalogue resolved to one candidate."""

    catalogue: Catalogue
    candidate: Candidate
    rule: PickRule | None = None
    reason: str | None = None
    status: Literal[ResolutionStatus.SELECTED] = ResolutionStatus.SELECTED


@dataclass(frozen=True, slots=True, kw_only=True)
class UnresolvedResolution:
    """No rule applied and no operator picked a candidate."""

    catalogue: Catalogue
    reason: str | None = None
    status: Literal[ResolutionStatus.UNRESOLVED] = ResolutionStatus.UNRESOLVED


@dataclass(frozen=True, slots=True, kw_only=True)
class FailedResolution:
    """A rule matched the catalogue but its target found nothing."""

    catalogue: Catalogue
    rule: PickRule
    failure: FailureReason
    reason: str | None = None
    status: Literal[ResolutionStatus.FAILED] = ResolutionStatus.FAILED


Resolution: TypeAlias = SelectedResolution | UnresolvedResolution | FailedResolution


@dataclass(frozen=True, slots=True, kw_only=True)
class ArchiveJob:
    """A selected candidate paired with the base name of its output archive."""

    catalogue: Catalogue
    candidate: Candidate
    output_name: str

    @property
    def source_path(self) -> Path:
        return self.candidate.path


__all__ = [
    "ArchiveJob",
    "FailedResolution",
    "FailureReason",
    "Resolution",
    "ResolutionStatus",
    "SelectedResolution",
    "UnresolvedResolution",
]
