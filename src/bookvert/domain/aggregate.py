"""Turn per-catalogue resolutions into archive jobs."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .errors import NamingCollisionError, ResolutionFailedError, UnresolvedCataloguesError
from .resolution import ArchiveJob, FailedResolution, SelectedResolution, UnresolvedResolution

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .errors import ResolutionError
    from .model import Catalogue
    from .resolution import Resolution

log = getLogger(__name__)


def output_name(title: str, catalogue: Catalogue, *, number_width: int = 0) -> str:
    """``title`` followed by the catalogue number, zero-filled to ``number_width``."""

    number = catalogue.number
    if number is None:
        return title
    return f"{title}{number:0{number_width}d}" if number_width else f"{title}{number}"


def aggregate_resolutions(
    resolutions: Sequence[Resolution],
    *,
    title: str,
    number_width: int = 0,
    problems: Sequence[ResolutionError] = (),
) -> tuple[ArchiveJob, ...]:
    """Build archive jobs, raising once with every problem found.

    Unresolved and failed catalogues are reported through
    ``UnresolvedCataloguesError``, duplicate output names through
    ``NamingCollisionError``. ``problems`` found by earlier stages are
    reported first. More than one problem raises ``ResolutionFailedError``.
    """

    jobs: list[ArchiveJob] = []
    issues: list[UnresolvedResolution | FailedResolution] = []
    labels_by_name: dict[str, list[str]] = {}

    for resolution in resolutions:
        if not isinstance(resolution, SelectedResolution):
            issues.append(resolution)
            continue
        name = output_name(title, resolution.catalogue, number_width=number_width)
        labels_by_name.setdefault(name, []).append(resolution.catalogue.label)
        jobs.append(
            ArchiveJob(
                catalogue=resolution.catalogue,
                candidate=resolution.candidate,
                output_name=name,
            )
        )

    errors: list[ResolutionError] = list(problems)
    if issues:
        errors.append(UnresolvedCataloguesError(issues))
    collisions = {
        name: tuple(labels) for name, labels in labels_by_name.items() if len(labels) > 1
    }
    if collisions:
        errors.append(NamingCollisionError(collisions))

    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise ResolutionFailedError(errors)

    log.debug("Aggregated %d archive job(s)", len(jobs))
    return tuple(jobs)


__all__ = ["aggregate_resolutions", "output_name"]
