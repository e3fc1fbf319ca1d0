"""Resolution pipeline from scanned candidates to archive jobs.

Stages run strictly in order:
1) group candidates into catalogues
2) drop catalogues outside the include filter
3) resolve every catalogue against the pick rules
4) hand unresolved catalogues to the operator (interactive runs only)
5) settle the base title
6) aggregate into archive jobs, reporting a missing title with the other problems
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .aggregate import aggregate_resolutions
from .errors import MissingTitleError, ResolutionCancelledError
from .grouping import filter_catalogues, group_catalogues
from .interactive import resolve_interactively
from .picking import resolve_catalogues
from .resolution import UnresolvedResolution

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .context import RunContext
    from .errors import ResolutionError
    from .model import Candidate
    from .ports.interaction import Operator
    from .resolution import ArchiveJob, Resolution

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    title: str
    resolutions: tuple[Resolution, ...]
    jobs: tuple[ArchiveJob, ...]


def resolve_books(
    candidates: Iterable[Candidate],
    *,
    context: RunContext,
    operator: Operator | None = None,
) -> ResolutionResult:
    """Run every resolution stage for one conversion."""

    candidates = list(candidates)
    catalogues = group_catalogues(candidates)
    selected = filter_catalogues(catalogues.values(), context.include)
    resolutions = resolve_catalogues(selected, context.rules)
    log.info(
        "Found %d catalogue(s) from %d candidate(s), %d need a choice",
        len(selected),
        len(candidates),
        sum(isinstance(resolution, UnresolvedResolution) for resolution in resolutions),
    )

    interactive = context.interactive and operator is not None
    if interactive and any(isinstance(r, UnresolvedResolution) for r in resolutions):
        outcome = resolve_interactively(resolutions, operator)
        if outcome.aborted:
            raise ResolutionCancelledError(outcome.pending)
        resolutions = outcome.resolutions
    elif not interactive:
        resolutions = tuple(_mark_noninteractive(resolution) for resolution in resolutions)

    problems: list[ResolutionError] = []
    try:
        title = resolve_title(
            candidates, context=context, operator=operator if interactive else None
        )
    except MissingTitleError as exc:
        problems.append(exc)
        title = ""
    jobs = aggregate_resolutions(
        resolutions, title=title, number_width=context.number_width, problems=problems
    )
    return ResolutionResult(title=title, resolutions=resolutions, jobs=jobs)


def resolve_title(
    candidates: Sequence[Candidate],
    *,
    context: RunContext,
    operator: Operator | None = None,
) -> str:
    """Pick the base title: explicit, then a single shared name, then the operator."""

    if context.title:
        return context.title

    suggestions = sorted({candidate.raw_name for candidate in candidates})
    if len(suggestions) == 1:
        log.info("Using %r as the series name", suggestions[0])
        return suggestions[0]

    if operator is not None:
        chosen = operator.choose_title(suggestions)
        if chosen and chosen.strip():
            return chosen.strip()

    raise MissingTitleError(suggestions)


def _mark_noninteractive(resolution: Resolution) -> Resolution:
    if isinstance(resolution, UnresolvedResolution):
        return UnresolvedResolution(catalogue=resolution.catalogue, reason="interactive_disabled")
    return resolution


__all__ = ["ResolutionResult", "resolve_books", "resolve_title"]
