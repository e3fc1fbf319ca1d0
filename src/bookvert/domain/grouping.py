"""Partition scanned candidates into catalogues."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from .model import Catalogue

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from .model import Candidate, CatalogueKey
    from .picking.rules import NumberSelector

log = getLogger(__name__)


def group_catalogues(candidates: Iterable[Candidate]) -> dict[CatalogueKey, Catalogue]:
    """Group candidates by identity.

    Catalogues are listed in the order their identity is first encountered.
    Members are ordered by ``raw_name`` (then path) and receive their
    ``lexical_rank`` from that order.
    """

    seen_paths: set[Path] = set()
    members_by_key: dict[CatalogueKey, list[Candidate]] = {}
    for candidate in candidates:
        if candidate.path in seen_paths:
            raise ValueError(f"Duplicate candidate path: {candidate.path}")
        seen_paths.add(candidate.path)
        members_by_key.setdefault(candidate.catalogue_key, []).append(candidate)

    catalogues: dict[CatalogueKey, Catalogue] = {}
    for key, members in members_by_key.items():
        ordered = sorted(members, key=lambda candidate: candidate.sort_key())
        ranked = tuple(
            replace(candidate, lexical_rank=rank) for rank, candidate in enumerate(ordered)
        )
        catalogues[key] = Catalogue(key=key, members=ranked)

    log.debug(
        "Grouped %d candidate(s) into %d catalogue(s)", len(seen_paths), len(catalogues)
    )
    return catalogues


def filter_catalogues(
    catalogues: Iterable[Catalogue],
    include: Sequence[NumberSelector],
) -> tuple[Catalogue, ...]:
    """Keep catalogues whose number matches any ``include`` selector.

    An empty ``include`` keeps everything.
    """

    if not include:
        return tuple(catalogues)

    kept: list[Catalogue] = []
    for catalogue in catalogues:
        if any(selector.matches(catalogue.number) for selector in include):
            kept.append(catalogue)
            continue
        log.info("Excluding catalogue %s (not in --include)", catalogue.label)
    return tuple(kept)
