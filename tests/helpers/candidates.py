"""Factories for candidates and catalogues."""

from __future__ import annotations

from pathlib import Path

from bookvert.domain.grouping import group_catalogues
from bookvert.domain.model import Candidate, Catalogue


def make_candidate(
    raw_name: str,
    *,
    page_count: int = 10,
    byte_size: int = 0,
    parent: str = "/scans",
) -> Candidate:
    return Candidate(
        path=Path(parent) / raw_name,
        raw_name=raw_name,
        page_count=page_count,
        byte_size=byte_size,
    )


def make_catalogues(*candidates: Candidate) -> list[Catalogue]:
    return list(group_catalogues(candidates).values())


def make_catalogue(*names: str, page_counts: tuple[int, ...] | None = None) -> Catalogue:
    counts = page_counts or tuple(10 for _ in names)
    catalogues = make_catalogues(
        *(make_candidate(name, page_count=count) for name, count in zip(names, counts, strict=True))
    )
    if len(catalogues) != 1:
        raise ValueError(f"Names do not share one identity: {names}")
    return catalogues[0]
