"""Candidate and catalogue value objects."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias

Identity: TypeAlias = tuple[int, ...]

_DIGIT_RUN = re.compile(r"[0-9]+")


def extract_identity(raw_name: str) -> Identity:
    """Return every run of decimal digits in ``raw_name`` as integers, in order.

    ``"Vol02-Ch10"`` yields ``(2, 10)``; a name without digits yields ``()``.
    """

    return tuple(int(run) for run in _DIGIT_RUN.findall(raw_name))


@dataclass(frozen=True, slots=True)
class UnnumberedKey:
    """Catalogue key for a candidate whose name carries no digits."""

    path: Path


CatalogueKey: TypeAlias = Identity | UnnumberedKey


@dataclass(frozen=True, slots=True, kw_only=True)
class Candidate:
    """A scanned directory that may become a book."""

    path: Path
    raw_name: str
    page_count: int
    byte_size: int = 0
    lexical_rank: int | None = None
    identity: Identity = field(init=False)

    def __post_init__(self) -> None:
        if self.page_count < 0:
            raise ValueError(f"Negative page count for {self.path}")
        object.__setattr__(self, "identity", extract_identity(self.raw_name))

    @classmethod
    def from_path(cls, path: Path, *, page_count: int, byte_size: int = 0) -> Candidate:
        return cls(path=path, raw_name=path.name, page_count=page_count, byte_size=byte_size)

    @property
    def catalogue_key(self) -> CatalogueKey:
        if self.identity:
            return self.identity
        return UnnumberedKey(path=self.path)

    def sort_key(self) -> tuple[str, str]:
        return self.raw_name, str(self.path)


@dataclass(frozen=True, slots=True, kw_only=True)
class Catalogue:
    """All candidates sharing one identity, ordered by lexical rank."""

    key: CatalogueKey
    members: tuple[Candidate, ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise ValueError("Catalogue must include at least one candidate")

    @property
    def identity(self) -> Identity:
        if isinstance(self.key, UnnumberedKey):
            return ()
        return self.key

    @property
    def number(self) -> int | None:
        """Leading identity component, the number pick rules match against."""
        identity = self.identity
        return identity[0] if identity else None

    @property
    def is_ambiguous(self) -> bool:
        return len(self.members) > 1

    @property
    def label(self) -> str:
        if isinstance(self.key, UnnumberedKey):
            return self.members[0].raw_name
        return "-".join(f"{component:03}" for component in self.key)


__all__ = [
    "Candidate",
    "Catalogue",
    "CatalogueKey",
    "Identity",
    "UnnumberedKey",
    "extract_identity",
]
