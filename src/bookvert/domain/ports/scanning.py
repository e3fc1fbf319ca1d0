"""Port for discovering book candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from bookvert.domain.model import Candidate


@runtime_checkable
class CandidateScanner(Protocol):
    """Callable port returning candidates in a deterministic order."""

    def __call__(self, roots: Sequence[Path]) -> list[Candidate]: ...


__all__ = ["CandidateScanner"]
