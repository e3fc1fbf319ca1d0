"""Scripted operator fake for the interactive protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bookvert.domain.model import Catalogue
    from bookvert.domain.ports.interaction import OperatorChoice


@dataclass
class ScriptedOperator:
    """Replays canned answers and records what it was shown."""

    catalogue_choices: list[OperatorChoice] = field(default_factory=list)
    candidate_choices: list[OperatorChoice] = field(default_factory=list)
    title: str | None = None
    listings: list[list[str]] = field(default_factory=list)
    asked_candidates: list[str] = field(default_factory=list)
    title_suggestions: list[str] | None = None

    def show_catalogues(self, pending: Sequence[Catalogue]) -> None:
        self.listings.append([catalogue.label for catalogue in pending])

    def choose_catalogue(self, pending: Sequence[Catalogue]) -> OperatorChoice:
        return self.catalogue_choices.pop(0)

    def choose_candidate(self, catalogue: Catalogue) -> OperatorChoice:
        self.asked_candidates.append(catalogue.label)
        return self.candidate_choices.pop(0)

    def choose_title(self, suggestions: Sequence[str]) -> str | None:
        self.title_suggestions = list(suggestions)
        return self.title
