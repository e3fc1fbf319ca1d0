"""Port between the interactive resolution protocol and a user interface."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bookvert.domain.model import Catalogue


class OperatorSignal(StrEnum):
    """Non-choice answers an operator can give."""

    CANCEL = "cancel"
    ABORT = "abort"


OperatorChoice: TypeAlias = int | OperatorSignal


@runtime_checkable
class Operator(Protocol):
    """Human (or scripted) counterpart of the interactive protocol.

    Choices are zero-based positions: into ``pending`` for catalogues and into
    ``catalogue.members`` for candidates.
    """

    def show_catalogues(self, pending: Sequence[Catalogue]) -> None: ...

    def choose_catalogue(self, pending: Sequence[Catalogue]) -> OperatorChoice: ...

    def choose_candidate(self, catalogue: Catalogue) -> OperatorChoice: ...

    def choose_title(self, suggestions: Sequence[str]) -> str | None: ...


__all__ = ["Operator", "OperatorChoice", "OperatorSignal"]
