"""Interactive disambiguation of unresolved catalogues.

The protocol is an explicit state machine driven through the ``Operator``
port, one catalogue at a time:

- LIST_CATALOGUES shows pending catalogues, or FINISHED when none are left
- SELECT_CATALOGUE takes a pending catalogue, or ABORTED
- SELECT_CANDIDATE takes a member (CONFIRMED), cancels back to the listing,
  or ABORTED
- CONFIRMED records the choice and returns to the listing

Aborting leaves every pending catalogue unresolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .ports.interaction import OperatorSignal
from .resolution import SelectedResolution, UnresolvedResolution

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import Catalogue
    from .ports.interaction import Operator, OperatorChoice
    from .resolution import Resolution

log = getLogger(__name__)


class ProtocolState(StrEnum):
    LIST_CATALOGUES = "list_catalogues"
    SELECT_CATALOGUE = "select_catalogue"
    SELECT_CANDIDATE = "select_candidate"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"
    FINISHED = "finished"


_TERMINAL_STATES = frozenset({ProtocolState.ABORTED, ProtocolState.FINISHED})


@dataclass(frozen=True, slots=True)
class InteractiveOutcome:
    """Resolutions after the session, in their original order."""

    resolutions: tuple[Resolution, ...]
    aborted: bool

    @property
    def pending(self) -> tuple[UnresolvedResolution, ...]:
        return tuple(
            resolution
            for resolution in self.resolutions
            if isinstance(resolution, UnresolvedResolution)
        )


@dataclass(slots=True)
class InteractiveSession:
    """One run of the disambiguation protocol over ``resolutions``."""

    operator: Operator
    resolutions: list[Resolution]
    state: ProtocolState = ProtocolState.LIST_CATALOGUES
    _current: int | None = field(default=None, repr=False)
    _choice: int | None = field(default=None, repr=False)

    def run(self) -> InteractiveOutcome:
        while self.state not in _TERMINAL_STATES:
            self.step()
        return InteractiveOutcome(
            resolutions=tuple(self.resolutions),
            aborted=self.state is ProtocolState.ABORTED,
        )

    def step(self) -> ProtocolState:
        """Advance the machine by one transition and return the new state."""

        previous = self.state
        if self.state is ProtocolState.LIST_CATALOGUES:
            self._list_catalogues()
        elif self.state is ProtocolState.SELECT_CATALOGUE:
            self._select_catalogue()
        elif self.state is ProtocolState.SELECT_CANDIDATE:
            self._select_candidate()
        elif self.state is ProtocolState.CONFIRMED:
            self._confirm()
        log.debug("Interactive protocol: %s -> %s", previous, self.state)
        return self.state

    def pending_positions(self) -> list[int]:
        return [
            position
            for position, resolution in enumerate(self.resolutions)
            if isinstance(resolution, UnresolvedResolution)
        ]

    def _pending_catalogues(self) -> list[Catalogue]:
        return [self.resolutions[position].catalogue for position in self.pending_positions()]

    def _list_catalogues(self) -> None:
        pending = self._pending_catalogues()
        if not pending:
            self.state = ProtocolState.FINISHED
            return
        self.operator.show_catalogues(pending)
        self.state = ProtocolState.SELECT_CATALOGUE

    def _select_catalogue(self) -> None:
        positions = self.pending_positions()
        pending = [self.resolutions[position].catalogue for position in positions]
        choice = self.operator.choose_catalogue(pending)
        if isinstance(choice, OperatorSignal):
            self._abort()
            return
        if not _in_range(choice, len(pending)):
            log.warning("Catalogue choice %s out of range (1-%d)", choice, len(pending))
            return
        self._current = positions[choice]
        self.state = ProtocolState.SELECT_CANDIDATE

    def _select_candidate(self) -> None:
        catalogue = self._current_catalogue()
        choice: OperatorChoice = self.operator.choose_candidate(catalogue)
        if choice is OperatorSignal.ABORT:
            self._abort()
            return
        if choice is OperatorSignal.CANCEL:
            self._current = None
            self.state = ProtocolState.LIST_CATALOGUES
            return
        if not _in_range(choice, len(catalogue.members)):
            log.warning(
                "Candidate choice %s out of range for catalogue %s", choice, catalogue.label
            )
            return
        self._choice = int(choice)
        self.state = ProtocolState.CONFIRMED

    def _confirm(self) -> None:
        if self._current is None or self._choice is None:
            raise RuntimeError("Interactive protocol confirmed without a selection")
        catalogue = self._current_catalogue()
        candidate = catalogue.members[self._choice]
        self.resolutions[self._current] = SelectedResolution(
            catalogue=catalogue,
            candidate=candidate,
            reason="operator_choice",
        )
        log.info("Catalogue %s: picked %s", catalogue.label, candidate.raw_name)
        self._current = None
        self._choice = None
        self.state = ProtocolState.LIST_CATALOGUES

    def _abort(self) -> None:
        for position in self.pending_positions():
            self.resolutions[position] = UnresolvedResolution(
                catalogue=self.resolutions[position].catalogue,
                reason="operator_aborted",
            )
        self._current = None
        self._choice = None
        self.state = ProtocolState.ABORTED

    def _current_catalogue(self) -> Catalogue:
        if self._current is None:
            raise RuntimeError("No catalogue selected")
        return self.resolutions[self._current].catalogue


def _in_range(choice: int, size: int) -> bool:
    return 0 <= choice < size


def resolve_interactively(
    resolutions: Sequence[Resolution],
    operator: Operator,
) -> InteractiveOutcome:
    """Let ``operator`` pick candidates for every unresolved catalogue."""

    session = InteractiveSession(operator=operator, resolutions=list(resolutions))
    return session.run()


__all__ = [
    "InteractiveOutcome",
    "InteractiveSession",
    "ProtocolState",
    "resolve_interactively",
]
