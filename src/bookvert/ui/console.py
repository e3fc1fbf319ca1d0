# ruff: noqa: T201

"""Line-based console operator for the interactive protocol."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from bookvert.domain.ports.interaction import OperatorSignal

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from bookvert.domain.model import Catalogue
    from bookvert.domain.ports.interaction import OperatorChoice

_ABORT_WORDS = frozenset({"q", "quit", "x", "exit"})
_CANCEL_WORDS = frozenset({"b", "back", "c", "cancel"})


def _pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


@dataclass(slots=True)
class ConsoleOperator:
    """Prompt on a text stream; choices are entered 1-based."""

    read: Callable[[str], str] = input
    out: TextIO = field(default_factory=lambda: sys.stdout)

    def show_catalogues(self, pending: Sequence[Catalogue]) -> None:
        print(f"{len(pending)} catalogue(s) need a choice:", file=self.out)
        for position, catalogue in enumerate(pending, start=1):
            count = len(catalogue.members)
            print(
                f"  {position}. {catalogue.label} "
                f"({count} {_pluralize(count, 'book', 'books')})",
                file=self.out,
            )

    def choose_catalogue(self, pending: Sequence[Catalogue]) -> OperatorChoice:
        return self._prompt(f"Catalogue [1-{len(pending)}, q to quit]: ", allow_cancel=False)

    def choose_candidate(self, catalogue: Catalogue) -> OperatorChoice:
        print(f"Catalogue {catalogue.label} - select book:", file=self.out)
        for rank, candidate in enumerate(catalogue.members, start=1):
            print(f"  {rank}. {candidate.raw_name}", file=self.out)
            print(f"       pages: {candidate.page_count}", file=self.out)
            print(f"       bytes: {candidate.byte_size}", file=self.out)
            print(f"       from {candidate.path.parent}", file=self.out)
        return self._prompt(
            f"Book [1-{len(catalogue.members)}, b to go back, q to quit]: ", allow_cancel=True
        )

    def choose_title(self, suggestions: Sequence[str]) -> str | None:
        print("Set the series name:", file=self.out)
        for position, name in enumerate(suggestions, start=1):
            print(f"  {position}. {name}", file=self.out)
        answer = self._read("Name (number or custom text, empty to skip): ")
        if answer is None or not answer:
            return None
        if answer.isdecimal() and 1 <= int(answer) <= len(suggestions):
            return suggestions[int(answer) - 1]
        return answer

    def _prompt(self, prompt: str, *, allow_cancel: bool) -> OperatorChoice:
        while True:
            answer = self._read(prompt)
            if answer is None or answer.lower() in _ABORT_WORDS:
                return OperatorSignal.ABORT
            if allow_cancel and answer.lower() in _CANCEL_WORDS:
                return OperatorSignal.CANCEL
            if answer.isdecimal():
                return int(answer) - 1
            print(f"Not a choice: {answer!r}", file=self.out)

    def _read(self, prompt: str) -> str | None:
        try:
            return self.read(prompt).strip()
        except EOFError:
            return None


__all__ = ["ConsoleOperator"]
