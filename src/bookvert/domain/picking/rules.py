"""Compiled pick rules.

A rule pairs a number selector (which catalogues it applies to) with a
target (which member of the catalogue to pick).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TypeAlias


class Specificity(IntEnum):
    """How narrowly a number selector targets catalogues."""

    ALL = 0
    RANGE = 1
    EXACT = 2


@dataclass(frozen=True, slots=True)
class AllNumbers:
    """Matches every catalogue, including unnumbered ones."""

    specificity = Specificity.ALL

    def matches(self, number: int | None) -> bool:  # noqa: ARG002
        return True

    @property
    def width(self) -> float:
        return math.inf

    def __str__(self) -> str:
        return ".."


@dataclass(frozen=True, slots=True)
class ExactNumber:
    value: int

    specificity = Specificity.EXACT

    def matches(self, number: int | None) -> bool:
        return number is not None and number == self.value

    @property
    def width(self) -> float:
        return 1

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class NumberRange:
    """Range over catalogue numbers; ``stop=None`` means open-ended."""

    start: int = 0
    stop: int | None = None
    inclusive: bool = False

    specificity = Specificity.RANGE

    def matches(self, number: int | None) -> bool:
        if number is None or number < self.start:
            return False
        if self.stop is None:
            return True
        if self.inclusive:
            return number <= self.stop
        return number < self.stop

    @property
    def width(self) -> float:
        if self.stop is None:
            return math.inf
        return self.stop - self.start + (1 if self.inclusive else 0)

    def __str__(self) -> str:
        if self.stop is None:
            return f"{self.start}.."
        operator = "..=" if self.inclusive else ".."
        return f"{self.start}{operator}{self.stop}"


NumberSelector: TypeAlias = AllNumbers | ExactNumber | NumberRange


class TargetKind(StrEnum):
    FIRST = "first"
    LAST = "last"
    MOST_PAGES = "most-pages"
    LARGEST = "largest"
    SMALLEST = "smallest"


@dataclass(frozen=True, slots=True)
class KeywordTarget:
    """One of the named strategies (``first``, ``last``, ``most-pages``, ...)."""

    kind: TargetKind

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True, slots=True)
class IndexTarget:
    """Zero-based position in the lexically ordered member list."""

    index: int

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True, slots=True)
class PatternTarget:
    """First member whose name matches the compiled expression."""

    pattern: re.Pattern[str]

    def __str__(self) -> str:
        return self.pattern.pattern


PickTarget: TypeAlias = KeywordTarget | IndexTarget | PatternTarget


@dataclass(frozen=True, slots=True, kw_only=True)
class PickRule:
    """A compiled ``[from=]to`` selector and its declaration position."""

    source: NumberSelector
    target: PickTarget
    position: int = 0

    def applies_to(self, number: int | None) -> bool:
        return self.source.matches(number)

    def precedence(self) -> tuple[int, float, int]:
        """Sort key where larger means more specific.

        Exact beats ranges beats all; narrower ranges beat wider ones;
        later declarations break remaining ties.
        """

        return self.source.specificity, -self.source.width, self.position

    def __str__(self) -> str:
        return f"{self.source}={self.target}"


__all__ = [
    "AllNumbers",
    "ExactNumber",
    "IndexTarget",
    "KeywordTarget",
    "NumberRange",
    "NumberSelector",
    "PatternTarget",
    "PickRule",
    "PickTarget",
    "Specificity",
    "TargetKind",
]
