"""Explicit per-run settings threaded through grouping, resolution and naming."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .picking import parse_number_selector, parse_pick_rules

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .picking import NumberSelector, PickRule


@dataclass(frozen=True, slots=True, kw_only=True)
class RunContext:
    title: str | None = None
    rules: tuple[PickRule, ...] = ()
    interactive: bool = True
    include: tuple[NumberSelector, ...] = ()
    number_width: int = 0

    def __post_init__(self) -> None:
        if self.number_width < 0:
            raise ValueError("Number width must be non-negative")

    @classmethod
    def from_arguments(
        cls,
        *,
        title: str | None = None,
        picks: Sequence[str] = (),
        interactive: bool = True,
        include: Sequence[str] = (),
        number_width: int = 0,
    ) -> RunContext:
        """Compile raw CLI values; raises ``PolicySyntaxError`` on bad selectors."""

        stripped = title.strip() if title else None
        return cls(
            title=stripped or None,
            rules=parse_pick_rules(picks),
            interactive=interactive,
            include=tuple(parse_number_selector(value) for value in include),
            number_width=number_width,
        )


__all__ = ["RunContext"]
