"""Parse ``[from=]to`` pick selectors into rules.

Grammar::

    from ::= N | N..M | N..=M | N.. | ..M | ..=M | ..
    to   ::= "first" | "last" | "most-pages" | "largest" | "smallest" | INDEX | REGEX

The split between ``from`` and ``to`` happens at the last ``=``, so a pattern
cannot itself contain ``=``. Several selectors may be given in one argument,
separated by commas.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bookvert.domain.errors import PolicySyntaxError

from .rules import (
    AllNumbers,
    ExactNumber,
    IndexTarget,
    KeywordTarget,
    NumberRange,
    PatternTarget,
    PickRule,
    TargetKind,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .rules import NumberSelector, PickTarget

_INTEGER = re.compile(r"[0-9]+")
_KEYWORDS = {kind.value: kind for kind in TargetKind}


def parse_pick_rules(arguments: Iterable[str]) -> tuple[PickRule, ...]:
    """Compile every selector in ``arguments``, preserving declaration order.

    Raises ``PolicySyntaxError`` on the first malformed selector; no partial
    result is returned.
    """

    rules: list[PickRule] = []
    for argument in arguments:
        for entry in argument.split(","):
            rules.append(parse_pick_rule(entry, position=len(rules)))
    return tuple(rules)


def parse_pick_rule(entry: str, *, position: int = 0) -> PickRule:
    text = entry.strip()
    if not text:
        raise PolicySyntaxError(entry=entry, token=entry, reason="empty rule")

    source_text, separator, target_text = text.rpartition("=")
    if not separator:
        source: NumberSelector = AllNumbers()
    else:
        source = _parse_selector(source_text, entry=entry)
    target = _parse_target(target_text, entry=entry)
    return PickRule(source=source, target=target, position=position)


def parse_number_selector(text: str) -> NumberSelector:
    """Parse the ``from`` half of a selector on its own (used by ``--include``)."""

    return _parse_selector(text, entry=text)


def _parse_selector(text: str, *, entry: str) -> NumberSelector:
    text = text.strip()
    if not text:
        return AllNumbers()

    if "..=" in text:
        start_text, _, stop_text = text.partition("..=")
        start = _parse_bound(start_text, entry=entry, default=0)
        stop = _parse_integer(stop_text, entry=entry)
        if stop < start:
            raise PolicySyntaxError(entry=entry, token=text, reason="inverted range")
        return NumberRange(start=start, stop=stop, inclusive=True)

    if ".." in text:
        start_text, _, stop_text = text.partition("..")
        if not start_text.strip() and not stop_text.strip():
            return AllNumbers()
        start = _parse_bound(start_text, entry=entry, default=0)
        if not stop_text.strip():
            return NumberRange(start=start)
        stop = _parse_integer(stop_text, entry=entry)
        if stop < start:
            raise PolicySyntaxError(entry=entry, token=text, reason="inverted range")
        if stop == start:
            raise PolicySyntaxError(entry=entry, token=text, reason="empty range")
        return NumberRange(start=start, stop=stop)

    return ExactNumber(_parse_integer(text, entry=entry))


def _parse_bound(text: str, *, entry: str, default: int) -> int:
    if not text.strip():
        return default
    return _parse_integer(text, entry=entry)


def _parse_integer(text: str, *, entry: str) -> int:
    token = text.strip()
    if not _INTEGER.fullmatch(token):
        raise PolicySyntaxError(entry=entry, token=token, reason="bad integer")
    return int(token)


def _parse_target(text: str, *, entry: str) -> PickTarget:
    token = text.strip()
    if not token:
        raise PolicySyntaxError(entry=entry, token=text, reason="empty pattern")

    if token in _KEYWORDS:
        return KeywordTarget(_KEYWORDS[token])

    if _INTEGER.fullmatch(token):
        return IndexTarget(int(token))

    flags = 0 if any(char.isupper() for char in token) else re.IGNORECASE
    try:
        compiled = re.compile(token, flags)
    except re.error as exc:
        raise PolicySyntaxError(
            entry=entry, token=token, reason=f"invalid regular expression: {exc}"
        ) from exc
    return PatternTarget(compiled)


__all__ = ["parse_number_selector", "parse_pick_rule", "parse_pick_rules"]
