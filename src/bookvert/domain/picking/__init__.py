"""Pick policy: selector parsing and rule-based catalogue resolution."""

from __future__ import annotations

from .parser import parse_number_selector, parse_pick_rule, parse_pick_rules
from .resolve import most_specific_rule, resolve_catalogue, resolve_catalogues, select_candidate
from .rules import (
    AllNumbers,
    ExactNumber,
    IndexTarget,
    KeywordTarget,
    NumberRange,
    NumberSelector,
    PatternTarget,
    PickRule,
    PickTarget,
    Specificity,
    TargetKind,
)

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
    "most_specific_rule",
    "parse_number_selector",
    "parse_pick_rule",
    "parse_pick_rules",
    "resolve_catalogue",
    "resolve_catalogues",
    "select_candidate",
]
