"""Apply pick rules to catalogues.

Matching policy:
- the most specific matching rule wins (exact > narrower range > wider range > all)
- among equally specific rules the one declared last wins
- no matching rule -> single members are selected, others stay unresolved
- a failing rule is final for ambiguous catalogues; for single-member
  catalogues it only fails when the rule explicitly targets the number
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bookvert.domain.resolution import (
    FailedResolution,
    FailureReason,
    SelectedResolution,
    UnresolvedResolution,
)

from .rules import IndexTarget, KeywordTarget, PatternTarget, Specificity, TargetKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from bookvert.domain.model import Candidate, Catalogue
    from bookvert.domain.resolution import Resolution

    from .rules import PickRule, PickTarget

log = getLogger(__name__)


def resolve_catalogues(
    catalogues: Iterable[Catalogue],
    rules: Sequence[PickRule],
) -> tuple[Resolution, ...]:
    """Resolve each catalogue independently, preserving listing order."""

    return tuple(resolve_catalogue(catalogue, rules) for catalogue in catalogues)


def resolve_catalogue(catalogue: Catalogue, rules: Sequence[PickRule]) -> Resolution:
    rule = most_specific_rule(rules, catalogue.number)

    if rule is None:
        if catalogue.is_ambiguous:
            log.debug("No pick rule matches catalogue %s", catalogue.label)
            return UnresolvedResolution(catalogue=catalogue, reason="no_matching_rule")
        return SelectedResolution(
            catalogue=catalogue,
            candidate=catalogue.members[0],
            reason="single_candidate",
        )

    picked = select_candidate(rule.target, catalogue.members)
    if isinstance(picked, FailureReason):
        if not catalogue.is_ambiguous and rule.source.specificity is Specificity.ALL:
            return SelectedResolution(
                catalogue=catalogue,
                candidate=catalogue.members[0],
                reason="single_candidate",
            )
        log.debug("Rule %s failed for catalogue %s: %s", rule, catalogue.label, picked)
        return FailedResolution(
            catalogue=catalogue,
            rule=rule,
            failure=picked,
            reason=_failure_detail(rule.target, picked, len(catalogue.members)),
        )

    log.debug("Rule %s picked %s for catalogue %s", rule, picked.raw_name, catalogue.label)
    return SelectedResolution(
        catalogue=catalogue,
        candidate=picked,
        rule=rule,
        reason="pick_rule",
    )


def most_specific_rule(rules: Sequence[PickRule], number: int | None) -> PickRule | None:
    matching = [rule for rule in rules if rule.applies_to(number)]
    if not matching:
        return None
    return max(matching, key=lambda rule: rule.precedence())


def select_candidate(
    target: PickTarget,
    members: Sequence[Candidate],
) -> Candidate | FailureReason:
    """Pick one of ``members`` (ordered by lexical rank) according to ``target``."""

    if isinstance(target, IndexTarget):
        if target.index >= len(members):
            return FailureReason.INDEX_OUT_OF_RANGE
        return members[target.index]

    if isinstance(target, PatternTarget):
        for member in members:
            if target.pattern.search(member.raw_name):
                return member
        return FailureReason.NO_PATTERN_MATCH

    return _select_by_keyword(target, members)


def _select_by_keyword(target: KeywordTarget, members: Sequence[Candidate]) -> Candidate:
    # max/min return the first extreme element, so ties go to the lowest rank.
    if target.kind is TargetKind.FIRST:
        return members[0]
    if target.kind is TargetKind.LAST:
        return members[-1]
    if target.kind is TargetKind.MOST_PAGES:
        return max(members, key=lambda member: member.page_count)
    if target.kind is TargetKind.LARGEST:
        return max(members, key=lambda member: member.byte_size)
    if target.kind is TargetKind.SMALLEST:
        return min(members, key=lambda member: member.byte_size)
    raise ValueError(f"Unsupported pick target: {target.kind}")


def _failure_detail(target: PickTarget, failure: FailureReason, member_count: int) -> str:
    if failure is FailureReason.INDEX_OUT_OF_RANGE:
        return f"index {target} out of range for {member_count} candidate(s)"
    return f"no candidate matches pattern {str(target)!r}"


__all__ = [
    "most_specific_rule",
    "resolve_catalogue",
    "resolve_catalogues",
    "select_candidate",
]
