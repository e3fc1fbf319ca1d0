from __future__ import annotations

import re

import pytest

from bookvert.domain.errors import PolicySyntaxError
from bookvert.domain.picking import (
    AllNumbers,
    ExactNumber,
    IndexTarget,
    KeywordTarget,
    NumberRange,
    PatternTarget,
    TargetKind,
    parse_number_selector,
    parse_pick_rule,
    parse_pick_rules,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3", ExactNumber(3)),
        ("1..5", NumberRange(start=1, stop=5)),
        ("1..=5", NumberRange(start=1, stop=5, inclusive=True)),
        ("4..", NumberRange(start=4)),
        ("..", AllNumbers()),
        ("", AllNumbers()),
        ("..5", NumberRange(start=0, stop=5)),
        ("..=5", NumberRange(start=0, stop=5, inclusive=True)),
        (" 2 .. 9 ", NumberRange(start=2, stop=9)),
    ],
)
def test_parse_number_selector(text: str, expected: object) -> None:
    assert parse_number_selector(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("first", KeywordTarget(TargetKind.FIRST)),
        ("last", KeywordTarget(TargetKind.LAST)),
        ("most-pages", KeywordTarget(TargetKind.MOST_PAGES)),
        ("largest", KeywordTarget(TargetKind.LARGEST)),
        ("smallest", KeywordTarget(TargetKind.SMALLEST)),
        ("2", IndexTarget(2)),
    ],
)
def test_parse_pick_rule_targets(text: str, expected: object) -> None:
    rule = parse_pick_rule(text)

    assert rule.source == AllNumbers()
    assert rule.target == expected


def test_parse_pick_rule_with_source() -> None:
    rule = parse_pick_rule("1..=5=most-pages")

    assert rule.source == NumberRange(start=1, stop=5, inclusive=True)
    assert rule.target == KeywordTarget(TargetKind.MOST_PAGES)


def test_parse_pick_rule_compiles_pattern() -> None:
    rule = parse_pick_rule("3=fix(ed)?")

    assert rule.source == ExactNumber(3)
    assert isinstance(rule.target, PatternTarget)
    assert rule.target.pattern.search("Title - 3 - FIXED")


def test_pattern_with_uppercase_is_case_sensitive() -> None:
    rule = parse_pick_rule("Fix")

    assert isinstance(rule.target, PatternTarget)
    assert rule.target.pattern.flags & re.IGNORECASE == 0
    assert rule.target.pattern.search("Title - 1 - fix") is None


def test_parse_pick_rules_preserves_declaration_order() -> None:
    rules = parse_pick_rules(["..=first", "3=last,5=1", "fix"])

    assert [str(rule) for rule in rules] == ["..=first", "3=last", "5=1", "..=fix"]
    assert [rule.position for rule in rules] == [0, 1, 2, 3]


def test_parse_pick_rules_empty_input() -> None:
    assert parse_pick_rules([]) == ()


@pytest.mark.parametrize(
    ("entry", "token", "reason"),
    [
        ("abc=first", "abc", "bad integer"),
        ("-1=first", "-1", "bad integer"),
        ("1..x=first", "x", "bad integer"),
        ("5..2=first", "5..2", "inverted range"),
        ("5..=2=first", "5..=2", "inverted range"),
        ("3..3=first", "3..3", "empty range"),
        ("3=", "", "empty pattern"),
        ("", "", "empty rule"),
    ],
)
def test_parse_pick_rule_rejects_malformed_entries(entry: str, token: str, reason: str) -> None:
    with pytest.raises(PolicySyntaxError) as excinfo:
        parse_pick_rule(entry)

    assert excinfo.value.entry == entry
    assert excinfo.value.token == token
    assert excinfo.value.reason == reason


def test_parse_pick_rule_rejects_invalid_regex() -> None:
    with pytest.raises(PolicySyntaxError, match="invalid regular expression") as excinfo:
        parse_pick_rule("2=fix(")

    assert excinfo.value.token == "fix("


def test_parse_pick_rules_fails_without_partial_result() -> None:
    with pytest.raises(PolicySyntaxError) as excinfo:
        parse_pick_rules(["first", "x=last", "3=1"])

    assert excinfo.value.entry == "x=last"


def test_policy_syntax_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="Invalid pick rule"):
        parse_pick_rules(["9..1=first"])
