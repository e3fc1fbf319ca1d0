from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from bookvert.domain.context import RunContext
from bookvert.domain.errors import (
    MissingTitleError,
    PolicySyntaxError,
    ResolutionCancelledError,
    ResolutionFailedError,
    UnresolvedCataloguesError,
)
from bookvert.domain.pipeline import resolve_books, resolve_title
from bookvert.domain.ports.interaction import OperatorSignal
from bookvert.domain.resolution import SelectedResolution
from tests.helpers.candidates import make_candidate
from tests.helpers.operators import ScriptedOperator

if TYPE_CHECKING:
    from bookvert.domain.model import Candidate


def _scenario() -> list[Candidate]:
    return [
        make_candidate("Title - 1"),
        make_candidate("Title - 1 - Fix"),
        make_candidate("Title - 2"),
    ]


def test_noninteractive_run_reports_ambiguous_catalogue() -> None:
    context = RunContext.from_arguments(title="Title", interactive=False)

    with pytest.raises(UnresolvedCataloguesError) as excinfo:
        resolve_books(_scenario(), context=context)

    (issue,) = excinfo.value.issues
    assert issue.catalogue.number == 1
    assert issue.reason == "interactive_disabled"


def test_missing_title_is_reported_with_unresolved_catalogues() -> None:
    context = RunContext.from_arguments(interactive=False)

    with pytest.raises(ResolutionFailedError) as excinfo:
        resolve_books(_scenario(), context=context)

    missing, unresolved = excinfo.value.errors
    assert isinstance(missing, MissingTitleError)
    assert "Title - 1 - Fix" in missing.suggestions
    assert isinstance(unresolved, UnresolvedCataloguesError)
    assert [issue.catalogue.number for issue in unresolved.issues] == [1]


def test_missing_title_alone_is_raised_directly() -> None:
    context = RunContext.from_arguments(picks=["fix"], interactive=False)

    with pytest.raises(MissingTitleError):
        resolve_books(_scenario(), context=context)


def test_pick_rule_resolves_scenario() -> None:
    context = RunContext.from_arguments(title="Title", picks=["fix"], interactive=False)

    result = resolve_books(_scenario(), context=context)

    assert [(job.output_name, job.candidate.raw_name) for job in result.jobs] == [
        ("Title1", "Title - 1 - Fix"),
        ("Title2", "Title - 2"),
    ]


def test_operator_resolves_remaining_catalogues() -> None:
    context = RunContext.from_arguments(title="Title")
    operator = ScriptedOperator(catalogue_choices=[0], candidate_choices=[0])

    result = resolve_books(_scenario(), context=context, operator=operator)

    assert [job.candidate.raw_name for job in result.jobs] == ["Title - 1", "Title - 2"]
    assert isinstance(result.resolutions[0], SelectedResolution)
    assert result.resolutions[0].reason == "operator_choice"


def test_operator_is_not_asked_about_rule_resolved_catalogues() -> None:
    context = RunContext.from_arguments(title="Title", picks=["1=last"])
    operator = ScriptedOperator()

    result = resolve_books(_scenario(), context=context, operator=operator)

    assert operator.listings == []
    assert len(result.jobs) == 2


def test_abort_cancels_the_run() -> None:
    context = RunContext.from_arguments(title="Title")
    operator = ScriptedOperator(catalogue_choices=[OperatorSignal.ABORT])

    with pytest.raises(ResolutionCancelledError) as excinfo:
        resolve_books(_scenario(), context=context, operator=operator)

    assert [pending.catalogue.number for pending in excinfo.value.pending] == [1]


def test_interactive_without_operator_behaves_like_noninteractive() -> None:
    context = RunContext.from_arguments(title="Title")

    with pytest.raises(UnresolvedCataloguesError):
        resolve_books(_scenario(), context=context, operator=None)


def test_include_filter_limits_catalogues() -> None:
    context = RunContext.from_arguments(title="Title", include=["2"], interactive=False)

    result = resolve_books(_scenario(), context=context)

    assert [job.output_name for job in result.jobs] == ["Title2"]


def test_number_width_is_applied_to_output_names() -> None:
    context = RunContext.from_arguments(
        title="Title", picks=["fix"], interactive=False, number_width=3
    )

    result = resolve_books(_scenario(), context=context)

    assert [job.output_name for job in result.jobs] == ["Title001", "Title002"]


def test_bad_selector_fails_before_resolution() -> None:
    with pytest.raises(PolicySyntaxError):
        RunContext.from_arguments(title="Title", picks=["first", "x=1"])


def test_title_defaults_to_single_shared_name() -> None:
    candidates = [make_candidate("Oneshot 5", parent="/a"), make_candidate("Oneshot 5", parent="/b")]

    assert resolve_title(candidates, context=RunContext()) == "Oneshot 5"


def test_title_is_asked_from_operator() -> None:
    operator = ScriptedOperator(title="  Series ")

    title = resolve_title(_scenario(), context=RunContext(), operator=operator)

    assert title == "Series"
    assert operator.title_suggestions == ["Title - 1", "Title - 1 - Fix", "Title - 2"]


def test_missing_title_raises() -> None:
    with pytest.raises(MissingTitleError) as excinfo:
        resolve_title(_scenario(), context=RunContext(interactive=False))

    assert "Title - 2" in excinfo.value.suggestions


def test_run_context_rejects_negative_width() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        RunContext(number_width=-1)
