from __future__ import annotations

import pytest

from bookvert.domain.aggregate import aggregate_resolutions, output_name
from bookvert.domain.errors import (
    NamingCollisionError,
    ResolutionFailedError,
    UnresolvedCataloguesError,
)
from bookvert.domain.picking import parse_pick_rules, resolve_catalogues
from tests.helpers.candidates import make_candidate, make_catalogue, make_catalogues


def test_output_name_appends_leading_number() -> None:
    assert output_name("Title", make_catalogue("Title - 3")) == "Title3"
    assert output_name("Title", make_catalogue("Vol02-Ch10")) == "Title2"


def test_output_name_zero_fills_to_width() -> None:
    assert output_name("Title", make_catalogue("Title - 3"), number_width=3) == "Title003"


def test_output_name_for_unnumbered_catalogue_is_the_title() -> None:
    assert output_name("Title", make_catalogue("Oneshot")) == "Title"


def test_aggregate_builds_jobs_for_selected_catalogues() -> None:
    catalogues = make_catalogues(make_candidate("Title - 1"), make_candidate("Title - 2"))

    jobs = aggregate_resolutions(resolve_catalogues(catalogues, ()), title="Title")

    assert [(job.output_name, job.source_path.name) for job in jobs] == [
        ("Title1", "Title - 1"),
        ("Title2", "Title - 2"),
    ]


def test_aggregate_reports_every_unresolved_and_failed_catalogue() -> None:
    catalogues = make_catalogues(
        make_candidate("Title - 1"),
        make_candidate("Title - 1 - Fix"),
        make_candidate("Title - 2"),
        make_candidate("Title - 3 a"),
        make_candidate("Title - 3 b"),
    )
    resolutions = resolve_catalogues(catalogues, parse_pick_rules(["3=5"]))

    with pytest.raises(UnresolvedCataloguesError) as excinfo:
        aggregate_resolutions(resolutions, title="Title")

    assert [issue.catalogue.label for issue in excinfo.value.issues] == ["001", "003"]
    assert [issue.status for issue in excinfo.value.issues] == ["unresolved", "failed"]


def test_aggregate_detects_naming_collisions() -> None:
    catalogues = make_catalogues(make_candidate("Vol1 Ch2"), make_candidate("Vol1 Ch3"))

    with pytest.raises(NamingCollisionError) as excinfo:
        aggregate_resolutions(resolve_catalogues(catalogues, ()), title="Title")

    assert excinfo.value.collisions == {"Title1": ("001-002", "001-003")}


def test_aggregate_reports_collisions_and_unresolved_together() -> None:
    catalogues = make_catalogues(
        make_candidate("Vol1 Ch2"),
        make_candidate("Vol1 Ch3"),
        make_candidate("Book 4 a"),
        make_candidate("Book 4 b"),
    )

    with pytest.raises(ResolutionFailedError) as excinfo:
        aggregate_resolutions(resolve_catalogues(catalogues, ()), title="Title")

    kinds = [type(error) for error in excinfo.value.errors]
    assert kinds == [UnresolvedCataloguesError, NamingCollisionError]
