from __future__ import annotations

from fixture_insights.derived.corners import combined_expected_corners, project_corner_averages
from fixture_insights.derived.types import StatDetail
from fixture_insights.derived.values import classify_value

CORNERS = 34


def _corners(raw: object) -> list[StatDetail]:
    return [StatDetail(type_id=CORNERS, value=classify_value(raw))]


def test_split_corners_give_rounded_venue_averages() -> None:
    details = _corners({"all": {"count": 110}, "home": {"count": 64}, "away": {"count": 46}})

    result = project_corner_averages(details, 10, 9)

    assert result.overall_total == 110
    assert (result.home.total, result.home.average, result.home.games) == (64, 6.4, 10)
    assert (result.away.total, result.away.average) == (46, 5.1)


def test_split_without_all_sums_venues() -> None:
    result = project_corner_averages(_corners({"home": 30, "away": 20}), 5, 5)

    assert result.overall_total == 50
    assert result.home.average == 6.0


def test_flat_count_only_sets_overall_total() -> None:
    result = project_corner_averages(_corners({"count": 87}), 10, 10)

    assert result.overall_total == 87
    assert result.home.total is None and result.home.average is None
    assert result.away.average is None


def test_zero_games_has_no_average() -> None:
    result = project_corner_averages(_corners({"home": {"count": 12}, "away": {"count": 9}}), 0, 3)

    assert result.home.total == 12
    assert result.home.average is None
    assert result.away.average == 3.0


def test_missing_corner_stat() -> None:
    result = project_corner_averages([], 10, 10)

    assert result.overall_total is None
    assert result.home.average is None


def test_combined_expected_corners_needs_both_averages() -> None:
    home_team = project_corner_averages(_corners({"home": 55, "away": 40}), 10, 10)
    away_team = project_corner_averages(_corners({"home": 50, "away": 47}), 10, 10)
    flat = project_corner_averages(_corners(90), 10, 10)

    assert combined_expected_corners(home_team, away_team) == 10.2
    assert combined_expected_corners(home_team, flat) is None
