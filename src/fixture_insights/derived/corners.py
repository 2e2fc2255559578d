from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.taxonomy import DEFAULT_TAXONOMY, TypeTaxonomy
from fixture_insights.derived.types import StatDetail, Venue, find_detail
from fixture_insights.derived.values import Split, StatValue, to_number, venue_part


@dataclass(frozen=True)
class VenueCorners:
    total: int | None
    average: float | None
    games: int


@dataclass(frozen=True)
class CornerAverages:
    overall_total: int | None
    home: VenueCorners
    away: VenueCorners


def _average(total: int | None, games: int) -> float | None:
    if total is None or games <= 0:
        return None
    return round(total / games, 1)


def _venue(value: StatValue, venue: Venue, games: int) -> VenueCorners:
    number = to_number(venue_part(value, venue.value))
    total = int(number) if number is not None else None
    return VenueCorners(total=total, average=_average(total, games), games=games)


def project_corner_averages(
    details: Sequence[StatDetail],
    games_played_home: int,
    games_played_away: int,
    *,
    taxonomy: TypeTaxonomy = DEFAULT_TAXONOMY,
) -> CornerAverages:
    """Home and away corner averages for one team season.

    A flat corner count has no venue split, so only `overall_total` is set.
    """

    items = [d for d in require_sequence(details, name="statistic details") if isinstance(d, StatDetail)]
    value = find_detail(items, taxonomy.team.corners)

    overall = to_number(value)
    home = _venue(value, Venue.HOME, games_played_home)
    away = _venue(value, Venue.AWAY, games_played_away)

    if isinstance(value, Split) and overall is None and home.total is not None and away.total is not None:
        overall = float(home.total + away.total)

    return CornerAverages(
        overall_total=int(overall) if overall is not None else None,
        home=home,
        away=away,
    )


def combined_expected_corners(home_team: CornerAverages, away_team: CornerAverages) -> float | None:
    """Home team's home average plus away team's away average; None unless both exist."""

    home_avg = home_team.home.average
    away_avg = away_team.away.average
    if home_avg is None or away_avg is None:
        return None
    return round(home_avg + away_avg, 1)
