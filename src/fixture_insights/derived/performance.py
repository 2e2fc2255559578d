from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.taxonomy import DEFAULT_TAXONOMY, TypeTaxonomy
from fixture_insights.derived.types import StatDetail, Venue, find_detail
from fixture_insights.derived.values import Counted, Split, to_int, venue_part


@dataclass(frozen=True)
class VenuePerformance:
    played: int | None
    won: int | None
    drawn: int | None
    lost: int | None
    goals_for: int | None
    goals_against: int | None
    clean_sheets: int | None
    points: int | None


def _venue_count(details: Sequence[StatDetail], type_id: int, venue: Venue) -> int | None:
    value = find_detail(details, type_id)
    if isinstance(value, Split):
        return to_int(venue_part(value, venue.value))
    if venue == Venue.ALL and isinstance(value, Counted):
        return to_int(value)
    return None


def games_played_by_venue(
    details: Sequence[StatDetail],
    *,
    taxonomy: TypeTaxonomy = DEFAULT_TAXONOMY,
) -> dict[Venue, int | None]:
    """Games played per venue from the `{total, home, away}` games-played stat."""

    items = [d for d in require_sequence(details, name="statistic details") if isinstance(d, StatDetail)]
    value = find_detail(items, taxonomy.team.games_played)
    if not isinstance(value, Split):
        return {venue: None for venue in Venue}

    total = to_int(venue_part(value, Venue.ALL.value))
    home = to_int(value.home)
    away = to_int(value.away)
    if total is None and home is not None and away is not None:
        total = home + away
    return {Venue.ALL: total, Venue.HOME: home, Venue.AWAY: away}


def project_venue_performance(
    details: Sequence[StatDetail],
    *,
    taxonomy: TypeTaxonomy = DEFAULT_TAXONOMY,
) -> dict[Venue, VenuePerformance]:
    items = [d for d in require_sequence(details, name="statistic details") if isinstance(d, StatDetail)]
    codes = taxonomy.team
    played = games_played_by_venue(items, taxonomy=taxonomy)

    result: dict[Venue, VenuePerformance] = {}
    for venue in Venue:
        won = _venue_count(items, codes.wins, venue)
        drawn = _venue_count(items, codes.draws, venue)
        result[venue] = VenuePerformance(
            played=played[venue],
            won=won,
            drawn=drawn,
            lost=_venue_count(items, codes.losses, venue),
            goals_for=_venue_count(items, codes.goals, venue),
            goals_against=_venue_count(items, codes.goals_conceded, venue),
            clean_sheets=_venue_count(items, codes.clean_sheets, venue),
            points=(3 * won + drawn) if won is not None and drawn is not None else None,
        )
    return result
