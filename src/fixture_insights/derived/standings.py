from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.taxonomy import DEFAULT_TAXONOMY, StandingsCodes, TypeTaxonomy
from fixture_insights.derived.types import (
    FormResult,
    StandingRow,
    StandingsView,
    StatDetail,
    find_detail,
)
from fixture_insights.derived.values import to_number

logger = logging.getLogger(__name__)

# Fixed positional bands for a 20 team league; not derived from competition metadata.
QUALIFICATION_ZONE_SIZE = 4
RELEGATION_ZONE_START_INDEX = 17


class Zone(StrEnum):
    QUALIFICATION = "qualification"
    RELEGATION = "relegation"


@dataclass(frozen=True)
class ProjectedStandingRow:
    participant_id: int
    participant_name: str | None
    position: int
    league_position: int | None
    played: int | None
    won: int | None
    drawn: int | None
    lost: int | None
    goals_for: int | None
    goals_against: int | None
    goal_difference: int | None
    points: int | None
    form: tuple[FormResult, ...]
    zone: Zone | None


def classify_zone(index: int) -> Zone | None:
    """Zone for a 0-based table index in the overall view."""

    if 0 <= index < QUALIFICATION_ZONE_SIZE:
        return Zone.QUALIFICATION
    if index >= RELEGATION_ZONE_START_INDEX:
        return Zone.RELEGATION
    return None


def _int_or_none(value: float | None) -> int | None:
    return int(value) if value is not None else None


def _stat(details: Sequence[StatDetail], type_id: int | None) -> int | None:
    return _int_or_none(to_number(find_detail(details, type_id)))


def _goal_difference(row: StandingRow, codes: StandingsCodes) -> int | None:
    gd = _stat(row.details, codes.goal_difference)
    if gd is not None:
        return gd
    gf = _stat(row.details, codes.goals_for)
    ga = _stat(row.details, codes.goals_against)
    if gf is None or ga is None:
        return None
    return gf - ga


def _points(row: StandingRow, codes: StandingsCodes, view: StandingsView) -> int | None:
    if view == StandingsView.OVERALL and row.points is not None:
        return int(row.points)
    return _stat(row.details, codes.points)


def _form_letters(row: StandingRow) -> tuple[FormResult, ...]:
    ordered = sorted(row.form, key=lambda f: f.sort_order)
    return tuple(f.letter for f in ordered)


def _split_sort_key(item: tuple[StandingRow, int | None, int | None]) -> tuple:
    row, points, gd = item
    # Unresolvable values rank below every resolvable one; never compare None numerically.
    return (
        points is None,
        -(points or 0),
        gd is None,
        -(gd or 0),
        row.participant_id,
    )


def project_standings(
    rows: Sequence[StandingRow],
    view: StandingsView | str = StandingsView.OVERALL,
    *,
    taxonomy: TypeTaxonomy = DEFAULT_TAXONOMY,
) -> list[ProjectedStandingRow]:
    """Ordered standings rows for one table view.

    - overall: provider order and `position` are authoritative; zones applied.
    - home/away: re-ranked by view points, then goal difference (GF - GA),
      then ascending participant id. Display position is the re-sorted index.
    """

    items = [r for r in require_sequence(rows, name="standings rows") if isinstance(r, StandingRow)]
    v = StandingsView(view)
    codes = taxonomy.standings(v)

    scored = [(r, _points(r, codes, v), _goal_difference(r, codes)) for r in items]
    if v != StandingsView.OVERALL:
        scored.sort(key=_split_sort_key)

    projected: list[ProjectedStandingRow] = []
    for index, (row, points, gd) in enumerate(scored):
        if v == StandingsView.OVERALL:
            position = row.position if row.position is not None else index + 1
            zone = classify_zone(index)
        else:
            position = index + 1
            zone = None

        projected.append(
            ProjectedStandingRow(
                participant_id=row.participant_id,
                participant_name=row.participant_name,
                position=position,
                league_position=row.position,
                played=_stat(row.details, codes.played),
                won=_stat(row.details, codes.won),
                drawn=_stat(row.details, codes.drawn),
                lost=_stat(row.details, codes.lost),
                goals_for=_stat(row.details, codes.goals_for),
                goals_against=_stat(row.details, codes.goals_against),
                goal_difference=gd,
                points=points,
                form=_form_letters(row),
                zone=zone,
            )
        )

    unresolved = sum(1 for p in projected if p.points is None)
    if unresolved:
        logger.debug("%d of %d standings rows have no %s points", unresolved, len(projected), v)

    return projected
