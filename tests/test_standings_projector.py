from __future__ import annotations

from fixture_insights.derived.standings import Zone, classify_zone, project_standings
from fixture_insights.derived.taxonomy import DEFAULT_TAXONOMY, StandingsCodes, TypeTaxonomy
from fixture_insights.derived.types import (
    FormResult,
    StandingFormEntry,
    StandingRow,
    StandingsView,
    StatDetail,
)
from fixture_insights.derived.values import Numeric


def _details(**codes: int) -> tuple[StatDetail, ...]:
    # Keys are "c<type_id>" so tests can name any code.
    return tuple(StatDetail(type_id=int(k[1:]), value=Numeric(float(v))) for k, v in codes.items())


def _row(
    participant_id: int,
    *,
    position: int | None = None,
    points: float | None = None,
    details: tuple[StatDetail, ...] = (),
    form: tuple[StandingFormEntry, ...] = (),
) -> StandingRow:
    return StandingRow(
        participant_id=participant_id,
        participant_name=f"Team {participant_id}",
        position=position,
        points=points,
        details=details,
        form=form,
    )


def test_overall_keeps_provider_order_and_position() -> None:
    rows = [
        _row(10, position=1, points=30, details=_details(c129=12, c133=25, c134=10, c179=15)),
        _row(20, position=2, points=28, details=_details(c129=12, c133=20, c134=11)),
        _row(30, position=None, points=None, details=_details(c187=20)),
    ]

    projected = project_standings(rows, StandingsView.OVERALL)

    assert [p.participant_id for p in projected] == [10, 20, 30]
    assert [p.position for p in projected] == [1, 2, 3]
    assert projected[0].goal_difference == 15
    # No GD detail: falls back to GF - GA.
    assert projected[1].goal_difference == 9
    assert projected[1].played == 12
    # No row points: falls back to the overall points detail.
    assert projected[2].points == 20
    assert projected[2].goal_difference is None


def test_overall_zones_by_table_index() -> None:
    rows = [_row(i, position=i + 1, points=float(40 - i)) for i in range(20)]

    projected = project_standings(rows, "overall")

    assert [p.zone for p in projected[:4]] == [Zone.QUALIFICATION] * 4
    assert all(p.zone is None for p in projected[4:17])
    assert [p.zone for p in projected[17:]] == [Zone.RELEGATION] * 3


def test_classify_zone_boundaries() -> None:
    assert classify_zone(0) == Zone.QUALIFICATION
    assert classify_zone(3) == Zone.QUALIFICATION
    assert classify_zone(4) is None
    assert classify_zone(16) is None
    assert classify_zone(17) == Zone.RELEGATION


def test_home_view_resorts_by_points_then_goal_difference() -> None:
    rows = [
        _row(1, position=1, details=_details(c185=10, c139=8, c140=4)),
        _row(2, position=2, details=_details(c185=12, c139=5, c140=5)),
        _row(3, position=3, details=_details(c185=10, c139=9, c140=2)),
        _row(4, position=4, details=_details(c139=3, c140=1)),
    ]

    projected = project_standings(rows, StandingsView.HOME)

    assert [p.participant_id for p in projected] == [2, 3, 1, 4]
    assert [p.position for p in projected] == [1, 2, 3, 4]
    assert [p.league_position for p in projected] == [2, 3, 1, 4]
    assert projected[1].goal_difference == 7
    assert projected[3].points is None
    assert all(p.zone is None for p in projected)


def test_away_view_unresolvable_goal_difference_ranks_below_resolvable() -> None:
    rows = [
        _row(7, details=_details(c186=9)),
        _row(5, details=_details(c186=9, c145=1, c146=3)),
        _row(6, details=_details(c186=9, c145=4, c146=6)),
    ]

    projected = project_standings(rows, StandingsView.AWAY)

    # 5 and 6 share GD -2, so the lower participant id goes first.
    assert [p.participant_id for p in projected] == [5, 6, 7]


def test_form_letters_follow_sort_order() -> None:
    form = (
        StandingFormEntry(letter=FormResult.LOSS, sort_order=3),
        StandingFormEntry(letter=FormResult.WIN, sort_order=1),
        StandingFormEntry(letter=FormResult.DRAW, sort_order=2),
    )

    projected = project_standings([_row(1, position=1, form=form)])

    assert projected[0].form == (FormResult.WIN, FormResult.DRAW, FormResult.LOSS)


def test_injected_taxonomy_changes_codes() -> None:
    taxonomy = TypeTaxonomy(
        version="test",
        home=StandingsCodes(
            played=1, won=2, drawn=3, lost=4, goals_for=5, goals_against=6, points=7
        ),
    )
    rows = [
        _row(1, details=_details(c7=3)),
        _row(2, details=_details(c7=6)),
    ]

    projected = project_standings(rows, StandingsView.HOME, taxonomy=taxonomy)
    default = project_standings(rows, StandingsView.HOME, taxonomy=DEFAULT_TAXONOMY)

    assert [p.participant_id for p in projected] == [2, 1]
    assert all(p.points is None for p in default)


def test_project_standings_does_not_mutate_input() -> None:
    rows = [
        _row(1, details=_details(c185=1)),
        _row(2, details=_details(c185=5)),
    ]
    before = list(rows)

    project_standings(rows, StandingsView.HOME)

    assert rows == before
