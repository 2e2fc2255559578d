from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.types import (
    FixtureSummary,
    ResolvedScore,
    ScoreDescription,
    ScoreEntry,
    Side,
)

# Newer fixtures carry an aggregated CURRENT score. Older ones only have period
# scores, where 2ND_HALF is cumulative (i.e. final for a 90 minute match).
RESOLUTION_ORDER: tuple[ScoreDescription, ...] = (
    ScoreDescription.CURRENT,
    ScoreDescription.SECOND_HALF,
    ScoreDescription.FIRST_HALF,
)

SCORE_VISIBLE_STATES = frozenset({"1H", "2H", "HT", "ET", "PEN", "FT", "AET", "FT_PEN"})


def resolve_score(scores: Sequence[ScoreEntry], side: Side | str) -> int | None:
    """Canonical goal count for one side, or None when no tier matches.

    Tiers are tried independently per side, so home and away may resolve from
    different tiers on partially migrated fixtures.
    """

    entries = require_sequence(scores, name="scores")
    wanted = Side(side)

    for description in RESOLUTION_ORDER:
        for entry in entries:
            if not isinstance(entry, ScoreEntry):
                continue
            if entry.description == description and entry.side == wanted:
                return entry.goals
    return None


def resolve_fixture_score(fixture: FixtureSummary) -> ResolvedScore:
    return ResolvedScore(
        home=resolve_score(fixture.scores, Side.HOME),
        away=resolve_score(fixture.scores, Side.AWAY),
    )


def display_scoreline(fixture: FixtureSummary) -> ResolvedScore | None:
    """Scoreline for started/finished fixtures; None means show kickoff time instead."""

    if fixture.state is None or fixture.state.upper() not in SCORE_VISIBLE_STATES:
        return None
    return resolve_fixture_score(fixture)


@dataclass(frozen=True)
class HeadToHeadRow:
    fixture_id: int
    date: datetime | None
    home_name: str | None
    away_name: str | None
    home_goals: int | None
    away_goals: int | None
    winner: Side | None


def _kickoff_sort_key(fixture: FixtureSummary) -> tuple[int, float, int]:
    # Most recent first; fixtures without a kickoff go last.
    if fixture.starting_at is None:
        return (1, 0.0, -fixture.id)
    return (0, -fixture.starting_at.timestamp(), -fixture.id)


def head_to_head_rows(
    fixtures: Sequence[FixtureSummary],
    *,
    limit: int | None = None,
) -> list[HeadToHeadRow]:
    items = [f for f in require_sequence(fixtures, name="fixtures") if isinstance(f, FixtureSummary)]
    items.sort(key=_kickoff_sort_key)
    if limit is not None:
        items = items[: max(limit, 0)]

    rows: list[HeadToHeadRow] = []
    for f in items:
        score = resolve_fixture_score(f)
        winner: Side | None = None
        if score.is_complete:
            assert score.home is not None and score.away is not None
            if score.home > score.away:
                winner = Side.HOME
            elif score.away > score.home:
                winner = Side.AWAY

        home = f.participant(Side.HOME)
        away = f.participant(Side.AWAY)
        rows.append(
            HeadToHeadRow(
                fixture_id=f.id,
                date=f.starting_at,
                home_name=home.name if home else None,
                away_name=away.name if away else None,
                home_goals=score.home,
                away_goals=score.away,
                winner=winner,
            )
        )
    return rows
