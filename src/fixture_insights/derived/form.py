from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.scores import resolve_score
from fixture_insights.derived.types import FixtureSummary, FormMatch, FormResult, Side

logger = logging.getLogger(__name__)

FINISHED_STATES = frozenset({"FT", "AET", "FT_PEN"})
DEFAULT_FORM_LIMIT = 5


@dataclass(frozen=True)
class FormSummary:
    played: int
    wins: int
    draws: int
    losses: int
    points: int
    goals_for: int
    goals_against: int
    sequence: str


def _is_finished(fixture: FixtureSummary) -> bool:
    return fixture.state is not None and fixture.state.upper() in FINISHED_STATES


def _recency_key(fixture: FixtureSummary) -> tuple[int, float, int]:
    if fixture.starting_at is None:
        return (1, 0.0, -fixture.id)
    return (0, -fixture.starting_at.timestamp(), -fixture.id)


def _classify(goals_for: int, goals_against: int) -> FormResult:
    if goals_for > goals_against:
        return FormResult.WIN
    if goals_for < goals_against:
        return FormResult.LOSS
    return FormResult.DRAW


def calculate_form(
    fixtures: Sequence[FixtureSummary],
    team_id: int,
    limit: int = DEFAULT_FORM_LIMIT,
    *,
    exclude_fixture_id: int | None = None,
) -> list[FormMatch]:
    """Most recent finished results for `team_id`, newest first.

    Unresolvable scores count as 0 goals for the W/D/L classification only, so
    every finished fixture still gets a definite result.
    """

    items = [f for f in require_sequence(fixtures, name="fixtures") if isinstance(f, FixtureSummary)]
    finished = [f for f in items if _is_finished(f) and f.id != exclude_fixture_id]
    finished.sort(key=_recency_key)

    matches: list[FormMatch] = []
    for fixture in finished[: max(limit, 0)]:
        side = fixture.side_of(team_id)
        if side is None:
            logger.debug("Team %s is not a participant of fixture %s", team_id, fixture.id)
            continue

        other = Side.AWAY if side == Side.HOME else Side.HOME
        goals_for = resolve_score(fixture.scores, side) or 0
        goals_against = resolve_score(fixture.scores, other) or 0

        opponent = next((p for p in fixture.participants if p.id != team_id), None)
        matches.append(
            FormMatch(
                fixture_id=fixture.id,
                result=_classify(goals_for, goals_against),
                goals_for=goals_for,
                goals_against=goals_against,
                opponent_name=(opponent.name if opponent and opponent.name else "Unknown"),
                date=fixture.starting_at,
            )
        )
    return matches


def summarize_form(matches: Sequence[FormMatch]) -> FormSummary:
    wins = sum(1 for m in matches if m.result == FormResult.WIN)
    draws = sum(1 for m in matches if m.result == FormResult.DRAW)
    losses = sum(1 for m in matches if m.result == FormResult.LOSS)
    return FormSummary(
        played=len(matches),
        wins=wins,
        draws=draws,
        losses=losses,
        points=3 * wins + draws,
        goals_for=sum(m.goals_for for m in matches),
        goals_against=sum(m.goals_against for m in matches),
        sequence="".join(m.result.value for m in matches),
    )
