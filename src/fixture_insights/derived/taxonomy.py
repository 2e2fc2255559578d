"""Provider type-code taxonomy.

Type codes are provider reference data, not constants of the transformations.
Every derived view takes a `TypeTaxonomy` so a different catalog version can be
injected (and tested) without touching the view logic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, fields, replace
from typing import Protocol

from fixture_insights.derived.types import StandingsView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StandingsCodes:
    played: int
    won: int
    drawn: int
    lost: int
    goals_for: int
    goals_against: int
    points: int
    # Only the overall table ships a precomputed goal difference.
    goal_difference: int | None = None


@dataclass(frozen=True)
class TeamStatCodes:
    wins: int = 214
    draws: int = 215
    losses: int = 216
    goals: int = 52
    goals_conceded: int = 88
    games_played: int = 27263
    clean_sheets: int = 194
    corners: int = 34
    scoring_minutes: int = 196
    conceded_scoring_minutes: int = 213


@dataclass(frozen=True)
class TypeTaxonomy:
    version: str = "sportmonks-v3"
    overall: StandingsCodes = field(
        default_factory=lambda: StandingsCodes(
            played=129,
            won=130,
            drawn=131,
            lost=132,
            goals_for=133,
            goals_against=134,
            points=187,
            goal_difference=179,
        )
    )
    home: StandingsCodes = field(
        default_factory=lambda: StandingsCodes(
            played=135,
            won=136,
            drawn=137,
            lost=138,
            goals_for=139,
            goals_against=140,
            points=185,
        )
    )
    away: StandingsCodes = field(
        default_factory=lambda: StandingsCodes(
            played=141,
            won=142,
            drawn=143,
            lost=144,
            goals_for=145,
            goals_against=146,
            points=186,
        )
    )
    team: TeamStatCodes = field(default_factory=TeamStatCodes)

    def standings(self, view: StandingsView | str) -> StandingsCodes:
        v = StandingsView(view)
        if v == StandingsView.HOME:
            return self.home
        if v == StandingsView.AWAY:
            return self.away
        return self.overall


DEFAULT_TAXONOMY = TypeTaxonomy()


class ProviderTypeLike(Protocol):
    id: int
    code: str | None


# Catalog `code` -> (taxonomy section, field). Anything not listed is ignored.
CATALOG_CODE_FIELDS: dict[str, tuple[str, str]] = {
    "wins": ("team", "wins"),
    "draws": ("team", "draws"),
    "lost": ("team", "losses"),
    "goals": ("team", "goals"),
    "goals-conceded": ("team", "goals_conceded"),
    "team-games-played": ("team", "games_played"),
    "cleansheets": ("team", "clean_sheets"),
    "corners": ("team", "corners"),
    "scoring-minutes": ("team", "scoring_minutes"),
    "conceded-scoring-minutes": ("team", "conceded_scoring_minutes"),
    "overall-matches-played": ("overall", "played"),
    "overall-won": ("overall", "won"),
    "overall-draw": ("overall", "drawn"),
    "overall-lost": ("overall", "lost"),
    "overall-goals-for": ("overall", "goals_for"),
    "overall-goals-against": ("overall", "goals_against"),
    "overall-points": ("overall", "points"),
    "overall-goal-difference": ("overall", "goal_difference"),
    "home-matches-played": ("home", "played"),
    "home-won": ("home", "won"),
    "home-draw": ("home", "drawn"),
    "home-lost": ("home", "lost"),
    "home-scored": ("home", "goals_for"),
    "home-conceded": ("home", "goals_against"),
    "home-points": ("home", "points"),
    "away-matches-played": ("away", "played"),
    "away-won": ("away", "won"),
    "away-draw": ("away", "drawn"),
    "away-lost": ("away", "lost"),
    "away-scored": ("away", "goals_for"),
    "away-conceded": ("away", "goals_against"),
    "away-points": ("away", "points"),
}


def taxonomy_from_provider_types(
    rows: Iterable[ProviderTypeLike],
    *,
    base: TypeTaxonomy = DEFAULT_TAXONOMY,
    version: str | None = None,
) -> TypeTaxonomy:
    """Overlay catalog ids onto `base` for every known catalog code.

    Codes the taxonomy does not know about are ignored, and fields whose code
    is missing from the catalog keep the `base` value.
    """

    overrides: dict[str, dict[str, int]] = {}
    matched = 0
    for row in rows:
        code = (row.code or "").strip().lower()
        target = CATALOG_CODE_FIELDS.get(code)
        if target is None:
            continue
        section, name = target
        overrides.setdefault(section, {})[name] = int(row.id)
        matched += 1

    logger.debug("Taxonomy overlay matched %d catalog codes", matched)

    changes: dict[str, object] = {}
    for f in fields(base):
        section_changes = overrides.get(f.name)
        if section_changes:
            changes[f.name] = replace(getattr(base, f.name), **section_changes)
    if version is not None:
        changes["version"] = version

    return replace(base, **changes)
