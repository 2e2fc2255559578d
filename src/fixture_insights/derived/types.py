from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from fixture_insights.derived.values import ABSENT, StatValue


class Side(StrEnum):
    HOME = "home"
    AWAY = "away"


class Venue(StrEnum):
    ALL = "all"
    HOME = "home"
    AWAY = "away"


class StandingsView(StrEnum):
    OVERALL = "overall"
    HOME = "home"
    AWAY = "away"


class ScoreDescription(StrEnum):
    CURRENT = "CURRENT"
    FIRST_HALF = "1ST_HALF"
    SECOND_HALF = "2ND_HALF"
    PENALTY_SHOOTOUT = "PENALTY_SHOOTOUT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_raw(cls, value: object) -> ScoreDescription:
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN


class FormResult(StrEnum):
    WIN = "W"
    DRAW = "D"
    LOSS = "L"


# -----------------------------
# Provider-side entities
# -----------------------------


@dataclass(frozen=True)
class ScoreEntry:
    description: ScoreDescription
    side: Side
    goals: int | None
    type_id: int | None = None


@dataclass(frozen=True)
class Participant:
    id: int
    side: Side | None
    name: str | None = None


@dataclass(frozen=True)
class FixtureSummary:
    id: int
    league_id: int | None
    starting_at: datetime | None
    state: str | None
    participants: tuple[Participant, ...] = ()
    scores: tuple[ScoreEntry, ...] = ()

    def participant(self, side: Side) -> Participant | None:
        for p in self.participants:
            if p.side == side:
                return p
        return None

    def side_of(self, team_id: int) -> Side | None:
        for p in self.participants:
            if p.id == team_id:
                return p.side
        return None


@dataclass(frozen=True)
class StatDetail:
    type_id: int
    value: StatValue = ABSENT


@dataclass(frozen=True)
class StandingFormEntry:
    letter: FormResult
    sort_order: float


@dataclass(frozen=True)
class StandingRow:
    participant_id: int
    participant_name: str | None = None
    position: int | None = None
    points: float | None = None
    details: tuple[StatDetail, ...] = ()
    form: tuple[StandingFormEntry, ...] = ()


@dataclass(frozen=True)
class OddsQuote:
    bookmaker_id: int
    market_id: int
    label: str
    american: float | None = None
    decimal: float | None = None
    bookmaker_name: str | None = None
    market_name: str | None = None

    @property
    def is_priced(self) -> bool:
        return self.american is not None or self.decimal is not None


# -----------------------------
# Derived entities
# -----------------------------


@dataclass(frozen=True)
class FormMatch:
    fixture_id: int
    result: FormResult
    goals_for: int
    goals_against: int
    opponent_name: str
    date: datetime | None


@dataclass(frozen=True)
class ResolvedScore:
    home: int | None
    away: int | None

    @property
    def is_complete(self) -> bool:
        return self.home is not None and self.away is not None


def find_detail(details: tuple[StatDetail, ...] | list[StatDetail], type_id: int | None) -> StatValue:
    """First detail with `type_id`, else ABSENT. Unknown codes are simply not found."""

    if type_id is None:
        return ABSENT
    for d in details:
        if d.type_id == type_id:
            return d.value
    return ABSENT


__all__ = [
    "FixtureSummary",
    "FormMatch",
    "FormResult",
    "OddsQuote",
    "Participant",
    "ResolvedScore",
    "ScoreDescription",
    "ScoreEntry",
    "Side",
    "StandingFormEntry",
    "StandingRow",
    "StandingsView",
    "StatDetail",
    "Venue",
    "find_detail",
]
