from __future__ import annotations

import logging
from typing import Any

from fixture_insights.derived.errors import require_mapping, require_sequence
from fixture_insights.derived.types import (
    FixtureSummary,
    FormResult,
    OddsQuote,
    Participant,
    ScoreDescription,
    ScoreEntry,
    Side,
    StandingFormEntry,
    StandingRow,
    StatDetail,
)
from fixture_insights.derived.values import classify_value, parse_number
from fixture_insights.ingestion.dates import parse_sportmonks_datetime

logger = logging.getLogger(__name__)

ApiItem = dict[str, Any]


def _as_int(value: Any) -> int | None:
    number = parse_number(value)
    if number is None:
        return None
    return int(number)


def _as_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_side(value: Any) -> Side | None:
    if not isinstance(value, str):
        return None
    try:
        return Side(value.strip().lower())
    except ValueError:
        return None


def _nested(item: ApiItem, key: str) -> ApiItem:
    value = item.get(key)
    return value if isinstance(value, dict) else {}


# -----------------------------
# Fixtures
# -----------------------------


def parse_score_entries(items: Any) -> tuple[ScoreEntry, ...]:
    entries: list[ScoreEntry] = []
    for item in require_sequence(items, name="scores"):
        if not isinstance(item, dict):
            continue
        score = _nested(item, "score")
        side = _as_side(score.get("participant"))
        if side is None:
            continue
        entries.append(
            ScoreEntry(
                description=ScoreDescription.from_raw(item.get("description")),
                side=side,
                goals=_as_int(score.get("goals")),
                type_id=_as_int(item.get("type_id")),
            )
        )
    return tuple(entries)


def parse_participants(items: Any) -> tuple[Participant, ...]:
    participants: list[Participant] = []
    for item in require_sequence(items, name="participants"):
        if not isinstance(item, dict):
            continue
        pid = _as_int(item.get("id"))
        if pid is None:
            continue
        participants.append(
            Participant(
                id=pid,
                side=_as_side(_nested(item, "meta").get("location")),
                name=_as_str(item.get("name")),
            )
        )
    return tuple(participants)


def _state_short_name(item: ApiItem) -> str | None:
    state = item.get("state")
    if isinstance(state, dict):
        return _as_str(state.get("state")) or _as_str(state.get("short_name"))
    return _as_str(state)


def parse_fixture(item: Any) -> FixtureSummary | None:
    """One fixture object -> FixtureSummary; None when it has no usable id."""

    raw = require_mapping(item, name="fixture")
    fixture_id = _as_int(raw.get("id"))
    if fixture_id is None:
        logger.debug("Skipping fixture without id: keys=%s", sorted(raw))
        return None

    participants = raw.get("participants")
    scores = raw.get("scores")
    return FixtureSummary(
        id=fixture_id,
        league_id=_as_int(raw.get("league_id")),
        starting_at=parse_sportmonks_datetime(
            raw.get("starting_at"), timestamp=raw.get("starting_at_timestamp")
        ),
        state=_state_short_name(raw),
        participants=parse_participants(participants) if isinstance(participants, list) else (),
        scores=parse_score_entries(scores) if isinstance(scores, list) else (),
    )


def parse_fixtures(items: Any) -> list[FixtureSummary]:
    fixtures: list[FixtureSummary] = []
    for item in require_sequence(items, name="fixtures"):
        if not isinstance(item, dict):
            continue
        fixture = parse_fixture(item)
        if fixture is not None:
            fixtures.append(fixture)
    return fixtures


# -----------------------------
# Statistics / standings
# -----------------------------


def parse_stat_details(items: Any) -> tuple[StatDetail, ...]:
    details: list[StatDetail] = []
    for item in require_sequence(items, name="details"):
        if not isinstance(item, dict):
            continue
        type_id = _as_int(item.get("type_id"))
        if type_id is None:
            continue
        details.append(StatDetail(type_id=type_id, value=classify_value(item.get("value"))))
    return tuple(details)


def select_team_statistics(team: Any, *, season_id: int | None = None) -> tuple[StatDetail, ...]:
    """Details of the team's statistics block for `season_id` (first block when None)."""

    raw = require_mapping(team, name="team")
    blocks = raw.get("statistics")
    if not isinstance(blocks, list):
        return ()

    for block in blocks:
        if not isinstance(block, dict):
            continue
        if season_id is not None and _as_int(block.get("season_id")) != season_id:
            continue
        details = block.get("details")
        return parse_stat_details(details) if isinstance(details, list) else ()
    return ()


def _parse_form(items: Any) -> tuple[StandingFormEntry, ...]:
    if not isinstance(items, list):
        return ()
    form: list[StandingFormEntry] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        letter = _as_str(item.get("form"))
        try:
            result = FormResult(letter.upper()) if letter else None
        except ValueError:
            result = None
        if result is None:
            continue
        order = parse_number(item.get("sort_order"))
        form.append(StandingFormEntry(letter=result, sort_order=order if order is not None else index))
    return tuple(form)


def parse_standing_rows(items: Any) -> list[StandingRow]:
    rows: list[StandingRow] = []
    for item in require_sequence(items, name="standings"):
        if not isinstance(item, dict):
            continue
        participant = _nested(item, "participant")
        participant_id = _as_int(item.get("participant_id"))
        if participant_id is None:
            participant_id = _as_int(participant.get("id"))
        if participant_id is None:
            continue
        details = item.get("details")
        rows.append(
            StandingRow(
                participant_id=participant_id,
                participant_name=_as_str(participant.get("name")),
                position=_as_int(item.get("position")),
                points=parse_number(item.get("points")),
                details=parse_stat_details(details) if isinstance(details, list) else (),
                form=_parse_form(item.get("form")),
            )
        )
    return rows


# -----------------------------
# Odds
# -----------------------------


def parse_odds_quotes(items: Any) -> list[OddsQuote]:
    """Pre-match odds entries -> OddsQuote.

    `american` arrives as a signed string ("+110") or number; `value`/`dp3`
    carry the decimal price.
    """

    quotes: list[OddsQuote] = []
    for item in require_sequence(items, name="odds"):
        if not isinstance(item, dict):
            continue
        bookmaker_id = _as_int(item.get("bookmaker_id"))
        market_id = _as_int(item.get("market_id"))
        label = _as_str(item.get("label")) or _as_str(item.get("name"))
        if bookmaker_id is None or market_id is None or label is None:
            continue

        decimal = parse_number(item.get("value"))
        if decimal is None:
            decimal = parse_number(item.get("dp3"))

        quotes.append(
            OddsQuote(
                bookmaker_id=bookmaker_id,
                market_id=market_id,
                label=label,
                american=parse_number(item.get("american")),
                decimal=decimal,
                bookmaker_name=_as_str(_nested(item, "bookmaker").get("name")),
                market_name=_as_str(_nested(item, "market").get("name")),
            )
        )
    return quotes
