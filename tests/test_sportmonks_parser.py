from __future__ import annotations

from datetime import UTC, datetime

import pytest

from fixture_insights.derived.errors import InvalidPayloadError
from fixture_insights.derived.types import FormResult, ScoreDescription, Side
from fixture_insights.derived.values import Counted, Numeric, Split
from fixture_insights.ingestion.dates import parse_sportmonks_datetime
from fixture_insights.ingestion.providers.sportmonks.parser import (
    parse_fixture,
    parse_fixtures,
    parse_odds_quotes,
    parse_standing_rows,
    select_team_statistics,
)


def _fixture_payload() -> dict:
    return {
        "id": 19134454,
        "league_id": 8,
        "starting_at": "2024-08-17 14:00:00",
        "state": {"id": 5, "state": "FT", "name": "Full Time"},
        "participants": [
            {"id": 9, "name": "Manchester City", "meta": {"location": "home"}},
            {"id": 14, "name": "Manchester United", "meta": {"location": "away"}},
            "garbage",
        ],
        "scores": [
            {"type_id": 1, "description": "1ST_HALF", "score": {"goals": 1, "participant": "home"}},
            {"type_id": 1525, "description": "CURRENT", "score": {"goals": 2, "participant": "home"}},
            {"type_id": 1525, "description": "CURRENT", "score": {"goals": "1", "participant": "away"}},
            {"type_id": 99, "description": "SOMETHING_NEW", "score": {"goals": 0, "participant": "away"}},
            {"description": "CURRENT", "score": {"goals": 5}},
        ],
    }


def test_parse_fixture_maps_provider_fields() -> None:
    fixture = parse_fixture(_fixture_payload())

    assert fixture is not None
    assert fixture.id == 19134454
    assert fixture.state == "FT"
    assert fixture.starting_at == datetime(2024, 8, 17, 14, 0, tzinfo=UTC)
    assert [p.id for p in fixture.participants] == [9, 14]
    assert fixture.side_of(14) == Side.AWAY
    assert len(fixture.scores) == 4
    assert fixture.scores[2].goals == 1
    assert fixture.scores[3].description == ScoreDescription.UNKNOWN


def test_parse_fixtures_skips_items_without_id() -> None:
    fixtures = parse_fixtures([_fixture_payload(), {"name": "no id"}, 42])

    assert [f.id for f in fixtures] == [19134454]


def test_parse_fixture_rejects_non_object() -> None:
    with pytest.raises(InvalidPayloadError):
        parse_fixture(["not", "a", "fixture"])


def test_parse_fixtures_rejects_non_list() -> None:
    with pytest.raises(InvalidPayloadError):
        parse_fixtures({"data": []})


def test_parse_sportmonks_datetime_variants() -> None:
    expected = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

    assert parse_sportmonks_datetime("2024-01-02 03:04:05") == expected
    assert parse_sportmonks_datetime("2024-01-02T03:04:05Z") == expected
    assert parse_sportmonks_datetime(None, timestamp=int(expected.timestamp())) == expected
    assert parse_sportmonks_datetime("not a date") is None
    assert parse_sportmonks_datetime("") is None


def test_parse_standing_rows() -> None:
    payload = [
        {
            "participant_id": 9,
            "participant": {"id": 9, "name": "Manchester City"},
            "position": 1,
            "points": 91,
            "details": [
                {"type_id": 129, "value": 38},
                {"type_id": 179, "value": "62"},
                {"value": 1},
            ],
            "form": [
                {"form": "w", "sort_order": 2},
                {"form": "?", "sort_order": 3},
                {"form": "D", "sort_order": 1},
            ],
        },
        {"participant": {"name": "No id"}},
    ]

    [row] = parse_standing_rows(payload)

    assert row.participant_id == 9
    assert row.participant_name == "Manchester City"
    assert row.points == 91
    assert [d.type_id for d in row.details] == [129, 179]
    assert row.details[0].value == Numeric(38.0)
    assert [f.letter for f in row.form] == [FormResult.WIN, FormResult.DRAW]


def test_select_team_statistics_by_season() -> None:
    team = {
        "id": 9,
        "statistics": [
            {"season_id": 21646, "details": [{"type_id": 52, "value": {"all": {"count": 80}}}]},
            {
                "season_id": 23614,
                "details": [
                    {"type_id": 34, "value": {"home": {"count": 60}, "away": {"count": 40}}},
                    {"type_id": 194, "value": {"count": 12}},
                ],
            },
        ],
    }

    details = select_team_statistics(team, season_id=23614)

    assert [d.type_id for d in details] == [34, 194]
    assert isinstance(details[0].value, Split)
    assert details[1].value == Counted(count=12.0)
    assert [d.type_id for d in select_team_statistics(team)] == [52]
    assert select_team_statistics(team, season_id=1) == ()
    assert select_team_statistics({"id": 9}) == ()


def test_parse_odds_quotes() -> None:
    payload = [
        {
            "bookmaker_id": 4,
            "bookmaker": {"id": 4, "name": "Betfair"},
            "market_id": 1,
            "market": {"id": 1, "name": "Fulltime Result"},
            "label": "1",
            "american": "+110",
            "value": "2.10",
        },
        {"bookmaker_id": 9, "market_id": 1, "name": "X", "dp3": "3.400"},
        {"bookmaker_id": 9, "market_id": 1, "label": "2"},
        {"market_id": 1, "label": "2", "value": "4.0"},
    ]

    quotes = parse_odds_quotes(payload)

    assert len(quotes) == 3
    assert quotes[0].american == 110
    assert quotes[0].decimal == 2.1
    assert quotes[0].bookmaker_name == "Betfair"
    assert quotes[0].market_name == "Fulltime Result"
    assert quotes[1].label == "X"
    assert quotes[1].decimal == 3.4
    assert not quotes[2].is_priced
