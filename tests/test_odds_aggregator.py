from __future__ import annotations

from fixture_insights.derived.odds import (
    aggregate_odds,
    bookmakers_with_valid_baseline,
    canonical_label,
    choose_default_bookmakers,
    market_name,
)
from fixture_insights.derived.types import OddsQuote


def _q(
    bookmaker_id: int,
    market_id: int,
    label: str,
    american: float | None = None,
    decimal: float | None = None,
    *,
    bookmaker_name: str | None = None,
) -> OddsQuote:
    return OddsQuote(
        bookmaker_id=bookmaker_id,
        market_id=market_id,
        label=label,
        american=american,
        decimal=decimal,
        bookmaker_name=bookmaker_name,
    )


def test_canonical_label_rule_tables() -> None:
    assert canonical_label("1", 1) == "Home"
    assert canonical_label("X", 37) == "Draw"
    assert canonical_label("away", 28075) == "Away"
    assert canonical_label("YES", 14) == "Yes"
    assert canonical_label("More 2.5", 12) == "Over 2.5"
    assert canonical_label("less 1.5", 47) == "Under 1.5"
    assert canonical_label("1X", 63) == "Home or Draw"
    assert canonical_label("x", 69) == "No Goal"
    assert canonical_label("odd", 99) == "Odd"
    assert canonical_label("2", 10) == "Away"
    assert canonical_label("1", 97) == "Exactly 1 Goal"
    assert canonical_label("3", 97) == "Exactly 3 Goals"


def test_canonical_label_passes_unknown_labels_through() -> None:
    assert canonical_label("Draw No Bet", 1) == "Draw No Bet"
    assert canonical_label("1", 5) == "1"


def test_market_name_prefers_payload_then_lookup() -> None:
    assert market_name(1, "Match Winner") == "Match Winner"
    assert market_name(14) == "Both Teams to Score"
    assert market_name(424242) == "Market 424242"


def test_aggregate_orders_three_way_selections_home_draw_away() -> None:
    quotes = [
        _q(4, 1, "2", american=250),
        _q(4, 1, "Other", decimal=9.0),
        _q(4, 1, "X", american=220),
        _q(4, 1, "1", american=-110),
    ]

    groups = aggregate_odds(quotes)

    assert len(groups) == 1
    labels = [s.label for s in groups[0].bookmakers[0].selections]
    assert labels == ["Home", "Draw", "Away", "Other"]
    assert groups[0].market_name == "Fulltime Result (1X2)"


def test_aggregate_drops_unpriced_bookmakers_and_empty_markets() -> None:
    quotes = [
        _q(4, 1, "1", american=100, bookmaker_name="Betfair"),
        _q(9, 1, "1", bookmaker_name="Unibet"),
        _q(9, 14, "Yes"),
    ]

    groups = aggregate_odds(quotes)

    assert [g.market_id for g in groups] == [1]
    assert [b.bookmaker_name for b in groups[0].bookmakers] == ["Betfair"]


def test_aggregate_first_priced_quote_per_label_wins() -> None:
    quotes = [
        _q(4, 14, "Yes"),
        _q(4, 14, "Yes", decimal=1.8),
        _q(4, 14, "Yes", decimal=2.5),
        _q(4, 14, "No", decimal=2.0),
    ]

    selections = aggregate_odds(quotes)[0].bookmakers[0].selections

    assert [(s.label, s.decimal) for s in selections] == [("Yes", 1.8), ("No", 2.0)]


def test_aggregate_sorts_markets_and_bookmakers() -> None:
    quotes = [
        _q(2, 14, "Yes", decimal=1.9, bookmaker_name="zebra"),
        _q(7, 14, "Yes", decimal=1.8, bookmaker_name="Alpha"),
        _q(3, 14, "Yes", decimal=1.7),
        _q(7, 1, "1", decimal=2.1, bookmaker_name="Alpha"),
    ]

    groups = aggregate_odds(quotes)

    assert [g.market_id for g in groups] == [1, 14]
    assert [b.bookmaker_name for b in groups[1].bookmakers] == ["Alpha", "Bookmaker 3", "zebra"]


def test_aggregate_filter_restricts_bookmakers() -> None:
    quotes = [
        _q(4, 1, "1", decimal=2.0),
        _q(9, 1, "1", decimal=2.1),
    ]

    groups = aggregate_odds(quotes, filter_bookmaker_ids=[9])

    assert [b.bookmaker_id for b in groups[0].bookmakers] == [9]
    assert aggregate_odds(quotes, filter_bookmaker_ids=[]) == []


def test_bookmakers_with_valid_baseline_requires_american_result_price() -> None:
    quotes = [
        _q(4, 1, "X", american=230, bookmaker_name="Betfair"),
        _q(9, 14, "Yes", american=-120, bookmaker_name="Unibet"),
        _q(11, 1, "1", bookmaker_name="Bet365"),
        _q(2, 1, "home", american=120, bookmaker_name="Ace"),
        _q(5, 1, "1", decimal=2.2, bookmaker_name="Coral"),
        _q(6, 1, "Draw No Bet", american=150, bookmaker_name="Dafabet"),
    ]

    options = bookmakers_with_valid_baseline(quotes)

    assert [o.bookmaker_id for o in options] == [2, 4]


def test_choose_default_bookmakers_tiers() -> None:
    both = [
        _q(9, 1, "1", american=100, bookmaker_name="Unibet"),
        _q(4, 1, "1", american=100, bookmaker_name="Betfair"),
        _q(1, 1, "1", american=100, bookmaker_name="Aardvark"),
    ]
    assert choose_default_bookmakers(both) == [4, 9]

    one = [
        _q(9, 1, "1", american=100, bookmaker_name="Unibet"),
        _q(20, 1, "1", american=100, bookmaker_name="Zed"),
        _q(21, 1, "1", american=100, bookmaker_name="Bwin"),
    ]
    assert choose_default_bookmakers(one) == [9, 21]

    none = [
        _q(20, 1, "1", american=100, bookmaker_name="Zed"),
        _q(21, 1, "1", american=100, bookmaker_name="Bwin"),
        _q(22, 1, "1", american=100, bookmaker_name="Coral"),
    ]
    assert choose_default_bookmakers(none) == [21, 22]

    assert choose_default_bookmakers([_q(4, 1, "1", decimal=2.0)]) == []


def test_aggregate_dedupes_on_canonical_label() -> None:
    quotes = [
        _q(4, 1, "1", american=-110),
        _q(4, 1, "Home", american=-105),
        _q(4, 1, "X", american=220),
        _q(4, 1, "2", american=250),
    ]

    selections = aggregate_odds(quotes)[0].bookmakers[0].selections

    assert [s.label for s in selections] == ["Home", "Draw", "Away"]
    assert selections[0].american == -110
