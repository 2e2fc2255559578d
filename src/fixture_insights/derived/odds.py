from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass

from fixture_insights.core.text import normalize_label_token
from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.types import OddsQuote

logger = logging.getLogger(__name__)

BASELINE_MARKET_ID = 1
PRIMARY_BOOKMAKER_IDS: tuple[int, ...] = (4, 9)  # Betfair, Unibet

THREE_WAY_RESULT_MARKETS = frozenset({1, 37, 80, 28075})
YES_NO_MARKETS = frozenset({14})
OVER_UNDER_MARKETS = frozenset({12, 38, 47})
DOUBLE_CHANCE_MARKETS = frozenset({63})
SCORE_FIRST_LAST_MARKETS = frozenset({69, 75})
ODD_EVEN_MARKETS = frozenset({99})
HOME_AWAY_MARKETS = frozenset({2, 10})
EXACT_GOALS_MARKETS = frozenset({97})

THREE_WAY_ORDER: tuple[str, ...] = ("Home", "Draw", "Away")

MARKET_NAMES: dict[int, str] = {
    1: "Fulltime Result (1X2)",
    2: "Home/Away",
    5: "Alternative Match Goals",
    10: "Home/Away",
    12: "Over/Under Goals",
    14: "Both Teams to Score",
    28: "Asian Handicap",
    29: "Asian Handicap Cards",
    30: "Asian Total Cards",
    31: "First Card Received",
    32: "Time of First Card",
    33: "Team Cards",
    34: "Corner Match Bet",
    35: "Corner Handicap",
    36: "Time of First Corner",
    37: "1st Half Result",
    38: "2nd Half Over/Under",
    39: "Team Corners",
    47: "2nd Half Over/Under",
    63: "Double Chance",
    69: "Team to Score First",
    75: "Team to Score Last",
    80: "2nd Half Result",
    83: "Handicap Result",
    97: "Exact Goals",
    98: "Goal Range",
    99: "Odd/Even Goals",
    100: "Result & Both Teams Score",
    101: "Result & Over/Under",
    13343: "Team Clean Sheet",
    28075: "Fulltime Result",
    28076: "To Win 2nd Half",
}

_over_under_re = re.compile(r"\b(over|more|under|less)\b", re.IGNORECASE)
_digits_re = re.compile(r"^\d+$")


# -----------------------------
# Label rule tables
# -----------------------------


def _three_way(token: str, raw: str) -> str:
    return {
        "1": "Home",
        "home": "Home",
        "x": "Draw",
        "draw": "Draw",
        "2": "Away",
        "away": "Away",
    }.get(token, raw)


def _yes_no(token: str, raw: str) -> str:
    return {"yes": "Yes", "no": "No"}.get(token, raw)


def _over_under(token: str, raw: str) -> str:
    def _swap(m: re.Match[str]) -> str:
        word = m.group(1).lower()
        return "Over" if word in ("over", "more") else "Under"

    return _over_under_re.sub(_swap, raw.strip())


def _double_chance(token: str, raw: str) -> str:
    return {
        "1x": "Home or Draw",
        "x2": "Draw or Away",
        "12": "Home or Away",
    }.get(token, raw)


def _score_first_last(token: str, raw: str) -> str:
    return {"1": "Home", "2": "Away", "x": "No Goal", "none": "No Goal"}.get(token, raw)


def _odd_even(token: str, raw: str) -> str:
    return {"odd": "Odd", "even": "Even"}.get(token, raw)


def _home_away(token: str, raw: str) -> str:
    return {"1": "Home", "2": "Away"}.get(token, raw)


def _exact_goals(token: str, raw: str) -> str:
    if _digits_re.match(token):
        return f"Exactly {token} {'Goal' if token == '1' else 'Goals'}"
    return raw


LabelRule = Callable[[str, str], str]

_RULES: tuple[tuple[frozenset[int], LabelRule], ...] = (
    (THREE_WAY_RESULT_MARKETS, _three_way),
    (YES_NO_MARKETS, _yes_no),
    (OVER_UNDER_MARKETS, _over_under),
    (DOUBLE_CHANCE_MARKETS, _double_chance),
    (SCORE_FIRST_LAST_MARKETS, _score_first_last),
    (ODD_EVEN_MARKETS, _odd_even),
    (HOME_AWAY_MARKETS, _home_away),
    (EXACT_GOALS_MARKETS, _exact_goals),
)


def canonical_label(label: str, market_id: int) -> str:
    """Human label for a raw selection label; unknown labels pass through."""

    token = normalize_label_token(label)
    for markets, rule in _RULES:
        if market_id in markets:
            return rule(token, label)
    return label


def market_name(market_id: int, provided: str | None = None) -> str:
    if provided:
        return provided
    return MARKET_NAMES.get(market_id, f"Market {market_id}")


def bookmaker_display_name(bookmaker_id: int, provided: str | None = None) -> str:
    return provided or f"Bookmaker {bookmaker_id}"


# -----------------------------
# Aggregation
# -----------------------------


@dataclass(frozen=True)
class Selection:
    label: str
    raw_label: str
    american: float | None
    decimal: float | None


@dataclass(frozen=True)
class BookmakerQuotes:
    bookmaker_id: int
    bookmaker_name: str
    selections: tuple[Selection, ...]


@dataclass(frozen=True)
class MarketGroup:
    market_id: int
    market_name: str
    bookmakers: tuple[BookmakerQuotes, ...]


@dataclass(frozen=True)
class BookmakerOption:
    bookmaker_id: int
    bookmaker_name: str


def _valid_quotes(quotes: Sequence[OddsQuote]) -> list[OddsQuote]:
    items = require_sequence(quotes, name="odds quotes")
    return [q for q in items if isinstance(q, OddsQuote)]


def _bookmaker_names(quotes: Sequence[OddsQuote]) -> dict[int, str]:
    names: dict[int, str] = {}
    for q in quotes:
        if q.bookmaker_id not in names or (
            q.bookmaker_name and names[q.bookmaker_id].startswith("Bookmaker ")
        ):
            names[q.bookmaker_id] = bookmaker_display_name(q.bookmaker_id, q.bookmaker_name)
    return names


def _selections(market_id: int, quotes: Sequence[OddsQuote]) -> tuple[Selection, ...]:
    seen: set[str] = set()
    selections: list[Selection] = []
    for q in quotes:
        label = canonical_label(q.label, market_id)
        if not q.is_priced or label in seen:
            continue
        seen.add(label)
        selections.append(
            Selection(
                label=label,
                raw_label=q.label,
                american=q.american,
                decimal=q.decimal,
            )
        )

    if market_id in THREE_WAY_RESULT_MARKETS:
        # Stable sort keeps first-seen order for labels outside Home/Draw/Away.
        rank = {label: i for i, label in enumerate(THREE_WAY_ORDER)}
        selections.sort(key=lambda s: rank.get(s.label, len(THREE_WAY_ORDER)))

    return tuple(selections)


def aggregate_odds(
    quotes: Sequence[OddsQuote],
    filter_bookmaker_ids: Collection[int] | None = None,
) -> list[MarketGroup]:
    """Group quotes into market -> bookmaker -> selections.

    A bookmaker only appears in a market when at least one of its quotes in
    that market carries a price.
    """

    items = _valid_quotes(quotes)
    if filter_bookmaker_ids is not None:
        wanted = set(filter_bookmaker_ids)
        items = [q for q in items if q.bookmaker_id in wanted]

    names = _bookmaker_names(items)

    by_market: dict[int, dict[int, list[OddsQuote]]] = {}
    market_names: dict[int, str | None] = {}
    for q in items:
        by_market.setdefault(q.market_id, {}).setdefault(q.bookmaker_id, []).append(q)
        if not market_names.get(q.market_id):
            market_names[q.market_id] = q.market_name

    groups: list[MarketGroup] = []
    for market_id in sorted(by_market):
        books: list[BookmakerQuotes] = []
        for bookmaker_id, book_quotes in by_market[market_id].items():
            selections = _selections(market_id, book_quotes)
            if not selections:
                logger.debug(
                    "Dropping bookmaker %s from market %s: no priced quotes",
                    bookmaker_id,
                    market_id,
                )
                continue
            books.append(
                BookmakerQuotes(
                    bookmaker_id=bookmaker_id,
                    bookmaker_name=names[bookmaker_id],
                    selections=selections,
                )
            )
        if not books:
            continue
        books.sort(key=lambda b: (b.bookmaker_name.casefold(), b.bookmaker_id))
        groups.append(
            MarketGroup(
                market_id=market_id,
                market_name=market_name(market_id, market_names.get(market_id)),
                bookmakers=tuple(books),
            )
        )
    return groups


# -----------------------------
# Default bookmaker selection
# -----------------------------


def bookmakers_with_valid_baseline(
    quotes: Sequence[OddsQuote],
    *,
    baseline_market_id: int = BASELINE_MARKET_ID,
) -> list[BookmakerOption]:
    """Bookmakers with an American price on a home/draw/away baseline selection, alphabetical."""

    items = _valid_quotes(quotes)
    names = _bookmaker_names(items)
    valid_ids = {
        q.bookmaker_id
        for q in items
        if q.market_id == baseline_market_id
        and q.american is not None
        and _three_way(normalize_label_token(q.label), q.label) in THREE_WAY_ORDER
    }
    options = [BookmakerOption(bookmaker_id=i, bookmaker_name=names[i]) for i in valid_ids]
    options.sort(key=lambda o: (o.bookmaker_name.casefold(), o.bookmaker_id))
    return options


def choose_default_bookmakers(
    quotes: Sequence[OddsQuote],
    *,
    primary_ids: Sequence[int] = PRIMARY_BOOKMAKER_IDS,
    baseline_market_id: int = BASELINE_MARKET_ID,
    count: int = 2,
) -> list[int]:
    """Initial bookmaker subset: primaries first, padded alphabetically.

    Non-empty whenever any bookmaker has a priced baseline quote.
    """

    available = [
        o.bookmaker_id
        for o in bookmakers_with_valid_baseline(quotes, baseline_market_id=baseline_market_id)
    ]
    chosen: list[int] = []
    for bookmaker_id in primary_ids:
        if bookmaker_id in available and bookmaker_id not in chosen:
            chosen.append(bookmaker_id)
    for bookmaker_id in available:
        if len(chosen) >= count:
            break
        if bookmaker_id not in chosen:
            chosen.append(bookmaker_id)
    return chosen[:count]
