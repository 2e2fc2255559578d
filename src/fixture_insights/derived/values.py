"""Tagged union for provider statistic values.

The provider ships the same logical quantity in several shapes depending on the
type code and API version: a bare number, a numeric string, an object with
``count``/``percentage``, a venue split ``{all, home, away}``, or a keyed
object such as scoring-minute buckets. `classify_value` turns a raw JSON value
into exactly one variant at the ingestion boundary; the extraction functions
below are total over every variant.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

_COUNT_KEYS = ("count", "total", "all")
_COUNTED_MARKERS = frozenset({"count", "total", "average", "percentage"})
_SPLIT_MARKERS = frozenset({"home", "away"})


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class Numeric:
    value: float


@dataclass(frozen=True)
class Text:
    raw: str


@dataclass(frozen=True)
class Counted:
    count: float | None = None
    total: float | None = None
    all: float | None = None
    percentage: float | None = None
    average: float | None = None


@dataclass(frozen=True)
class Split:
    all: StatValue = field(default_factory=Absent)
    home: StatValue = field(default_factory=Absent)
    away: StatValue = field(default_factory=Absent)


@dataclass(frozen=True)
class Keyed:
    entries: Mapping[str, StatValue] = field(default_factory=dict)


@dataclass(frozen=True)
class Unrecognized:
    raw: Any = None


StatValue = Union[Absent, Numeric, Text, Counted, Split, Keyed, Unrecognized]

ABSENT = Absent()


def parse_number(raw: Any) -> float | None:
    """Scalar -> finite float, or None. Accepts numbers and numeric strings."""

    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def classify_value(raw: Any) -> StatValue:
    if raw is None:
        return ABSENT
    if isinstance(raw, bool):
        return Unrecognized(raw)
    if isinstance(raw, int | float):
        number = parse_number(raw)
        return Numeric(number) if number is not None else Unrecognized(raw)
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, Mapping):
        keys = set(raw.keys())
        if keys & _SPLIT_MARKERS:
            # Games-played ships `total` where other split stats ship `all`.
            return Split(
                all=classify_value(raw["all"] if "all" in raw else raw.get("total")),
                home=classify_value(raw.get("home")),
                away=classify_value(raw.get("away")),
            )
        if keys & _COUNTED_MARKERS or (keys == {"all"} and not isinstance(raw["all"], Mapping)):
            return Counted(
                count=parse_number(raw.get("count")),
                total=parse_number(raw.get("total")),
                all=parse_number(raw.get("all")),
                percentage=parse_number(raw.get("percentage")),
                average=parse_number(raw.get("average")),
            )
        return Keyed({str(k): classify_value(v) for k, v in raw.items()})
    return Unrecognized(raw)


def to_number(value: StatValue) -> float | None:
    if isinstance(value, Numeric):
        return value.value
    if isinstance(value, Text):
        return parse_number(value.raw)
    if isinstance(value, Counted):
        for key in _COUNT_KEYS:
            candidate = getattr(value, key)
            if candidate is not None:
                return candidate
        return None
    if isinstance(value, Split):
        return to_number(value.all)
    return None


def to_int(value: StatValue) -> int | None:
    number = to_number(value)
    return int(number) if number is not None else None


def to_count(value: StatValue) -> int:
    """Bucket rule: number, then count/total/all, then numeric string, else 0."""

    if isinstance(value, Numeric):
        return int(value.value)
    if isinstance(value, Counted):
        number = to_number(value)
        return int(number) if number is not None else 0
    if isinstance(value, Split):
        return to_count(value.all)
    if isinstance(value, Text):
        number = parse_number(value.raw)
        return int(number) if number is not None else 0
    return 0


def percentage_of(value: StatValue) -> float | None:
    if isinstance(value, Counted):
        return value.percentage
    return None


def venue_part(value: StatValue, venue: str) -> StatValue:
    """Pick one side of a venue split. Non-split values have no venue parts."""

    if not isinstance(value, Split):
        return ABSENT
    if venue == "home":
        return value.home
    if venue == "away":
        return value.away
    if venue == "all":
        return value.all
    return ABSENT


def keyed_entry(value: StatValue, key: str) -> StatValue:
    if isinstance(value, Keyed):
        return value.entries.get(key, ABSENT)
    return ABSENT


def is_mapping_shaped(value: StatValue) -> bool:
    return isinstance(value, Keyed | Counted | Split)
