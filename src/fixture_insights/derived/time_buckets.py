from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from fixture_insights.derived.errors import require_sequence
from fixture_insights.derived.taxonomy import DEFAULT_TAXONOMY, TypeTaxonomy
from fixture_insights.derived.types import StatDetail, find_detail
from fixture_insights.derived.values import (
    Absent,
    StatValue,
    is_mapping_shaped,
    keyed_entry,
    percentage_of,
    to_count,
)

# Provider convention; the overlap at 15/30/... is passed through as-is.
BUCKET_KEYS: tuple[str, ...] = ("0-15", "15-30", "30-45", "45-60", "60-75", "75-90")


def _bucket_entry(value: StatValue, key: str) -> StatValue:
    # Some payloads key buckets as "0_15" instead of "0-15".
    entry = keyed_entry(value, key)
    if isinstance(entry, Absent):
        entry = keyed_entry(value, key.replace("-", "_"))
    return entry


def extract_time_buckets(details: Sequence[StatDetail], type_id: int) -> dict[str, int] | None:
    """Per-bucket goal counts for a scoring-minutes stat.

    None when the stat is missing or not an object at all. Individual buckets
    that cannot be resolved become 0 so the buckets always sum to a finite total.
    """

    items = require_sequence(details, name="statistic details")
    value = find_detail([d for d in items if isinstance(d, StatDetail)], type_id)
    if not is_mapping_shaped(value):
        return None
    return {key: to_count(_bucket_entry(value, key)) for key in BUCKET_KEYS}


def bucket_scale_max(*bucket_maps: Mapping[str, int] | None) -> int:
    """Largest bucket across every map being compared, never below 1."""

    largest = 1
    for buckets in bucket_maps:
        if not buckets:
            continue
        for count in buckets.values():
            largest = max(largest, count)
    return largest


@dataclass(frozen=True)
class BucketShare:
    range: str
    goals: int
    percentage: float


@dataclass(frozen=True)
class ScoringDistribution:
    scored: tuple[BucketShare, ...] | None
    conceded: tuple[BucketShare, ...] | None
    total_scored: int
    total_conceded: int
    scale_max: int


def _shares(details: Sequence[StatDetail], type_id: int) -> tuple[BucketShare, ...] | None:
    buckets = extract_time_buckets(details, type_id)
    if buckets is None:
        return None
    value = find_detail(details, type_id)
    shares: list[BucketShare] = []
    for key in BUCKET_KEYS:
        pct = percentage_of(_bucket_entry(value, key))
        shares.append(
            BucketShare(
                range=key,
                goals=buckets[key],
                percentage=round(pct, 1) if pct is not None else 0.0,
            )
        )
    return tuple(shares)


def scoring_distribution(
    details: Sequence[StatDetail],
    *,
    taxonomy: TypeTaxonomy = DEFAULT_TAXONOMY,
) -> ScoringDistribution:
    """Scored vs conceded minute buckets for one team season."""

    items = [d for d in require_sequence(details, name="statistic details") if isinstance(d, StatDetail)]
    scored = _shares(items, taxonomy.team.scoring_minutes)
    conceded = _shares(items, taxonomy.team.conceded_scoring_minutes)

    scored_map = {s.range: s.goals for s in scored} if scored else None
    conceded_map = {s.range: s.goals for s in conceded} if conceded else None

    return ScoringDistribution(
        scored=scored,
        conceded=conceded,
        total_scored=sum(scored_map.values()) if scored_map else 0,
        total_conceded=sum(conceded_map.values()) if conceded_map else 0,
        scale_max=bucket_scale_max(scored_map, conceded_map),
    )
