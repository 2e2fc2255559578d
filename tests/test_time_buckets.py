from __future__ import annotations

from fixture_insights.derived.time_buckets import (
    BUCKET_KEYS,
    bucket_scale_max,
    extract_time_buckets,
    scoring_distribution,
)
from fixture_insights.derived.types import StatDetail
from fixture_insights.derived.values import classify_value

SCORING = 196
CONCEDED = 213


def _detail(type_id: int, raw: object) -> StatDetail:
    return StatDetail(type_id=type_id, value=classify_value(raw))


def test_extract_time_buckets_resolves_every_bucket_shape() -> None:
    details = [
        _detail(
            SCORING,
            {
                "0-15": {"count": 2, "percentage": 20.0},
                "15-30": 3,
                "30-45": "1",
                "45-60": {"total": 4},
                "60-75": {"all": 5},
                "75-90": "n/a",
            },
        )
    ]

    buckets = extract_time_buckets(details, SCORING)

    assert buckets == {"0-15": 2, "15-30": 3, "30-45": 1, "45-60": 4, "60-75": 5, "75-90": 0}
    assert tuple(buckets) == BUCKET_KEYS


def test_extract_time_buckets_missing_keys_are_zero() -> None:
    buckets = extract_time_buckets([_detail(SCORING, {"0-15": {"count": 1}})], SCORING)

    assert buckets is not None
    assert sum(buckets.values()) == 1


def test_extract_time_buckets_none_without_mapping() -> None:
    assert extract_time_buckets([], SCORING) is None
    assert extract_time_buckets([_detail(SCORING, 12)], SCORING) is None
    assert extract_time_buckets([_detail(SCORING, "12")], SCORING) is None


def test_bucket_scale_max_has_floor_of_one() -> None:
    assert bucket_scale_max() == 1
    assert bucket_scale_max(None, {"0-15": 0}) == 1
    assert bucket_scale_max({"0-15": 2}, {"75-90": 7}) == 7


def test_scoring_distribution_shares_scale_and_totals() -> None:
    details = [
        _detail(SCORING, {"0-15": {"count": 2, "percentage": 40.04}, "75-90": {"count": 3}}),
        _detail(CONCEDED, {"30-45": {"count": 6, "percentage": 100}}),
    ]

    dist = scoring_distribution(details)

    assert dist.total_scored == 5
    assert dist.total_conceded == 6
    assert dist.scale_max == 6
    assert dist.scored is not None
    assert dist.scored[0].percentage == 40.0
    assert dist.scored[-1].goals == 3
    assert dist.scored[-1].percentage == 0.0


def test_scoring_distribution_without_stats() -> None:
    dist = scoring_distribution([])

    assert dist.scored is None and dist.conceded is None
    assert dist.total_scored == 0
    assert dist.scale_max == 1


def test_extract_time_buckets_accepts_underscore_keys() -> None:
    details = [_detail(SCORING, {"0_15": {"count": 4, "percentage": 66.7}, "15_30": 2})]

    buckets = extract_time_buckets(details, SCORING)
    dist = scoring_distribution(details)

    assert buckets == {"0-15": 4, "15-30": 2, "30-45": 0, "45-60": 0, "60-75": 0, "75-90": 0}
    assert dist.scored is not None
    assert dist.scored[0].percentage == 66.7
