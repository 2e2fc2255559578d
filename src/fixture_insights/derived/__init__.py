from fixture_insights.derived.corners import (
    CornerAverages,
    VenueCorners,
    combined_expected_corners,
    project_corner_averages,
)
from fixture_insights.derived.errors import InvalidPayloadError
from fixture_insights.derived.form import FormSummary, calculate_form, summarize_form
from fixture_insights.derived.odds import (
    MarketGroup,
    aggregate_odds,
    bookmakers_with_valid_baseline,
    canonical_label,
    choose_default_bookmakers,
    market_name,
)
from fixture_insights.derived.performance import (
    VenuePerformance,
    games_played_by_venue,
    project_venue_performance,
)
from fixture_insights.derived.scores import (
    display_scoreline,
    head_to_head_rows,
    resolve_fixture_score,
    resolve_score,
)
from fixture_insights.derived.standings import (
    ProjectedStandingRow,
    Zone,
    classify_zone,
    project_standings,
)
from fixture_insights.derived.taxonomy import DEFAULT_TAXONOMY, TypeTaxonomy
from fixture_insights.derived.time_buckets import (
    BUCKET_KEYS,
    bucket_scale_max,
    extract_time_buckets,
    scoring_distribution,
)

__all__ = [
    "BUCKET_KEYS",
    "DEFAULT_TAXONOMY",
    "CornerAverages",
    "FormSummary",
    "InvalidPayloadError",
    "MarketGroup",
    "ProjectedStandingRow",
    "TypeTaxonomy",
    "VenueCorners",
    "VenuePerformance",
    "Zone",
    "aggregate_odds",
    "bookmakers_with_valid_baseline",
    "bucket_scale_max",
    "calculate_form",
    "canonical_label",
    "choose_default_bookmakers",
    "classify_zone",
    "combined_expected_corners",
    "display_scoreline",
    "extract_time_buckets",
    "games_played_by_venue",
    "head_to_head_rows",
    "market_name",
    "project_corner_averages",
    "project_standings",
    "project_venue_performance",
    "resolve_fixture_score",
    "resolve_score",
    "scoring_distribution",
    "summarize_form",
]
