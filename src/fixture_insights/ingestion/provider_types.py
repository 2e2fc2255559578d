from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from fixture_insights.db.repos.provider_type_repo import ProviderTypeRepository
from fixture_insights.derived.taxonomy import (
    DEFAULT_TAXONOMY,
    TypeTaxonomy,
    taxonomy_from_provider_types,
)
from fixture_insights.ingestion.providers.sportmonks.client import SportMonksClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncProviderTypesResult:
    total_from_api: int
    inserted: int
    updated: int
    duration_s: float
    synced_at: datetime


def sync_provider_types(session: Session, client: SportMonksClient) -> SyncProviderTypesResult:
    """Fetch the full provider type catalog and upsert it into `provider_types`."""

    started = time.monotonic()
    synced_at = datetime.now(UTC)

    items = list(client.iter_types())
    inserted, updated = ProviderTypeRepository(session).upsert_many(items, synced_at=synced_at)

    result = SyncProviderTypesResult(
        total_from_api=len(items),
        inserted=inserted,
        updated=updated,
        duration_s=round(time.monotonic() - started, 3),
        synced_at=synced_at,
    )
    logger.info(
        "Type catalog sync: %d from API, %d inserted, %d updated in %.3fs",
        result.total_from_api,
        result.inserted,
        result.updated,
        result.duration_s,
    )
    return result


def load_taxonomy(session: Session, *, base: TypeTaxonomy = DEFAULT_TAXONOMY) -> TypeTaxonomy:
    """Taxonomy from the stored catalog; `base` unchanged when the catalog is empty."""

    rows = ProviderTypeRepository(session).all()
    if not rows:
        logger.info("Type catalog is empty; using built-in taxonomy %s", base.version)
        return base

    newest = max((r.last_synced_at for r in rows if r.last_synced_at is not None), default=None)
    version = f"catalog@{newest.date().isoformat()}" if newest else "catalog"
    return taxonomy_from_provider_types(rows, base=base, version=version)
