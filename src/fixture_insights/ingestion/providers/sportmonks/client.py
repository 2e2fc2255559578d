from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from datetime import date
from typing import Any

from fixture_insights.core.config import settings
from fixture_insights.ingestion.providers.base.client import BaseHttpClient
from fixture_insights.ingestion.providers.base.errors import ProviderResponseError

logger = logging.getLogger(__name__)

ApiItem = dict[str, Any]

FIXTURE_INCLUDES: tuple[str, ...] = ("participants", "scores", "state", "league")
PER_PAGE = 50
MAX_PAGES = 200


def build_http_client(base_url: str, api_token: str | None = None) -> BaseHttpClient:
    token = api_token or settings.require_sportmonks_token()
    return BaseHttpClient(base_url=base_url, default_params={"api_token": token})


class SportMonksClient:
    """Thin SportMonks v3 client returning raw `data` payloads.

    `http` targets the football API; `core_http` targets the core API
    (type catalog). Normalization happens in `parser`, not here.
    """

    def __init__(self, *, http: BaseHttpClient, core_http: BaseHttpClient | None = None) -> None:
        self.http = http
        self.core_http = core_http

    @classmethod
    def from_settings(cls) -> SportMonksClient:
        token = settings.require_sportmonks_token()
        return cls(
            http=build_http_client(settings.sportmonks_base_url, token),
            core_http=build_http_client(settings.sportmonks_core_url, token),
        )

    def close(self) -> None:
        self.http.close()
        if self.core_http is not None:
            self.core_http.close()

    def __enter__(self) -> SportMonksClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -----------------------------
    # Request helpers
    # -----------------------------

    @staticmethod
    def _include_param(includes: Sequence[str]) -> dict[str, str]:
        return {"include": ";".join(includes)} if includes else {}

    @staticmethod
    def _data(payload: dict[str, Any], *, path: str) -> Any:
        if "data" not in payload:
            message = payload.get("message") or "response has no 'data'"
            raise ProviderResponseError(f"sportmonks {path}: {message}")
        return payload["data"]

    def _get_data(
        self,
        path: str,
        *,
        includes: Sequence[str] = (),
        params: dict[str, Any] | None = None,
        http: BaseHttpClient | None = None,
    ) -> Any:
        query = self._include_param(includes)
        if params:
            query.update(params)
        payload = (http or self.http).get_json(path, params=query)
        return self._data(payload, path=path)

    def _iter_pages(
        self,
        path: str,
        *,
        includes: Sequence[str] = (),
        per_page: int = PER_PAGE,
        http: BaseHttpClient | None = None,
    ) -> Iterator[ApiItem]:
        page = 1
        while page <= MAX_PAGES:
            query = self._include_param(includes)
            query.update({"per_page": per_page, "page": page})
            payload = (http or self.http).get_json(path, params=query)
            items = self._data(payload, path=path)
            if not isinstance(items, list):
                raise ProviderResponseError(f"sportmonks {path}: expected a list, got {type(items)}")

            for item in items:
                if isinstance(item, dict):
                    yield item

            pagination = payload.get("pagination")
            has_more = isinstance(pagination, dict) and pagination.get("has_more") is True
            logger.debug("Fetched %s page %d (%d items, has_more=%s)", path, page, len(items), has_more)
            if not has_more or not items:
                return
            page += 1
        logger.warning("Stopped paging %s after %d pages", path, MAX_PAGES)

    # -----------------------------
    # Endpoints
    # -----------------------------

    def get_fixture(self, fixture_id: int, *, include_odds: bool = True) -> ApiItem:
        includes = list(FIXTURE_INCLUDES)
        if include_odds:
            includes += ["odds.bookmaker", "odds.market"]
        data = self._get_data(f"/fixtures/{fixture_id}", includes=includes)
        if not isinstance(data, dict):
            raise ProviderResponseError(f"Expected fixture object, got {type(data)}")
        return data

    def get_head_to_head(self, team1_id: int, team2_id: int) -> list[ApiItem]:
        data = self._get_data(
            f"/fixtures/head-to-head/{team1_id}/{team2_id}", includes=FIXTURE_INCLUDES
        )
        return [i for i in data if isinstance(i, dict)] if isinstance(data, list) else []

    def get_team_fixtures_between(self, start: date, end: date, team_id: int) -> list[ApiItem]:
        path = f"/fixtures/between/{start.isoformat()}/{end.isoformat()}/{team_id}"
        return list(self._iter_pages(path, includes=FIXTURE_INCLUDES))

    def get_standings(self, season_id: int) -> list[ApiItem]:
        data = self._get_data(
            f"/standings/seasons/{season_id}", includes=("participant", "form", "details")
        )
        return [i for i in data if isinstance(i, dict)] if isinstance(data, list) else []

    def get_team_statistics(self, team_id: int, season_id: int) -> ApiItem:
        data = self._get_data(
            f"/teams/{team_id}",
            includes=("statistics.details",),
            params={"filters": f"teamStatisticSeasons:{season_id}"},
        )
        if not isinstance(data, dict):
            raise ProviderResponseError(f"Expected team object, got {type(data)}")
        return data

    def iter_types(self) -> Iterator[ApiItem]:
        if self.core_http is None:
            raise ProviderResponseError("Type catalog requires a core API client")
        yield from self._iter_pages("/types", per_page=100, http=self.core_http)
