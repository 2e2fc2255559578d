from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import ProviderAuthError, ProviderRateLimited, ProviderRequestError

logger = logging.getLogger(__name__)

Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
    - Sends `default_params` (e.g. query-string tokens) on every request.
    - Maps transport failures and non-2xx statuses onto provider errors.
    """

    base_url: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)
    default_params: Mapping[str, str] = field(default_factory=dict, repr=False)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Json:
        """
        Perform an HTTP request and return the parsed JSON object.
        Raises ProviderRequestError (or a subclass) on transport issues / non-2xx.
        """
        merged: dict[str, Any] = dict(self.default_params)
        if params:
            merged.update(params)

        logger.debug("%s %s params=%s", method, path, sorted(k for k in merged if k != "api_token"))
        try:
            resp = self._client.request(method=method, url=path.lstrip("/"), params=merged)
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            raise ProviderRequestError(str(e)) from e

        if resp.status_code == 429:
            raise ProviderRateLimited("Provider rate limited the request (HTTP 429).")
        if resp.status_code in (401, 403):
            raise ProviderAuthError(f"HTTP {resp.status_code}: check the API token and plan.")

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Never echo the query string; it carries the token.
            raise ProviderRequestError(
                f"HTTP {resp.status_code} for {method} {resp.request.url.path}"
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderRequestError("Response was not valid JSON.") from e

        if not isinstance(data, dict):
            raise ProviderRequestError(f"Expected JSON object, got {type(data)}")

        return data

    def get_json(self, path: str, *, params: Mapping[str, Any] | None = None) -> Json:
        return self.request_json("GET", path, params=params)
