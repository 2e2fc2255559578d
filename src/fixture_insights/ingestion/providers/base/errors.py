from __future__ import annotations


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""


class ProviderRateLimited(ProviderRequestError):
    """Provider throttled the request (HTTP 429)."""


class ProviderAuthError(ProviderRequestError):
    """Token missing, invalid or not entitled to the resource (HTTP 401/403)."""


class ProviderResponseError(ProviderError):
    """Provider returned a well-formed response indicating an application-level error."""
