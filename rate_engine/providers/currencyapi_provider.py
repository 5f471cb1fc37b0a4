"""currencyapi.com (keyed) provider implementation."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from rate_engine.utils.datetime import parse_timestamp, utc_now

from .base import BaseRateProvider, ProviderNotConfigured, ProviderUnavailable, RateNotFound
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .schemas import RateEntry, normalize_code

DEFAULT_BASE_URL = "https://api.currencyapi.com/v3"
NOT_FOUND_STATUSES = {404, 422}


class CurrencyApiProvider(BaseRateProvider):
    """Provider backed by the ``/latest`` endpoint of currencyapi.com.

    The API key is optional at construction time; without one every fetch
    raises ``ProviderNotConfigured`` so the resolution chain can skip it.
    """

    name = "currencyapi"

    def __init__(self, client: HTTPClient, api_key: str | None) -> None:
        self._client = client
        self._api_key = (api_key or "").strip() or None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CurrencyApiProvider:
        base_url_value = config.get("CURRENCY_API_BASE_URL")
        if not isinstance(base_url_value, str) or not base_url_value.strip():
            base_url = DEFAULT_BASE_URL
        else:
            base_url = base_url_value
        client_config = HTTPClientConfig(
            base_url=base_url,
            timeout=float(config.get("REQUEST_TIMEOUT_SECONDS", 5)),
            max_retries=int(config.get("PROVIDER_MAX_RETRIES", 2)),
            backoff_seconds=float(config.get("PROVIDER_BACKOFF_SECONDS", 0.25)),
            total_timeout=float(config.get("PROVIDER_CALL_BUDGET_SECONDS", 8)),
        )
        return cls(HTTPClient(client_config), api_key=config.get("CURRENCY_API_KEY"))

    @property
    def configured(self) -> bool:
        return self._api_key is not None

    def fetch(self, base: str, target: str) -> RateEntry:
        if not self.configured:
            raise ProviderNotConfigured("CURRENCY_API_KEY not configured")

        base_currency = normalize_code(base)
        target_currency = normalize_code(target)
        params = {
            "apikey": self._api_key,
            "currencies": target_currency,
            "base_currency": base_currency,
        }

        try:
            payload = self._client.get("/latest", params=params)
        except HTTPClientError as exc:
            if exc.status_code in NOT_FOUND_STATUSES:
                raise RateNotFound(
                    f"{self.name} does not quote {base_currency} to {target_currency}"
                ) from exc
            raise ProviderUnavailable(str(exc)) from exc

        data = payload.get("data")
        if not isinstance(data, Mapping):
            raise ProviderUnavailable(f"Unexpected response payload from {self.name}")

        quote = data.get(target_currency)
        if not isinstance(quote, Mapping) or quote.get("value") is None:
            raise RateNotFound(f"Rate not found for {base_currency} to {target_currency}")

        try:
            return RateEntry(
                base_currency=base_currency,
                target_currency=target_currency,
                rate=quote["value"],
                timestamp=utc_now(),
                provider=self.name,
                as_of=self._last_updated_at(payload.get("meta")),
            )
        except (TypeError, ValueError) as exc:
            raise ProviderUnavailable(f"Invalid rate from {self.name}: {quote['value']!r}") from exc

    @staticmethod
    def _last_updated_at(meta: Any) -> datetime | None:
        if not isinstance(meta, Mapping) or not meta.get("last_updated_at"):
            return None
        try:
            return parse_timestamp(meta["last_updated_at"])
        except (TypeError, ValueError, OverflowError, OSError):
            return None
