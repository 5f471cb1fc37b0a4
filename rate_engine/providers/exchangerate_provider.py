"""ExchangeRate-API (free, keyless) provider implementation."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from rate_engine.utils.datetime import parse_timestamp, utc_now

from .base import BaseRateProvider, ProviderUnavailable, RateNotFound
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .schemas import RateEntry, normalize_code

DEFAULT_BASE_URL = "https://api.exchangerate-api.com/v4"
NOT_FOUND_STATUSES = {400, 404}


class ExchangeRateApiProvider(BaseRateProvider):
    """Provider backed by the public ``/latest/{base}`` endpoint of exchangerate-api.com."""

    name = "exchangerate-api"

    def __init__(self, client: HTTPClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ExchangeRateApiProvider:
        base_url_value = config.get("EXCHANGERATE_API_BASE_URL")
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
        return cls(HTTPClient(client_config))

    def fetch(self, base: str, target: str) -> RateEntry:
        base_currency = normalize_code(base)
        target_currency = normalize_code(target)

        try:
            payload = self._client.get(f"/latest/{base_currency}")
        except HTTPClientError as exc:
            if exc.status_code in NOT_FOUND_STATUSES:
                raise RateNotFound(
                    f"{self.name} does not quote base currency {base_currency}"
                ) from exc
            raise ProviderUnavailable(str(exc)) from exc

        rates = payload.get("rates")
        if not isinstance(rates, Mapping):
            raise ProviderUnavailable(f"Unexpected response payload from {self.name}")

        value = rates.get(target_currency)
        if value is None:
            raise RateNotFound(f"Rate not found for {base_currency} to {target_currency}")

        try:
            return RateEntry(
                base_currency=base_currency,
                target_currency=target_currency,
                rate=value,
                timestamp=utc_now(),
                provider=self.name,
                as_of=self._published_at(payload),
            )
        except (TypeError, ValueError) as exc:
            raise ProviderUnavailable(f"Invalid rate from {self.name}: {value!r}") from exc

    @staticmethod
    def _published_at(payload: Mapping[str, Any]) -> datetime | None:
        raw = payload.get("time_last_updated") or payload.get("date")
        if raw is None:
            return None
        try:
            return parse_timestamp(raw)
        except (TypeError, ValueError, OverflowError, OSError):
            return None
