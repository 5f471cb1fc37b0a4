"""ExchangeRate-API provider unit tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
import requests
import responses
from freezegun import freeze_time

from rate_engine.providers.base import ProviderUnavailable, RateNotFound
from rate_engine.providers.exchangerate_provider import ExchangeRateApiProvider
from rate_engine.providers.http_client import HTTPClient, HTTPClientConfig
from tests.fixtures import load_json

pytestmark = pytest.mark.providers

LATEST_USD = "https://api.exchangerate-api.com/v4/latest/USD"


@pytest.fixture()
def provider() -> ExchangeRateApiProvider:
    config = HTTPClientConfig(
        base_url="https://api.exchangerate-api.com/v4",
        timeout=2,
        max_retries=1,
        backoff_seconds=0,
    )
    return ExchangeRateApiProvider(HTTPClient(config))


@freeze_time("2026-01-05T12:00:00Z")
@responses.activate
def test_fetch_returns_entry_stamped_with_fetch_time(provider: ExchangeRateApiProvider) -> None:
    responses.add(responses.GET, LATEST_USD, json=load_json("exchangerate_api_latest_usd.json"))

    entry = provider.fetch("usd", "eur")

    assert entry.pair == ("USD", "EUR")
    assert entry.rate == 0.92
    assert entry.provider == "exchangerate-api"
    assert entry.timestamp == datetime(2026, 1, 5, 12, 0, tzinfo=UTC)
    assert entry.as_of == datetime(2026, 1, 5, 0, 0, 1, tzinfo=UTC)


@responses.activate
def test_fetch_missing_target_raises_not_found(provider: ExchangeRateApiProvider) -> None:
    responses.add(responses.GET, LATEST_USD, json=load_json("exchangerate_api_latest_usd.json"))

    with pytest.raises(RateNotFound):
        provider.fetch("USD", "VND")


@responses.activate
def test_fetch_unknown_base_raises_not_found(provider: ExchangeRateApiProvider) -> None:
    responses.add(
        responses.GET,
        "https://api.exchangerate-api.com/v4/latest/XYZ",
        json={"result": "error", "error-type": "unsupported-code"},
        status=404,
    )

    with pytest.raises(RateNotFound):
        provider.fetch("XYZ", "USD")


@responses.activate
def test_fetch_wraps_server_errors(provider: ExchangeRateApiProvider) -> None:
    responses.add(responses.GET, LATEST_USD, status=503)

    with pytest.raises(ProviderUnavailable) as exc_info:
        provider.fetch("USD", "EUR")

    assert "Failed to fetch" in str(exc_info.value)


@responses.activate
def test_fetch_treats_timeout_as_unavailable(provider: ExchangeRateApiProvider) -> None:
    responses.add(responses.GET, LATEST_USD, body=requests.exceptions.ReadTimeout("slow upstream"))

    with pytest.raises(ProviderUnavailable):
        provider.fetch("USD", "EUR")


@responses.activate
def test_fetch_rejects_payload_without_rates(provider: ExchangeRateApiProvider) -> None:
    responses.add(responses.GET, LATEST_USD, json={"base": "USD"})

    with pytest.raises(ProviderUnavailable):
        provider.fetch("USD", "EUR")


def test_from_config_uses_timeout_and_default_url() -> None:
    provider = ExchangeRateApiProvider.from_config(
        {"EXCHANGERATE_API_BASE_URL": "", "REQUEST_TIMEOUT_SECONDS": 3, "PROVIDER_MAX_RETRIES": 4}
    )

    client_config = provider._client.config  # type: ignore[attr-defined]
    assert client_config.base_url == "https://api.exchangerate-api.com/v4"
    assert client_config.timeout == 3.0
    assert client_config.max_retries == 4
    assert client_config.total_timeout == 8.0


@responses.activate
def test_out_of_range_publication_time_is_dropped(provider: ExchangeRateApiProvider) -> None:
    responses.add(
        responses.GET,
        LATEST_USD,
        json={"base": "USD", "time_last_updated": 1e20, "rates": {"EUR": 0.92}},
    )

    entry = provider.fetch("USD", "EUR")

    assert entry.rate == 0.92
    assert entry.as_of is None
