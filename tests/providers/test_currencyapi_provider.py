"""currencyapi.com provider unit tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
import responses
from responses import matchers

from rate_engine.providers.base import ProviderNotConfigured, ProviderUnavailable, RateNotFound
from rate_engine.providers.currencyapi_provider import CurrencyApiProvider
from rate_engine.providers.http_client import HTTPClient, HTTPClientConfig
from tests.fixtures import load_json

pytestmark = pytest.mark.providers

LATEST = "https://api.currencyapi.com/v3/latest"


def make_provider(api_key: str | None = "secret") -> CurrencyApiProvider:
    config = HTTPClientConfig(
        base_url="https://api.currencyapi.com/v3",
        timeout=2,
        max_retries=1,
        backoff_seconds=0,
    )
    return CurrencyApiProvider(HTTPClient(config), api_key=api_key)


@pytest.mark.parametrize("api_key", [None, "", "   "])
@responses.activate
def test_missing_key_raises_not_configured_without_network(api_key) -> None:
    provider = make_provider(api_key)

    with pytest.raises(ProviderNotConfigured):
        provider.fetch("USD", "EUR")

    assert not provider.configured
    assert len(responses.calls) == 0


@responses.activate
def test_fetch_sends_key_and_parses_rate() -> None:
    responses.add(
        responses.GET,
        LATEST,
        json=load_json("currencyapi_latest_usd_eur.json"),
        match=[
            matchers.query_param_matcher(
                {"apikey": "secret", "currencies": "EUR", "base_currency": "USD"}
            )
        ],
    )

    entry = make_provider().fetch("usd", "eur")

    assert entry.rate == 0.9187
    assert entry.provider == "currencyapi"
    assert entry.as_of == datetime(2026, 1, 5, 11, 59, 59, tzinfo=UTC)


@responses.activate
def test_validation_error_maps_to_not_found() -> None:
    responses.add(responses.GET, LATEST, json={"message": "invalid currency"}, status=422)

    with pytest.raises(RateNotFound):
        make_provider().fetch("USD", "XYZ")


@responses.activate
def test_missing_quote_maps_to_not_found() -> None:
    responses.add(responses.GET, LATEST, json={"meta": {}, "data": {}})

    with pytest.raises(RateNotFound):
        make_provider().fetch("USD", "EUR")


@pytest.mark.parametrize("status", [401, 429, 500])
@responses.activate
def test_other_http_errors_map_to_unavailable(status) -> None:
    responses.add(responses.GET, LATEST, json={"message": "nope"}, status=status)

    with pytest.raises(ProviderUnavailable):
        make_provider().fetch("USD", "EUR")


def test_from_config_reads_api_key() -> None:
    provider = CurrencyApiProvider.from_config({"CURRENCY_API_KEY": "abc"})
    assert provider.configured

    assert not CurrencyApiProvider.from_config({}).configured


@pytest.mark.parametrize(
    "meta",
    ["oops", ["2026-01-05"], {"last_updated_at": 1e20}, {"last_updated_at": "yesterday"}],
)
@responses.activate
def test_malformed_meta_keeps_rate_without_as_of(meta) -> None:
    responses.add(
        responses.GET,
        LATEST,
        json={"data": {"EUR": {"code": "EUR", "value": 0.9}}, "meta": meta},
    )

    entry = make_provider().fetch("USD", "EUR")

    assert entry.rate == 0.9
    assert entry.as_of is None
