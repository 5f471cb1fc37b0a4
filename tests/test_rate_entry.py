from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from rate_engine.providers.schemas import RateEntry, normalize_code


def test_rate_entry_normalizes_codes_and_timestamps():
    local = datetime(2026, 1, 5, 15, 0, tzinfo=ZoneInfo("Europe/Istanbul"))
    entry = RateEntry(" usd", "eur ", "0.92", local, "p1")

    assert entry.pair == ("USD", "EUR")
    assert entry.rate == 0.92
    assert entry.timestamp.tzinfo == UTC
    assert entry.timestamp == local


@pytest.mark.parametrize("rate", [0, -1.5, float("nan"), float("inf")])
def test_rate_entry_requires_positive_finite_rate(rate):
    with pytest.raises(ValueError):
        RateEntry("USD", "EUR", rate, datetime.now(UTC), "p1")


def test_rate_entry_requires_provider():
    with pytest.raises(ValueError):
        RateEntry("USD", "EUR", 0.9, datetime.now(UTC), " ")


def test_inverted_entry_keeps_provenance():
    entry = RateEntry("USD", "EUR", 0.8, datetime(2026, 1, 5, tzinfo=UTC), "p1")

    inverse = entry.inverted()

    assert inverse.pair == ("EUR", "USD")
    assert inverse.rate == 1.25
    assert (inverse.timestamp, inverse.provider) == (entry.timestamp, entry.provider)


@pytest.mark.parametrize("code", ["", "  ", "€UR"])
def test_normalize_code_rejects_invalid_input(code):
    with pytest.raises(ValueError):
        normalize_code(code)
