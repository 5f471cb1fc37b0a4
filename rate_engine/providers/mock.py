"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from rate_engine.utils.datetime import utc_now

from .base import BaseRateProvider, RateNotFound
from .schemas import RateEntry, normalize_code

# Units of each currency per one USD.
USD_QUOTES: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 150.12,
    "CAD": 1.36,
    "AUD": 1.52,
    "CHF": 0.88,
    "CNY": 7.19,
    "INR": 83.2,
    "KRW": 1335.5,
}


class MockRateProvider(BaseRateProvider):
    """Deterministic provider that cross-computes rates from a USD quote table."""

    name = "mock"

    def __init__(self, quotes: dict[str, float] | None = None) -> None:
        self._quotes = dict(quotes or USD_QUOTES)

    def fetch(self, base: str, target: str) -> RateEntry:
        base_currency = normalize_code(base)
        target_currency = normalize_code(target)
        try:
            base_quote = self._quotes[base_currency]
            target_quote = self._quotes[target_currency]
        except KeyError as exc:
            raise RateNotFound(
                f"Mock provider has no quote for {exc.args[0]}"
            ) from exc

        return RateEntry(
            base_currency=base_currency,
            target_currency=target_currency,
            rate=target_quote / base_quote,
            timestamp=utc_now(),
            provider=self.name,
        )
