"""Public conversion API composed over the rate cache and matrix refresher."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rate_engine.providers.schemas import (
    FALLBACK_PROVIDER,
    SAME_CURRENCY_PROVIDER,
    RateEntry,
    normalize_code,
)

from .currency_catalog import CurrencyCatalog, catalog as default_catalog
from .matrix_refresher import MatrixRefresher
from .rate_cache import RateCache


@dataclass(frozen=True)
class Money:
    amount: float
    currency: str


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a single conversion; built per call and never cached.

    ``provider`` is ``"fallback"`` when no upstream could supply a rate and the
    amount was converted at parity.
    """

    original_amount: Money
    converted_amount: Money
    exchange_rate: float
    timestamp: datetime
    provider: str

    @property
    def is_fallback(self) -> bool:
        return self.provider == FALLBACK_PROVIDER


class ConversionEngine:
    """Convert amounts between currencies using cached, derived or fetched rates."""

    def __init__(
        self,
        cache: RateCache,
        refresher: MatrixRefresher,
        catalog: CurrencyCatalog | None = None,
    ) -> None:
        self._cache = cache
        self._refresher = refresher
        self._catalog = catalog or default_catalog

    @property
    def cache(self) -> RateCache:
        return self._cache

    @property
    def refresher(self) -> MatrixRefresher:
        return self._refresher

    def convert(self, amount: float, from_currency: str, to_currency: str) -> ConversionResult:
        source = normalize_code(from_currency)
        target = normalize_code(to_currency)

        if source == target:
            return ConversionResult(
                original_amount=Money(amount, source),
                converted_amount=Money(amount, target),
                exchange_rate=1.0,
                timestamp=self._cache.now(),
                provider=SAME_CURRENCY_PROVIDER,
            )

        self._refresher.update_rates_if_needed()
        entry = self._cache.get_rate(source, target)
        return ConversionResult(
            original_amount=Money(amount, source),
            converted_amount=Money(amount * entry.rate, target),
            exchange_rate=entry.rate,
            timestamp=entry.timestamp,
            provider=entry.provider,
        )

    def get_exchange_rate(self, from_currency: str, to_currency: str) -> RateEntry:
        return self._cache.get_rate(from_currency, to_currency)

    def convert_to_base_currency(self, amount: float, currency: str, base_currency: str) -> float:
        if normalize_code(currency) == normalize_code(base_currency):
            return amount
        return self.convert(amount, currency, base_currency).converted_amount.amount

    def get_supported_currencies(self) -> list[str]:
        return self._catalog.codes

    def get_currency_name(self, code: str) -> str:
        return self._catalog.name(code)

    def get_currency_symbol(self, code: str) -> str:
        return self._catalog.symbol(code)

    def clear_cache(self) -> None:
        """Drop every cached pair and make the next conversion re-run the matrix sweep."""

        self._cache.clear()
        self._refresher.reset()
