"""Bulk pre-warming of the rate cache over a fixed currency matrix."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from itertools import combinations
from time import perf_counter

from rate_engine.providers.schemas import normalize_code
from rate_engine.utils.datetime import EPOCH

from .rate_cache import AllProvidersFailed, RateCache

logger = logging.getLogger(__name__)

COMMON_CURRENCIES: tuple[str, ...] = (
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "CAD",
    "AUD",
    "CHF",
    "CNY",
    "INR",
    "KRW",
)


@dataclass
class SweepSummary:
    """Outcome of one pass over the currency matrix."""

    started_at: datetime
    succeeded: list[tuple[str, str]] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)


class MatrixRefresher:
    """Resolve every unordered pair of ``currencies`` once per TTL window."""

    def __init__(self, cache: RateCache, currencies: Sequence[str] = COMMON_CURRENCIES) -> None:
        self._cache = cache
        self._currencies = _dedupe(normalize_code(code) for code in currencies)
        self._last_bulk_update = EPOCH
        self._lock = threading.Lock()

    @property
    def currencies(self) -> tuple[str, ...]:
        return self._currencies

    @property
    def last_bulk_update(self) -> datetime:
        with self._lock:
            return self._last_bulk_update

    def pairs(self) -> Iterator[tuple[str, str]]:
        return combinations(self._currencies, 2)

    def is_due(self) -> bool:
        return self._cache.now() - self.last_bulk_update > self._cache.ttl

    def update_rates_if_needed(self) -> bool:
        """Run a sweep when the last one is older than the cache TTL.

        Concurrent callers may both observe a due sweep and both run it.
        """

        if not self.is_due():
            return False
        self.refresh_all()
        return True

    def refresh_all(self) -> SweepSummary:
        """Resolve every matrix pair, logging failures without aborting the sweep."""

        summary = SweepSummary(started_at=self._cache.now())
        start = perf_counter()
        for base, target in self.pairs():
            try:
                self._cache.resolve(base, target)
            except AllProvidersFailed as exc:
                logger.warning("Failed to update rate for %s to %s: %s", base, target, exc)
                summary.failed.append((base, target))
            else:
                summary.succeeded.append((base, target))

        with self._lock:
            self._last_bulk_update = self._cache.now()

        logger.info(
            "Currency matrix refreshed",
            extra={
                "event": "matrix.sweep",
                "status": "partial" if summary.failed else "success",
                "pairs": summary.attempted,
                "failed": len(summary.failed),
                "duration_ms": round((perf_counter() - start) * 1000, 3),
            },
        )
        return summary

    def reset(self) -> None:
        """Force the next ``update_rates_if_needed`` call to sweep."""

        with self._lock:
            self._last_bulk_update = EPOCH


def _dedupe(codes: Iterator[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for code in codes:
        seen.setdefault(code, None)
    return tuple(seen)
