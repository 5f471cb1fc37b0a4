"""In-memory exchange-rate cache with provider fallback resolution."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from time import perf_counter

from rate_engine.logging import provider_log_extra
from rate_engine.providers.base import (
    BaseRateProvider,
    ProviderError,
    ProviderNotConfigured,
    ProviderUnavailable,
    RateNotFound,
)
from rate_engine.providers.schemas import (
    FALLBACK_PROVIDER,
    SAME_CURRENCY_PROVIDER,
    RateEntry,
    normalize_code,
)
from rate_engine.utils.datetime import utc_now

from .rate_store import RateStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=1)

Clock = Callable[[], datetime]
Pair = tuple[str, str]


class AllProvidersFailed(ProviderError):
    """No provider in the chain produced a rate for the pair."""

    def __init__(self, base: str, target: str, errors: dict[str, ProviderError]) -> None:
        detail = "; ".join(f"{name}: {err}" for name, err in errors.items()) or "no providers"
        super().__init__(f"All currency providers failed for {base}/{target} ({detail})")
        self.base = base
        self.target = target
        self.errors = errors


class RateCache:
    """Map of directed currency pairs to the most recently resolved rate.

    Entries are never evicted; a stale entry is only replaced when its pair is
    read again. A fresh reverse entry is inverted instead of calling providers,
    and the inverted entry keeps the original timestamp so both expire together.
    When every provider fails, ``get_rate`` returns a parity rate tagged
    ``"fallback"`` rather than raising.
    """

    def __init__(
        self,
        providers: Sequence[BaseRateProvider],
        *,
        store: RateStore | None = None,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self._providers = list(providers)
        self._store = store
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[Pair, RateEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def providers(self) -> list[BaseRateProvider]:
        return list(self._providers)

    def now(self) -> datetime:
        return self._clock()

    def get_rate(self, base: str, target: str) -> RateEntry:
        base_currency = normalize_code(base)
        target_currency = normalize_code(target)
        now = self._clock()

        if base_currency == target_currency:
            return RateEntry(
                base_currency=base_currency,
                target_currency=target_currency,
                rate=1,
                timestamp=now,
                provider=SAME_CURRENCY_PROVIDER,
            )

        with self._lock:
            cached = self._entries.get((base_currency, target_currency))
            if cached is not None and self._is_fresh(cached, now):
                return cached

            reverse = self._entries.get((target_currency, base_currency))
            if reverse is not None and self._is_fresh(reverse, now):
                derived = reverse.inverted()
                self._entries[derived.pair] = derived
                logger.debug(
                    "Derived %s/%s from cached reverse rate",
                    base_currency,
                    target_currency,
                    extra=provider_log_extra(
                        provider=derived.provider,
                        base=base_currency,
                        target=target_currency,
                        event="rate.derived",
                        status="success",
                    ),
                )
                return derived

        try:
            return self.resolve(base_currency, target_currency)
        except AllProvidersFailed as exc:
            logger.error(
                "Failed to fetch exchange rate, using parity fallback: %s",
                exc,
                extra=provider_log_extra(
                    provider=FALLBACK_PROVIDER,
                    base=base_currency,
                    target=target_currency,
                    event="rate.fallback",
                    status="fallback",
                ),
            )
            return RateEntry(
                base_currency=base_currency,
                target_currency=target_currency,
                rate=1,
                timestamp=self._clock(),
                provider=FALLBACK_PROVIDER,
            )

    def resolve(self, base: str, target: str) -> RateEntry:
        """Fetch ``base``/``target`` from the provider chain and cache the first success.

        Raises:
            AllProvidersFailed: If no provider returned a rate.
        """

        base_currency = normalize_code(base)
        target_currency = normalize_code(target)
        errors: dict[str, ProviderError] = {}

        for provider in self._providers:
            name = _provider_name(provider)
            start = perf_counter()
            try:
                entry = provider.fetch(base_currency, target_currency)
            except ProviderNotConfigured as exc:
                logger.debug(
                    "Provider %s not configured; skipping",
                    name,
                    extra=provider_log_extra(
                        provider=name,
                        base=base_currency,
                        target=target_currency,
                        event="provider.skipped",
                        status="not_configured",
                    ),
                )
                errors[name] = exc
                continue
            except ProviderError as exc:
                status = "not_found" if isinstance(exc, RateNotFound) else "unavailable"
                log = logger.info if isinstance(exc, RateNotFound) else logger.warning
                log(
                    "Currency provider %s failed: %s",
                    name,
                    exc,
                    extra=provider_log_extra(
                        provider=name,
                        base=base_currency,
                        target=target_currency,
                        event="provider.fetch",
                        status=status,
                        duration_ms=(perf_counter() - start) * 1000,
                        error=str(exc),
                    ),
                )
                errors[name] = exc
                continue
            except Exception as exc:
                logger.exception(
                    "Currency provider %s raised unexpectedly",
                    name,
                    extra=provider_log_extra(
                        provider=name,
                        base=base_currency,
                        target=target_currency,
                        event="provider.fetch",
                        status="unavailable",
                        duration_ms=(perf_counter() - start) * 1000,
                        error=repr(exc),
                    ),
                )
                errors[name] = ProviderUnavailable(f"{name} raised {exc!r}")
                continue

            logger.info(
                "Provider fetch succeeded",
                extra=provider_log_extra(
                    provider=name,
                    base=base_currency,
                    target=target_currency,
                    event="provider.fetch",
                    status="success",
                    duration_ms=(perf_counter() - start) * 1000,
                ),
            )
            self.put(entry)
            self._record(entry)
            return entry

        raise AllProvidersFailed(base_currency, target_currency, errors)

    def put(self, entry: RateEntry) -> None:
        with self._lock:
            self._entries[entry.pair] = entry

    def peek(self, base: str, target: str) -> RateEntry | None:
        """Return the cached entry for a pair regardless of freshness."""

        with self._lock:
            return self._entries.get((normalize_code(base), normalize_code(target)))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _record(self, entry: RateEntry) -> None:
        if self._store is None:
            return
        try:
            self._store.record(entry)
        except Exception:
            # The audit trail must never fail a resolution.
            logger.exception("Rate store rejected %s/%s", *entry.pair)

    def _is_fresh(self, entry: RateEntry, now: datetime) -> bool:
        return now - entry.timestamp < self._ttl


def _provider_name(provider: BaseRateProvider) -> str:
    return getattr(provider, "name", provider.__class__.__name__)
