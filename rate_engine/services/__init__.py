"""Service layer: rate cache, store, matrix refresher and conversion engine."""

from __future__ import annotations

import atexit
import logging
from datetime import timedelta

from rate_engine.providers.registry import build_provider_chain

from .conversion import ConversionEngine, ConversionResult, Money
from .currency_catalog import CurrencyCatalog, CurrencyInfo, catalog
from .matrix_refresher import COMMON_CURRENCIES, MatrixRefresher, SweepSummary
from .rate_cache import AllProvidersFailed, RateCache
from .rate_store import RateStore, create_rate_store
from .scheduler import init_scheduler

logger = logging.getLogger(__name__)

__all__ = [
    "AllProvidersFailed",
    "COMMON_CURRENCIES",
    "ConversionEngine",
    "ConversionResult",
    "CurrencyCatalog",
    "CurrencyInfo",
    "MatrixRefresher",
    "Money",
    "RateCache",
    "RateStore",
    "SweepSummary",
    "catalog",
    "create_rate_store",
    "init_engine",
    "init_scheduler",
]


def init_engine(app) -> ConversionEngine:
    """Build the process-wide cache, refresher and engine and attach them to ``app``."""

    providers = build_provider_chain(app.config["FX_RATE_PROVIDERS"], app.config)
    store = create_rate_store(app)
    if store is not None:
        atexit.register(store.shutdown, False)

    cache = RateCache(
        providers,
        store=store,
        ttl=timedelta(seconds=int(app.config.get("RATE_CACHE_TTL_SECONDS", 3600))),
    )
    refresher = MatrixRefresher(cache, app.config.get("FX_MATRIX_CURRENCIES", COMMON_CURRENCIES))
    engine = ConversionEngine(cache, refresher)

    app.extensions["rate_store"] = store
    app.extensions["rate_cache"] = cache
    app.extensions["matrix_refresher"] = refresher
    app.extensions["conversion_engine"] = engine

    logger.info(
        "Conversion engine ready with providers %s",
        ", ".join(provider.name for provider in providers),
    )
    return engine
