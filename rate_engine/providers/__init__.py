"""Provider interfaces and data structures for FX rate sources."""

from .base import (
    BaseRateProvider,
    ProviderError,
    ProviderNotConfigured,
    ProviderUnavailable,
    RateNotFound,
)
from .currencyapi_provider import CurrencyApiProvider
from .exchangerate_provider import ExchangeRateApiProvider
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .mock import MockRateProvider
from .schemas import FALLBACK_PROVIDER, SAME_CURRENCY_PROVIDER, RateEntry, normalize_code

__all__ = [
    "BaseRateProvider",
    "ProviderError",
    "ProviderNotConfigured",
    "ProviderUnavailable",
    "RateNotFound",
    "RateEntry",
    "FALLBACK_PROVIDER",
    "SAME_CURRENCY_PROVIDER",
    "normalize_code",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "ExchangeRateApiProvider",
    "CurrencyApiProvider",
    "MockRateProvider",
]
