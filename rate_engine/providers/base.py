"""Abstract interface and failure kinds for FX rate providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schemas import RateEntry


class ProviderError(Exception):
    """Raised when an upstream provider cannot fulfill a request."""


class ProviderNotConfigured(ProviderError):
    """The provider is missing credentials and is effectively disabled."""


class RateNotFound(ProviderError):
    """The provider does not quote the requested pair."""


class ProviderUnavailable(ProviderError):
    """Transient failure: network error, timeout, 5xx or malformed payload."""


class BaseRateProvider(ABC):
    """Defines the interface all FX rate providers must implement."""

    name: str

    @abstractmethod
    def fetch(self, base: str, target: str) -> RateEntry:
        """Return the current rate for ``base`` -> ``target`` or raise a ``ProviderError``."""
