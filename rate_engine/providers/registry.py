"""Registry and factory for FX rate providers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Iterable, List

from .base import BaseRateProvider, ProviderError

ProviderFactory = Callable[[Mapping[str, Any]], BaseRateProvider]

_PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {}


def _default_factories() -> Iterable[tuple[str, ProviderFactory]]:
    from .currencyapi_provider import CurrencyApiProvider
    from .exchangerate_provider import ExchangeRateApiProvider
    from .mock import MockRateProvider

    return [
        (ExchangeRateApiProvider.name, ExchangeRateApiProvider.from_config),
        (CurrencyApiProvider.name, CurrencyApiProvider.from_config),
        (MockRateProvider.name, lambda _config: MockRateProvider()),
    ]


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory under the given name."""

    if not name:
        raise ValueError("Provider name cannot be empty.")
    _PROVIDER_FACTORIES[name.lower()] = factory


def unregister_provider(name: str) -> None:
    """Remove a provider factory; primarily for testing."""

    _PROVIDER_FACTORIES.pop(name.lower(), None)


def list_providers() -> List[str]:
    """Return the list of registered provider identifiers."""

    return sorted(_PROVIDER_FACTORIES.keys())


def get_provider(name: str, config: Mapping[str, Any] | None = None) -> BaseRateProvider:
    """Instantiate a provider by name using the supplied configuration mapping."""

    provider_name = (name or "").strip().lower()
    try:
        factory = _PROVIDER_FACTORIES[provider_name]
    except KeyError as exc:
        available = ", ".join(list_providers()) or "none registered"
        raise ProviderError(
            f"Unknown provider '{provider_name}'. Available providers: {available}"
        ) from exc
    return factory(config or {})


def build_provider_chain(
    names: Sequence[str], config: Mapping[str, Any] | None = None
) -> list[BaseRateProvider]:
    """Instantiate providers in priority order, preserving the order given."""

    return [get_provider(name, config) for name in names]


def reset_registry(default_factories: Iterable[tuple[str, ProviderFactory]] | None = None) -> None:
    """Reset provider registry; useful for tests."""

    _PROVIDER_FACTORIES.clear()

    factories = default_factories or _default_factories()
    for name, factory in factories:
        register_provider(name, factory)


reset_registry()
