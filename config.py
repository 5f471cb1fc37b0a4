"""Application configuration classes."""

from __future__ import annotations

import os

SUPPORTED_RATE_PROVIDERS = {"exchangerate-api", "currencyapi", "mock"}
PROVIDER_ALIASES = {
    "exchangerate_api": "exchangerate-api",
    "exchangerateapi": "exchangerate-api",
    "currency_api": "currencyapi",
}
DEFAULT_MATRIX_CURRENCIES = "USD,EUR,GBP,JPY,CAD,AUD,CHF,CNY,INR,KRW"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "fx-rate-engine"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = _get_env("DATABASE_URL", "sqlite:///fx-rate-engine.db")

    RATE_CACHE_TTL_SECONDS = int(_get_env("RATE_CACHE_TTL_SECONDS", "3600"))
    FX_RATE_PROVIDERS: list[str] | str = _get_env("FX_RATE_PROVIDERS", "exchangerate-api,currencyapi")
    FX_MATRIX_CURRENCIES: list[str] | str = _get_env("FX_MATRIX_CURRENCIES", DEFAULT_MATRIX_CURRENCIES)

    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "5"))
    PROVIDER_MAX_RETRIES = int(_get_env("PROVIDER_MAX_RETRIES", "2"))
    PROVIDER_BACKOFF_SECONDS = float(_get_env("PROVIDER_BACKOFF_SECONDS", "0.25"))
    # No retry starts once this many seconds have passed for a provider call, so a
    # single provider holds a conversion for at most this budget plus one
    # attempt (connect and read timeouts of REQUEST_TIMEOUT_SECONDS each).
    PROVIDER_CALL_BUDGET_SECONDS = float(_get_env("PROVIDER_CALL_BUDGET_SECONDS", "8"))
    EXCHANGERATE_API_BASE_URL = _get_env("EXCHANGERATE_API_BASE_URL", "https://api.exchangerate-api.com/v4")
    CURRENCY_API_BASE_URL = _get_env("CURRENCY_API_BASE_URL", "https://api.currencyapi.com/v3")
    CURRENCY_API_KEY = _get_env("CURRENCY_API_KEY", "")

    RATE_STORE_ENABLED = _get_env("RATE_STORE_ENABLED", "true").lower() == "true"
    RATE_STORE_ASYNC = _get_env("RATE_STORE_ASYNC", "true").lower() == "true"

    SCHEDULER_ENABLED = _get_env("SCHEDULER_ENABLED", "false").lower() == "true"
    SCHEDULER_TIMEZONE = _get_env("SCHEDULER_TIMEZONE", "UTC")
    RATES_REFRESH_CRON = _get_env("RATES_REFRESH_CRON", "*/15 * * * *")

    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the provider list is empty or names an unknown provider.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_providers(config_cls)
    _normalize_matrix(config_cls)
    return config_cls


def _validate_providers(config_cls: type[BaseConfig]) -> None:
    raw = config_cls.FX_RATE_PROVIDERS
    names = _split_csv(raw) if isinstance(raw, str) else list(raw)
    normalized = [_normalize_provider(name) for name in names]
    if not normalized:
        raise ValueError("FX_RATE_PROVIDERS must name at least one provider.")

    unknown = [name for name in normalized if name not in SUPPORTED_RATE_PROVIDERS]
    if unknown:
        raise ValueError(
            f"Unsupported FX_RATE_PROVIDERS {unknown}. "
            f"Allowed values: {sorted(SUPPORTED_RATE_PROVIDERS)}"
        )
    config_cls.FX_RATE_PROVIDERS = list(dict.fromkeys(normalized))


def _normalize_matrix(config_cls: type[BaseConfig]) -> None:
    raw = config_cls.FX_MATRIX_CURRENCIES
    codes = _split_csv(raw) if isinstance(raw, str) else list(raw)
    config_cls.FX_MATRIX_CURRENCIES = [code.upper() for code in codes]


def _normalize_provider(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.strip().lower()
    return PROVIDER_ALIASES.get(normalized, normalized)
