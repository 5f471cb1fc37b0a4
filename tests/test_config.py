from __future__ import annotations

import pytest

from config import DEFAULT_MATRIX_CURRENCIES, BaseConfig, DevelopmentConfig, ProductionConfig, get_config


def test_get_config_normalizes_provider_list(monkeypatch):
    monkeypatch.setattr(
        ProductionConfig, "FX_RATE_PROVIDERS", " ExchangeRate_API , currencyapi,currencyapi "
    )

    config_cls = get_config("production")

    assert config_cls is ProductionConfig
    assert config_cls.FX_RATE_PROVIDERS == ["exchangerate-api", "currencyapi"]
    assert config_cls.DEBUG is False


def test_get_config_rejects_unknown_provider(monkeypatch):
    monkeypatch.setattr(DevelopmentConfig, "FX_RATE_PROVIDERS", "exchangerate-api,frankfurter")

    with pytest.raises(ValueError) as exc_info:
        get_config("development")

    assert "frankfurter" in str(exc_info.value)


def test_get_config_rejects_empty_provider_list(monkeypatch):
    monkeypatch.setattr(DevelopmentConfig, "FX_RATE_PROVIDERS", " , ")

    with pytest.raises(ValueError):
        get_config("development")


def test_get_config_splits_matrix_currencies(monkeypatch):
    monkeypatch.setattr(DevelopmentConfig, "FX_MATRIX_CURRENCIES", "usd, eur ,gbp")

    assert get_config("development").FX_MATRIX_CURRENCIES == ["USD", "EUR", "GBP"]


def test_get_config_unknown_env_raises():
    with pytest.raises(KeyError):
        get_config("staging")


def test_defaults_match_documented_values():
    assert DEFAULT_MATRIX_CURRENCIES.split(",") == [
        "USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "KRW",
    ]
    assert BaseConfig.RATE_CACHE_TTL_SECONDS == 3600
    assert BaseConfig.REQUEST_TIMEOUT_SECONDS == 5
