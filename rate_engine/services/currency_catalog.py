"""Static catalog of supported currencies with display names and symbols."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    name: str
    symbol: str


_CURRENCIES: tuple[CurrencyInfo, ...] = (
    CurrencyInfo("USD", "US Dollar", "$"),
    CurrencyInfo("EUR", "Euro", "€"),
    CurrencyInfo("GBP", "British Pound", "£"),
    CurrencyInfo("JPY", "Japanese Yen", "¥"),
    CurrencyInfo("CAD", "Canadian Dollar", "C$"),
    CurrencyInfo("AUD", "Australian Dollar", "A$"),
    CurrencyInfo("CHF", "Swiss Franc", "Fr"),
    CurrencyInfo("CNY", "Chinese Yuan", "¥"),
    CurrencyInfo("INR", "Indian Rupee", "₹"),
    CurrencyInfo("KRW", "South Korean Won", "₩"),
    CurrencyInfo("SGD", "Singapore Dollar", "S$"),
    CurrencyInfo("HKD", "Hong Kong Dollar", "HK$"),
    CurrencyInfo("NOK", "Norwegian Krone", "kr"),
    CurrencyInfo("SEK", "Swedish Krona", "kr"),
    CurrencyInfo("DKK", "Danish Krone", "kr"),
    CurrencyInfo("PLN", "Polish Zloty", "zł"),
    CurrencyInfo("CZK", "Czech Koruna", "Kč"),
    CurrencyInfo("HUF", "Hungarian Forint", "Ft"),
    CurrencyInfo("RUB", "Russian Ruble", "₽"),
    CurrencyInfo("BRL", "Brazilian Real", "R$"),
    CurrencyInfo("MXN", "Mexican Peso", "$"),
    CurrencyInfo("ZAR", "South African Rand", "R"),
    CurrencyInfo("TRY", "Turkish Lira", "₺"),
    CurrencyInfo("NZD", "New Zealand Dollar", "NZ$"),
    CurrencyInfo("THB", "Thai Baht", "฿"),
    CurrencyInfo("MYR", "Malaysian Ringgit", "RM"),
    CurrencyInfo("IDR", "Indonesian Rupiah", "Rp"),
    CurrencyInfo("PHP", "Philippine Peso", "₱"),
    CurrencyInfo("VND", "Vietnamese Dong", "₫"),
    CurrencyInfo("AED", "UAE Dirham", "د.إ"),
)


@dataclass(frozen=True)
class CurrencyCatalog:
    """Lookup of display metadata; unknown codes fall back to the code itself."""

    entries: Mapping[str, CurrencyInfo] = field(
        default_factory=lambda: MappingProxyType({info.code: info for info in _CURRENCIES})
    )

    @property
    def codes(self) -> list[str]:
        return list(self.entries.keys())

    def name(self, code: str) -> str:
        info = self.entries.get(str(code).strip().upper())
        return info.name if info else code

    def symbol(self, code: str) -> str:
        info = self.entries.get(str(code).strip().upper())
        return info.symbol if info else code


catalog = CurrencyCatalog()
